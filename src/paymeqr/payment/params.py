#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

from ..core.models import CURRENCY_CODE, PaymentParameters
from ..core.validation import (
    require_amount,
    require_note,
    require_payee_id,
    require_payee_name,
)
from .uri import encode_upi_uri


class PaymentRequest:
    """Accumulates the fields of a UPI payment request.

    Setters validate before touching state, so a rejected call leaves the
    request exactly as it was. Each accepted call swaps in a new frozen
    :class:`PaymentParameters` with one field changed.
    """

    def __init__(self, upi_id: str) -> None:
        self._params = PaymentParameters(
            payee_id=require_payee_id(upi_id),
            currency_code=CURRENCY_CODE,
        )

    @property
    def parameters(self) -> PaymentParameters:
        return self._params

    @property
    def uri(self) -> str:
        return encode_upi_uri(self._params)

    def set_payee_name(self, name: str) -> PaymentRequest:
        self._params = replace(self._params, payee_name=require_payee_name(name))
        return self

    def set_amount(self, amount: int | float | Decimal | str) -> PaymentRequest:
        self._params = replace(self._params, amount=require_amount(amount))
        return self

    def set_note(self, note: str) -> PaymentRequest:
        self._params = replace(self._params, note=require_note(note))
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._params.payee_id!r})"
