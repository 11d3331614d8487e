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

from dataclasses import dataclass
from enum import Enum

CURRENCY_CODE = "INR"


class Environment(str, Enum):
    BROWSER = "browser"
    SERVER = "server"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class PaymentParameters:
    payee_id: str
    currency_code: str = CURRENCY_CODE
    payee_name: str | None = None
    amount: str | None = None
    note: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "payee_id": self.payee_id,
            "currency_code": self.currency_code,
            "payee_name": self.payee_name,
            "amount": self.amount,
            "note": self.note,
        }
