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

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .errors import ValidationError

UPI_ID_PATTERN = re.compile(r"[a-zA-Z0-9.\-_]{2,256}@[a-zA-Z]{1,64}")
MIN_PAYEE_NAME_LENGTH = 2
MAX_NOTE_LENGTH = 80

_CENTS = Decimal("0.01")


def require_payee_id(value: object) -> str:
    """Validate a UPI ID (``local@handle``) and return it trimmed."""
    if not isinstance(value, str) or not value:
        raise ValidationError("Invalid or missing UPI ID")
    trimmed = value.strip()
    if UPI_ID_PATTERN.fullmatch(trimmed) is None:
        raise ValidationError("Invalid or missing UPI ID")
    return trimmed


def require_payee_name(value: object) -> str:
    """Validate a display name of at least two non-blank characters."""
    if not isinstance(value, str):
        raise ValidationError("Invalid payee name")
    trimmed = value.strip()
    if len(trimmed) < MIN_PAYEE_NAME_LENGTH:
        raise ValidationError("Invalid payee name")
    return trimmed


def require_amount(value: object) -> str:
    """Validate a positive amount and format it with exactly two decimals."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal, str)):
        raise ValidationError("Invalid amount")
    text = value.strip() if isinstance(value, str) else str(value)
    try:
        number = Decimal(text)
        if not number.is_finite():
            raise ValidationError("Invalid amount")
        rounded = number.quantize(_CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValidationError("Invalid amount") from exc
    if number <= 0 or rounded <= 0:
        raise ValidationError("Invalid amount")
    return f"{rounded:f}"


def require_note(value: object) -> str:
    """Validate a transaction note; the length limit applies before trimming."""
    if not isinstance(value, str) or len(value) > MAX_NOTE_LENGTH:
        raise ValidationError(f"Note must be a string up to {MAX_NOTE_LENGTH} characters")
    return value.strip()
