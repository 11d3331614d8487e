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

from urllib.parse import quote_plus, urlencode

from ..core.models import PaymentParameters

UPI_SCHEME = "upi"
UPI_AUTHORITY = "pay"

# Emission order is fixed; it does not follow the order setters were called in.
FIELD_KEYS: tuple[tuple[str, str], ...] = (
    ("pa", "payee_id"),
    ("cu", "currency_code"),
    ("pn", "payee_name"),
    ("am", "amount"),
    ("tn", "note"),
)


def query_pairs(params: PaymentParameters) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for key, attr in FIELD_KEYS:
        value = getattr(params, attr)
        if value is None or value == "":
            continue
        pairs.append((key, value))
    return pairs


def _form_quote(
    value: str, safe: str = "", encoding: str | None = None, errors: str | None = None
) -> str:
    # application/x-www-form-urlencoded: only *-._ and alphanumerics stay literal,
    # unpaired surrogates become U+FFFD.
    text = value.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace")
    return quote_plus(text, safe="*").replace("~", "%7E")


def encode_upi_uri(params: PaymentParameters) -> str:
    query = urlencode(query_pairs(params), quote_via=_form_quote)
    return f"{UPI_SCHEME}://{UPI_AUTHORITY}?{query}"
