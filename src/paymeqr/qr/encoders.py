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

import inspect
from typing import Any, Protocol

from .codec import QrConfig, qr_bytes, qr_data_uri


class BrowserEncoder(Protocol):
    async def to_data_url(self, text: str) -> str: ...


class ServerEncoder(BrowserEncoder, Protocol):
    async def to_buffer(self, text: str) -> bytes: ...


class SegnoEncoder:
    """In-process encoder used when the host can import segno."""

    def __init__(self, config: QrConfig | None = None) -> None:
        self.config = config or QrConfig()

    async def to_data_url(self, text: str) -> str:
        return qr_data_uri(text, kind="png", config=self.config)

    async def to_buffer(self, text: str) -> bytes:
        return qr_bytes(text, kind="png", config=self.config)


class GlobalQrEncoder:
    """Adapter over the ``QRCode`` global defined by the qrcode CDN script."""

    def __init__(self, handle: Any) -> None:
        self.handle = handle

    async def to_data_url(self, text: str) -> str:
        result = self.handle.toDataURL(text)
        if inspect.isawaitable(result):
            result = await result
        return str(result)
