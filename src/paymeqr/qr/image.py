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

import base64
import binascii
import html
import io
from dataclasses import dataclass
from urllib.parse import unquote_to_bytes

from PIL import Image

DEFAULT_ALT_TEXT = "UPI QR Code"
DEFAULT_LOADING = "lazy"


@dataclass(frozen=True)
class QrImage:
    """Displayable QR image, shaped like an ``<img>`` element."""

    src: str
    alt: str = DEFAULT_ALT_TEXT
    loading: str = DEFAULT_LOADING

    @property
    def mime_type(self) -> str:
        header, _ = _split_data_url(self.src)
        return header.split(";", 1)[0] or "text/plain"

    @property
    def data(self) -> bytes:
        header, payload = _split_data_url(self.src)
        if header.endswith(";base64"):
            try:
                return base64.b64decode(payload, validate=True)
            except binascii.Error as exc:
                raise ValueError("image src has invalid base64 payload") from exc
        return unquote_to_bytes(payload)

    def to_pil(self) -> Image.Image:
        image = Image.open(io.BytesIO(self.data))
        image.load()
        return image

    def to_html(self) -> str:
        src, alt, loading = (
            html.escape(value, quote=True) for value in (self.src, self.alt, self.loading)
        )
        return f'<img src="{src}" alt="{alt}" loading="{loading}">'


def _split_data_url(src: str) -> tuple[str, str]:
    if not src.startswith("data:") or "," not in src:
        raise ValueError("image src is not a data URL")
    header, payload = src[len("data:") :].split(",", 1)
    return header, payload
