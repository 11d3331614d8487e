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
import io
from dataclasses import dataclass
from typing import Any

import segno
from PIL import Image, ImageColor, ImageDraw

Color = str | tuple[int, int, int] | tuple[int, int, int, int]

_MIME_TYPES = {
    "png": "image/png",
    "svg": "image/svg+xml",
}
_MODULE_SHAPES = {"square", "rounded"}
_ROUNDED_RATIO = 0.2


@dataclass(frozen=True)
class QrConfig:
    error: str = "M"
    scale: int = 4
    border: int = 4
    dark: Color | None = None
    light: Color | None = None
    module_shape: str = "square"
    version: int | None = None
    mask: int | None = None
    boost_error: bool = True


def make_qr(data: str, *, config: QrConfig | None = None) -> Any:
    config = config or QrConfig()
    return segno.make(
        data,
        error=config.error,
        version=config.version,
        mask=config.mask,
        micro=False,
        boost_error=config.boost_error,
    )


def qr_bytes(data: str, *, kind: str = "png", config: QrConfig | None = None) -> bytes:
    config = config or QrConfig()
    kind = kind.strip().lower()
    if kind not in _MIME_TYPES:
        raise ValueError(f"unsupported image kind: {kind}")
    shape = config.module_shape.strip().lower()
    if shape not in _MODULE_SHAPES:
        raise ValueError(f"unsupported module_shape: {config.module_shape}")
    qr = make_qr(data, config=config)
    if shape != "square":
        if kind != "png":
            raise ValueError("custom module shapes are only supported for PNG output")
        return _render_rounded_png(qr, config=config)

    buf = io.BytesIO()
    qr.save(
        buf,
        kind=kind,
        scale=config.scale,
        border=config.border,
        **_segno_color_kwargs(dark=config.dark, light=config.light),
    )
    return buf.getvalue()


def qr_data_uri(data: str, *, kind: str = "png", config: QrConfig | None = None) -> str:
    payload = qr_bytes(data, kind=kind, config=config)
    encoded = base64.b64encode(payload).decode("ascii")
    return f"data:{_MIME_TYPES[kind.strip().lower()]};base64,{encoded}"


def _segno_color_kwargs(**values: object) -> dict[str, object]:
    style: dict[str, object] = {}
    for key, value in values.items():
        normalized = _normalize_color_value(value)
        if normalized is None:
            continue
        style[key] = normalized
    return style


def _normalize_color_value(value: object) -> object | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip()
    return value


def _color_to_rgba(
    value: object,
    fallback: tuple[int, int, int, int],
) -> tuple[int, int, int, int]:
    normalized = _normalize_color_value(value)
    if normalized is None:
        return fallback
    if isinstance(normalized, str):
        if normalized.lower() in ("none", "transparent"):
            return fallback
        rgba = ImageColor.getcolor(normalized, "RGBA")
        if isinstance(rgba, int):
            return (rgba, rgba, rgba, 255)
        return (int(rgba[0]), int(rgba[1]), int(rgba[2]), int(rgba[3]))
    if isinstance(normalized, (tuple, list)):
        if len(normalized) == 3:
            return (int(normalized[0]), int(normalized[1]), int(normalized[2]), 255)
        if len(normalized) == 4:
            return tuple(int(part) for part in normalized)  # type: ignore[return-value]
    return fallback


def _render_rounded_png(qr: Any, *, config: QrConfig) -> bytes:
    light_rgba = _color_to_rgba(config.light, (255, 255, 255, 255))
    dark_rgba = _color_to_rgba(config.dark, (0, 0, 0, 255))
    scale = config.scale

    width, height = qr.symbol_size(scale=scale, border=config.border)
    image = Image.new("RGBA", (width, height), light_rgba)
    draw = ImageDraw.Draw(image)
    radius = _ROUNDED_RATIO * scale

    for row_idx, row in enumerate(qr.matrix_iter(scale=1, border=config.border)):
        for col_idx, is_dark in enumerate(row):
            if not is_dark:
                continue
            x = col_idx * scale
            y = row_idx * scale
            draw.rounded_rectangle((x, y, x + scale, y + scale), radius=radius, fill=dark_rgba)

    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()
