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

import os
import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urlparse

from platformdirs import user_config_dir

from ..qr.codec import QrConfig
from ..qr.image import DEFAULT_ALT_TEXT
from ..qr.locator import QRCODE_LOADER_URL, QRCODE_SCRIPT_MARKER

CONFIG_ENV = "PAYMEQR_CONFIG"
XDG_CONFIG_ENV = "XDG_CONFIG_HOME"
CONFIG_FILENAME = "config.toml"
_ERROR_LEVELS = {"L", "M", "Q", "H"}


@dataclass(frozen=True)
class BrowserDefaults:
    loader_url: str = QRCODE_LOADER_URL
    script_marker: str = QRCODE_SCRIPT_MARKER


@dataclass(frozen=True)
class ImageDefaults:
    alt: str = DEFAULT_ALT_TEXT


@dataclass(frozen=True)
class UiDefaults:
    quiet: bool = False


@dataclass(frozen=True)
class AppConfig:
    qr_config: QrConfig = field(default_factory=QrConfig)
    browser: BrowserDefaults = field(default_factory=BrowserDefaults)
    image: ImageDefaults = field(default_factory=ImageDefaults)
    ui: UiDefaults = field(default_factory=UiDefaults)
    source: Path | None = None


def user_config_path() -> Path:
    xdg_override = os.environ.get(XDG_CONFIG_ENV)
    if xdg_override:
        return Path(xdg_override) / "paymeqr" / CONFIG_FILENAME
    if sys.platform == "darwin":
        return Path.home() / ".config" / "paymeqr" / CONFIG_FILENAME
    return Path(user_config_dir("paymeqr", appauthor=False)) / CONFIG_FILENAME


def resolve_config_path(path: str | Path | None = None) -> Path | None:
    if path:
        return Path(path)
    env_path = os.environ.get(CONFIG_ENV)
    if env_path and env_path.strip():
        return Path(env_path.strip())
    candidate = user_config_path()
    if candidate.is_file():
        return candidate
    return None


def load_app_config(path: str | Path | None = None) -> AppConfig:
    config_path = resolve_config_path(path)
    if config_path is None:
        return AppConfig()
    data = _load_toml(config_path)
    return AppConfig(
        qr_config=build_qr_config(_get_dict(data, "qr")),
        browser=_parse_browser_defaults(_get_dict(data, "browser")),
        image=_parse_image_defaults(_get_dict(data, "image")),
        ui=UiDefaults(quiet=_parse_bool(_get_dict(data, "ui").get("quiet"), field="ui.quiet")),
        source=config_path,
    )


def build_qr_config(cfg: dict[str, object] | None = None) -> QrConfig:
    cfg = cfg or {}
    error = str(cfg.get("error", "M")).strip().upper()
    if error not in _ERROR_LEVELS:
        raise ValueError("qr.error must be one of L, M, Q, H")
    scale = _parse_int(cfg.get("scale"), field="qr.scale", default=4)
    if scale <= 0:
        raise ValueError("qr.scale must be a positive integer")
    border = _parse_int(cfg.get("border"), field="qr.border", default=4)
    if border < 0:
        raise ValueError("qr.border must be a non-negative integer")
    shape = str(cfg.get("module_shape", "square")).strip().lower()
    if shape not in {"square", "rounded"}:
        raise ValueError("qr.module_shape must be 'square' or 'rounded'")
    return QrConfig(
        error=error,
        scale=scale,
        border=border,
        dark=_parse_color(cfg.get("dark")),
        light=_parse_color(cfg.get("light")),
        module_shape=shape,
        version=_parse_optional_int(cfg.get("version"), field="qr.version"),
        mask=_parse_optional_int(cfg.get("mask"), field="qr.mask"),
        boost_error=_parse_bool(cfg.get("boost_error"), field="qr.boost_error", default=True),
    )


def _parse_browser_defaults(cfg: dict[str, object]) -> BrowserDefaults:
    loader_url = _parse_optional_str(cfg.get("loader_url"), field="browser.loader_url")
    if loader_url is not None and urlparse(loader_url).scheme != "https":
        raise ValueError("browser.loader_url must be an https URL")
    marker = _parse_optional_str(cfg.get("script_marker"), field="browser.script_marker")
    return BrowserDefaults(
        loader_url=loader_url or QRCODE_LOADER_URL,
        script_marker=marker or QRCODE_SCRIPT_MARKER,
    )


def _parse_image_defaults(cfg: dict[str, object]) -> ImageDefaults:
    alt = _parse_optional_str(cfg.get("alt"), field="image.alt")
    return ImageDefaults(alt=alt or DEFAULT_ALT_TEXT)


def _load_toml(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _get_dict(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if isinstance(value, dict):
        return value
    return {}


def _parse_optional_str(value: object, *, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    normalized = value.strip()
    return normalized or None


def _parse_bool(value: object, *, field: str, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
        raise ValueError(f"{field} must be a boolean")
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"{field} must be a boolean")


def _parse_int_strict(value: object, *, field: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{field} must be an integer")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError as exc:
            raise ValueError(f"{field} must be an integer") from exc
    raise ValueError(f"{field} must be an integer")


def _parse_int(value: object, *, field: str, default: int) -> int:
    if value is None:
        return default
    return _parse_int_strict(value, field=field)


def _parse_optional_int(value: object, *, field: str) -> int | None:
    if value is None:
        return None
    return _parse_int_strict(value, field=field)


def _parse_color(value: object) -> str | tuple[int, int, int] | tuple[int, int, int, int] | None:
    if value is None:
        return None
    if isinstance(value, str):
        if value.strip().lower() in ("none", "transparent"):
            return None
        return value
    if isinstance(value, (list, tuple)):
        if len(value) == 3:
            return (int(value[0]), int(value[1]), int(value[2]))
        if len(value) == 4:
            return (int(value[0]), int(value[1]), int(value[2]), int(value[3]))
    return None
