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

import importlib.util
import sys
from dataclasses import dataclass

from ..core.models import Environment

HOST_ENCODER_MODULE = "segno"


@dataclass(frozen=True)
class HostProbe:
    has_window: bool
    can_import_encoder: bool


def probe_host() -> HostProbe:
    return HostProbe(
        has_window=_browser_window() is not None,
        can_import_encoder=_can_import(HOST_ENCODER_MODULE),
    )


def detect_environment(probe: HostProbe | None = None) -> Environment:
    probe = probe or probe_host()
    if probe.has_window:
        return Environment.BROWSER
    if probe.can_import_encoder:
        return Environment.SERVER
    return Environment.UNSUPPORTED


def _browser_window() -> object | None:
    if sys.platform != "emscripten":
        return None
    try:
        import js
    except ImportError:
        return None
    return getattr(js, "window", None)


def _can_import(module: str) -> bool:
    try:
        return importlib.util.find_spec(module) is not None
    except (ImportError, ValueError):
        return False
