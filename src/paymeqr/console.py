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

import sys

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

THEME = Theme(
    {
        "warning": "yellow",
        "error": "red",
        "muted": "dim",
    }
)


def isatty(stream: object | None, fallback: object | None = None) -> bool:
    if stream is not None and hasattr(stream, "isatty"):
        try:
            return bool(stream.isatty())
        except (OSError, ValueError, AttributeError):
            return False
    return bool(getattr(fallback, "isatty", lambda: False)())


def _build_console() -> Console:
    return Console(stderr=True, theme=THEME, force_terminal=isatty(sys.__stderr__, sys.stderr))


console_err = _build_console()


def note(message: str, *, quiet: bool) -> None:
    if quiet:
        return
    console_err.print(f"[muted]{escape(message)}[/muted]")


def warn(message: str, *, quiet: bool) -> None:
    if quiet:
        return
    console_err.print(f"[warning]Warning:[/warning] {escape(message)}")
