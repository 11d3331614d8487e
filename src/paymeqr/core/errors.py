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


class PayMeQRError(Exception):
    """Base class for every error raised by paymeqr."""


class ValidationError(PayMeQRError, ValueError):
    """A payment field was rejected; fix the input and call again."""


class UnsupportedEnvironmentError(PayMeQRError, RuntimeError):
    """The requested output is not available in the detected environment."""


class DependencyLoadError(PayMeQRError, RuntimeError):
    """The browser QR encoder could not be loaded; calling again retries."""


@dataclass
class EncodingError(PayMeQRError, RuntimeError):
    action: str
    detail: str

    def __str__(self) -> str:
        message = self.detail.strip() or "unknown error"
        return f"Failed to {self.action}: {message}"


def wrap_encoder_error(exc: BaseException, *, action: str) -> EncodingError:
    detail = str(exc).strip() or exc.__class__.__name__
    return EncodingError(action=action, detail=detail)
