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

"""UPI payment QR codes for servers and Pyodide-hosted browsers."""

from .config import AppConfig, load_app_config
from .core.errors import (
    DependencyLoadError,
    EncodingError,
    PayMeQRError,
    UnsupportedEnvironmentError,
    ValidationError,
)
from .core.models import CURRENCY_CODE, Environment, PaymentParameters
from .payment.params import PaymentRequest
from .payment.uri import encode_upi_uri, query_pairs
from .producer import ImageProducer, PayMeQR, build_image_producer
from .qr.environment import HostProbe, detect_environment, probe_host
from .qr.image import QrImage
from .qr.locator import (
    BrowserEncoderState,
    EncoderLocator,
    LoadStatus,
    shared_browser_state,
)

__all__ = [
    "AppConfig",
    "BrowserEncoderState",
    "CURRENCY_CODE",
    "DependencyLoadError",
    "EncoderLocator",
    "EncodingError",
    "Environment",
    "HostProbe",
    "ImageProducer",
    "LoadStatus",
    "PayMeQR",
    "PayMeQRError",
    "PaymentParameters",
    "PaymentRequest",
    "QrImage",
    "UnsupportedEnvironmentError",
    "ValidationError",
    "build_image_producer",
    "detect_environment",
    "encode_upi_uri",
    "load_app_config",
    "probe_host",
    "query_pairs",
    "shared_browser_state",
]
