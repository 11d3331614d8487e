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

from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TypeVar

from .config import AppConfig, load_app_config
from .core.errors import UnsupportedEnvironmentError, wrap_encoder_error
from .core.models import Environment, PaymentParameters
from .payment.params import PaymentRequest
from .payment.uri import encode_upi_uri
from .qr.browser import BrowserRuntime, PyodideRuntime
from .qr.environment import detect_environment
from .qr.image import DEFAULT_ALT_TEXT, DEFAULT_LOADING, QrImage
from .qr.locator import BrowserEncoderState, EncoderLocator

_T = TypeVar("_T")


class ImageProducer:
    def __init__(self, locator: EncoderLocator, *, alt_text: str = DEFAULT_ALT_TEXT) -> None:
        self.locator = locator
        self.alt_text = alt_text

    @property
    def environment(self) -> Environment:
        return self.locator.environment

    async def create_display_result(self, params: PaymentParameters) -> str | QrImage:
        """Render ``params`` for display.

        Returns a PNG data URL on a server, or a :class:`QrImage` in the browser.
        """
        link = encode_upi_uri(params)
        environment = self.environment
        if environment is Environment.SERVER:
            server_encoder = self.locator.get_server_encoder()
            return await _invoke(server_encoder.to_data_url, link, action="generate QR code")
        if environment is Environment.BROWSER:
            browser_encoder = await self.locator.get_browser_encoder()
            data_url = await _invoke(browser_encoder.to_data_url, link, action="generate QR code")
            return QrImage(src=data_url, alt=self.alt_text, loading=DEFAULT_LOADING)
        raise UnsupportedEnvironmentError("Unsupported environment for QR generation")

    async def create_buffer_result(self, params: PaymentParameters) -> bytes:
        """Render ``params`` as PNG bytes; only available on a server."""
        if self.environment is not Environment.SERVER:
            raise UnsupportedEnvironmentError(
                "QR code buffers are only available in a server environment"
            )
        link = encode_upi_uri(params)
        encoder = self.locator.get_server_encoder()
        return await _invoke(encoder.to_buffer, link, action="generate QR code buffer")


async def _invoke(call: Callable[[str], Awaitable[_T]], link: str, *, action: str) -> _T:
    try:
        return await call(link)
    except Exception as exc:
        # Encoders are opaque; whatever they raise surfaces as EncodingError.
        raise wrap_encoder_error(exc, action=action) from exc


def build_image_producer(
    config: AppConfig | None = None,
    *,
    environment: Environment | None = None,
    browser: BrowserRuntime | None = None,
    state: BrowserEncoderState | None = None,
) -> ImageProducer:
    config = config or load_app_config()
    environment = environment or detect_environment()
    if environment is Environment.BROWSER and browser is None:
        browser = PyodideRuntime()
    locator = EncoderLocator(
        environment=environment,
        browser=browser,
        qr_config=config.qr_config,
        state=state,
        loader_url=config.browser.loader_url,
        script_marker=config.browser.script_marker,
        quiet=config.ui.quiet,
    )
    return ImageProducer(locator, alt_text=config.image.alt)


class PayMeQR(PaymentRequest):
    """UPI payment request that can render itself as a QR code.

    >>> qr = PayMeQR("you@upi").set_payee_name("Jane Doe").set_amount(99)
    >>> qr.uri
    'upi://pay?pa=you%40upi&cu=INR&pn=Jane+Doe&am=99.00'

    ``create_qr_code`` returns a PNG data URL on a server and a
    :class:`QrImage` in the browser. ``get_qr_code_buffer`` and
    ``save_qr_code`` are server-only.
    """

    def __init__(
        self,
        upi_id: str,
        *,
        producer: ImageProducer | None = None,
        config: AppConfig | None = None,
    ) -> None:
        super().__init__(upi_id)
        self._producer = producer
        self._config = config

    @property
    def producer(self) -> ImageProducer:
        if self._producer is None:
            self._producer = build_image_producer(self._config)
        return self._producer

    async def create_qr_code(self) -> str | QrImage:
        return await self.producer.create_display_result(self.parameters)

    async def get_qr_code_buffer(self) -> bytes:
        return await self.producer.create_buffer_result(self.parameters)

    async def save_qr_code(self, path: str | Path) -> Path:
        target = Path(path)
        if target.suffix and target.suffix.lower() != ".png":
            raise ValueError(f"QR codes are saved as PNG, got {target.suffix}")
        payload = await self.get_qr_code_buffer()
        target.write_bytes(payload)
        return target
