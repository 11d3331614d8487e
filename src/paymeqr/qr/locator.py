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

"""Resolve a ready QR encoder for the detected environment.

The browser encoder is fetched at most once per process: the first caller
injects (or adopts) the loader ``<script>`` and every later caller awaits the
same future until it settles. A failed load is forgotten so the next call
tries again.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum

from ..console import note, warn
from ..core.errors import DependencyLoadError, UnsupportedEnvironmentError
from ..core.models import Environment
from .browser import BrowserRuntime, ScriptTag
from .codec import QrConfig
from .encoders import BrowserEncoder, GlobalQrEncoder, SegnoEncoder, ServerEncoder

QRCODE_LOADER_URL = "https://cdnjs.cloudflare.com/ajax/libs/qrcode/1.5.1/qrcode.min.js"
QRCODE_SCRIPT_MARKER = "qrcode.min.js"
QRCODE_GLOBAL = "QRCode"


class LoadStatus(str, Enum):
    ABSENT = "absent"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass
class BrowserEncoderState:
    status: LoadStatus = LoadStatus.ABSENT
    handle: object | None = None
    pending: asyncio.Future[object] | None = None
    injections: int = 0

    def begin(self, future: asyncio.Future[object]) -> None:
        self.status = LoadStatus.LOADING
        self.pending = future

    def mark_ready(self, handle: object) -> None:
        self.status = LoadStatus.READY
        self.handle = handle
        self.pending = None

    def mark_failed(self) -> None:
        self.status = LoadStatus.FAILED
        self.handle = None
        self.pending = None

    def reset(self) -> None:
        self.status = LoadStatus.ABSENT
        self.handle = None
        self.pending = None
        self.injections = 0


_SHARED_STATE = BrowserEncoderState()


def shared_browser_state() -> BrowserEncoderState:
    return _SHARED_STATE


class EncoderLocator:
    def __init__(
        self,
        *,
        environment: Environment,
        browser: BrowserRuntime | None = None,
        server_encoder: ServerEncoder | None = None,
        qr_config: QrConfig | None = None,
        state: BrowserEncoderState | None = None,
        loader_url: str = QRCODE_LOADER_URL,
        script_marker: str = QRCODE_SCRIPT_MARKER,
        quiet: bool = False,
    ) -> None:
        self.environment = environment
        self.state = state if state is not None else shared_browser_state()
        self._browser = browser
        self._server_encoder = server_encoder
        self._qr_config = qr_config
        self._loader_url = loader_url
        self._script_marker = script_marker
        self._quiet = quiet

    def get_server_encoder(self) -> ServerEncoder:
        if self.environment is not Environment.SERVER:
            raise UnsupportedEnvironmentError(
                f"server QR encoder is not available in a {self.environment.value} environment"
            )
        if self._server_encoder is None:
            self._server_encoder = SegnoEncoder(self._qr_config)
        return self._server_encoder

    async def get_browser_encoder(self) -> BrowserEncoder:
        runtime = self._require_browser()
        if self.state.status is LoadStatus.READY and self.state.handle is not None:
            return GlobalQrEncoder(self.state.handle)

        handle = runtime.lookup_global(QRCODE_GLOBAL)
        if handle is not None:
            self.state.mark_ready(handle)
            return GlobalQrEncoder(handle)

        pending = self.state.pending
        if self.state.status is not LoadStatus.LOADING or pending is None:
            pending = self._start_load(runtime)
        # Cancelling one waiter leaves the shared fetch running.
        handle = await asyncio.shield(pending)
        return GlobalQrEncoder(handle)

    def _require_browser(self) -> BrowserRuntime:
        if self.environment is not Environment.BROWSER:
            raise UnsupportedEnvironmentError(
                f"browser QR encoder is not available in a {self.environment.value} environment"
            )
        if self._browser is None:
            raise UnsupportedEnvironmentError("no browser runtime configured")
        return self._browser

    def _start_load(self, runtime: BrowserRuntime) -> asyncio.Future[object]:
        future: asyncio.Future[object] = asyncio.get_running_loop().create_future()
        self.state.begin(future)
        document = runtime.document

        script = document.find_script(self._script_marker)
        if script is not None and script.settled:
            # Already loaded without defining the global; it will not fire again.
            warn(f"Replacing stale QR encoder script {script.src}", quiet=self._quiet)
            script.remove()
            script = None
        if script is not None:
            self._watch(
                runtime,
                script,
                future,
                error_message="QRCode library failed to load.",
            )
            return future

        script = document.create_script()
        script.src = self._loader_url
        script.cross_origin = "anonymous"
        self._watch(
            runtime,
            script,
            future,
            error_message="Failed to load QRCode library from CDN. Please check your connection.",
        )
        document.append_to_head(script)
        self.state.injections += 1
        note(f"Loading QR encoder from {self._loader_url}", quiet=self._quiet)
        return future

    def _watch(
        self,
        runtime: BrowserRuntime,
        script: ScriptTag,
        future: asyncio.Future[object],
        *,
        error_message: str,
    ) -> None:
        def on_load(_event: object = None) -> None:
            handle = runtime.lookup_global(QRCODE_GLOBAL)
            if handle is None:
                self._fail(script, future, f"{QRCODE_GLOBAL} is undefined after the loader ran.")
                return
            if self.state.pending is future:
                self.state.mark_ready(handle)
            if not future.done():
                future.set_result(handle)

        def on_error(_event: object = None) -> None:
            self._fail(script, future, error_message)

        script.add_listener("load", on_load)
        script.add_listener("error", on_error)

    def _fail(self, script: ScriptTag, future: asyncio.Future[object], message: str) -> None:
        if self.state.pending is future:
            self.state.mark_failed()
        # Failed tags are dropped so the next attempt injects a fresh one.
        script.remove()
        warn(message, quiet=self._quiet)
        if not future.done():
            future.set_exception(DependencyLoadError(message))
