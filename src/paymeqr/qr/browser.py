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

"""Browser host contract and its Pyodide implementation.

The locator only talks to these protocols, so the script-loading logic can run
against an in-memory document in tests and against the real DOM under Pyodide.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

Listener = Callable[[object], None]


class ScriptTag(Protocol):
    src: str
    cross_origin: str | None

    @property
    def settled(self) -> bool: ...

    def add_listener(self, event: str, listener: Listener) -> None: ...

    def remove(self) -> None: ...


class Document(Protocol):
    def find_script(self, marker: str) -> ScriptTag | None: ...

    def create_script(self) -> ScriptTag: ...

    def append_to_head(self, script: ScriptTag) -> None: ...


class BrowserRuntime(Protocol):
    document: Document

    def lookup_global(self, name: str) -> object | None: ...


class _JsScript:
    def __init__(
        self,
        element: Any,
        create_proxy: Callable[[Listener], Any],
        performance: Any | None = None,
    ) -> None:
        self.element = element
        self._create_proxy = create_proxy
        self._performance = performance
        # Proxies must outlive the call that registers them.
        self._proxies: list[Any] = []

    @property
    def src(self) -> str:
        return str(self.element.src)

    @src.setter
    def src(self, value: str) -> None:
        self.element.src = value

    @property
    def cross_origin(self) -> str | None:
        return self.element.crossOrigin

    @cross_origin.setter
    def cross_origin(self, value: str | None) -> None:
        self.element.crossOrigin = value

    @property
    def settled(self) -> bool:
        """True once the browser finished fetching ``src`` (Resource Timing)."""
        if self._performance is None or not self.src:
            return False
        return self._performance.getEntriesByName(self.src).length > 0

    def add_listener(self, event: str, listener: Listener) -> None:
        proxy = self._create_proxy(listener)
        self._proxies.append(proxy)
        self.element.addEventListener(event, proxy)

    def remove(self) -> None:
        self.element.remove()


class _JsDocument:
    def __init__(
        self,
        document: Any,
        create_proxy: Callable[[Listener], Any],
        performance: Any | None = None,
    ) -> None:
        self._document = document
        self._create_proxy = create_proxy
        self._performance = performance

    def find_script(self, marker: str) -> _JsScript | None:
        element = self._document.querySelector(f'script[src*="{marker}"]')
        if element is None:
            return None
        return _JsScript(element, self._create_proxy, self._performance)

    def create_script(self) -> _JsScript:
        element = self._document.createElement("script")
        return _JsScript(element, self._create_proxy, self._performance)

    def append_to_head(self, script: ScriptTag) -> None:
        if not isinstance(script, _JsScript):
            raise TypeError("script was not created by this document")
        self._document.head.appendChild(script.element)


class PyodideRuntime:
    """Browser runtime backed by Pyodide's ``js`` module."""

    def __init__(
        self,
        js_module: Any | None = None,
        *,
        create_proxy: Callable[[Listener], Any] | None = None,
    ) -> None:
        if js_module is None:
            import js as js_module
        if create_proxy is None:
            from pyodide.ffi import create_proxy
        self._js = js_module
        self.document = _JsDocument(
            js_module.document, create_proxy, getattr(js_module, "performance", None)
        )

    def lookup_global(self, name: str) -> object | None:
        return getattr(self._js, name, None)
