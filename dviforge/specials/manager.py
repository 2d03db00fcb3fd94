# DviForge - A DVI to SVG Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
SpecialManager - Special Dispatch Registry

Routes specials to the handler registered for their prefix and broadcasts
page-begin events to all registered page listeners.

Prefix matching is exact on the leading token of the special: the maximal
run of characters in [A-Za-z0-9_.-], extended by one trailing ':' if present.
``backgroundcolor red`` therefore does not match the ``background`` handler.

Handlers run strictly one at a time. Entering a dispatch while another one is
in progress (e.g. a handler feeding a special back into the manager) is a
programming error and raises RuntimeError.
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from typing import Iterable

from .handler import DVIBeginPageListener, SpecialActions, SpecialError, SpecialHandler

logger = logging.getLogger(__name__)

_PREFIX_RE = re.compile(r'\s*([A-Za-z0-9_.\-]+:?)\s*(.*)', re.DOTALL)


def extract_prefix(special: str) -> tuple[str, str]:
    """Split a special into (prefix, body). The prefix is '' if there is none."""
    m = _PREFIX_RE.match(special)
    if m is None:
        return '', special.strip()
    return m.group(1), m.group(2)


def builtin_handlers() -> list[SpecialHandler]:
    """Fresh instances of all handlers shipped with DviForge."""
    from .bgcolor import BgColorSpecialHandler
    from .color import ColorSpecialHandler
    return [BgColorSpecialHandler(), ColorSpecialHandler()]


class SpecialManager:
    def __init__(self) -> None:
        self._handlers: list[SpecialHandler] = []
        self._handlers_by_prefix: dict[str, SpecialHandler] = {}
        self._page_listeners: list[DVIBeginPageListener] = []
        self._active = None  # handler currently executing

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_handler(self, handler: SpecialHandler, ignore: Iterable[str] = ()) -> bool:
        """Register ``handler`` unless its name is in ``ignore``.

        Returns:
            True if the handler was registered.
        """
        if handler.name() in set(ignore):
            logger.debug("Special handler %s disabled", handler.name())
            return False
        for prefix in handler.prefixes():
            previous = self._handlers_by_prefix.get(prefix)
            if previous is not None and previous is not handler:
                logger.debug("Prefix '%s' moves from handler %s to %s",
                             prefix, previous.name(), handler.name())
            self._handlers_by_prefix[prefix] = handler
        if handler not in self._handlers:
            self._handlers.append(handler)
            if isinstance(handler, DVIBeginPageListener):
                self._page_listeners.append(handler)
        return True

    def register_handlers(self, handlers: Iterable[SpecialHandler] | None = None,
                          ignore: Iterable[str] = ()) -> None:
        """Register ``handlers`` (default: the built-in set), skipping ignored names."""
        ignore = set(ignore)
        for handler in (builtin_handlers() if handlers is None else handlers):
            self.register_handler(handler, ignore)

    def find_handler(self, prefix: str) -> SpecialHandler | None:
        return self._handlers_by_prefix.get(prefix)

    def handlers(self) -> list[SpecialHandler]:
        return list(self._handlers)

    def page_listeners(self) -> list[DVIBeginPageListener]:
        return list(self._page_listeners)

    def write_handler_info(self, out) -> None:
        """Write one ``name: info`` line per registered handler."""
        width = max((len(h.name()) for h in self._handlers), default=0)
        for handler in self._handlers:
            out.write(f"{handler.name():<{width}}  {handler.info()}\n")

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    @contextmanager
    def _dispatching(self, handler):
        if self._active is not None:
            raise RuntimeError(
                f"special dispatch re-entered while handler {self._active!r} is active")
        self._active = handler
        try:
            yield handler
        finally:
            self._active = None

    def reset(self) -> None:
        """Discard lookahead state of all handlers before a new lookahead pass."""
        for handler in self._handlers:
            handler.reset()

    def preprocess(self, special: str, actions: SpecialActions) -> bool:
        """Feed ``special`` to its handler's lookahead hook.

        Returns:
            False if no handler is registered for the special's prefix.
        """
        prefix, body = extract_prefix(special)
        handler = self._handlers_by_prefix.get(prefix)
        if handler is None:
            return False
        with self._dispatching(handler):
            try:
                handler.preprocess(prefix, body, actions)
            except SpecialError as exc:
                logger.warning("%s special on page %d: %s", prefix, actions.current_page, exc)
        return True

    def process(self, special: str, actions: SpecialActions) -> bool:
        """Feed ``special`` to its handler's render hook.

        Returns:
            True if a handler accepted and executed the special.
        """
        prefix, body = extract_prefix(special)
        handler = self._handlers_by_prefix.get(prefix)
        if handler is None:
            logger.debug("Ignoring unsupported special '%s'", special.strip())
            return False
        with self._dispatching(handler):
            try:
                ok = handler.process(prefix, body, actions)
            except SpecialError as exc:
                logger.warning("%s special on page %d: %s", prefix, actions.current_page, exc)
                return False
        if not ok:
            logger.warning("Invalid %s special on page %d: '%s'",
                           prefix, actions.current_page, special.strip())
        return ok

    def notify_begin_page(self, pageno: int, actions: SpecialActions) -> None:
        """Call dvi_begin_page() of all page listeners in registration order."""
        for listener in self._page_listeners:
            with self._dispatching(listener):
                listener.dvi_begin_page(pageno, actions)
