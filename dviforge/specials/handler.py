# DviForge - A DVI to SVG Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Special Handler Interfaces

A special is an out-of-band directive embedded in the DVI stream
(``\\special{background rgb 1 0 0}``). The first token of a special, its
prefix, selects the handler family; the remainder is the handler's body.

The document is traversed twice:

1. Lookahead pass: every special is passed to SpecialHandler.preprocess().
   Nothing is drawn; handlers collect page-indexed state.
2. Render pass: at the start of each page every DVIBeginPageListener is
   notified, then specials are passed to SpecialHandler.process() in
   document order, interleaved with the regular drawing operations.

Effects that must appear underneath the page content (a page background)
are learned in pass 1 and emitted from dvi_begin_page() in pass 2.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..core.color import Color


class SpecialError(Exception):
    """Malformed special body."""
    pass


class SpecialActions(ABC):
    """Drawing and state context shared by all handlers of a document."""

    background_color: Color | None = None

    @property
    @abstractmethod
    def current_page(self) -> int:
        """Number of the page being processed (1-based)."""

    @property
    @abstractmethod
    def page_width(self) -> float: ...

    @property
    @abstractmethod
    def page_height(self) -> float: ...

    @abstractmethod
    def fill_page(self, color: Color) -> None:
        """Paint a rectangle of ``color`` covering the full page, underneath its content."""

    @abstractmethod
    def get_color(self) -> Color:
        """Current fill color used by subsequent drawing operations."""

    @abstractmethod
    def set_color(self, color: Color) -> None: ...


class SpecialHandler(ABC):
    """Handles all specials starting with one of its prefixes."""

    @abstractmethod
    def name(self) -> str:
        """Short handler name, used to enable/disable handlers."""

    def info(self) -> str:
        return ""

    @abstractmethod
    def prefixes(self) -> tuple[str, ...]:
        """Prefixes claimed by this handler. Must not change over the handler's lifetime."""

    def preprocess(self, prefix: str, body: str, actions: SpecialActions) -> None:
        """Lookahead pass hook. Must not draw."""
        pass

    @abstractmethod
    def process(self, prefix: str, body: str, actions: SpecialActions) -> bool:
        """Render pass hook.

        Returns:
            False if ``body`` is malformed for this handler.
        """

    def reset(self) -> None:
        """Discard state collected by a previous lookahead pass."""
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name()}>"


class DVIBeginPageListener(ABC):
    """Notified at the start of each page, before anything is drawn on it."""

    @abstractmethod
    def dvi_begin_page(self, pageno: int, actions: SpecialActions) -> None:
        pass
