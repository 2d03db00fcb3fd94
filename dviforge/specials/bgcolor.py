# DviForge - A DVI to SVG Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Background color special (dvips ``\\special{background <color>}``).

The background must lie underneath everything on the page, but the special
may appear anywhere in the page content. The lookahead pass therefore
records (page, color) pairs, and the page background is painted from
dvi_begin_page() before any content of the page is drawn. A color stays in
effect on all following pages until another background special replaces it.
"""

from __future__ import annotations

import bisect
import logging

from ..core.color import Color, ColorError
from .handler import DVIBeginPageListener, SpecialActions, SpecialHandler

logger = logging.getLogger(__name__)


class BgColorSpecialHandler(SpecialHandler, DVIBeginPageListener):

    def __init__(self) -> None:
        self._page_colors: list[tuple[int, Color]] = []  # (page number, color), document order
        self._pages: list[int] = []  # page numbers of _page_colors, for bisect

    def name(self) -> str:
        return "bgcolor"

    def info(self) -> str:
        return "background color special"

    def prefixes(self) -> tuple[str, ...]:
        return ("background",)

    @property
    def page_colors(self) -> list[tuple[int, Color]]:
        return list(self._page_colors)

    def reset(self) -> None:
        self._page_colors.clear()
        self._pages.clear()

    def preprocess(self, prefix: str, body: str, actions: SpecialActions) -> None:
        try:
            color = Color.parse(body)
        except ColorError as exc:
            logger.warning("Ignoring background special on page %d: %s", actions.current_page, exc)
            return
        self._page_colors.append((actions.current_page, color))
        self._pages.append(actions.current_page)

    def process(self, prefix: str, body: str, actions: SpecialActions) -> bool:
        # The visible background was painted at page begin; only remember
        # the color for consumers that query it later on the page.
        try:
            actions.background_color = Color.parse(body)
        except ColorError:
            return False
        return True

    def color_at(self, pageno: int) -> Color | None:
        """Background color in effect on ``pageno``, or None."""
        # Entries are ordered by page; the last one at or before pageno wins
        pos = bisect.bisect_right(self._pages, pageno)
        if pos == 0:
            return None
        return self._page_colors[pos - 1][1]

    def dvi_begin_page(self, pageno: int, actions: SpecialActions) -> None:
        color = self.color_at(pageno)
        if color is not None:
            actions.fill_page(color)
