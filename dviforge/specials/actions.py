# DviForge - A DVI to SVG Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from ..core import types as dv
from ..core.color import Color
from ..core.display_list_builder import DisplayListBuilder
from .handler import SpecialActions


class PageActions(SpecialActions):
    """SpecialActions implementation that records drawing in a display list."""

    def __init__(self, page_width: float = dv.DEFAULT_PAGE_WIDTH,
                 page_height: float = dv.DEFAULT_PAGE_HEIGHT) -> None:
        self._page_width = page_width
        self._page_height = page_height
        self._pageno = 0
        self._color = Color.BLACK
        self.background_color = None
        self.builder = DisplayListBuilder(dv.DisplayList(page_width, page_height))

    @property
    def current_page(self) -> int:
        return self._pageno

    @current_page.setter
    def current_page(self, pageno: int) -> None:
        self._pageno = pageno

    @property
    def page_width(self) -> float:
        return self._page_width

    @property
    def page_height(self) -> float:
        return self._page_height

    @property
    def display_list(self) -> dv.DisplayList:
        return self.builder.display_list

    def begin_page(self, pageno: int) -> dv.DisplayList:
        """Start rendering page ``pageno`` with an empty display list."""
        self._pageno = pageno
        self.background_color = None
        return self.builder.start_page(self._page_width, self._page_height)

    def fill_page(self, color: Color) -> None:
        self.builder.fill_page(color)
        self.background_color = color

    def fill_rect(self, x: float, y: float, width: float, height: float) -> dv.FillRect:
        """Draw a rectangle in the current fill color."""
        rect = dv.FillRect(x, y, width, height, self._color)
        self.builder.add_graphics_operation(rect)
        return rect

    def get_color(self) -> Color:
        return self._color

    def set_color(self, color: Color) -> None:
        self._color = color
