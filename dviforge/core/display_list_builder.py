# DviForge - A DVI to SVG Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
DisplayListBuilder - Page Display List Management

Collects the drawing elements of the current page. Regular graphics
operations are appended in paint order; background elements are placed
underneath everything already on the page, so a background is correct even
if it is supplied after other content has been emitted.
"""

from __future__ import annotations

from .color import Color
from . import types as dv


class DisplayListBuilder:
    """
    Owns the display list of the current page.

    A fresh DisplayList is started with start_page(); the builder keeps track
    of how many background elements sit at the bottom of the list.
    """

    def __init__(self, display_list: dv.DisplayList | None = None):
        self.display_list = display_list if display_list is not None else dv.DisplayList()
        self.background_count = 0

    def start_page(self, width: float, height: float) -> dv.DisplayList:
        """Begin a new, empty display list for the next page."""
        self.display_list = dv.DisplayList(width, height)
        self.background_count = 0
        return self.display_list

    def add_graphics_operation(self, graphics_element) -> None:
        """Append a drawing element on top of the current page content."""
        self.display_list.append(graphics_element)

    def add_background(self, graphics_element) -> None:
        """Insert an element below all non-background content of the page."""
        self.display_list.insert(self.background_count, graphics_element)
        self.background_count += 1

    def fill_page(self, color: Color) -> dv.FillRect:
        """Add a full-page rectangle of ``color`` as page background."""
        rect = dv.FillRect(0.0, 0.0, self.display_list.width, self.display_list.height, color)
        self.add_background(rect)
        return rect
