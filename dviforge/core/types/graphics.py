# DviForge - A DVI to SVG Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Display list types. A page is rendered by accumulating drawing elements in a
DisplayList in paint order; output devices replay the list.

Coordinates are in PostScript big points (bp) with the origin at the top-left
corner of the page and y growing downwards, as in SVG.
"""

from __future__ import annotations

from ..color import Color

# US Letter
DEFAULT_PAGE_WIDTH = 612.0
DEFAULT_PAGE_HEIGHT = 792.0


class DisplayList(list):
    def __init__(self, width: float = DEFAULT_PAGE_WIDTH, height: float = DEFAULT_PAGE_HEIGHT) -> None:
        super().__init__()

        self.width = width
        self.height = height

    """
    This is a list of drawing elements (FillRect, ...) in paint order.
    The first element is painted first, i.e. lies underneath all others.
    """


class FillRect:
    """Solid axis-aligned rectangle."""

    __slots__ = ('x', 'y', 'width', 'height', 'color')

    def __init__(self, x: float, y: float, width: float, height: float, color: Color) -> None:
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.color = color

    def __eq__(self, other) -> bool:
        if not isinstance(other, FillRect):
            return NotImplemented
        return (self.x, self.y, self.width, self.height, self.color) == \
               (other.x, other.y, other.width, other.height, other.color)

    def __repr__(self) -> str:
        return f"FillRect({self.x:g}, {self.y:g}, {self.width:g}, {self.height:g}, {self.color})"
