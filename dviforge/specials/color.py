# DviForge - A DVI to SVG Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Color special (dvips ``\\special{color ...}``).

    color push <color>   save the current color and switch to <color>
    color pop            restore the most recently saved color
    color <color>        switch to <color> and empty the color stack

The color stack is global to the document and persists across pages.
"""

from __future__ import annotations

import logging

from ..core.color import Color, ColorError
from .handler import SpecialActions, SpecialError, SpecialHandler

logger = logging.getLogger(__name__)


class ColorSpecialHandler(SpecialHandler):

    def __init__(self) -> None:
        self._color_stack: list[Color] = []

    def name(self) -> str:
        return "color"

    def info(self) -> str:
        return "complete support of color specials"

    def prefixes(self) -> tuple[str, ...]:
        return ("color",)

    @property
    def depth(self) -> int:
        return len(self._color_stack)

    def reset(self) -> None:
        self._color_stack.clear()

    def process(self, prefix: str, body: str, actions: SpecialActions) -> bool:
        cmd, _, rest = body.strip().partition(' ')
        try:
            if cmd == "push":
                color = Color.parse(rest)
                self._color_stack.append(actions.get_color())
                actions.set_color(color)
            elif cmd == "pop":
                if not self._color_stack:
                    raise SpecialError("color stack underflow")
                actions.set_color(self._color_stack.pop())
            else:
                actions.set_color(Color.parse(body))
                self._color_stack.clear()
        except ColorError as exc:
            logger.debug("color special: %s", exc)
            return False
        return True
