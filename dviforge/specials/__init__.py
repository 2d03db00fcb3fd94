# DviForge - A DVI to SVG Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
DviForge Specials Package - Public API

- handler.py: SpecialHandler, DVIBeginPageListener and SpecialActions interfaces
- manager.py: SpecialManager, the prefix-based dispatch registry
- actions.py: PageActions, display-list backed SpecialActions
- bgcolor.py / color.py: the built-in handlers
"""

from .actions import PageActions
from .bgcolor import BgColorSpecialHandler
from .color import ColorSpecialHandler
from .handler import DVIBeginPageListener, SpecialActions, SpecialError, SpecialHandler
from .manager import SpecialManager, builtin_handlers, extract_prefix

__all__ = [
    "BgColorSpecialHandler",
    "ColorSpecialHandler",
    "DVIBeginPageListener",
    "PageActions",
    "SpecialActions",
    "SpecialError",
    "SpecialHandler",
    "SpecialManager",
    "builtin_handlers",
    "extract_prefix",
]
