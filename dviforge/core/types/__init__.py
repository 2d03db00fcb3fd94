# DviForge - A DVI to SVG Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
DviForge Types Package - Public API

Re-exports the display list types so callers can use a single namespace:

```python
from ..core import types as dv

display_list = dv.DisplayList(612, 792)
display_list.append(dv.FillRect(0, 0, 612, 792, color))
```
"""

from .graphics import DisplayList, FillRect, DEFAULT_PAGE_WIDTH, DEFAULT_PAGE_HEIGHT

__all__ = [
    "DisplayList",
    "FillRect",
    "DEFAULT_PAGE_WIDTH",
    "DEFAULT_PAGE_HEIGHT",
]
