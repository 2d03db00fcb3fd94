# DviForge - A DVI to SVG Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Two-pass document driver.

A Document is a sequence of pages, each a sequence of items in document
order: special strings and rules (filled rectangles drawn in the current
color). run_document() performs the lookahead pass over all pages and then
the render pass, producing one display list per page.

Documents can be loaded from JSON:

    {
      "width": 612, "height": 792,
      "pages": [
        {"items": ["background rgb 1 0 0", {"rule": [72, 72, 100, 20]}]},
        {"items": []}
      ]
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Union

from .core import types as dv
from .specials.actions import PageActions
from .specials.manager import SpecialManager

logger = logging.getLogger(__name__)


class DocumentError(ValueError):
    """Malformed document description."""
    pass


@dataclass(frozen=True)
class Rule:
    """Filled rectangle in the current color, top-left origin, bp units."""
    x: float
    y: float
    width: float
    height: float


PageItem = Union[str, Rule]


@dataclass
class Page:
    items: list = field(default_factory=list)

    def specials(self) -> Iterable[str]:
        return (item for item in self.items if isinstance(item, str))


@dataclass
class Document:
    pages: list = field(default_factory=list)
    width: float = dv.DEFAULT_PAGE_WIDTH
    height: float = dv.DEFAULT_PAGE_HEIGHT

    @classmethod
    def from_dict(cls, data: dict) -> Document:
        try:
            width = float(data.get("width", dv.DEFAULT_PAGE_WIDTH))
            height = float(data.get("height", dv.DEFAULT_PAGE_HEIGHT))
            pages = [Page([_parse_item(item) for item in page.get("items", [])])
                     for page in data["pages"]]
        except (KeyError, TypeError, AttributeError, ValueError) as exc:
            raise DocumentError(f"invalid document: {exc}") from exc
        return cls(pages, width, height)

    @classmethod
    def from_json(cls, path: str) -> Document:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise DocumentError(f"{path}: {exc}") from exc
        return cls.from_dict(data)


def _parse_item(item) -> PageItem:
    if isinstance(item, str):
        return item
    if isinstance(item, dict) and "rule" in item:
        x, y, w, h = (float(v) for v in item["rule"])
        return Rule(x, y, w, h)
    raise ValueError(f"unknown page item {item!r}")


def preprocess_document(doc: Document, manager: SpecialManager, actions: PageActions) -> None:
    """Lookahead pass: feed all specials to the handlers' preprocess hooks."""
    manager.reset()
    for pageno, page in enumerate(doc.pages, start=1):
        actions.current_page = pageno
        for special in page.specials():
            manager.preprocess(special, actions)


def render_page(pageno: int, page: Page, manager: SpecialManager, actions: PageActions) -> dv.DisplayList:
    """Render pass for a single page."""
    display_list = actions.begin_page(pageno)
    manager.notify_begin_page(pageno, actions)
    for item in page.items:
        if isinstance(item, Rule):
            actions.fill_rect(item.x, item.y, item.width, item.height)
        else:
            manager.process(item, actions)
    return display_list


def run_document(doc: Document, manager: SpecialManager,
                 actions: Optional[PageActions] = None,
                 device: Optional[Callable[[PageActions, int], None]] = None,
                 page_filter: Optional[set] = None) -> list:
    """Run both passes over ``doc``.

    Args:
        doc: Document to process
        manager: SpecialManager with registered handlers
        actions: Drawing context (a fresh PageActions sized to the document if None)
        device: Called as device(actions, pageno) after each rendered page
        page_filter: Page numbers passed to the device (default: all)

    Returns:
        List of display lists, one per page.
    """
    if actions is None:
        actions = PageActions(doc.width, doc.height)

    preprocess_document(doc, manager, actions)

    display_lists = []
    for pageno, page in enumerate(doc.pages, start=1):
        display_lists.append(render_page(pageno, page, manager, actions))
        if device is not None and (page_filter is None or pageno in page_filter):
            device(actions, pageno)
    logger.info("Processed %d page(s)", len(doc.pages))
    return display_lists
