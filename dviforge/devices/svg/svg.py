# DviForge - A DVI to SVG Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
SVG Output Device

Renders a page display list to an SVG file using Cairo's SVGSurface. The
page is left transparent; a page background only appears if a background
special put one into the display list.
"""

from __future__ import annotations

import io
import logging
import os

import cairo

from ...core import types as dv

logger = logging.getLogger(__name__)


def render_display_list(display_list: dv.DisplayList, cairo_ctx) -> None:
    """Replay ``display_list`` on a Cairo context in paint order."""
    for element in display_list:
        if isinstance(element, dv.FillRect):
            cairo_ctx.set_source_rgb(*element.color.rgb())
            cairo_ctx.rectangle(element.x, element.y, element.width, element.height)
            cairo_ctx.fill()
        else:
            logger.debug("SVG device skips unsupported element %r", element)


def render_svg(display_list: dv.DisplayList) -> bytes:
    """Render ``display_list`` and return the SVG document."""
    svg_buffer = io.BytesIO()
    surface = cairo.SVGSurface(svg_buffer, display_list.width, display_list.height)
    surface.set_document_unit(cairo.SVG_UNIT_PT)
    cc = cairo.Context(surface)
    render_display_list(display_list, cc)
    surface.finish()
    return svg_buffer.getvalue()


def showpage(display_list: dv.DisplayList, output_file: str) -> None:
    """Write ``display_list`` to ``output_file`` as SVG."""
    with open(output_file, 'wb') as f:
        f.write(render_svg(display_list))
    logger.info("Wrote %s", output_file)


class SVGDevice:
    """Page sink for driver.run_document(): writes ``<base>-<page>.svg`` files."""

    def __init__(self, output_dir: str, base_name: str = "page") -> None:
        self.output_dir = output_dir
        self.base_name = base_name
        self.written: list[str] = []

    def output_file(self, pageno: int) -> str:
        return os.path.join(self.output_dir, f"{self.base_name}-{pageno:04d}.svg")

    def __call__(self, actions, pageno: int) -> None:
        os.makedirs(self.output_dir, exist_ok=True)
        path = self.output_file(pageno)
        showpage(actions.display_list, path)
        self.written.append(path)
