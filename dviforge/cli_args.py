# DviForge - A DVI to SVG Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CLI argument parsing for DviForge.

Handles command-line argument definition, parsing, page and character range
specifications, and output file naming.
"""

from __future__ import annotations

import argparse
import os
from importlib import metadata


def _parse_ranges(spec: str, minimum: int, what: str, base: int = 10) -> set[int]:
    numbers: set[int] = set()
    for part in spec.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            bounds = part.split("-", 1)
            if len(bounds) != 2 or not bounds[0].strip() or not bounds[1].strip():
                raise ValueError(f"Invalid {what} range: '{part}'")
            try:
                start = int(bounds[0], base)
                end = int(bounds[1], base)
            except ValueError:
                raise ValueError(f"Invalid {what} range: '{part}'")
            if start < minimum or end < minimum:
                raise ValueError(f"{what.capitalize()} numbers must be >= {minimum}: '{part}'")
            if start > end:
                raise ValueError(f"Invalid {what} range (start > end): '{part}'")
            numbers.update(range(start, end + 1))
        else:
            try:
                num = int(part, base)
            except ValueError:
                raise ValueError(f"Invalid {what} number: '{part}'")
            if num < minimum:
                raise ValueError(f"{what.capitalize()} numbers must be >= {minimum}: '{part}'")
            numbers.add(num)
    if not numbers:
        raise ValueError(f"Empty {what} range specification")
    return numbers


def _parse_page_ranges(spec: str) -> set[int]:
    """Parse a page range specification into a set of page numbers.

    Supports single pages (``3``), ranges (``1-5``), and comma-separated
    combinations (``1-3,7,10-12``).  Page numbers are 1-based.

    Raises:
        ValueError: If the specification is malformed.
    """
    return _parse_ranges(spec, 1, "page")


def _parse_char_ranges(spec: str) -> set[int]:
    """Parse a character code range such as ``0-127`` or ``0x41-0x5a,48``."""
    return _parse_ranges(spec, 0, "character", base=0)


def get_output_base_name(outputfile: str | None, inputfile: str) -> str:
    """
    Derive output base name from command-line arguments.

    Args:
        outputfile: The -o argument value (or None)
        inputfile: The input document path

    Returns:
        Base name for output files (without extension)
    """
    if outputfile:
        base = os.path.basename(outputfile)
        return os.path.splitext(base)[0]
    base = os.path.basename(inputfile)
    return os.path.splitext(base)[0] or "page"


def _get_version() -> str:
    try:
        return metadata.version("dviforge")
    except metadata.PackageNotFoundError:
        return "unknown"


def build_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the DviForge argument parser."""
    parser = argparse.ArgumentParser(
        prog="dviforge",
        description="DviForge - DVI to SVG converter",
    )

    parser.add_argument(
        "-V", "--version", action="version",
        version=f"DviForge {_get_version()}"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--font-dir", dest="font_dirs", action="append", default=[],
        help="Add a directory to the font search path (may be repeated)"
    )
    parser.add_argument(
        "--list-specials", action="store_true",
        help="List the supported special handlers and exit"
    )

    subparsers = parser.add_subparsers(dest="command")

    tfm = subparsers.add_parser("tfm", help="Print the metrics of a TFM file")
    tfm.add_argument("font", help="Font name (looked up as <font>.tfm) or path to a .tfm file")
    tfm.add_argument(
        "--chars",
        help="Character codes to list (e.g., 0-127, 65, 0x41-0x5a); default: all"
    )

    render = subparsers.add_parser("render", help="Render a JSON page document to SVG")
    render.add_argument("inputfile", help="JSON document to render")
    render.add_argument(
        "-o", "--output", dest="outputfile", help="Specify output filename base"
    )
    render.add_argument(
        "--output-dir", dest="output_dir", default="df_output",
        help="Specify output directory (default: df_output)"
    )
    render.add_argument(
        "--pages",
        help="Page range to output (e.g., 1-5, 3, 1-3,7,10-12)"
    )
    render.add_argument(
        "--no-specials", dest="no_specials", default="",
        help="Comma-separated special handler names to disable (e.g., bgcolor,color)"
    )

    return parser
