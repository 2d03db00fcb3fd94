#!/usr/bin/env python3
# DviForge - A DVI to SVG Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
DviForge - command line entry point

Usage:
    dviforge tfm cmr10 --chars 65-90
    dviforge --font-dir ~/texmf/fonts/tfm tfm cmr10
    dviforge render doc.json --output-dir out --pages 1-3
    dviforge --list-specials
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Dict, Optional

from .cli_args import (
    _parse_char_ranges, _parse_page_ranges, build_argument_parser, get_output_base_name,
)
from .core.file_finder import FileFinder, default_search_path
from .core.tfm import TFM, TFMError, read_tfm
from .driver import Document, DocumentError, run_document
from .specials.manager import SpecialManager


def init_system_params(args) -> Dict[str, Any]:
    """
    Build the run configuration from parsed command-line arguments.

    Returns:
        Dict[str, Any]: System parameters dictionary containing:
            - FontSearchPath: Directories searched for TFM files
              (--font-dir options, then DVIFORGE_FONTS, then the working directory)
            - OutputDirectory: Directory receiving SVG files
            - OutputBaseName: Base name of SVG files
            - PageFilter: Set of page numbers to write, or None for all
            - DisabledSpecials: Names of special handlers not to register
    """
    font_dirs = [os.path.expanduser(d) for d in getattr(args, "font_dirs", [])]
    params = {
        "FontSearchPath": font_dirs + default_search_path(),
        "OutputDirectory": getattr(args, "output_dir", "df_output"),
        "OutputBaseName": "page",
        "PageFilter": None,
        "DisabledSpecials": set(),
    }
    if getattr(args, "inputfile", None):
        params["OutputBaseName"] = get_output_base_name(args.outputfile, args.inputfile)
    if getattr(args, "pages", None):
        params["PageFilter"] = _parse_page_ranges(args.pages)
    if getattr(args, "no_specials", ""):
        params["DisabledSpecials"] = {n.strip() for n in args.no_specials.split(",") if n.strip()}
    return params


def _load_tfm(font: str, params: Dict[str, Any]) -> Optional[TFM]:
    if os.path.isfile(font):
        with open(font, "rb") as f:
            return read_tfm(f)
    if font.endswith(".tfm"):
        font = font[:-4]
    return TFM.from_file(font, FileFinder(params["FontSearchPath"]))


def print_tfm(tfm: TFM, fontname: str, chars: Optional[set], out=None) -> None:
    if out is None:
        out = sys.stdout
    out.write(f"font:        {fontname}\n")
    out.write(f"checksum:    {tfm.checksum:#010x}\n")
    out.write(f"design size: {tfm.design_size:g}pt\n")
    out.write(f"characters:  {tfm.first_char}-{tfm.last_char}\n\n")
    out.write(f"{'code':>6} {'width':>10} {'height':>10} {'depth':>10} {'italic':>10}\n")
    if chars is None:
        codes = [c for c in range(tfm.first_char, tfm.last_char + 1) if tfm.char_exists(c)]
    else:
        codes = sorted(chars)
    for c in codes:
        out.write(f"{c:>6} {tfm.width(c):>10.4f} {tfm.height(c):>10.4f} "
                  f"{tfm.depth(c):>10.4f} {tfm.italic_corr(c):>10.4f}\n")


def _cmd_tfm(args, params: Dict[str, Any]) -> int:
    chars = _parse_char_ranges(args.chars) if args.chars else None
    tfm = _load_tfm(args.font, params)
    if tfm is None:
        print(f"DviForge Error: font metric file for '{args.font}' not found")
        return 1
    print_tfm(tfm, args.font, chars)
    return 0


def _cmd_render(args, params: Dict[str, Any]) -> int:
    # Late import: only rendering needs Cairo
    from .devices.svg.svg import SVGDevice

    doc = Document.from_json(args.inputfile)
    manager = SpecialManager()
    manager.register_handlers(ignore=params["DisabledSpecials"])
    device = SVGDevice(params["OutputDirectory"], params["OutputBaseName"])
    run_document(doc, manager, device=device, page_filter=params["PageFilter"])
    print(f"{len(device.written)} of {len(doc.pages)} page(s) written to {params['OutputDirectory']}")
    return 0


def main(argv=None) -> int:
    """
    Main entry point for DviForge.

    Returns:
        Exit code: 0 for success, 1 for error
    """
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
    )

    try:
        params = init_system_params(args)
    except ValueError as e:
        print(f"DviForge Error: {e}")
        return 1

    if args.list_specials:
        manager = SpecialManager()
        manager.register_handlers()
        manager.write_handler_info(sys.stdout)
        return 0

    if args.command is None:
        parser.print_help()
        return 1

    try:
        if args.command == "tfm":
            return _cmd_tfm(args, params)
        return _cmd_render(args, params)
    except (TFMError, DocumentError, ValueError, OSError) as e:
        print(f"DviForge Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
