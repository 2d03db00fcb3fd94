# DviForge - A DVI to SVG Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Per-font-name cache of loaded TFM metrics.

Each font is decoded at most once. Missing or undecodable fonts are cached
as well, so a broken font is reported once rather than on every lookup.
"""

from __future__ import annotations

import logging

from .file_finder import FileFinder
from .tfm import TFM, TFMError

logger = logging.getLogger(__name__)

_MISSING = object()


class TFMCache:
    def __init__(self, finder: FileFinder | None = None) -> None:
        self._finder = finder if finder is not None else FileFinder()
        self._fonts: dict[str, object] = {}

    def get(self, fontname: str) -> TFM | None:
        """Return the metrics of ``fontname``, or None if unavailable."""
        entry = self._fonts.get(fontname)
        if entry is None:
            entry = self._load(fontname)
            self._fonts[fontname] = entry
        return None if entry is _MISSING else entry

    def __contains__(self, fontname: str) -> bool:
        return self._fonts.get(fontname, _MISSING) is not _MISSING

    def clear(self) -> None:
        self._fonts.clear()

    def _load(self, fontname: str):
        try:
            tfm = TFM.from_file(fontname, self._finder)
        except (TFMError, OSError) as exc:
            logger.warning("Could not load metrics of font %s: %s", fontname, exc)
            return _MISSING
        if tfm is None:
            logger.warning("Font metric file %s.tfm not found", fontname)
            return _MISSING
        return tfm
