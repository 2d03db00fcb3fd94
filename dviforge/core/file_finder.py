# DviForge - A DVI to SVG Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
File finder: locates font support files (TFM) in a list of search
directories. Directories are scanned recursively once, on the first lookup,
and the name-to-path mapping is kept for the lifetime of the finder.
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

# Environment variable holding extra search directories (os.pathsep separated)
FONT_PATH_ENV = "DVIFORGE_FONTS"


def default_search_path() -> list[str]:
    """Directories from DVIFORGE_FONTS followed by the working directory."""
    dirs = [d for d in os.environ.get(FONT_PATH_ENV, "").split(os.pathsep) if d]
    dirs.append(os.getcwd())
    return dirs


class FileFinder:
    """Maps bare file names (``cmr10.tfm``) to paths inside search directories."""

    def __init__(self, search_path: list[str] | None = None) -> None:
        self._search_path = list(search_path) if search_path is not None else default_search_path()
        self._files: dict[str, str] = {}   # {file_name: file_path}
        self._scanned = False

    @property
    def search_path(self) -> list[str]:
        return list(self._search_path)

    def lookup(self, filename: str) -> str | None:
        """Return the path of ``filename``, or None if it cannot be found.

        Absolute or relative paths that exist are returned unchanged.
        """
        if os.path.dirname(filename) and os.path.isfile(filename):
            return filename
        if not self._scanned:
            self._scan()
        path = self._files.get(filename)
        if path is None:
            logger.debug("File %s not found in %s", filename, self._search_path)
        return path

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _scan(self) -> None:
        for d in self._search_path:
            if os.path.isdir(d):
                self._scan_directory(d)
        self._scanned = True
        logger.info("File finder indexed %d files", len(self._files))

    def _scan_directory(self, root: str) -> None:
        for dirpath, _dirnames, filenames in os.walk(root):
            for fname in filenames:
                # First directory in the search path wins
                if fname not in self._files:
                    self._files[fname] = os.path.join(dirpath, fname)
