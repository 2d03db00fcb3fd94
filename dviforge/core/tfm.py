# DviForge - A DVI to SVG Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
TFM (TeX Font Metric) Binary Parser

Decodes the compact, big-endian TFM format into random-accessible per-glyph
geometry. Only the parts needed for layout are read: the header checksum and
design size, the char-info table, and the width, height, depth and italic
correction tables. Ligature/kern programs, extensible recipes and font
parameters are skipped.

File layout (all words big-endian):
  bytes 0-23   twelve 16-bit counts: lf, lh, bc, ec, nw, nh, nd, ni,
               nl, nk, ne, np
  bytes 24-    header (lh words): checksum, design size, ...
  24 + 4*lh    char-info table (ec-bc+1 words), then width, height,
               depth and italic tables

Malformed fonts are common in the wild, so structurally complete files always
load; inconsistent char-info indices only yield zero-valued geometry.
"""

from __future__ import annotations

import logging
import os
import struct

from .fixed_point import FixedPointTable, fix2real

logger = logging.getLogger(__name__)

_PREAMBLE_SIZE = 24


class TFMError(Exception):
    """Error during TFM parsing."""
    pass


# ---------------------------------------------------------------------------
# Char-info word layout
#
#   byte 1   | byte 2    | byte 3    | byte 4
#   xxxxxxxx | xxxx xxxx | xxxxxx xx | xxxxxxxx
#   width    | hgt  dpt  | italic tg | remainder
# ---------------------------------------------------------------------------

WIDTH_SHIFT, WIDTH_BITS = 24, 8
HEIGHT_SHIFT, HEIGHT_BITS = 20, 4
DEPTH_SHIFT, DEPTH_BITS = 16, 4
ITALIC_SHIFT, ITALIC_BITS = 10, 6
TAG_SHIFT, TAG_BITS = 8, 2
REMAINDER_SHIFT, REMAINDER_BITS = 0, 8


def _field(word: int, shift: int, bits: int) -> int:
    return (word >> shift) & ((1 << bits) - 1)


def char_width_index(word: int) -> int:
    return _field(word, WIDTH_SHIFT, WIDTH_BITS)


def char_height_index(word: int) -> int:
    return _field(word, HEIGHT_SHIFT, HEIGHT_BITS)


def char_depth_index(word: int) -> int:
    return _field(word, DEPTH_SHIFT, DEPTH_BITS)


def char_italic_index(word: int) -> int:
    return _field(word, ITALIC_SHIFT, ITALIC_BITS)


def char_tag(word: int) -> int:
    """Tag: 0 none, 1 lig/kern program, 2 charlist, 3 extensible."""
    return _field(word, TAG_SHIFT, TAG_BITS)


def char_remainder(word: int) -> int:
    return _field(word, REMAINDER_SHIFT, REMAINDER_BITS)


def _read_unsigned(stream, n: int, what: str) -> int:
    data = stream.read(n)
    if len(data) < n:
        raise TFMError(f"Unexpected end of TFM data reading {what}")
    return int.from_bytes(data, 'big')


def _seek(stream, offset: int, whence: int = os.SEEK_SET) -> None:
    try:
        stream.seek(offset, whence)
    except (OSError, ValueError) as exc:
        raise TFMError(f"Cannot seek in TFM data: {exc}") from exc


def _read_table(stream, count: int, what: str) -> FixedPointTable:
    try:
        return FixedPointTable.from_stream(stream, count)
    except ValueError:
        raise TFMError(f"Unexpected end of TFM data reading {what} ({count} words)") from None


class TFM:
    """Parsed font metrics. Immutable once constructed."""

    __slots__ = (
        '_checksum', '_first_char', '_last_char', '_design_size',
        '_char_info', '_widths', '_heights', '_depths', '_italics',
    )

    def __init__(self, checksum: int, first_char: int, last_char: int, design_size: int,
                 char_info: tuple[int, ...],
                 widths: FixedPointTable, heights: FixedPointTable,
                 depths: FixedPointTable, italics: FixedPointTable) -> None:
        self._checksum = checksum
        self._first_char = first_char
        self._last_char = last_char
        self._design_size = design_size  # raw fix word
        self._char_info = tuple(char_info)
        self._widths = widths
        self._heights = heights
        self._depths = depths
        self._italics = italics

    @classmethod
    def from_stream(cls, stream) -> TFM:
        return read_tfm(stream)

    @classmethod
    def from_file(cls, fontname: str, finder) -> TFM | None:
        """Locate ``<fontname>.tfm`` with ``finder`` and load it.

        Returns:
            The parsed metrics, or None if no such file can be found.

        Raises:
            TFMError: If the file exists but cannot be decoded.
        """
        path = finder.lookup(fontname + ".tfm")
        if path is None:
            logger.debug("No TFM file found for font %s", fontname)
            return None
        with open(path, 'rb') as f:
            return read_tfm(f)

    # ------------------------------------------------------------------
    # Header data
    # ------------------------------------------------------------------

    @property
    def checksum(self) -> int:
        return self._checksum

    @property
    def first_char(self) -> int:
        return self._first_char

    @property
    def last_char(self) -> int:
        return self._last_char

    @property
    def design_size(self) -> float:
        """Design size in TeX points."""
        return fix2real(self._design_size)

    def __len__(self) -> int:
        return len(self._char_info)

    # ------------------------------------------------------------------
    # Per-character queries
    # ------------------------------------------------------------------

    def char_info(self, c: int) -> int | None:
        """Return the raw char-info word of ``c``, or None if not covered."""
        if c < self._first_char or c > self._last_char:
            return None
        pos = c - self._first_char
        if pos >= len(self._char_info):
            return None
        return self._char_info[pos]

    def char_exists(self, c: int) -> bool:
        """True if ``c`` is present in the font (non-zero width index)."""
        word = self.char_info(c)
        return word is not None and char_width_index(word) != 0

    def _lookup(self, c: int, table: FixedPointTable, index_func) -> float:
        word = self.char_info(c)
        if word is None:
            return 0.0
        index = index_func(word)
        if index >= len(table):
            return 0.0
        return table[index] * self.design_size

    def width(self, c: int) -> float:
        """Width of ``c`` in TeX points."""
        return self._lookup(c, self._widths, char_width_index)

    def height(self, c: int) -> float:
        """Height of ``c`` in TeX points."""
        return self._lookup(c, self._heights, char_height_index)

    def depth(self, c: int) -> float:
        """Depth of ``c`` in TeX points."""
        return self._lookup(c, self._depths, char_depth_index)

    def italic_corr(self, c: int) -> float:
        """Italic correction of ``c`` in TeX points."""
        return self._lookup(c, self._italics, char_italic_index)

    def __repr__(self) -> str:
        return (f"TFM(chars={self._first_char}..{self._last_char}, "
                f"design_size={self.design_size:g}pt, checksum={self._checksum:#010x})")


def read_tfm(stream) -> TFM:
    """Decode a TFM file from a seekable binary stream.

    Args:
        stream: Binary file-like object supporting read() and seek()

    Returns:
        TFM instance

    Raises:
        TFMError: If the stream ends before a required field is read.
    """
    _seek(stream, 2)  # skip file length
    lh = _read_unsigned(stream, 2, "header length")
    bc = _read_unsigned(stream, 2, "first character code")
    ec = _read_unsigned(stream, 2, "last character code")
    nw = _read_unsigned(stream, 2, "width table size")
    nh = _read_unsigned(stream, 2, "height table size")
    nd = _read_unsigned(stream, 2, "depth table size")
    ni = _read_unsigned(stream, 2, "italic table size")

    # nl, nk, ne and np are not needed for glyph geometry
    _seek(stream, 8, os.SEEK_CUR)
    checksum = _read_unsigned(stream, 4, "checksum")
    design_size = _read_unsigned(stream, 4, "design size")

    if design_size & 0x80000000 or design_size == 0:
        logger.warning("TFM design size is not positive (%#010x)", design_size)

    _seek(stream, _PREAMBLE_SIZE + lh * 4)
    n_chars = ec - bc + 1 if ec >= bc else 0
    data = stream.read(4 * n_chars)
    if len(data) < 4 * n_chars:
        raise TFMError(f"Unexpected end of TFM data reading char info table ({n_chars} words)")
    char_info = struct.unpack(f'>{n_chars}I', data)

    widths = _read_table(stream, nw, "width table")
    heights = _read_table(stream, nh, "height table")
    depths = _read_table(stream, nd, "depth table")
    italics = _read_table(stream, ni, "italic correction table")

    logger.debug("Loaded TFM: chars %d-%d, %d/%d/%d/%d table words",
                 bc, ec, nw, nh, nd, ni)
    return TFM(checksum, bc, ec, design_size, char_info,
               widths, heights, depths, italics)
