# DviForge - A DVI to SVG Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Fixed-Point Word Tables

TeX font metric files store every dimension as a 32-bit two's-complement
"fix word" with 20 fractional bits. FixedPointTable is a read-only view over
a flat sequence of such words, backed by a big-endian numpy int32 array so
that a whole table is decoded in one step.
"""

from __future__ import annotations

import numpy as np

FIX_FRACTION_BITS = 20
FIX_UNITY = 1 << FIX_FRACTION_BITS

# Fix words are stored most-significant byte first
_FIX_DTYPE = np.dtype('>i4')


def fix2real(word: int) -> float:
    """Convert a 32-bit fix word to a float.

    Accepts either the signed value or the raw unsigned word as read from
    a file; values >= 2**31 are reinterpreted as two's complement.
    """
    word &= 0xFFFFFFFF
    if word & 0x80000000:
        word -= 1 << 32
    return word / FIX_UNITY


class FixedPointTable:
    """Immutable sequence of fix words with real-valued access."""

    __slots__ = ('_words',)

    def __init__(self, words=None) -> None:
        if words is None:
            words = np.zeros(0, dtype=_FIX_DTYPE)
        elif not isinstance(words, np.ndarray):
            # Raw unsigned words wrap to their signed interpretation
            words = np.array([w & 0xFFFFFFFF for w in words], dtype=np.uint32).astype(_FIX_DTYPE)
        else:
            words = words.astype(_FIX_DTYPE)
        words.flags.writeable = False
        self._words = words

    @classmethod
    def from_bytes(cls, data: bytes, count: int) -> FixedPointTable:
        """Decode ``count`` big-endian words from ``data``.

        Raises:
            ValueError: If ``data`` holds fewer than ``4*count`` bytes.
        """
        needed = 4 * count
        if len(data) < needed:
            raise ValueError(f"expected {needed} bytes for {count} words, got {len(data)}")
        if count == 0:
            return cls()
        return cls(np.frombuffer(data, dtype=_FIX_DTYPE, count=count))

    @classmethod
    def from_stream(cls, stream, count: int) -> FixedPointTable:
        """Read ``count`` words from the current position of a binary stream."""
        return cls.from_bytes(stream.read(4 * count), count)

    def __len__(self) -> int:
        return len(self._words)

    def __getitem__(self, index: int) -> float:
        return int(self._words[index]) / FIX_UNITY

    def __repr__(self) -> str:
        return f"FixedPointTable({len(self)} words)"
