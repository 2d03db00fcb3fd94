"""Helpers assembling synthetic TFM files for tests."""
from __future__ import annotations

import struct

FIX_UNITY = 1 << 20


def fix(value: float) -> int:
    """Encode a real number as an unsigned 32-bit fix word."""
    return round(value * FIX_UNITY) & 0xFFFFFFFF


def char_info_word(width: int, height: int = 0, depth: int = 0, italic: int = 0,
                   tag: int = 0, remainder: int = 0) -> int:
    return (width << 24) | (height << 20) | (depth << 16) | (italic << 10) | (tag << 8) | remainder


def build_tfm(first_char: int, char_infos: list, widths: list, heights: list,
              depths: list, italics: list, design_size: float = 10.0,
              checksum: int = 0x12345678, header_words: int = 2,
              last_char: int | None = None) -> bytes:
    """Assemble a TFM file. Table entries are real numbers, char infos raw words."""
    if last_char is None:
        last_char = first_char + len(char_infos) - 1
    nw, nh, nd, ni = len(widths), len(heights), len(depths), len(italics)
    nl = nk = ne = 0
    np_ = 1
    lf = 6 + header_words + len(char_infos) + nw + nh + nd + ni + nl + nk + ne + np_
    data = struct.pack('>12H', lf, header_words, first_char, last_char,
                       nw, nh, nd, ni, nl, nk, ne, np_)
    header = [checksum, fix(design_size)] + [0] * (header_words - 2)
    data += struct.pack(f'>{header_words}I', *header)
    data += struct.pack(f'>{len(char_infos)}I', *char_infos)
    for table in (widths, heights, depths, italics):
        data += struct.pack(f'>{len(table)}I', *(fix(v) for v in table))
    data += struct.pack('>I', 0)  # slant parameter
    return data
