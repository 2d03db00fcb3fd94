from __future__ import annotations

import io
import struct

import pytest

from tfm_builder import build_tfm, char_info_word

from dviforge.core import file_finder
from dviforge.core.file_finder import FileFinder
from dviforge.core.font_cache import TFMCache
from dviforge.core.tfm import (
    TFM, TFMError, char_depth_index, char_height_index, char_italic_index,
    char_remainder, char_tag, char_width_index, read_tfm,
)


def test_char_info_bit_fields():
    word = 0xAB_C5_F6_7E
    assert char_width_index(word) == 0xAB
    assert char_height_index(word) == 0xC
    assert char_depth_index(word) == 0x5
    assert char_italic_index(word) == 0x3D
    assert char_tag(word) == 0x2
    assert char_remainder(word) == 0x7E


def test_char_info_builder_roundtrips_through_accessors():
    word = char_info_word(200, 15, 9, 63, 3, 17)
    assert (char_width_index(word), char_height_index(word), char_depth_index(word),
            char_italic_index(word), char_tag(word), char_remainder(word)) == (200, 15, 9, 63, 3, 17)


def test_header_fields(sample_tfm_bytes):
    tfm = read_tfm(io.BytesIO(sample_tfm_bytes))
    assert tfm.checksum == 0x12345678
    assert tfm.first_char == 65
    assert tfm.last_char == 67
    assert tfm.design_size == pytest.approx(10.0)
    assert len(tfm) == 3


def test_geometry_is_scaled_by_design_size(sample_tfm_bytes):
    tfm = read_tfm(io.BytesIO(sample_tfm_bytes))
    assert tfm.width(65) == pytest.approx(5.0, abs=1e-5)
    assert tfm.height(65) == pytest.approx(7.0, abs=1e-5)
    assert tfm.depth(65) == pytest.approx(2.0, abs=1e-5)
    assert tfm.italic_corr(65) == pytest.approx(0.5, abs=1e-5)
    assert tfm.width(66) == pytest.approx(7.5, abs=1e-5)
    assert tfm.height(66) == pytest.approx(6.8, abs=1e-5)
    assert tfm.depth(66) == 0.0


@pytest.mark.parametrize("code", [0, 64, 68, 255, -1])
def test_codes_outside_range_have_zero_geometry(sample_tfm_bytes, code):
    tfm = read_tfm(io.BytesIO(sample_tfm_bytes))
    assert tfm.width(code) == 0.0
    assert tfm.height(code) == 0.0
    assert tfm.depth(code) == 0.0
    assert tfm.italic_corr(code) == 0.0
    assert tfm.char_info(code) is None
    assert not tfm.char_exists(code)


def test_out_of_range_table_index_yields_zero(sample_tfm_bytes):
    tfm = read_tfm(io.BytesIO(sample_tfm_bytes))
    # 'C' has height index 5 but the height table only has 3 entries
    assert tfm.height(67) == 0.0
    assert tfm.width(67) == pytest.approx(5.0, abs=1e-5)


def test_char_exists_requires_nonzero_width_index():
    data = build_tfm(10, [char_info_word(0), char_info_word(1)], [0.0, 1.0], [0.0], [0.0], [0.0])
    tfm = read_tfm(io.BytesIO(data))
    assert not tfm.char_exists(10)
    assert tfm.char_exists(11)


def test_header_length_determines_char_info_offset():
    data = build_tfm(0, [char_info_word(1)], [0.0, 0.25], [0.0], [0.0], [0.0],
                     design_size=8.0, header_words=18)
    tfm = read_tfm(io.BytesIO(data))
    assert tfm.width(0) == pytest.approx(2.0, abs=1e-5)


def test_negative_fix_words():
    data = build_tfm(0, [char_info_word(1, 0, 0, 1)], [0.0, 0.5], [0.0], [0.0], [0.0, -0.125])
    tfm = read_tfm(io.BytesIO(data))
    assert tfm.italic_corr(0) == pytest.approx(-1.25, abs=1e-5)


def test_loading_twice_gives_identical_results(sample_tfm_bytes):
    first = read_tfm(io.BytesIO(sample_tfm_bytes))
    second = TFM.from_stream(io.BytesIO(sample_tfm_bytes))
    for c in range(first.first_char, first.last_char + 1):
        assert first.width(c) == second.width(c)
        assert first.height(c) == second.height(c)
        assert first.depth(c) == second.depth(c)
        assert first.italic_corr(c) == second.italic_corr(c)


def test_empty_font_loads_without_characters():
    data = build_tfm(1, [], [0.0], [0.0], [0.0], [0.0], last_char=0)
    tfm = read_tfm(io.BytesIO(data))
    assert len(tfm) == 0
    assert tfm.width(0) == 0.0
    assert tfm.width(1) == 0.0


@pytest.mark.parametrize("length", [0, 1, 10, 23, 28, 31])
def test_truncated_preamble_raises(sample_tfm_bytes, length):
    with pytest.raises(TFMError):
        read_tfm(io.BytesIO(sample_tfm_bytes[:length]))


def test_truncated_tables_raise(sample_tfm_bytes):
    # cut inside the italic correction table
    with pytest.raises(TFMError):
        read_tfm(io.BytesIO(sample_tfm_bytes[:-8]))


def test_truncated_char_info_raises(sample_tfm_bytes):
    with pytest.raises(TFMError):
        read_tfm(io.BytesIO(sample_tfm_bytes[:36]))


def test_nonpositive_design_size_still_loads(caplog):
    data = build_tfm(0, [char_info_word(1)], [0.0, 1.0], [0.0], [0.0], [0.0], design_size=0.0)
    tfm = read_tfm(io.BytesIO(data))
    assert tfm.width(0) == 0.0
    assert "design size" in caplog.text


def test_from_file_uses_finder(tmp_path, sample_tfm_bytes):
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "cmr10.tfm").write_bytes(sample_tfm_bytes)
    finder = FileFinder([str(tmp_path)])

    tfm = TFM.from_file("cmr10", finder)
    assert tfm is not None
    assert tfm.width(65) == pytest.approx(5.0, abs=1e-5)
    assert TFM.from_file("cmr12", finder) is None


def test_file_finder_first_search_directory_wins(tmp_path, sample_tfm_bytes):
    first, second = tmp_path / "a", tmp_path / "b"
    for d in (first, second):
        d.mkdir()
        (d / "cmr10.tfm").write_bytes(sample_tfm_bytes)
    finder = FileFinder([str(first), str(second)])

    assert finder.lookup("cmr10.tfm") == str(first / "cmr10.tfm")
    assert finder.search_path == [str(first), str(second)]
    assert "font support files" in file_finder.__doc__


def test_from_file_propagates_decode_errors(tmp_path):
    (tmp_path / "broken.tfm").write_bytes(struct.pack('>3H', 10, 2, 0))
    with pytest.raises(TFMError):
        TFM.from_file("broken", FileFinder([str(tmp_path)]))


def test_tfm_cache_loads_once_and_caches_misses(tmp_path, sample_tfm_bytes, caplog):
    (tmp_path / "cmr10.tfm").write_bytes(sample_tfm_bytes)
    (tmp_path / "bad.tfm").write_bytes(b'\x00\x01')
    cache = TFMCache(FileFinder([str(tmp_path)]))

    first = cache.get("cmr10")
    assert first is not None
    assert cache.get("cmr10") is first
    assert "cmr10" in cache

    assert cache.get("bad") is None
    assert cache.get("missing") is None
    assert "missing" not in cache
    assert caplog.text.count("Font metric file missing.tfm not found") == 1
    cache.get("missing")
    assert caplog.text.count("Font metric file missing.tfm not found") == 1
