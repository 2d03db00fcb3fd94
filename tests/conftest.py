"""Pytest configuration and shared fixtures for DviForge tests."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
_root_str = str(_REPO_ROOT)
if _root_str not in sys.path:
    sys.path.insert(0, _root_str)

from tfm_builder import build_tfm, char_info_word  # noqa: E402

from dviforge.specials.actions import PageActions  # noqa: E402
from dviforge.specials.manager import SpecialManager  # noqa: E402


@pytest.fixture
def sample_tfm_bytes() -> bytes:
    """Characters 'A'..'C'; 'C' carries an out-of-range height index."""
    return build_tfm(
        first_char=65,
        char_infos=[
            char_info_word(1, 1, 1, 1),
            char_info_word(2, 2, 0, 0),
            char_info_word(1, 5, 0, 0),
        ],
        widths=[0.0, 0.5, 0.75],
        heights=[0.0, 0.7, 0.68],
        depths=[0.0, 0.2],
        italics=[0.0, 0.05],
        design_size=10.0,
    )


@pytest.fixture
def actions() -> PageActions:
    return PageActions(200.0, 100.0)


@pytest.fixture
def manager() -> SpecialManager:
    manager = SpecialManager()
    manager.register_handlers()
    return manager
