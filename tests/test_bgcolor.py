from __future__ import annotations

import pytest

from dviforge.core import types as dv
from dviforge.core.color import Color
from dviforge.specials.bgcolor import BgColorSpecialHandler

RED = Color(1.0, 0.0, 0.0)
BLUE = Color(0.0, 0.0, 1.0)


def _lookahead(handler, actions, specials):
    """Feed (page, body) pairs to the handler's preprocess hook."""
    for pageno, body in specials:
        actions.current_page = pageno
        handler.preprocess("background", body, actions)


def _backgrounds(handler, actions, pages):
    drawn = []
    for pageno in pages:
        display_list = actions.begin_page(pageno)
        handler.dvi_begin_page(pageno, actions)
        drawn.append([e.color for e in display_list])
    return drawn


def test_handler_metadata():
    handler = BgColorSpecialHandler()
    assert handler.name() == "bgcolor"
    assert handler.prefixes() == ("background",)
    assert handler.info()


def test_colors_carry_forward_until_replaced(actions):
    handler = BgColorSpecialHandler()
    _lookahead(handler, actions, [(2, "rgb 1 0 0"), (5, "rgb 0 0 1")])

    drawn = _backgrounds(handler, actions, range(1, 7))
    assert drawn == [[], [RED], [RED], [RED], [BLUE], [BLUE]]


def test_no_entries_draws_nothing(actions):
    handler = BgColorSpecialHandler()
    assert _backgrounds(handler, actions, range(1, 4)) == [[], [], []]


def test_background_covers_full_page(actions):
    handler = BgColorSpecialHandler()
    _lookahead(handler, actions, [(1, "Red")])

    display_list = actions.begin_page(1)
    handler.dvi_begin_page(1, actions)
    assert display_list == [dv.FillRect(0.0, 0.0, 200.0, 100.0, RED)]
    assert actions.background_color == RED


def test_last_special_on_a_page_wins(actions):
    handler = BgColorSpecialHandler()
    _lookahead(handler, actions, [(3, "Red"), (3, "Blue")])

    assert handler.color_at(2) is None
    assert handler.color_at(3) == BLUE
    assert handler.color_at(10) == BLUE


def test_malformed_color_is_skipped(actions, caplog):
    handler = BgColorSpecialHandler()
    _lookahead(handler, actions, [(1, "rgb 1 0"), (2, "Blue")])

    assert handler.page_colors == [(2, BLUE)]
    assert "Ignoring background special on page 1" in caplog.text
    assert _backgrounds(handler, actions, [1, 2]) == [[], [BLUE]]


def test_background_is_painted_under_existing_content(actions):
    handler = BgColorSpecialHandler()
    _lookahead(handler, actions, [(1, "Red")])

    display_list = actions.begin_page(1)
    actions.set_color(BLUE)
    actions.fill_rect(10, 10, 5, 5)
    handler.dvi_begin_page(1, actions)
    assert [e.color for e in display_list] == [RED, BLUE]


def test_process_updates_state_without_drawing(actions):
    handler = BgColorSpecialHandler()
    display_list = actions.begin_page(1)

    assert handler.process("background", "Blue", actions)
    assert actions.background_color == BLUE
    assert display_list == []

    assert not handler.process("background", "nonsense color", actions)
    assert actions.background_color == BLUE


@pytest.mark.parametrize("pageno, expected", [(1, None), (4, RED), (7, BLUE), (100, BLUE)])
def test_color_at(actions, pageno, expected):
    handler = BgColorSpecialHandler()
    _lookahead(handler, actions, [(4, "Red"), (7, "Blue")])
    assert handler.color_at(pageno) == expected


def test_named_color_spelling_a_model_keyword(actions):
    handler = BgColorSpecialHandler()
    _lookahead(handler, actions, [(1, "Gray")])

    assert handler.page_colors == [(1, Color.parse("cmyk 0 0 0 0.5"))]
    assert handler.color_at(1) == Color(0.5, 0.5, 0.5)


def test_reset_forgets_page_lookup(actions):
    handler = BgColorSpecialHandler()
    _lookahead(handler, actions, [(2, "Red")])
    handler.reset()

    assert handler.color_at(5) is None
    _lookahead(handler, actions, [(3, "Blue")])
    assert handler.color_at(2) is None
    assert handler.color_at(3) == BLUE
