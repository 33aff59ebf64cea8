from __future__ import annotations

import pytest

from snape.index_chars import char_for, position_for


def test_char_for_lowercase_then_uppercase() -> None:
    assert char_for(0) == "a"
    assert char_for(25) == "z"
    assert char_for(26) == "A"
    assert char_for(51) == "Z"


def test_char_for_wraps_after_uppercase() -> None:
    assert char_for(52) == "a"
    assert char_for(53) == "b"
    assert char_for(52 + 25) == "z"
    assert char_for(78) == "a"


def test_char_for_rejects_negative_position() -> None:
    with pytest.raises(ValueError):
        char_for(-1)


def test_position_for_letters() -> None:
    assert position_for("a") == 0
    assert position_for("c") == 2
    assert position_for("A") == 26
    assert position_for("Z") == 51


@pytest.mark.parametrize("char", ["0", "/", "?", " ", "é", "", "ab"])
def test_position_for_other_characters_has_no_mapping(char: str) -> None:
    assert position_for(char) is None


def test_char_and_position_are_inverses_below_52() -> None:
    for position in range(52):
        assert position_for(char_for(position)) == position


def test_wrapped_positions_collide_with_lowercase() -> None:
    for position in range(52, 104):
        assert position_for(char_for(position)) == position % 26
