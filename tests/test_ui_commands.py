import sys
import os

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.ui.commands import parse_key, parse_keys, INVALID_KEY_MESSAGE


def test_parse_key_accepts_integers():
    assert parse_key("42") == 42
    assert parse_key("  -7 ") == -7
    assert parse_key("+3") == 3


@pytest.mark.parametrize("text", ["", "abc", "1.5", "10a", None, "1 2"])
def test_parse_key_rejects_invalid_input(text):
    with pytest.raises(ValueError) as exc:
        parse_key(text)
    assert str(exc.value) == INVALID_KEY_MESSAGE


def test_parse_keys_multiple_separators():
    assert parse_keys("10, 20 30,40") == [10, 20, 30, 40]
    assert parse_keys("5") == [5]


def test_parse_keys_rejects_any_bad_token():
    with pytest.raises(ValueError):
        parse_keys("10, x, 30")
    with pytest.raises(ValueError):
        parse_keys("   ")


if __name__ == "__main__":
    test_parse_key_accepts_integers()
    test_parse_keys_multiple_separators()
    test_parse_keys_rejects_any_bad_token()
