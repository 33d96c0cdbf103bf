import pytest
from hypothesis import given
from hypothesis import strategies as st

from seqparsec.Char import (
    alpha_num,
    any_char,
    char,
    digit,
    letter,
    none_of,
    one_of,
    satisfy,
    space,
    string,
    tag,
)
from seqparsec.Parsec import Error, Incomplete, Needed, Ok
from seqparsec.Prim import eof, run_parser, take


def run(parser, input_str):
    return run_parser(parser, input_str)


# --- Basic Character Parsers ---


@given(st.characters())
def test_char_parser(c):
    # Should match the character
    res, err = run(char(c), c)
    assert res == c
    assert err is None

    # Should fail on different character
    diff = chr((ord(c) + 1) % 0x110000)
    res_fail, err_fail = run(char(c), diff)
    assert res_fail is None
    assert err_fail is not None


@given(st.characters(), st.text())
def test_satisfy(c, text):
    # Predicate: matches specific char
    p = satisfy(lambda x: x == c)

    if text.startswith(c):
        res, _ = run(p, text)
        assert res == c
    else:
        res, err = run(p, text)
        assert res is None
        assert err is not None


@given(st.text(min_size=1))
def test_one_of(text):
    p = one_of(text)
    res, _ = run(p, text[0])
    assert res == text[0]


@given(st.text(min_size=1))
def test_none_of(text):
    p = none_of(list(text))
    res, err = run(p, text[0])
    assert res is None
    assert err is not None


@pytest.mark.parametrize("parser, good, bad", [
    (digit(), "7", "x"),
    (letter(), "q", "7"),
    (alpha_num(), "7", "-"),
    (space(), " ", "x"),
])
def test_character_classes(parser, good, bad):
    assert run(parser, good)[0] == good
    res, err = run(parser, bad)
    assert res is None
    assert f"'{bad}'" in str(err)


def test_any_char_fails_only_at_end():
    assert run(any_char(), "z")[0] == "z"
    res, err = run(any_char(), "")
    assert res is None
    assert "end of input" in str(err)


# --- Tag ---


@given(st.text())
def test_tag_parser(s):
    p = tag(s)

    res, err = run(p, s + "suffix")
    assert res == s
    assert err is None

    if s:
        # Mismatch in the last position: nothing is consumed, the full literal is expected
        partial = s[:-1] + chr((ord(s[-1]) + 1) % 0x110000)
        res_fail, err_fail = run(p, partial)
        assert res_fail is None
        assert err_fail.index == 0
        assert repr(s) in str(err_fail)


def test_string_is_tag():
    assert string is tag


# --- Streaming input ---


def test_tag_on_partial_prefix_is_incomplete(initial_state):
    res = tag("abcd")(initial_state("ab", partial=True))
    assert isinstance(res, Incomplete)
    assert res.needed == Needed.size(2)


def test_tag_on_complete_prefix_is_error(initial_state):
    res = tag("abcd")(initial_state("ab"))
    assert isinstance(res, Error)


def test_tag_mismatch_is_error_even_when_partial(initial_state):
    res = tag("abcd")(initial_state("ax", partial=True))
    assert isinstance(res, Error)


def test_char_at_end_of_partial_input(initial_state):
    res = char("a")(initial_state("", partial=True))
    assert isinstance(res, Incomplete)
    assert res.needed == Needed.size(1)


def test_take(initial_state):
    res = take(3)(initial_state("abcdef"))
    assert isinstance(res, Ok)
    assert res.value == "abc"
    assert res.state.remaining == "def"

    assert isinstance(take(3)(initial_state("ab")), Error)
    short = take(3)(initial_state("ab", partial=True))
    assert short.needed == Needed.size(1)

    with pytest.raises(ValueError):
        take(-1)


def test_eof(initial_state):
    assert isinstance(eof()(initial_state("")), Ok)
    assert isinstance(eof()(initial_state("", partial=True)), Incomplete)

    res, err = run(char('a') > eof(), "ab")
    assert res is None
    assert "end of input" in str(err)
