import logging

import pytest
from hypothesis import given, strategies as st

from seqparsec.Char import char, digit, tag
from seqparsec.Combinators import (
    alt, between, choice, complete, count, cut, option, option_maybe, parser_trace, parser_traced,
)
from seqparsec.Parsec import Error, Failure, Incomplete, Needed, Ok
from seqparsec.Prim import fail, fatal, need, run_parser
from seqparsec.Sequence import pair


def run(parser, input_str):
    return run_parser(parser, input_str)

# --- Choice ---

def test_choice_basic():
    # Matches first available
    p = choice([char('a'), char('b'), char('c')])
    assert run(p, "a")[0] == "a"
    assert run(p, "b")[0] == "b"
    assert run(p, "c")[0] == "c"

    # Fails if none match
    res, err = run(p, "d")
    assert res is None
    # Error should contain info about all expectations
    msg = str(err)
    assert "'a'" in msg and "'b'" in msg and "'c'" in msg

def test_choice_empty():
    res, err = run(choice([]), "input")
    assert res is None
    assert "no alternatives" in str(err)

def test_or_operator_is_alt():
    p = tag("ab") | tag("cd")
    assert run(p, "cd")[0] == "cd"

@pytest.mark.parametrize("stopper", [fatal("stop"), need(4)])
def test_alt_does_not_catch_failure_or_incomplete(stopper, counting, initial_state):
    after = counting(tag("x"))
    res = alt(fail("first"), stopper, after)(initial_state("x"))

    assert isinstance(res, (Failure, Incomplete))
    assert after.calls == 0

# --- Cut / Complete ---

def test_cut_only_changes_errors(initial_state):
    assert isinstance(cut(tag("a"))(initial_state("b")), Failure)
    assert isinstance(cut(tag("a"))(initial_state("a")), Ok)
    assert isinstance(cut(need())(initial_state("")), Incomplete)

def test_complete_turns_incomplete_into_error(initial_state):
    res = complete(tag("abcd"))(initial_state("ab", partial=True))
    assert isinstance(res, Error)
    assert "2 more elements" in str(res.error)

    # In an alternation the error is now recoverable
    p = alt(complete(tag("abcd")), tag("ab"))
    assert p(initial_state("ab", partial=True)).value == "ab"

def test_need_rejects_non_positive_sizes():
    with pytest.raises(ValueError):
        need(0)
    assert Needed.unknown().is_known is False

# --- Option / Between / Count ---

def test_option():
    p = option("default", tag("foo"))
    assert run(p, "foo")[0] == "foo"
    assert run(p, "bar")[0] == "default"

def test_option_maybe():
    p = option_maybe(char('a'))
    assert run(p, "a")[0] == 'a'
    assert run(p, "b") == (None, None)

def test_between():
    p = between(char('('), char(')'), tag("foo"))
    res, _ = run(p, "(foo)")
    assert res == "foo"

    # Fail closing
    res_fail, err = run(p, "(foo")
    assert res_fail is None
    assert "')'" in str(err)

@given(st.integers(min_value=0, max_value=20))
def test_count(n):
    input_str = "a" * n + "b"
    p = count(n, char('a'))
    res, err = run(p, input_str)

    assert res == ['a'] * n
    assert err is None

def test_count_fail():
    # Expect 3, get 2
    p = count(3, char('a'))
    res, err = run(p, "aa")
    assert res is None
    assert err is not None

def test_count_negative():
    with pytest.raises(ValueError):
        count(-1, char('a'))

# --- Label ---

def test_label_replaces_expectation():
    p = pair(digit(), digit()).label("two digits")
    res, err = run(p, "x1")
    assert "expecting two digits" in str(err)

def test_label_keeps_errors_past_the_start():
    p = pair(digit(), digit()).label("two digits")
    res, err = run(p, "1x")
    assert "two digits" not in str(err)
    assert "expecting digit" in str(err)

# --- Tracing ---

def test_parser_trace_logs_without_consuming(caplog, initial_state):
    with caplog.at_level(logging.DEBUG, logger="seqparsec.Combinators"):
        res = parser_trace("here")(initial_state("abc"))

    assert isinstance(res, Ok)
    assert res.state.index == 0
    assert "here: 'abc'" in caplog.text

def test_parser_traced_passes_outcome_through(caplog, initial_state):
    inner = tag("ab")
    with caplog.at_level(logging.DEBUG, logger="seqparsec.Combinators"):
        ok = parser_traced("ab", inner)(initial_state("abc"))
        bad = parser_traced("ab", inner)(initial_state("x"))

    assert ok.value == "ab"
    assert isinstance(bad, Error)
    assert "ab: matched 'ab'" in caplog.text
    assert "ab: error:" in caplog.text
