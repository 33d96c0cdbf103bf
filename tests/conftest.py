# tests/conftest.py
import pytest

from seqparsec.Parsec import (
    Error, Failure, Incomplete, Message, MessageType, Needed, Ok, ParseError, ParseResult, Parsec, SourcePos, State,
)


def assert_result_eq(res1: ParseResult, res2: ParseResult):
    """
    Deep comparison of two ParseResults.
    """
    assert type(res1) is type(res2), f"Outcome mismatch: {type(res1).__name__} != {type(res2).__name__}"

    if isinstance(res1, Ok):
        assert res1.value == res2.value
        assert res1.state.index == res2.state.index
        assert res1.state.pos == res2.state.pos
    elif isinstance(res1, Incomplete):
        assert res1.needed == res2.needed
    else:
        assert res1.error.messages == res2.error.messages
        assert res1.error.pos == res2.error.pos


class Counting:
    """Wraps a parser and records how many times it ran."""

    def __init__(self, parser):
        self.parser = parser
        self.calls = 0

    def __call__(self, state: State) -> ParseResult:
        self.calls += 1
        return self.parser(state)


def constant(outcome: ParseResult) -> Parsec:
    """A parser that returns the very same outcome object on every call."""
    return Parsec(lambda state: outcome, "constant")


@pytest.fixture
def initial_state():
    def _make(input_data, partial=False):
        return State(input_data, 0, SourcePos(1, 1, "test"), None, partial)

    return _make


@pytest.fixture
def counting():
    return Counting


@pytest.fixture(params=["error", "incomplete", "failure"])
def failing_outcome(request):
    """Each kind of non-Ok outcome, in turn."""
    err = ParseError(SourcePos(1, 1), [Message(MessageType.MESSAGE, "boom")], 0)
    return {
        "error": Error(err),
        "incomplete": Incomplete(Needed.size(3)),
        "failure": Failure(err),
    }[request.param]


@pytest.fixture(scope="session")
def const_parser():
    return constant


@pytest.fixture(scope="session")
def result_eq():
    return assert_result_eq
