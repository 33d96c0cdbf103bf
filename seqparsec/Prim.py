import threading
from typing import Any, Callable, Optional, Sequence, Tuple

from .Parsec import (
    Error, Failure, Incomplete, MessageType, Needed, Ok, ParseError, ParseException,
    ParseIncomplete, ParseResult, Parsec, State, T,
)


def pure(value: T) -> Parsec[T]:
    """Return a parser that succeeds with a value without consuming input."""
    def parse(state: State) -> ParseResult:
        return Ok(value, state)
    return Parsec(parse, "pure")


def fail(msg: str) -> Parsec[Any]:
    """A parser that always fails, recoverably, with a message."""
    def parse(state: State) -> ParseResult:
        return Error(ParseError.new_message(state, MessageType.MESSAGE, msg))
    return Parsec(parse, "fail")


def fatal(msg: str) -> Parsec[Any]:
    """A parser that always fails with a Failure that alternation will not catch."""
    def parse(state: State) -> ParseResult:
        return Failure(ParseError.new_message(state, MessageType.MESSAGE, msg))
    return Parsec(parse, "fatal")


def need(n: Optional[int] = None) -> Parsec[Any]:
    """A parser that always asks for more input."""
    needed = Needed.unknown() if n is None else Needed.size(n)

    def parse(state: State) -> ParseResult:
        return Incomplete(needed)
    return Parsec(parse, "need")


def lazy(thunk: Callable[[], Parsec[T]]) -> Parsec[T]:
    """
    Defer building a parser until it first runs. Needed for recursive grammars.

    The thunk is called exactly once, even when several threads run the
    parser for the first time together.
    """
    cache = []
    lock = threading.Lock()

    def parse(state: State) -> ParseResult:
        if not cache:
            with lock:
                if not cache:
                    cache.append(thunk())
        return cache[0](state)
    return Parsec(parse, "lazy")


def _end_of_input(state: State, want: int) -> ParseResult:
    """Outcome for a leaf parser that ran short of input by `want` tokens."""
    if state.partial:
        return Incomplete(Needed.size(want))
    return Error(ParseError.unexpected(state, ""))


def token(show_tok: Callable[[Any], str], test_tok: Callable[[Any], Optional[T]]) -> Parsec[T]:
    """Parse a single token for which `test_tok` returns a value other than None."""
    def parse(state: State) -> ParseResult:
        if state.is_eof:
            return _end_of_input(state, 1)

        tok_val = state.input[state.index]
        result_val = test_tok(tok_val)
        if result_val is None:
            return Error(ParseError.unexpected(state, show_tok(tok_val)))
        return Ok(result_val, state.advance(1))
    return Parsec(parse, "token")


def _matched_prefix(found: Sequence[Any], expected: Sequence[Any]) -> int:
    # Item by item, so a tuple pattern matches a list of tokens
    n = 0
    for got, want in zip(found, expected):
        if got != want:
            break
        n += 1
    return n


def tokens(show_tokens: Callable[[Sequence[Any]], str], expected: Sequence[Any]) -> Parsec[Sequence[Any]]:
    """
    Match `expected` exactly at the start of the remaining input.

    Tokens are compared one by one, so the container type of `expected`
    need not match the input's. The output is the matched slice of the input.
    On partial input, a remainder that is a strict prefix of `expected`
    yields Incomplete with the number of missing tokens.
    """
    size = len(expected)

    def parse(state: State) -> ParseResult:
        if not size:
            return Ok(expected, state)

        found = state.peek(size)
        matched = _matched_prefix(found, expected)
        if matched == size:
            return Ok(found, state.advance(size))
        if matched == len(found) and state.partial:
            return Incomplete(Needed.size(size - matched))
        shown = show_tokens(found) if found else ""
        return Error(ParseError.unexpected(state, shown, show_tokens(expected)))
    return Parsec(parse, "tokens")


def take(n: int) -> Parsec[Sequence[Any]]:
    """Consume exactly `n` tokens, whatever they are."""
    if n < 0:
        raise ValueError(f"take expects a non-negative count, got {n}")

    def parse(state: State) -> ParseResult:
        if state.input_len < n:
            return _end_of_input(state, n - state.input_len)
        return Ok(state.peek(n), state.advance(n))
    return Parsec(parse, "take")


def eof() -> Parsec[None]:
    """Succeeds only at the end of input."""
    def parse(state: State) -> ParseResult:
        if state.is_eof:
            if state.partial:
                return Incomplete(Needed.unknown())
            return Ok(None, state)
        err = ParseError.unexpected(state, repr(state.peek(1)[0]), "end of input")
        return Error(err)
    return Parsec(parse, "eof")


def _incomplete_error(state: State, needed: Needed) -> ParseError:
    end = state.advance(state.input_len)
    return ParseError(end.pos, [], end.index).add_message(
        MessageType.SYS_UNEXPECT, "").add_message(MessageType.EXPECT, str(needed))


def run_parser(parser: Parsec[T],
               input_data: Sequence[Any],
               user_state: Any = None,
               source_name: str = "",
               partial: bool = False) -> Tuple[Optional[T], Optional[ParseError]]:
    """Run `parser` on fresh input, returning (value, None) or (None, error)."""
    initial_state = State.initial(input_data, user_state, source_name, partial)
    res = parser(initial_state)
    if isinstance(res, Ok):
        return res.value, None
    if isinstance(res, Incomplete):
        return None, _incomplete_error(initial_state, res.needed)
    return None, res.error


def parse(parser: Parsec[T],
          input_data: Sequence[Any],
          user_state: Any = None,
          source_name: str = "",
          partial: bool = False) -> T:
    """Run `parser` and return its value, raising ParseException if it does not succeed."""
    initial_state = State.initial(input_data, user_state, source_name, partial)
    res = parser(initial_state)
    if isinstance(res, Ok):
        return res.value
    if isinstance(res, Incomplete):
        raise ParseIncomplete(_incomplete_error(initial_state, res.needed), res.needed)
    raise ParseException(res.error, fatal=isinstance(res, Failure))
