import logging
from typing import Any, List, Optional

from .Parsec import Error, Failure, Incomplete, MessageType, Ok, ParseError, ParseResult, Parsec, State, T
from .Prim import fail, pure
from .Sequence import ParserLike, delimited, sequence

logger = logging.getLogger(__name__)


# 1. alt: Tries parsers in order until one succeeds
def alt(*parsers: ParserLike) -> Parsec[Any]:
    """
    Tries each parser on the same cursor until one succeeds.

    Only a recoverable Error moves on to the next alternative; Incomplete
    and Failure are returned straight away. When every alternative fails
    the errors are merged, so the message lists everything that was expected.
    """
    alternatives = [Parsec.lift(p) for p in parsers]
    if not alternatives:
        return fail("no alternatives")

    def parse(state: State) -> ParseResult:
        error: Optional[ParseError] = None
        for p in alternatives:
            res = p(state)
            if not isinstance(res, Error):
                return res
            error = res.error if error is None else ParseError.merge(error, res.error)
        return Error(error)
    return Parsec(parse, "alt")


# 2. choice: alt over a list
def choice(parsers: List[ParserLike]) -> Parsec[Any]:
    """Applies a list of parsers in order until one succeeds."""
    return alt(*parsers)


# 3. cut: Commit to the current branch
def cut(p: ParserLike) -> Parsec[Any]:
    """Turns a recoverable Error from p into a Failure, so no enclosing alt retries."""
    p = Parsec.lift(p)

    def parse(state: State) -> ParseResult:
        res = p(state)
        if isinstance(res, Error):
            return Failure(res.error)
        return res
    return Parsec(parse, p.name)


# 4. complete: Treat the input as final
def complete(p: ParserLike) -> Parsec[Any]:
    """Turns Incomplete from p into a recoverable Error at the starting cursor."""
    p = Parsec.lift(p)

    def parse(state: State) -> ParseResult:
        res = p(state)
        if isinstance(res, Incomplete):
            return Error(ParseError.new_message(state, MessageType.SYS_UNEXPECT, "")
                         .add_message(MessageType.EXPECT, str(res.needed)))
        return res
    return Parsec(parse, p.name)


# 5. option: Tries a parser, returning a default value on failure
def option(x: T, p: ParserLike) -> Parsec[T]:
    """Tries parser p; returns its result if successful, else x if it fails recoverably."""
    return alt(p, pure(x))


# 6. optionMaybe: Tries a parser, returning Optional[T]
def option_maybe(p: ParserLike) -> Parsec[Optional[Any]]:
    return alt(p, pure(None))


# 7. count: Parses n occurrences of a parser
def count(n: int, p: ParserLike) -> Parsec[List[Any]]:
    """Applies p exactly n times and returns the outputs as a list."""
    if n < 0:
        raise ValueError(f"count expects a non-negative count, got {n}")
    return sequence([p] * n).map(list)


# 8. between: Parses an opening parser, a main parser, and a closing parser
def between(open: ParserLike, close: ParserLike, p: ParserLike) -> Parsec[Any]:
    """Parses 'open', then 'p', then 'close', returning the result of 'p'."""
    return delimited(open, p, close)


# 9. parserTrace: Logs the upcoming input without consuming it
def parser_trace(label_str: str) -> Parsec[None]:
    def parse(state: State) -> ParseResult:
        more = '...' if state.input_len > 30 else ''
        logger.debug('%s: %r%s at %s', label_str, state.peek(30), more, state.pos)
        return Ok(None, state)
    return Parsec(parse, label_str)


# 10. parserTraced: Logs entry to p and how it finished
def parser_traced(label_str: str, p: ParserLike) -> Parsec[Any]:
    p = Parsec.lift(p)

    def parse(state: State) -> ParseResult:
        logger.debug('%s: trying at %s', label_str, state.pos)
        res = p(state)
        if isinstance(res, Ok):
            logger.debug('%s: matched %r, now at %s', label_str, res.value, res.state.pos)
        elif isinstance(res, Incomplete):
            logger.debug('%s: needs %s', label_str, res.needed)
        else:
            logger.debug('%s: %s: %s', label_str, type(res).__name__.lower(), res.error)
        return res
    return Parsec(parse, label_str)
