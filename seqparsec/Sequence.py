"""
Combinators applying parsers in sequence.

Each combinator runs its components one after another, feeding the cursor
returned by one component into the next. The first outcome that is not an
Ok (Error, Incomplete or Failure) is returned as-is: the same object, never
wrapped, downgraded or annotated, and no later component runs. Nothing is
rolled back either; a caller wanting to backtrack simply retries from the
cursor it still holds.
"""
from typing import Any, Iterable, List, Tuple, Union

from .Parsec import Ok, ParseFn, ParseResult, Parsec, State

ParserLike = Union[Parsec[Any], ParseFn]


# 1. pair: Both outputs, as a 2-tuple
def pair(first: ParserLike, second: ParserLike) -> Parsec[Tuple[Any, Any]]:
    """
    Runs `first`, then `second` on what is left, and returns both outputs.

        >>> p = pair(tag("abc"), tag("efg"))
        >>> run_parser(p, "abcefghij")
        (('abc', 'efg'), None)
    """
    first, second = Parsec.lift(first), Parsec.lift(second)

    def parse(state: State) -> ParseResult:
        res1 = first(state)
        if not res1.is_ok:
            return res1
        res2 = second(res1.state)
        if not res2.is_ok:
            return res2
        return Ok((res1.value, res2.value), res2.state)
    return Parsec(parse, "pair")


# 2. preceded: Skip a mandatory prefix
def preceded(first: ParserLike, second: ParserLike) -> Parsec[Any]:
    """Runs `first` and discards its output, then returns the output of `second`."""
    first, second = Parsec.lift(first), Parsec.lift(second)

    def parse(state: State) -> ParseResult:
        res1 = first(state)
        if not res1.is_ok:
            return res1
        return second(res1.state)
    return Parsec(parse, "preceded")


# 3. terminated: Require a suffix
def terminated(first: ParserLike, second: ParserLike) -> Parsec[Any]:
    """
    Returns the output of `first`; `second` must still succeed after it.
    If `second` fails the whole parser fails, even though `first` matched.
    """
    first, second = Parsec.lift(first), Parsec.lift(second)

    def parse(state: State) -> ParseResult:
        res1 = first(state)
        if not res1.is_ok:
            return res1
        res2 = second(res1.state)
        if not res2.is_ok:
            return res2
        return Ok(res1.value, res2.state)
    return Parsec(parse, "terminated")


# 4. separated_pair: Two values around a separator
def separated_pair(first: ParserLike, sep: ParserLike, second: ParserLike) -> Parsec[Tuple[Any, Any]]:
    """Runs `first`, `sep` and `second` in order; returns the outputs of `first` and `second`."""
    first, sep, second = Parsec.lift(first), Parsec.lift(sep), Parsec.lift(second)

    def parse(state: State) -> ParseResult:
        res1 = first(state)
        if not res1.is_ok:
            return res1
        res_sep = sep(res1.state)
        if not res_sep.is_ok:
            return res_sep
        res2 = second(res_sep.state)
        if not res2.is_ok:
            return res2
        return Ok((res1.value, res2.value), res2.state)
    return Parsec(parse, "separated_pair")


# 5. delimited: A value between an opening and a closing parser
def delimited(first: ParserLike, second: ParserLike, third: ParserLike) -> Parsec[Any]:
    """
    Runs all three parsers in order and returns only the output of `second`.
    Equivalent to `preceded(first, terminated(second, third))`.

        >>> run_parser(delimited(tag("("), tag("abc"), tag(")")), "(abc)def")
        ('abc', None)
    """
    first, second, third = Parsec.lift(first), Parsec.lift(second), Parsec.lift(third)

    def parse(state: State) -> ParseResult:
        res1 = first(state)
        if not res1.is_ok:
            return res1
        res2 = second(res1.state)
        if not res2.is_ok:
            return res2
        res3 = third(res2.state)
        if not res3.is_ok:
            return res3
        return Ok(res2.value, res3.state)
    return Parsec(parse, "delimited")


# 6. unit: The empty sequence
def unit() -> Parsec[Tuple[()]]:
    """Always succeeds with `()` and consumes nothing. Identity element of `sequence`."""
    def parse(state: State) -> ParseResult:
        return Ok((), state)
    return Parsec(parse, "unit")


# 7. sequence: Any number of parsers, outputs collected into a tuple
def sequence(*parsers: Union[ParserLike, Iterable[ParserLike]]) -> Parsec[Tuple[Any, ...]]:
    """
    Applies the parsers one by one and returns their outputs as a tuple.

    Parsers may be given as separate arguments or as a single iterable:
    `sequence(a, b, c)` and `sequence([a, b, c])` are the same parser.
    Position i of the tuple always holds the output of the i-th parser.
    The number of parsers is fixed when the parser is built, and there is
    no upper limit on it. With no parsers at all this is `unit()`.

        >>> run_parser(sequence(letter(), digit(), letter()), "a1b")
        (('a', '1', 'b'), None)
    """
    if len(parsers) == 1 and not callable(parsers[0]):
        parsers = tuple(parsers[0])  # type: ignore[arg-type]
    components: List[Parsec[Any]] = [Parsec.lift(p) for p in parsers]  # type: ignore[arg-type]
    if not components:
        return unit()

    def parse(state: State) -> ParseResult:
        outputs = []
        current = state
        for p in components:
            res = p(current)
            if not res.is_ok:
                return res
            outputs.append(res.value)
            current = res.state
        return Ok(tuple(outputs), current)
    return Parsec(parse, f"sequence/{len(components)}")


tuple_parser = sequence
