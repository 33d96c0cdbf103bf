from typing import Any, Callable, Iterable, Sequence

from .Parsec import Parsec
from .Prim import token, tokens


def _show(tok: Any) -> str:
    return repr(tok)


# Core function: Succeeds if the token satisfies a predicate
def satisfy(f: Callable[[Any], bool]) -> Parsec[Any]:
    """Succeeds for any token where f returns True. Returns the parsed token."""
    return token(_show, lambda t: t if f(t) else None)


# Helper function: Parses a single character
def char(c: str) -> Parsec[str]:
    """Parses a single character c and returns it."""
    return satisfy(lambda x: x == c).label(f"'{c}'")


# 1. tag: Parses an exact literal prefix
def tag(s: Sequence[Any]) -> Parsec[Sequence[Any]]:
    """
    Matches `s` at the start of the remaining input and returns the matched
    slice of the input. Works on str, bytes and token lists alike; tokens are
    compared one by one, so a tuple literal matches a list of tokens.
    """
    return tokens(_show, s)


string = tag


# 2. oneOf: Parses any character in the provided collection
def one_of(cs: Iterable[Any]) -> Parsec[Any]:
    """Succeeds if the current token is in cs. Returns the parsed token."""
    allowed = list(cs)
    return satisfy(lambda c: c in allowed).label(f"one of {''.join(map(str, allowed))}")


# 3. noneOf: Parses any character not in the provided collection
def none_of(cs: Iterable[Any]) -> Parsec[Any]:
    """Succeeds if the current token is not in cs. Returns the parsed token."""
    forbidden = list(cs)
    return satisfy(lambda c: c not in forbidden).label(f"none of {''.join(map(str, forbidden))}")


# 4. space: Parses a whitespace character
def space() -> Parsec[str]:
    return satisfy(lambda c: isinstance(c, str) and c.isspace()).label("space")


# 5. digit: Parses an ASCII digit
def digit() -> Parsec[str]:
    return satisfy(lambda c: isinstance(c, str) and c in '0123456789').label("digit")


# 6. letter: Parses an alphabetic character
def letter() -> Parsec[str]:
    return satisfy(lambda c: isinstance(c, str) and c.isalpha()).label("letter")


# 7. alphaNum: Parses an alphanumeric character
def alpha_num() -> Parsec[str]:
    return satisfy(lambda c: isinstance(c, str) and c.isalnum()).label("letter or digit")


# 8. anyChar: Parses any token
def any_char() -> Parsec[Any]:
    return satisfy(lambda _: True)
