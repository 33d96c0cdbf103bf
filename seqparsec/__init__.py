# Core
from .Parsec import (
    Parsec, State, SourcePos, ParseError, Message, MessageType, Needed,
    Ok, Error, Incomplete, Failure, ParseResult, ParseException, ParseIncomplete,
)
from .Prim import run_parser, parse, pure, fail, fatal, need, lazy, token, tokens, take, eof

# Sequencing
from .Sequence import pair, preceded, terminated, separated_pair, delimited, sequence, tuple_parser, unit

# Characters
from .Char import (
    tag, string, char, satisfy, one_of, none_of,
    space, digit, letter, alpha_num, any_char,
)

# Combinators
from .Combinators import (
    alt, choice, cut, complete, option, option_maybe, count, between,
    parser_trace, parser_traced,
)
