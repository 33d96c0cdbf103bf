from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Any, Callable, Generic, List, Optional, Sequence, Tuple, TypeVar, Union

T = TypeVar('T')  # Generic type for parser results
U = TypeVar('U')


@dataclass(frozen=True)
class SourcePos:
    """Represents a line/column position in the input stream."""
    line: int = 1
    column: int = 1
    name: str = ""

    def update(self, token: Any) -> 'SourcePos':
        """Update position based on a single token (e.g., character)."""
        if token == '\n':
            return SourcePos(self.line + 1, 1, self.name)
        return SourcePos(self.line, self.column + 1, self.name)

    def update_many(self, tokens: Sequence[Any]) -> 'SourcePos':
        """Update position over a run of tokens in one step."""
        if isinstance(tokens, str):
            newlines = tokens.count('\n')
            if newlines:
                return SourcePos(self.line + newlines, len(tokens) - tokens.rfind('\n'), self.name)
        return SourcePos(self.line, self.column + len(tokens), self.name)

    def __str__(self) -> str:
        prefix = f'"{self.name}" ' if self.name else ""
        return f"{prefix}line {self.line}, column {self.column}"


@dataclass(frozen=True)
class State:
    """
    Immutable input cursor.

    `input` is the whole source and is shared between every cursor derived
    from it; only `index` moves. Copying a State never copies the input.
    `partial` marks input that may still grow (streaming mode), which lets
    leaf parsers answer Incomplete instead of failing at end of input.
    """
    input: Sequence[Any]
    index: int = 0
    pos: SourcePos = field(default_factory=SourcePos)
    user: Any = None
    partial: bool = False

    @classmethod
    def initial(cls, input: Sequence[Any], user_state: Any = None,
                source_name: str = "", partial: bool = False) -> 'State':
        return cls(input, 0, SourcePos(name=source_name), user_state, partial)

    @property
    def remaining(self) -> Sequence[Any]:
        """The unconsumed suffix of the input."""
        return self.input[self.index:]

    @property
    def input_len(self) -> int:
        return len(self.input) - self.index

    @property
    def is_eof(self) -> bool:
        return self.index >= len(self.input)

    def peek(self, count: int = 1) -> Sequence[Any]:
        """Up to `count` upcoming tokens, without advancing."""
        return self.input[self.index:self.index + count]

    def advance(self, count: int) -> 'State':
        """Return a new cursor `count` tokens further on. Only leaf parsers call this."""
        count = min(count, self.input_len)
        if count <= 0:
            return self
        consumed = self.input[self.index:self.index + count]
        return replace(self, index=self.index + count, pos=self.pos.update_many(consumed))


@dataclass(frozen=True)
class Needed:
    """How much more input a streaming parser wants; `amount` is None when unknown."""
    amount: Optional[int] = None

    @classmethod
    def unknown(cls) -> 'Needed':
        return cls(None)

    @classmethod
    def size(cls, n: int) -> 'Needed':
        if n < 1:
            raise ValueError(f"Needed.size expects a positive count, got {n}")
        return cls(n)

    @property
    def is_known(self) -> bool:
        return self.amount is not None

    def __str__(self) -> str:
        if self.amount is None:
            return "more input"
        return f"{self.amount} more element{'s' if self.amount != 1 else ''}"


class MessageType(Enum):
    SYS_UNEXPECT = auto()  # generated by leaf parsers (the token actually found)
    UNEXPECT = auto()      # raised by user code
    EXPECT = auto()        # what would have been accepted
    MESSAGE = auto()       # free-form


@dataclass(frozen=True)
class Message:
    type: MessageType
    text: str


@dataclass
class ParseError:
    """Error context: where parsing stopped and what was expected there."""
    pos: SourcePos
    messages: List[Message] = field(default_factory=list)
    index: int = 0

    @classmethod
    def new_message(cls, state: State, msg_type: MessageType, text: str) -> 'ParseError':
        return cls(state.pos, [Message(msg_type, text)], state.index)

    @classmethod
    def unexpected(cls, state: State, found: str, expecting: Optional[str] = None) -> 'ParseError':
        messages = [Message(MessageType.SYS_UNEXPECT, found)]
        if expecting is not None:
            messages.append(Message(MessageType.EXPECT, expecting))
        return cls(state.pos, messages, state.index)

    def is_unknown(self) -> bool:
        return not self.messages

    def add_message(self, msg_type: MessageType, text: str) -> 'ParseError':
        msg = Message(msg_type, text)
        if msg in self.messages:
            return self
        return ParseError(self.pos, self.messages + [msg], self.index)

    def set_expect(self, text: str) -> 'ParseError':
        """Replace every EXPECT message with a single one."""
        kept = [m for m in self.messages if m.type is not MessageType.EXPECT]
        return ParseError(self.pos, kept + [Message(MessageType.EXPECT, text)], self.index)

    @staticmethod
    def merge(e1: 'ParseError', e2: 'ParseError') -> 'ParseError':
        """The error that got further wins; at the same offset the messages are combined."""
        if e2.is_unknown() and not e1.is_unknown():
            return e1
        if e1.is_unknown() and not e2.is_unknown():
            return e2
        if e1.index > e2.index:
            return e1
        if e2.index > e1.index:
            return e2
        merged = list(e1.messages)
        for m in e2.messages:
            if m not in merged:
                merged.append(m)
        return ParseError(e1.pos, merged, e1.index)

    def show_messages(self) -> str:
        if not self.messages:
            return "unknown parse error"

        def texts(msg_type: MessageType) -> List[str]:
            out: List[str] = []
            for m in self.messages:
                if m.type is msg_type and m.text not in out:
                    out.append(m.text)
            return out

        parts = []
        sys_unexpect = texts(MessageType.SYS_UNEXPECT)
        unexpect = [t for t in texts(MessageType.UNEXPECT) if t]
        if unexpect:
            parts.append("unexpected " + ", ".join(unexpect))
        elif sys_unexpect:
            parts.append("unexpected " + (sys_unexpect[0] or "end of input"))
        expect = [t for t in texts(MessageType.EXPECT) if t]
        if expect:
            if len(expect) == 1:
                parts.append("expecting " + expect[0])
            else:
                parts.append("expecting " + ", ".join(expect[:-1]) + " or " + expect[-1])
        parts.extend(t for t in texts(MessageType.MESSAGE) if t)
        return "; ".join(parts)

    def __str__(self) -> str:
        return f"Parse error at {self.pos}: {self.show_messages()}"


# --- Parse outcomes ---
#
# Every parser returns exactly one of Ok, Error, Incomplete or Failure.
# They share the read-only attributes value/state/error/is_ok so callers can
# inspect any outcome without an isinstance ladder.

@dataclass(frozen=True)
class Ok(Generic[T]):
    """Success: `state` is the cursor left after the parser, `value` its output."""
    value: T
    state: State

    error = None
    is_ok = True


@dataclass(frozen=True)
class Error:
    """Recoverable failure. Alternation may retry another branch from the original cursor."""
    error: ParseError

    value = None
    state = None
    is_ok = False


@dataclass(frozen=True)
class Incomplete:
    """Streaming input ran out before a decision could be made."""
    needed: Needed = field(default_factory=Needed)

    value = None
    state = None
    error = None
    is_ok = False


@dataclass(frozen=True)
class Failure:
    """Fatal failure. Alternation must pass it through untouched."""
    error: ParseError

    value = None
    state = None
    is_ok = False


ParseResult = Union[Ok[T], Error, Incomplete, Failure]
ParseFn = Callable[[State], ParseResult]


class ParseException(Exception):
    """Raised by `parse` when a parser does not succeed."""
    def __init__(self, error: ParseError, fatal: bool = False):
        super().__init__(str(error))
        self.error = error
        self.fatal = fatal


class ParseIncomplete(ParseException):
    """Raised by `parse` when streaming input ended too early."""
    def __init__(self, error: ParseError, needed: Needed):
        super().__init__(error)
        self.needed = needed


class Parsec(Generic[T]):
    """
    A parser: a pure function from a State to a ParseResult.

    Invoking the same parser twice on the same State must give the same
    outcome. Nothing here checks that; it is what makes retrying from a
    saved cursor safe, so leaf parsers must not keep state between calls.
    """
    def __init__(self, parse_fn: ParseFn, name: Optional[str] = None):
        self.parse_fn = parse_fn
        self.name = name

    def __call__(self, state: State) -> ParseResult:
        return self.parse_fn(state)

    def __repr__(self) -> str:
        return f"<Parsec {self.name}>" if self.name else "<Parsec>"

    @staticmethod
    def lift(p: Union['Parsec[T]', ParseFn]) -> 'Parsec[T]':
        """Accept a Parsec or any plain `State -> ParseResult` callable."""
        if isinstance(p, Parsec):
            return p
        if callable(p):
            return Parsec(p, getattr(p, '__name__', None))
        raise TypeError(f"expected a parser, got {type(p).__name__}")

    # Monadic bind (>>=)
    def bind(self, f: Callable[[T], 'Parsec[U]']) -> 'Parsec[U]':
        def parse(state: State) -> ParseResult:
            res = self(state)
            if not res.is_ok:
                return res
            return f(res.value)(res.state)
        return Parsec(parse, self.name)

    # Functor (<$>)
    def map(self, f: Callable[[T], U]) -> 'Parsec[U]':
        def parse(state: State) -> ParseResult:
            res = self(state)
            if not res.is_ok:
                return res
            return Ok(f(res.value), res.state)
        return Parsec(parse, self.name)

    # `a > b > c` means `(a > b) and (b > c)` to Python, which would drop `a`
    def __bool__(self) -> bool:
        raise TypeError("parsers have no truth value; use >> or parentheses")

    # Sequence (&): both outputs as a 2-tuple
    def __and__(self, other: 'Parsec[U]') -> 'Parsec[Tuple[T, U]]':
        from .Sequence import pair
        return pair(self, other)

    # Sequence (*>)
    def __gt__(self, other: 'Parsec[U]') -> 'Parsec[U]':
        from .Sequence import preceded
        return preceded(self, other)

    # Sequence (<*)
    def __lt__(self, other: 'Parsec[U]') -> 'Parsec[T]':
        from .Sequence import terminated
        return terminated(self, other)

    # `p >> q` sequences two parsers, `p >> f` binds a function
    def __rshift__(self, other: Union['Parsec[U]', Callable[[T], 'Parsec[U]']]) -> 'Parsec[U]':
        if isinstance(other, Parsec):
            from .Sequence import preceded
            return preceded(self, other)
        return self.bind(other)

    # Alternative (<|>)
    def __or__(self, other: 'Parsec[T]') -> 'Parsec[T]':
        from .Combinators import alt
        return alt(self, other)

    # Label (<?>)
    def label(self, msg: str) -> 'Parsec[T]':
        """Name what this parser expects when it fails without getting past its start."""
        def parse(state: State) -> ParseResult:
            res = self(state)
            if isinstance(res, Error) and res.error.index == state.index:
                return Error(res.error.set_expect(msg))
            return res
        return Parsec(parse, msg)
