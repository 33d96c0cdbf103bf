from seqparsec.Char import char, digit, tag
from seqparsec.Combinators import alt, choice, cut
from seqparsec.Prim import run_parser, take
from seqparsec.Sequence import preceded, separated_pair, sequence, terminated

# An HTTP/1.x request line, e.g. "GET /index.html HTTP/1.1\r\n"

# 1. Method: one of a fixed set of tokens
method = choice([tag(m) for m in ("GET", "HEAD", "POST", "PUT", "DELETE", "OPTIONS")]).label("method")

# 2. Request target: '/' followed by everything up to the next space
def up_to_space(state):
    end = state.index
    while end < len(state.input) and state.input[end] != ' ':
        end += 1
    return take(end - state.index)(state)

target = preceded(char('/'), up_to_space).map(lambda rest: '/' + rest)

# 3. Version: "HTTP/" digit "." digit; once "HTTP/" matched there is no going back
version = preceded(
    tag("HTTP/"),
    cut(separated_pair(digit(), char('.'), digit())),
).map(lambda v: (int(v[0]), int(v[1])))

crlf = alt(tag("\r\n"), tag("\n"))

request_line = terminated(
    sequence(terminated(method, char(' ')), terminated(target, char(' ')), version),
    crlf,
)


if __name__ == "__main__":
    for line in ("GET /index.html HTTP/1.1\r\n", "FETCH / HTTP/1.1\n", "GET / HTTP/x.1\n"):
        result, err = run_parser(request_line, line)
        if err:
            print(f"{line!r}: failed: {err}")
        else:
            method_name, path, (major, minor) = result
            print(f"{line!r}: {method_name} {path} (HTTP {major}.{minor})")
