"""
Benchmark: sequencing over an index-based cursor.

Every step of a sequence hands the next parser a new State that shares the
original input, so the cost of a sequence should grow linearly with its
arity and must not depend on how much input is left after it.

Usage:
    uv run python benchmarks/bench_sequence.py
"""

import timeit
from seqparsec.Char import char, digit, tag
from seqparsec.Combinators import count
from seqparsec.Prim import run_parser, token
from seqparsec.Sequence import delimited, separated_pair, sequence


def bench_wide_sequence(sizes: list[int], repeats: int = 5) -> dict[int, float]:
    """Benchmark sequence(char('a') * n) on strings of increasing size."""
    results = {}
    for n in sizes:
        parser = sequence([char("a")] * n)
        data = "a" * n
        t = timeit.timeit(lambda: run_parser(parser, data), number=repeats)
        results[n] = t / repeats
    return results


def bench_long_tail(sizes: list[int], repeats: int = 5) -> dict[int, float]:
    """Benchmark a short sequence at the start of a large input; should stay flat."""
    parser = separated_pair(tag("key"), tag("="), count(5, digit()))
    results = {}
    for n in sizes:
        data = "key=12345" + "x" * n
        t = timeit.timeit(lambda: run_parser(parser, data), number=repeats)
        results[n] = t / repeats
    return results


def bench_nested(sizes: list[int], repeats: int = 5) -> dict[int, float]:
    """Benchmark n levels of delimited('(', ..., ')')."""
    results = {}
    for n in sizes:
        parser = char("x")
        for _ in range(n):
            parser = delimited(char("("), parser, char(")"))
        data = "(" * n + "x" + ")" * n
        t = timeit.timeit(lambda: run_parser(parser, data), number=repeats)
        results[n] = t / repeats
    return results


def bench_token_list(sizes: list[int], repeats: int = 5) -> dict[int, float]:
    """Benchmark sequencing over a list input (generic token stream)."""
    int_token = token(
        show_tok=lambda t: str(t),
        test_tok=lambda t: t if isinstance(t, int) else None,
    )
    results = {}
    for n in sizes:
        parser = sequence([int_token] * n)
        data = list(range(n))
        t = timeit.timeit(lambda: run_parser(parser, data), number=repeats)
        results[n] = t / repeats
    return results


def format_time(seconds: float) -> str:
    if seconds < 1e-3:
        return f"{seconds * 1e6:8.1f} us"
    elif seconds < 1:
        return f"{seconds * 1e3:8.2f} ms"
    else:
        return f"{seconds:8.3f}  s"


def print_results(name: str, results: dict[int, float]) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {name}")
    print(f"{'=' * 60}")
    print(f"  {'Size':>10}  {'Time':>12}  {'Ratio vs smallest':>18}")
    print(f"  {'-'*10}  {'-'*12}  {'-'*18}")

    baseline = list(results.values())[0]
    for size, elapsed in results.items():
        ratio = elapsed / baseline if baseline > 0 else 0
        print(f"  {size:>10,}  {format_time(elapsed)}  {ratio:>17.1f}x")


def main() -> None:
    sizes = [1_000, 5_000, 10_000, 50_000, 100_000]
    nested_sizes = [10, 25, 50, 100, 200]

    print("seqparsec Sequencing Benchmark")
    print("=" * 60)

    suites = [
        ("sequence(char('a') * n)", bench_wide_sequence, sizes),
        ("separated_pair + long tail", bench_long_tail, sizes),
        ("nested delimited", bench_nested, nested_sizes),
        ("List[int] tokens", bench_token_list, sizes),
    ]

    for name, fn, sz in suites:
        results = fn(sz)
        print_results(name, results)

    print()


if __name__ == "__main__":
    main()
