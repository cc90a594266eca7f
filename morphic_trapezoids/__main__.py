import argparse
import logging
import sys
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from morphic_trapezoids import (
    ExactArithmeticError,
    ExactFraction,
    FloatScalar,
    IndexOutOfRangeError,
    QuadraticInt,
    SequenceTooShortError,
    SymbolSequence,
    TrapezoidSequence,
    draw_trapezoids,
    get_sequence_config,
)

logger = logging.getLogger(__name__)

BOUND_FAMILIES = ("fraction", "float")


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _parse_bound(family: str, values: List[str]):
    if family == "fraction":
        if len(values) != 2:
            raise ValueError("A fraction bound takes two integers: ONES RT3")
        return ExactFraction(QuadraticInt(int(values[0]), int(values[1])), QuadraticInt(1, 0))
    if len(values) != 1:
        raise ValueError("A float bound takes one decimal value")
    return FloatScalar(float(values[0]))


def _index_of_last_new_subword(args: argparse.Namespace) -> None:
    symbols = SymbolSequence(args.length)
    if args.vector_sequence:
        index = symbols.index_of_last_new_vector_sequence(args.length)
        print(f"The (0-based) index of the last new vector sequence of length {args.length} is {index}.")
        print(f"The vector sequence starting at this index is {symbols.vectors(index, args.length)}.")
        return
    index = symbols.index_of_last_new_subword(args.length)
    subword = "".join(chr(ord("a") + symbols[i]) for i in range(index, index + args.length))
    print(f"The (0-based) index of the last new subword of length {args.length} is {index}.")
    print(f"The subword at this index is {subword}.")


def _earliest_subword_match(args: argparse.Namespace) -> None:
    symbols = SymbolSequence(args.start + args.length + 1)
    print(symbols.earliest_subword_match(args.start, args.length))


def _print_symbol_sequence(args: argparse.Namespace) -> None:
    symbols = SymbolSequence(args.length)
    print("1-indexed Symbol Sequence" if args.one_indexed else "0-indexed Symbol Sequence")
    rendered = symbols.letters(args.length) if args.alphabetic else symbols.symbols(args.length)
    for i, symbol in enumerate(rendered):
        print(f"\t{i + 1 if args.one_indexed else i}: {symbol}")


def _distinct_subword_intervals(args: argparse.Namespace) -> None:
    symbols = SymbolSequence(2)
    intervals = symbols.collinear_search_intervals(args.length)
    print("[" + ", ".join(str(interval) for interval in intervals) + "]")


def _count_collinear(args: argparse.Namespace) -> None:
    chain = TrapezoidSequence.create(2, args.family)
    best = chain.best_collinear_over_intervals(args.max_index_gap)
    print(
        f"The largest number of trapezoids separated by at most {args.max_index_gap} indices "
        f"that are intersected by a single straight line is {best.count}."
    )
    print(
        f"The intersection is through trapezoids {best.index1} and {best.index2} "
        f"(0-based indexing) at points {best.point1} and {best.point2}."
    )


def _assert_bounded(check: str, description: str) -> Callable[[argparse.Namespace], None]:
    def run(args: argparse.Namespace) -> None:
        bound = _parse_bound(args.family, args.bound)
        chain = TrapezoidSequence.create(1, args.family)
        end_index = chain.index_of_last_new_relative_positioning(args.gap_max + 1)
        below = getattr(chain, check)(args.gap_min, args.gap_max, 0, end_index, bound)
        print("SUCCESS" if below else "FAILURE")
        verdict = "is less than" if below else "is not less than"
        print(
            f"The {description} for trapezoids separated by at least {args.gap_min} "
            f"and at most {args.gap_max} indices {verdict} {bound}"
        )

    return run


def _draw(args: argparse.Namespace) -> None:
    chain = TrapezoidSequence.create(args.length, args.family)
    path = draw_trapezoids(chain, args.output, recursive=args.recursive)
    print(f"Drawing written to {path}")


def _build_parser() -> argparse.ArgumentParser:
    default_family = get_sequence_config().default_family
    parser = argparse.ArgumentParser(description="Explore morphic trapezoid chains")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    cmd = commands.add_parser("index-of-last-new-subword", help="Last new subword of a given length")
    cmd.add_argument("length", type=int)
    cmd.add_argument(
        "--vector-sequence",
        action="store_true",
        help="Report the last new sequence of i/j/k vector letters instead",
    )
    cmd.set_defaults(handler=_index_of_last_new_subword)

    cmd = commands.add_parser("earliest-subword-match", help="Earliest repeat of the subword at START")
    cmd.add_argument("start", type=int)
    cmd.add_argument("length", type=int)
    cmd.set_defaults(handler=_earliest_subword_match)

    cmd = commands.add_parser("print-symbol-sequence", help="Print a prefix of the symbol sequence")
    cmd.add_argument("length", type=int)
    cmd.add_argument("--alphabetic", action="store_true", help="Print symbols as letters")
    cmd.add_argument("--one-indexed", action="store_true", help="Number positions from 1")
    cmd.set_defaults(handler=_print_symbol_sequence)

    cmd = commands.add_parser("distinct-subword-intervals", help="Spans holding every distinct subword")
    cmd.add_argument("length", type=int)
    cmd.set_defaults(handler=_distinct_subword_intervals)

    cmd = commands.add_parser("count-collinear", help="Most trapezoids pierced by one line")
    cmd.add_argument("max_index_gap", type=int)
    cmd.add_argument("--family", choices=["quadratic", "fraction", "float"], default=default_family)
    cmd.set_defaults(handler=_count_collinear)

    assertions: Dict[str, Tuple[str, str]] = {
        "assert-bounded-ratio": ("assert_bounded_ratio", "ratio of largest to smallest distance per gap"),
        "assert-bounded-max-distance": ("assert_bounded_max_distance", "largest distance per index gap"),
        "assert-bounded-min-distance": (
            "assert_bounded_min_distance",
            "ratio of index gap plus 1 to the smallest distance",
        ),
    }
    for name, (check, description) in assertions.items():
        cmd = commands.add_parser(name, help=f"Check the {description} against BOUND")
        cmd.add_argument("gap_min", type=int)
        cmd.add_argument("gap_max", type=int)
        cmd.add_argument("bound", nargs="+", help="ONES RT3 for fraction bounds, a decimal for float")
        cmd.add_argument("--family", choices=BOUND_FAMILIES, default="fraction")
        cmd.set_defaults(handler=_assert_bounded(check, description))

    cmd = commands.add_parser("draw", help="Draw a chain to a PNG file")
    cmd.add_argument("length", type=int)
    cmd.add_argument("output")
    cmd.add_argument("--family", choices=["quadratic", "fraction", "float"], default="float")
    cmd.add_argument("--recursive", action="store_true", help="Overlay scaled prefixes of the chain")
    cmd.set_defaults(handler=_draw)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    try:
        args.handler(args)
    except (ExactArithmeticError, SequenceTooShortError, IndexOutOfRangeError, ValueError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        raise SystemExit(1)


if __name__ == "__main__":
    main(sys.argv[1:])
