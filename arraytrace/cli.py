"""Command-line entry point: print a trace for a snippet or an algorithm."""

from __future__ import annotations

import argparse
import logging
import sys

from . import constants
from .api import dump_trace, generate_trace, synthesize_trace, trace_to_json
from .delivery import iter_operation_messages, to_json
from .errors import SynthesisError
from .generators import Algorithm
from .trace_stats import TraceStats

logger = logging.getLogger(__name__)

DEMO_SOURCE = """\
let arr = [5, 3, 8, 1];
for (let i = 0; i < arr.length; i++) {
    for (let j = 0; j < arr.length - i - 1; j++) {
        if (arr[j] > arr[j + 1]) {
            [arr[j], arr[j + 1]] = [arr[j + 1], arr[j]];
        }
    }
}
"""


def _parse_values(text: str) -> list[int | float]:
    values = []
    for item in text.split(","):
        item = item.strip()
        if not item:
            continue
        try:
            values.append(int(item))
        except ValueError:
            try:
                values.append(float(item))
            except ValueError:
                raise argparse.ArgumentTypeError(f"not a number: {item!r}") from None
    return values


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arraytrace",
        description="Synthesize array visualization traces from code or an algorithm name",
    )
    parser.add_argument("file", nargs="?",
                        help="Source file to synthesize a trace from")
    parser.add_argument("--language", "-l", default=constants.DEFAULT_LANGUAGE,
                        choices=constants.SUPPORTED_LANGUAGES,
                        help="Source language (default: javascript)")
    parser.add_argument("--algorithm", "-a", default=None,
                        choices=[a.value for a in Algorithm],
                        help="Generate a canonical trace instead of parsing code")
    parser.add_argument("--array", type=_parse_values, default=None,
                        help="Comma-separated input values for --algorithm")
    parser.add_argument("--format", "-f", default="text",
                        choices=["text", "json", "jsonl"],
                        help="Output format (default: text)")
    parser.add_argument("--stats", action="store_true",
                        help="Print operation counts after the trace")
    parser.add_argument("--no-comments", action="store_true",
                        help="Omit loop-entry comment events")
    parser.add_argument("--reject-unresolved", action="store_true",
                        help="Drop comparisons with non-literal indices")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log pipeline decisions to stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    try:
        if args.algorithm:
            values = args.array if args.array is not None else [64, 34, 25, 12, 22, 11, 90]
            trace = generate_trace(args.algorithm, values)
        else:
            if args.file:
                with open(args.file) as f:
                    source = f.read()
            else:
                source = DEMO_SOURCE
                logger.info("No file provided, using built-in demo")
            trace = synthesize_trace(
                source,
                language=args.language,
                emit_comments=not args.no_comments,
                reject_unresolved=args.reject_unresolved,
            )
    except (SynthesisError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.format == "json":
        print(trace_to_json(trace, indent=2))
    elif args.format == "jsonl":
        for message in iter_operation_messages(trace):
            print(to_json(message))
    else:
        print("═══ Trace ═══")
        print(dump_trace(trace))

    if args.stats:
        print(TraceStats.of(trace).report())
    return 0


if __name__ == "__main__":
    sys.exit(main())
