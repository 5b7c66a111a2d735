"""
Wire conformance CLI entry point.

Run the conformance suites of the primitive codecs shipped with the harness.

Usage::

    python -m wire_conformance
    python -m wire_conformance -k Varint
    python -m wire_conformance --json > report.json
    python -m wire_conformance --max-examples 500 -k Word64

Options:
    -k, --keyword   Only run checks whose name contains this substring
    --max-examples  Examples per check (overrides the configured defaults)
    --json          Print the report as JSON instead of text
    -v, --verbose   Enable debug logging

The number of examples per check is read from the environment, see
`wire_conformance.config`.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .primitives import builtin_suites

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)

    # Hypothesis narrates shrinking at debug level; keep it out of the way.
    logging.getLogger("hypothesis").setLevel(logging.WARNING)


def _positive_int(raw: str) -> int:
    value = int(raw)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"{value} is not a positive integer")
    return value


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit code."""
    parser = argparse.ArgumentParser(
        description="Wire codec conformance checks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "-k",
        "--keyword",
        default="",
        help="Only run checks whose name contains this substring",
    )
    parser.add_argument(
        "--max-examples",
        type=_positive_int,
        default=None,
        help="Examples per check, overriding the configured defaults",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    suite = builtin_suites()
    if args.keyword:
        suite = suite.select(args.keyword)
    if args.max_examples is not None:
        suite = suite.with_max_examples(args.max_examples)
    if not len(suite):
        logger.error("No checks match %r", args.keyword)
        return 2

    report = suite.run()

    if args.json:
        print(report.model_dump_json(by_alias=True, indent=2))
    else:
        print(report.summary())

    return 0 if report.passed else 1


if __name__ == "__main__":
    sys.exit(main())
