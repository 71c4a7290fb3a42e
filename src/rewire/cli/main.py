# src/rewire/cli/main.py
"""Command line entry point: rewire [--fake] ROOT FROM:TO [FROM:TO ...]"""

import argparse
import logging
import sys

from rewire.cli.controller import canvas
from rewire.config.config import load_config
from rewire.errors import ErrorKind, RewireError
from rewire.utils.logger import configure_logging
from rewire.walker.replacements import ReplacementSet
from rewire.workflow.pipeline import Pipeline

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def build_parser(prog: str = "rewire") -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Replace all occurrences of FROM with TO in Python files, then sort their imports.",
        epilog=f"Example: {prog} . foo:bar baz:buzz",
    )
    parser.add_argument("root", metavar="PATH", help="Root directory (or single file) to rewrite")
    parser.add_argument("patterns", metavar="FROM:TO", nargs="+", help="Literal replacement, exactly one ':'")
    parser.add_argument("--fake", action="store_true", help="Also modify directories whose name contains 'fake'")
    parser.add_argument("--config", "-c", default=None, help="YAML config file (default: $REWIRE_CONFIG)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def run_command(args) -> int:
    config = load_config(args.config)
    configure_logging("DEBUG" if args.verbose else config.log_level)

    replacements = ReplacementSet.from_args(args.patterns)
    logger.debug("Patterns: %r", replacements)

    pipeline = Pipeline.from_config(config)
    pipeline.run(args.root, replacements, include_fakes=args.fake or config.include_fakes)
    return EXIT_OK


def main(argv=None) -> int:
    """CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return run_command(args)
    except RewireError as e:
        return report_failure(e, parser)


def report_failure(error: RewireError, parser: argparse.ArgumentParser) -> int:
    if error.kind is ErrorKind.USAGE:
        canvas.usage(error.message)
        canvas.usage(parser.format_help())
    else:
        canvas.error(error.message, location=error.location)
    return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
