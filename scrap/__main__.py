"""
Command-line runner for Scrap programs.

Usage:
    python -m scrap FILE.scrap [ARGS ...]
    scrap FILE.scrap [ARGS ...] --verbose

Everything after FILE is handed to the program as `std::args`. Errors raised
by the interpreter are reported on stderr and the process exits with status 1.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from scrap import __version__, config
from scrap.errors import ScrapError, ScrapSyntaxError, ScrapUnresolvedReference
from scrap.interpreter import Interpreter

logger = logging.getLogger("scrap")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scrap", description="Run a Scrap program")
    parser.add_argument("file", type=Path, help="source file declaring a main function")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="arguments exposed as std::args")
    parser.add_argument("-v", "--verbose", action="store_true", help="log interpreter activity to stderr")
    parser.add_argument("--version", action="version", version=f"scrap {__version__}")
    return parser


def format_error(error: ScrapError, path: Path) -> str:
    if isinstance(error, ScrapSyntaxError):
        return f"{path}: SyntaxError: {error}"
    if isinstance(error, ScrapUnresolvedReference):
        return f"{path}: ReferenceError: {error}"
    return f"{path}: RuntimeError: {error}"


def main(argv: list[str] | None = None) -> int:
    options = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else config.get_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        source = options.file.read_text(encoding="utf-8")
    except OSError as ex:
        print(f"scrap: cannot read {options.file}: {ex.strerror}", file=sys.stderr)
        return 1

    sys.setrecursionlimit(config.get_recursion_limit())
    try:
        Interpreter().run(source, options.args)
    except ScrapError as ex:
        print(format_error(ex, options.file), file=sys.stderr)
        return 1
    except RecursionError:
        print(f"{options.file}: FatalError: stack overflow", file=sys.stderr)
        return 1
    logger.debug("%s finished", options.file)
    return 0


if __name__ == "__main__":
    sys.exit(main())
