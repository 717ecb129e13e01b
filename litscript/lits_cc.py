#!/usr/bin/env python3
"""``lits-cc``: compile a LitScript source file into bytecode."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from litscript.compiler import LitsCompiler
from litscript.errors import LitError, LitIOError


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LitIOError(exc) from exc


def _compile_to(source: str, output_path: Path) -> None:
    """Compile ``source`` and write the bytecode to ``output_path``.

    Nothing is written when compilation fails.
    """
    data = LitsCompiler().compile(source)
    try:
        output_path.write_bytes(data)
    except OSError as exc:
        raise LitIOError(exc) from exc


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = _ArgumentParser(
        prog="lits-cc",
        description="Compile a LitScript source file into a binary instruction stream.",
    )
    parser.add_argument("input", help="Path to the LitScript source file.")
    parser.add_argument("output", help="Path of the compiled bytecode file to write.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    input_path = Path(args.input)
    output_path = Path(args.output)
    try:
        source = _read_source(input_path)
    except LitIOError as exc:
        print(f"Unable to read {input_path}: {exc}", file=sys.stderr)
        return 1

    try:
        _compile_to(source, output_path)
    except LitIOError as exc:
        print(f"Unable to write {output_path}: {exc}", file=sys.stderr)
        return 1
    except LitError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
