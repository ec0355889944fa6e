from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .backends import Backend
from .compiler import DEFAULT_TAPE_LENGTH, BrainfuckCompiler, CompilerOptions
from .parser import ParseError

logger = logging.getLogger(__name__)


def _read_source(path: str) -> str:
    source_path = Path(path)
    if not source_path.exists():
        raise FileNotFoundError(f"Source file not found: {path}")
    return source_path.read_text(encoding="utf-8")


def _output_path(emit: str, source: str, extension: str) -> Path:
    output_path = Path(emit)
    if output_path.is_dir():
        return output_path / f"{Path(source).stem}.{extension}"
    return output_path


def _write_output(path: Path, data: str) -> None:
    path.write_text(data, encoding="utf-8")


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Brainfuck (with raw inserts) compiler")
    parser.add_argument("source", help="Path to Brainfuck source file")
    parser.add_argument(
        "-o",
        "--emit",
        help="Destination file or directory for generated code (default: print to stdout)",
    )
    parser.add_argument(
        "--pre",
        type=int,
        default=0,
        help="Cells before the initial pointer position (default: 0)",
    )
    parser.add_argument(
        "--post",
        type=int,
        default=DEFAULT_TAPE_LENGTH,
        help=f"Cells from the initial pointer position onward (default: {DEFAULT_TAPE_LENGTH})",
    )
    parser.add_argument(
        "--backend",
        choices=[backend.value for backend in Backend],
        default=Backend.C99.value,
        help="Target language (default: c99)",
    )
    parser.add_argument(
        "--print-ir",
        action="store_true",
        help="Print the parsed intermediate representation instead of compiling",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        options = CompilerOptions(pre=args.pre, post=args.post, backend=args.backend)
    except ValueError as exc:
        print(f"Invalid options: {exc}", file=sys.stderr)
        return 2

    try:
        source_text = _read_source(args.source)
    except FileNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    compiler = BrainfuckCompiler(options)
    try:
        if args.print_ir:
            output = compiler.format(source_text) + "\n"
            extension = "bf"
        else:
            result = compiler.compile(source_text)
            output, extension = result.code, result.extension
    except ParseError as exc:
        logger.debug("Parse failed at offset %d", exc.position)
        print(f"Syntax error: {exc}", file=sys.stderr)
        return 1

    if args.emit:
        destination = _output_path(args.emit, args.source, extension)
        _write_output(destination, output)
        logger.debug("Wrote %s", destination)
    else:
        sys.stdout.write(output)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
