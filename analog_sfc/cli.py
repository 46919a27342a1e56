"""Command line entry point."""

from __future__ import annotations

import json
import sys

from .backend.typescript import emit_typescript
from .compiler import compile_file
from .errors import AnalogError
from .frontend.blocks import extract_blocks
from .frontend.classify import build_skeleton

PHASES: list[str] = ["blocks", "classify"]

USAGE: str = """\
analog-sfc [OPTIONS] [INPUT] [-o OUTPUT]

Options:
  --filename PATH     File path used for naming when reading stdin
  --stop-at PHASE     Stop after phase: blocks, classify
  --format            Apply the formatting pass to the output
  -o, --output FILE   Write output to FILE instead of stdout
  --help              Show this help message
"""


def read_source(input_file: str | None) -> tuple[str, int]:
    """Read source from file or stdin. Returns (source, exit_code) where exit_code 0 means OK."""
    if input_file is not None:
        try:
            with open(input_file, "rb") as f:
                raw = f.read()
        except OSError:
            print("error: cannot open '" + input_file + "'", file=sys.stderr)
            return ("", 1)
    else:
        raw = sys.stdin.buffer.read()
    try:
        return (raw.decode("utf-8"), 0)
    except ValueError:
        print("error: invalid utf-8 in input", file=sys.stderr)
        return ("", 1)


def write_output(output: str, output_file: str | None) -> int:
    """Write output to file or stdout. Returns 0 on success, 1 on error."""
    if output_file is not None:
        try:
            with open(output_file, "w") as f:
                f.write(output)
        except OSError:
            print("error: cannot write '" + output_file + "'", file=sys.stderr)
            return 1
        return 0
    sys.stdout.write(output)
    return 0


def run_pipeline(file_path: str, source: str, stop_at: str | None, should_format: bool) -> tuple[int, str]:
    """Run the compiler. Returns (exit_code, output)."""
    try:
        blocks = extract_blocks(source)
        if stop_at == "blocks":
            return (0, json.dumps(blocks.to_dict(), indent=2) + "\n")
        if stop_at == "classify":
            return (0, emit_typescript(build_skeleton(file_path, blocks)))
        result = compile_file(file_path, source, should_format)
    except AnalogError as e:
        print("error: " + str(e), file=sys.stderr)
        return (1, "")
    for warning in result.warnings:
        print(file_path + ": " + str(warning), file=sys.stderr)
    return (0, result.code)


def parse_args(args: list[str]) -> tuple[str | None, str | None, str | None, bool, str | None]:
    """Returns (input_file, filename, stop_at, should_format, output_file)."""
    input_file: str | None = None
    filename: str | None = None
    stop_at: str | None = None
    should_format = False
    output_file: str | None = None
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            sys.exit(0)
        elif arg in ("--filename", "--stop-at", "-o", "--output"):
            if i + 1 >= len(args):
                print("error: " + arg + " requires an argument", file=sys.stderr)
                sys.exit(2)
            value = args[i + 1]
            if arg == "--filename":
                filename = value
            elif arg == "--stop-at":
                stop_at = value
            else:
                output_file = value
            i += 2
        elif arg == "--format":
            should_format = True
            i += 1
        elif arg.startswith("-"):
            print("error: unknown flag '" + arg + "'", file=sys.stderr)
            sys.exit(2)
        else:
            if input_file is not None:
                print("error: unexpected argument '" + arg + "'", file=sys.stderr)
                sys.exit(2)
            input_file = arg
            i += 1
    if stop_at is not None and stop_at not in PHASES:
        print("error: unknown phase '" + stop_at + "'", file=sys.stderr)
        sys.exit(2)
    if input_file is None and filename is None:
        print("error: --filename is required when reading stdin", file=sys.stderr)
        sys.exit(2)
    return (input_file, filename, stop_at, should_format, output_file)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = sys.argv[1:] if argv is None else argv
    input_file, filename, stop_at, should_format, output_file = parse_args(args)
    source, err = read_source(input_file)
    if err != 0:
        return err
    file_path = filename if filename is not None else input_file
    exit_code, output = run_pipeline(file_path or "", source, stop_at, should_format)
    if exit_code != 0:
        return exit_code
    return write_output(output, output_file)


if __name__ == "__main__":
    sys.exit(main())
