"""
Bytedump command line interface
"""

# Standard library -----------------------------------------------------------------------------------------------------
import argparse
import os
import sys
from importlib.metadata import PackageNotFoundError, version as metadata_version
from typing import Sequence

# Local ----------------------------------------------------------------------------------------------------------------
from .dump import FormatKind, hexdump_file
from .exceptions import SizeError
from .units import parse_bytes

PROG = "bytedump"


# Methods --------------------------------------------------------------------------------------------------------------

def size_arg(text: str) -> int:
    """argparse type for byte-size options such as '12.5 KiB'."""
    try:
        return parse_bytes(text)
    except SizeError as exc:
        raise argparse.ArgumentTypeError(f"invalid size {text!r}: {exc}") from exc


def package_version() -> str:
    try:
        return metadata_version(PROG)
    except PackageNotFoundError:
        return "unknown"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROG, description="A hexdump utility.")

    # @formatter:off
    formats = parser.add_argument_group("formats", "any combination, lines are printed in the order given")
    formats.add_argument("-b", "--one-byte-octal", dest="formats", action="append_const",
                         const=FormatKind.ONE_BYTE_OCTAL, help="one-byte octal display")
    formats.add_argument("-c", "--one-byte-char", dest="formats", action="append_const",
                         const=FormatKind.ONE_BYTE_CHAR, help="one-byte character display")
    formats.add_argument("-o", "--two-bytes-octal", dest="formats", action="append_const",
                         const=FormatKind.TWO_BYTES_OCTAL, help="two-byte octal display")
    formats.add_argument("-x", "--two-bytes-hex", dest="formats", action="append_const",
                         const=FormatKind.TWO_BYTES_HEX, help="two-byte hexadecimal display")
    formats.add_argument("-C", "--canonical", dest="formats", action="append_const",
                         const=FormatKind.CANONICAL, help="canonical hex+ASCII display (default)")
    formats.add_argument("-d", "--two-bytes-decimal", dest="formats", action="append_const",
                         const=FormatKind.TWO_BYTES_DECIMAL, help="two-byte decimal display")
    # @formatter:on

    parser.add_argument("-n", "--length", type=size_arg, default=None, metavar="SIZE",
                        help="interpret only SIZE bytes of input, e.g. 512, 4K, 1.5MiB")
    parser.add_argument("-s", "--skip", type=size_arg, default=0, metavar="SIZE",
                        help="skip SIZE bytes from the beginning of the input")
    parser.add_argument("--version", action="version", version=f"%(prog)s {package_version()}")
    parser.add_argument("input", help="input file")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Run the CLI.

    Returns:
        int: Exit code, 0 on success and 1 on I/O failure. Invalid options
        exit with code 2 from argparse.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    # Repeated flags keep their first position
    formats = list(dict.fromkeys(args.formats or []))

    try:
        hexdump_file(args.input, out=sys.stdout, formats=formats, skip=args.skip, length=args.length)
        sys.stdout.flush()
    except BrokenPipeError:
        # Reader went away, e.g. `bytedump file | head`
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return 1
    except OverflowError:
        print(f"{PROG}: {args.input}: skip of {args.skip} bytes is too large to seek", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"{PROG}: {args.input}: {exc.strerror or exc}", file=sys.stderr)
        return 1

    return 0
