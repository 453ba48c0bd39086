#
# Bytedump Dispatcher
#

# Standard library -----------------------------------------------------------------------------------------------------
import os
import sys
import warnings
from enum import StrEnum, unique
from typing import Iterable, TextIO

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import (
    LineFormatter,
    CanonicalFormatter,
    OneByteCharFormatter,
    OneByteOctalFormatter,
    TwoBytesDecimalFormatter,
    TwoBytesHexFormatter,
    TwoBytesOctalFormatter,
)
from .io import Chunk, ChunkReader, DEFAULT_CHUNK_SIZE, Readable, skip_bytes, stream_size


# Classes --------------------------------------------------------------------------------------------------------------

# @formatter:off
@unique
class FormatKind(StrEnum):
    """
    Display modes, one line per mode per chunk.

    Attributes:
        ONE_BYTE_OCTAL (str)    : -b, 3-digit octal bytes
        ONE_BYTE_CHAR (str)     : -c, escaped characters
        CANONICAL (str)         : -C, hex bytes and ASCII gutter
        TWO_BYTES_DECIMAL (str) : -d, 5-digit decimal words
        TWO_BYTES_OCTAL (str)   : -o, 6-digit octal words
        TWO_BYTES_HEX (str)     : -x, 4-digit hex words
    """
    ONE_BYTE_OCTAL = "one_byte_octal"
    ONE_BYTE_CHAR = "one_byte_char"
    CANONICAL = "canonical"
    TWO_BYTES_DECIMAL = "two_bytes_decimal"
    TWO_BYTES_OCTAL = "two_bytes_octal"
    TWO_BYTES_HEX = "two_bytes_hex"
# @formatter:on


class DumpConf:
    CHUNK_SIZE = DEFAULT_CHUNK_SIZE
    DEFAULT_FORMAT = FormatKind.CANONICAL
    FORMATTERS: dict[FormatKind, type[LineFormatter]] = {
        FormatKind.ONE_BYTE_OCTAL: OneByteOctalFormatter,
        FormatKind.ONE_BYTE_CHAR: OneByteCharFormatter,
        FormatKind.CANONICAL: CanonicalFormatter,
        FormatKind.TWO_BYTES_DECIMAL: TwoBytesDecimalFormatter,
        FormatKind.TWO_BYTES_OCTAL: TwoBytesOctalFormatter,
        FormatKind.TWO_BYTES_HEX: TwoBytesHexFormatter,
    }


dump_conf = DumpConf()


class Dispatcher:
    """
    Feed every chunk to an ordered set of line formatters.

    For each chunk, each formatter writes its offset column then its payload,
    in registration order, to a single text sink.

    Args:
        formatters: Formatters or format kinds in output order. None or empty
            selects the canonical display only.

    Example:
        >>> out = io.StringIO()
        >>> Dispatcher(["two_bytes_hex", "canonical"]).run(ChunkReader(io.BytesIO(b"AB")), out)
        1
    """

    def __init__(self, formatters: Iterable[LineFormatter | FormatKind | str] | None = None):
        self.formatters = build_format_set(formatters)

    def dispatch(self, chunk: Chunk, out: TextIO) -> None:
        for formatter in self.formatters:
            out.write(formatter.print_offset(chunk))
            out.write(formatter.print_payload(chunk))

    def run(self, chunks: Iterable[Chunk], out: TextIO) -> int:
        """
        Dispatch all chunks.

        Returns:
            int: Number of chunks written.
        """
        count = 0
        for chunk in chunks:
            self.dispatch(chunk, out)
            count += 1
        return count


# Methods --------------------------------------------------------------------------------------------------------------

def formatter_for(kind: FormatKind | str) -> LineFormatter:
    """
    New formatter instance for a format kind.

    Raises:
        ValueError: If kind is not a FormatKind value.
    """
    try:
        kind = FormatKind(kind)
    except ValueError:
        raise ValueError(
            f"Invalid format: {kind!r}, expected one of {tuple(k.value for k in FormatKind)}"
        ) from None
    return dump_conf.FORMATTERS[kind]()


def build_format_set(
        formats: Iterable[LineFormatter | FormatKind | str] | None = None,
) -> tuple[LineFormatter, ...]:
    """
    Ordered, immutable formatter set.

    Format kinds are turned into formatters, formatter instances are kept as is.
    Insertion order is output order. An empty selection gives the default
    display, canonical.
    """
    formatters = tuple(
        f if isinstance(f, LineFormatter) else formatter_for(f)
        for f in (formats or ())
    )
    return formatters or (formatter_for(dump_conf.DEFAULT_FORMAT),)


def hexdump(
        reader: Readable,
        out: TextIO | None = None,
        formats: Iterable[LineFormatter | FormatKind | str] | None = None,
        skip: int = 0,
        length: int | None = None,
) -> int:
    """
    Dump a binary stream in one or more formats.

    Args:
        reader: Binary reader positioned at the start of the input.
        out: Text sink, sys.stdout by default.
        formats: Formatters or format kinds, canonical if none.
        skip: Bytes to skip first; offsets start at this value.
        length: Maximum number of bytes to dump, None dumps everything.

    Returns:
        int: Number of chunks written.

    Raises:
        ValueError: If skip or length is negative.
    """
    if skip < 0:
        raise ValueError(f"skip must be >= 0, got {skip}")
    if length is not None and length < 0:
        raise ValueError(f"length must be >= 0, got {length}")

    out = sys.stdout if out is None else out
    dispatcher = Dispatcher(formats)

    skip_bytes(reader, skip)
    chunks = ChunkReader(reader, offset=skip, length=length, chunk_size=dump_conf.CHUNK_SIZE)
    return dispatcher.run(chunks, out)


def hexdump_file(
        path: str | os.PathLike[str],
        out: TextIO | None = None,
        formats: Iterable[LineFormatter | FormatKind | str] | None = None,
        skip: int = 0,
        length: int | None = None,
) -> int:
    """
    Dump a file, see hexdump().

    Warns when skip goes beyond the end of a regular file.
    """
    with open(path, "rb") as f:
        size = stream_size(f)
        if size is not None and skip > size:
            warnings.warn(
                f"skip of {skip} bytes is beyond the end of {os.fspath(path)} ({size} bytes)",
                stacklevel=2,
            )
        return hexdump(f, out=out, formats=formats, skip=skip, length=length)
