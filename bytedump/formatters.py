"""
Line formatters for byte dumps.

Every formatter turns one chunk into one output line: the offset column
(print_offset) followed by the payload (print_payload). The set of formatters
is closed, one class per display mode.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import sys
from abc import ABC, abstractmethod
from typing import Iterable, Literal

# Local ----------------------------------------------------------------------------------------------------------------
from .io import Chunk, DEFAULT_CHUNK_SIZE

ByteOrder = Literal["little", "big"]

ESCAPES = {0x00: "\\0", 0x09: "\\t", 0x0A: "\\n", 0x0D: "\\r"}


# Classes --------------------------------------------------------------------------------------------------------------

class LineFormatter(ABC):
    """
    Render chunks as lines of `0xAAAAAAAA<TAB><payload><LF>`.
    """

    def print_offset(self, chunk: Chunk) -> str:
        """Offset column: lowercase hex, 0x prefix, at least 8 digits, then a tab."""
        return f"{chunk.offset:#010x}\t"

    @abstractmethod
    def print_payload(self, chunk: Chunk) -> str:
        """Payload of the line including the trailing newline."""
        raise NotImplementedError

    def render(self, chunk: Chunk) -> str:
        """The full line."""
        return self.print_offset(chunk) + self.print_payload(chunk)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and vars(self) == vars(other)

    def __hash__(self) -> int:
        return hash((type(self), tuple(sorted(vars(self).items()))))


class OneByteOctalFormatter(LineFormatter):
    """Each byte as 3-digit octal: `124 150 151 163`."""

    def print_payload(self, chunk: Chunk) -> str:
        return " ".join(f"{byte:03o}" for byte in chunk.data) + "\n"


class OneByteCharFormatter(LineFormatter):
    """
    Each byte as a character in a 3-column field: `  T   h  \\n 377`.

    Tab, newline, carriage return and NUL are shown as C escapes, printable
    ASCII as itself and everything else as unpadded octal.
    """

    def print_payload(self, chunk: Chunk) -> str:
        return " ".join(f"{escape_byte(byte):>3}" for byte in chunk.data) + "\n"


class CanonicalFormatter(LineFormatter):
    """
    Hex+ASCII display: `54 68 69 73 01 69 73 20  61 20 63 68 75 6E 6B FF<TAB>|This.is a chunk.|`

    The hex column is padded to a fixed width so that the ASCII gutter of a
    short last chunk lines up with the full ones.

    Args:
        chunk_size: Bytes per full line, sets the hex column width.
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
        self.chunk_size = chunk_size

    @property
    def hex_width(self) -> int:
        """Column width of a full hex field, 3 columns per byte."""
        return self.chunk_size * 3

    def print_payload(self, chunk: Chunk) -> str:
        half = self.chunk_size // 2
        first = " ".join(f"{byte:02X}" for byte in chunk.data[:half])
        second = " ".join(f"{byte:02X}" for byte in chunk.data[half:])
        hex_field = f"{first}  {second}" if second else first

        gutter = "".join(printable_char(byte) for byte in chunk.data)
        return f"{hex_field:<{self.hex_width}}\t|{gutter}|\n"


class WordFormatter(LineFormatter):
    """
    Base for 16-bit word displays.

    Byte pairs are merged into words in `byteorder`, native by default; an odd
    trailing byte stands alone as a zero-extended word.
    """

    spec: str = ""

    def __init__(self, byteorder: ByteOrder = sys.byteorder):
        if byteorder not in ("little", "big"):
            raise ValueError(f"byteorder must be 'little' or 'big', got {byteorder!r}")
        self.byteorder = byteorder

    def print_payload(self, chunk: Chunk) -> str:
        words = merge_words(chunk.data, self.byteorder)
        return " ".join(format(word, self.spec) for word in words) + "\n"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(byteorder={self.byteorder!r})"


class TwoBytesDecimalFormatter(WordFormatter):
    """Words as 5-digit decimal: `26708 29545`."""
    spec = "05d"


class TwoBytesOctalFormatter(WordFormatter):
    """Words as 6-digit octal: `064124 071551`."""
    spec = "06o"


class TwoBytesHexFormatter(WordFormatter):
    """Words as 4-digit uppercase hex: `6854 7369`."""
    spec = "04X"


# Methods --------------------------------------------------------------------------------------------------------------

def escape_byte(byte: int) -> str:
    """
    Character display of one byte.

    Examples:
        >>> escape_byte(0x41)
        'A'
        >>> escape_byte(0x0A)
        '\\\\n'
        >>> escape_byte(0x01)
        '1'
        >>> escape_byte(0xFF)
        '377'
    """
    if byte in ESCAPES:
        return ESCAPES[byte]
    if 0x20 <= byte <= 0x7E:
        return chr(byte)
    return f"{byte:o}"


def printable_char(byte: int) -> str:
    """Printable ASCII as itself, anything else as '.'."""
    return chr(byte) if 0x20 <= byte <= 0x7E else "."


def merge_words(data: bytes | Iterable[int], byteorder: ByteOrder = sys.byteorder) -> list[int]:
    """
    Merge bytes pairwise into 16-bit words.

    Examples:
        >>> merge_words(b"\\x54\\x68\\x6B", "little")
        [26708, 107]
        >>> merge_words(b"\\x54\\x68", "big")
        [21608]
    """
    data = bytes(data)
    words = [int.from_bytes(data[i:i + 2], byteorder) for i in range(0, len(data) - 1, 2)]
    if len(data) % 2:
        words.append(data[-1])
    return words
