"""
Chunked binary input for line-oriented dumps.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import io
import os
import stat
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Protocol

# Constants ------------------------------------------------------------------------------------------------------------
DEFAULT_CHUNK_SIZE = 16
SKIP_BLOCK_SIZE = 64 * 1024  # 64KB, read-and-discard block for non-seekable streams


# Classes --------------------------------------------------------------------------------------------------------------

class Readable(Protocol):
    """Anything with a binary read(size) method."""

    def read(self, size: int = -1, /) -> bytes | None: ...


@dataclass(frozen=True)
class Chunk:
    """
    One window of input bytes.

    Attributes:
        offset: Absolute position of the first byte in the original stream.
        data: The bytes, at most one chunk size long.
    """

    offset: int
    data: bytes

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[int]:
        return iter(self.data)


class LimitedReader:
    """
    Reader wrapper that never returns more than `limit` bytes in total.

    Args:
        reader: Underlying binary reader.
        limit: Total number of bytes to let through.

    Attributes:
        remaining: Bytes still allowed.
    """

    def __init__(self, reader: Readable, limit: int) -> None:
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        self.reader = reader
        self.remaining = limit

    def read(self, size: int = -1) -> bytes:
        if self.remaining == 0:
            return b""

        if size < 0 or size > self.remaining:
            size = self.remaining

        data = self.reader.read(size) or b""
        self.remaining -= len(data)
        return data


class ChunkReader:
    """
    Iterate over a binary stream in fixed-size chunks with absolute offsets.

    Every chunk is exactly `chunk_size` bytes long except the last one, which
    holds whatever was left (possibly nothing) and ends the iteration.

    Args:
        reader: Binary reader, already positioned at the first byte to dump.
        offset: Absolute position of that first byte, numbering starts here.
        length: Maximum number of bytes to read, None reads until end of stream.
        chunk_size: Bytes per chunk.

    Example:
        >>> chunks = ChunkReader(io.BytesIO(b"0123456789ABCDEF01"), offset=32)
        >>> [(c.offset, c.data) for c in chunks]
        [(32, b'0123456789ABCDEF'), (48, b'01')]
    """

    def __init__(
            self,
            reader: Readable,
            offset: int = 0,
            length: int | None = None,
            chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if offset < 0:
            raise ValueError(f"offset must be >= 0, got {offset}")
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")

        self.reader = reader if length is None else LimitedReader(reader, length)
        self.offset = offset
        self.chunk_size = chunk_size

    def __iter__(self) -> Iterator[Chunk]:
        offset = self.offset
        while True:
            data = read_to_fill(self.reader, self.chunk_size)
            yield Chunk(offset=offset, data=data)

            if len(data) < self.chunk_size:
                return
            offset += self.chunk_size


# Methods --------------------------------------------------------------------------------------------------------------

def read_to_fill(reader: Readable, size: int) -> bytes:
    """
    Read exactly `size` bytes unless the stream ends first.

    Short reads are continued and InterruptedError is retried, so a result
    shorter than `size` always means end of stream. Other OSError-s propagate.

    Args:
        reader: Binary reader.
        size: Number of bytes wanted.

    Returns:
        bytes: At most `size` bytes.
    """
    buffer = bytearray()
    while len(buffer) < size:
        try:
            data = reader.read(size - len(buffer))
        except InterruptedError:
            continue

        if not data:
            break
        buffer.extend(data)

    return bytes(buffer)


def skip_bytes(reader: Readable, count: int) -> int:
    """
    Advance a binary stream by `count` bytes.

    Seekable streams are moved with seek() and always report `count`, seeking
    past the end is allowed. Other streams are read and discarded in blocks
    until `count` bytes are consumed or the stream ends.

    Returns:
        int: Number of bytes skipped.

    Raises:
        ValueError: If count is negative.
        OverflowError: If count does not fit a file offset.
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    if count == 0:
        return 0

    if _is_seekable(reader):
        try:
            reader.seek(count, os.SEEK_CUR)
        except (OverflowError, ValueError) as exc:
            raise OverflowError(f"skip of {count} bytes is too large to seek") from exc
        return count

    skipped = 0
    while skipped < count:
        data = read_to_fill(reader, min(SKIP_BLOCK_SIZE, count - skipped))
        if not data:
            break
        skipped += len(data)
    return skipped


def stream_size(reader: BinaryIO) -> int | None:
    """
    Size of a regular file behind a reader, None when it cannot be told.
    """
    try:
        fileno = reader.fileno()
    except (AttributeError, OSError, io.UnsupportedOperation):
        return None

    st = os.fstat(fileno)
    if not stat.S_ISREG(st.st_mode):
        return None
    return st.st_size


# Private methods ------------------------------------------------------------------------------------------------------

def _is_seekable(reader: Readable) -> bool:
    seekable = getattr(reader, "seekable", None)
    if seekable is None:
        return False
    try:
        return bool(seekable())
    except (OSError, ValueError):
        return False
