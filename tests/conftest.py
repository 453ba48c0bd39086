#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest
import pathlib

# Local ----------------------------------------------------------------------------------------------------------------
from bytedump.io import Chunk

SAMPLE_BYTES = bytes([
    0x54, 0x68, 0x69, 0x73, 0x01, 0x69, 0x73, 0x20,
    0x61, 0x20, 0x63, 0x68, 0x75, 0x6E, 0x6B, 0xFF,
])

# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def sample_chunk() -> Chunk:
    """The 16-byte 'This\\x01is a chunk\\xff' window at offset 16."""
    return Chunk(offset=16, data=SAMPLE_BYTES)


@pytest.fixture
def temp_file(tmp_path: pathlib.Path):
    """Fixture to create a temporary file with specified content."""

    def _create_file(content: bytes = b"") -> pathlib.Path:
        file_path = tmp_path / "test.dat"
        file_path.write_bytes(content)
        return file_path

    return _create_file


@pytest.fixture
def counting_file(tmp_path: pathlib.Path) -> pathlib.Path:
    """A 40-byte file holding bytes 0x00..0x27."""
    p = tmp_path / "counting.bin"
    p.write_bytes(bytes(range(40)))
    return p
