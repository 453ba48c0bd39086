#
# Bytedump - Dispatcher Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import io
import sys

# Third Party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from bytedump.dump import (
    Dispatcher,
    FormatKind,
    build_format_set,
    formatter_for,
    hexdump,
    hexdump_file,
)
from bytedump.formatters import (
    CanonicalFormatter,
    OneByteOctalFormatter,
    TwoBytesDecimalFormatter,
    TwoBytesHexFormatter,
)
from bytedump.io import Chunk


# Tests ----------------------------------------------------------------------------------------------------------------

class TestFormatterFor:

    @pytest.mark.parametrize("kind", list(FormatKind))
    def test_every_kind(self, kind):
        assert formatter_for(kind) is not formatter_for(kind)

    def test_by_name(self):
        assert isinstance(formatter_for("two_bytes_hex"), TwoBytesHexFormatter)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Invalid format"):
            formatter_for("quad_words")


class TestBuildFormatSet:

    @pytest.mark.parametrize("formats", [None, [], ()])
    def test_default_canonical(self, formats):
        assert build_format_set(formats) == (CanonicalFormatter(),)

    def test_order_preserved(self):
        format_set = build_format_set([FormatKind.TWO_BYTES_HEX, "canonical", FormatKind.ONE_BYTE_OCTAL])
        assert [type(f) for f in format_set] == [TwoBytesHexFormatter, CanonicalFormatter, OneByteOctalFormatter]

    def test_instances_kept(self):
        formatter = TwoBytesHexFormatter("big")
        assert build_format_set([formatter])[0] is formatter

    def test_immutable(self):
        assert isinstance(build_format_set(["canonical"]), tuple)


class TestDispatcher:

    def test_default_is_canonical(self, sample_chunk):
        out = io.StringIO()
        Dispatcher().dispatch(sample_chunk, out)
        assert out.getvalue() == (
            "0x00000010\t54 68 69 73 01 69 73 20  61 20 63 68 75 6E 6B FF\t|This.is a chunk.|\n"
        )

    def test_registration_order_per_chunk(self):
        out = io.StringIO()
        dispatcher = Dispatcher([TwoBytesDecimalFormatter("little"), CanonicalFormatter()])
        chunks = [Chunk(offset=0, data=b"AB"), Chunk(offset=16, data=b"C")]
        assert dispatcher.run(chunks, out) == 2
        assert out.getvalue().splitlines() == [
            "0x00000000\t16961",
            "0x00000000\t" + "41 42".ljust(48) + "\t|AB|",
            "0x00000010\t00067",
            "0x00000010\t" + "43".ljust(48) + "\t|C|",
        ]


class TestHexdump:

    def test_sample(self, sample_chunk):
        out = io.StringIO()
        reader = io.BytesIO(bytes(16) + sample_chunk.data)
        count = hexdump(reader, out, formats=["canonical", "two_bytes_decimal"], skip=16)
        assert count == 2
        assert out.getvalue() == (
            "0x00000010\t54 68 69 73 01 69 73 20  61 20 63 68 75 6E 6B FF\t|This.is a chunk.|\n"
            "0x00000010\t26708 29545 26881 08307 08289 26723 28277 65387\n"
            "0x00000020\t" + " " * 48 + "\t||\n"
            "0x00000020\t\n"
        )

    def test_skip_and_length(self):
        out = io.StringIO()
        hexdump(io.BytesIO(bytes(range(64))), out, formats=["one_byte_octal"], skip=3, length=18)
        assert out.getvalue().splitlines() == [
            "0x00000003\t" + " ".join(f"{b:03o}" for b in range(3, 19)),
            "0x00000013\t023 024",
        ]

    def test_offsets_increase_by_16(self):
        out = io.StringIO()
        hexdump(io.BytesIO(bytes(100)), out)
        offsets = [int(line.split("\t")[0], 16) for line in out.getvalue().splitlines()]
        assert offsets == [0, 16, 32, 48, 64, 80, 96]

    @pytest.mark.parametrize("kwargs", [{"skip": -1}, {"length": -1}])
    def test_negative(self, kwargs):
        with pytest.raises(ValueError):
            hexdump(io.BytesIO(b""), io.StringIO(), **kwargs)


class TestHexdumpFile:

    def test_file(self, counting_file):
        out = io.StringIO()
        assert hexdump_file(counting_file, out, formats=["two_bytes_hex"], length=4) == 1
        expected = "0100 0302" if sys.byteorder == "little" else "0001 0203"
        assert out.getvalue() == f"0x00000000\t{expected}\n"

    def test_skip_beyond_end_warns(self, counting_file):
        out = io.StringIO()
        with pytest.warns(UserWarning, match="beyond the end"):
            hexdump_file(counting_file, out, skip=100)
        assert out.getvalue() == "0x00000064\t" + " " * 48 + "\t||\n"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            hexdump_file(tmp_path / "missing.bin", io.StringIO())
