#
# Bytedump Byte-Size Units
#

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass
from enum import StrEnum, unique
from fractions import Fraction
from typing import Iterator, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .exceptions import NoValueError, NotNumberError, UnitIncorrectError

# @formatter:off

KILOBYTE  = 1000 ** 1
MEGABYTE  = 1000 ** 2
GIGABYTE  = 1000 ** 3
TERABYTE  = 1000 ** 4
PETABYTE  = 1000 ** 5
EXABYTE   = 1000 ** 6
ZETTABYTE = 1000 ** 7
YOTTABYTE = 1000 ** 8

KIBIBYTE = 1 << 10
MEBIBYTE = 1 << 20
GIBIBYTE = 1 << 30
TEBIBYTE = 1 << 40
PEBIBYTE = 1 << 50
EXBIBYTE = 1 << 60
ZEBIBYTE = 1 << 70
YOBIBYTE = 1 << 80

U128_MAX = (1 << 128) - 1

# Unit letters in magnitude order, K=1 ... Y=8
UNIT_LETTERS = "KMGTPEZY"

# Characters reported as acceptable in place of an unknown unit letter, Y is not listed
EXPECTED_UNIT_LETTERS = ("B", "K", "M", "G", "T", "P", "E", "Z")

# @formatter:on


# Classes --------------------------------------------------------------------------------------------------------------

# @formatter:off
@unique
class ByteUnit(StrEnum):
    """
    Byte units, decimal (powers of 1000) and binary (powers of 1024).

    Attributes:
        B (str)   : Single byte
        KB (str)  : Kilobyte, 10³ bytes
        KiB (str) : Kibibyte, 2¹⁰ bytes
        ...
        YB (str)  : Yottabyte, 10²⁴ bytes
        YiB (str) : Yobibyte, 2⁸⁰ bytes
    """
    B = "B"
    KB = "KB"
    KiB = "KiB"
    MB = "MB"
    MiB = "MiB"
    GB = "GB"
    GiB = "GiB"
    TB = "TB"
    TiB = "TiB"
    PB = "PB"
    PiB = "PiB"
    EB = "EB"
    EiB = "EiB"
    ZB = "ZB"
    ZiB = "ZiB"
    YB = "YB"
    YiB = "YiB"
# @formatter:on

    @classmethod
    def from_letter(cls, letter: str, binary: bool) -> Self:
        """Unit for a case-insensitive magnitude letter K..Y, e.g. ('k', True) → KiB."""
        letter = letter.upper()
        if letter not in UNIT_LETTERS:
            raise ValueError(f"Invalid unit letter: {letter!r}, expected one of {tuple(UNIT_LETTERS)}")
        return cls(f"{letter}iB" if binary else f"{letter}B")

    @property
    def binary(self) -> bool:
        """True for the …iB units."""
        return self.value.endswith("iB")

    @property
    def base(self) -> int:
        return 1024 if self.binary else 1000

    @property
    def exponent(self) -> int:
        """Magnitude index: 0 for B, 1 for KB/KiB up to 8 for YB/YiB."""
        if self is ByteUnit.B:
            return 0
        return UNIT_LETTERS.index(self.value[0]) + 1

    @property
    def multiplier(self) -> int:
        """Exact number of bytes in one unit."""
        return UNIT_MULTIPLIERS[self]


UNIT_MULTIPLIERS: dict[ByteUnit, int] = {
    ByteUnit.B: 1,
    ByteUnit.KB: KILOBYTE, ByteUnit.KiB: KIBIBYTE,
    ByteUnit.MB: MEGABYTE, ByteUnit.MiB: MEBIBYTE,
    ByteUnit.GB: GIGABYTE, ByteUnit.GiB: GIBIBYTE,
    ByteUnit.TB: TERABYTE, ByteUnit.TiB: TEBIBYTE,
    ByteUnit.PB: PETABYTE, ByteUnit.PiB: PEBIBYTE,
    ByteUnit.EB: EXABYTE, ByteUnit.EiB: EXBIBYTE,
    ByteUnit.ZB: ZETTABYTE, ByteUnit.ZiB: ZEBIBYTE,
    ByteUnit.YB: YOTTABYTE, ByteUnit.YiB: YOBIBYTE,
}


@dataclass(frozen=True, order=True)
class ByteSize:
    """
    An exact, non-negative byte count in the unsigned 128-bit range.

    For most use cases, prefer the factory class method ByteSize.parse().

    Examples:
        >>> ByteSize.parse("12.5 KiB")
        ByteSize(value=12800)
        >>> int(ByteSize.parse("128KB"))
        128000
    """

    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"ByteSize value must be an int, got {type(self.value).__name__}")
        if not 0 <= self.value <= U128_MAX:
            raise ValueError(f"ByteSize value must be in range [0, 2**128 - 1], got {self.value}")

    @classmethod
    def parse(cls, text: str) -> Self:
        """
        Parse a byte-size string such as "128", "12.8 KB" or "1.25 K".

        Raises:
            NoValueError: If text is empty after trimming.
            NotNumberError: If a digit is missing where one is mandatory.
            UnitIncorrectError: If the unit suffix is malformed.
        """
        return cls(parse_bytes(text))

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


# Methods --------------------------------------------------------------------------------------------------------------

def parse_bytes(text: str) -> int:
    """
    Convert a byte-size string into an exact number of bytes.

    Grammar, case-insensitive unit:
        size := ws* digits ('.' digits)? ws* unit?
        unit := letter ('i'? 'b')?       letter in B K M G T P E Z Y

    A bare magnitude letter means the binary unit, so "1.25 K" is 1.25 KiB.

    Args:
        text: The string to parse.

    Returns:
        int: Byte count, truncated toward zero, at most 2**128 - 1.

    Raises:
        TypeError: If text is not a str.
        NoValueError: If text is empty after trimming.
        NotNumberError: If a digit is missing where one is mandatory.
        UnitIncorrectError: If the unit suffix is malformed.

    Examples:
        >>> parse_bytes("128KB")
        128000
        >>> parse_bytes("128KiB")
        131072
        >>> parse_bytes("12.8 KB")
        12800
        >>> parse_bytes("1.25 K")
        1280
    """
    if not isinstance(text, str):
        raise TypeError(f"Byte size must be a str, got {type(text).__name__}")

    chars = iter(text.strip())

    first = next(chars, None)
    if first is None:
        raise NoValueError()
    if not _is_digit(first):
        raise NotNumberError(first)
    whole = int(first)
    fraction = Fraction(0)

    # Numeric phase: ends at the end of input, at whitespace or at the first unit character
    current = next(chars, None)
    while current is not None and _is_digit(current):
        whole = whole * 10 + int(current)
        current = next(chars, None)

    if current == ".":
        current = next(chars, None)
        if current is None:
            raise NotNumberError(".")
        if not _is_digit(current):
            raise NotNumberError(current)

        digits = ""
        while current is not None and _is_digit(current):
            digits += current
            current = next(chars, None)
        fraction = Fraction(int(digits), 10 ** len(digits))

    while current is not None and current.isspace():
        current = next(chars, None)

    unit = read_unit(current, chars)
    return get_bytes(unit, whole + fraction)


def read_unit(first: str | None, chars: Iterator[str]) -> ByteUnit:
    """
    Recognize a unit suffix starting at the character `first`.

    Args:
        first: The first unit character, None at the end of input.
        chars: The rest of the input.

    Raises:
        UnitIncorrectError: With the characters acceptable in the failing state.
    """
    if first is None:
        return ByteUnit.B

    letter = _ascii_upper(first)
    if letter == "B":
        _expect_end(chars)
        return ByteUnit.B

    if letter in UNIT_LETTERS:
        return ByteUnit.from_letter(letter, binary=_read_binary_suffix(chars))

    raise UnitIncorrectError(first, EXPECTED_UNIT_LETTERS, also_expect_no_character=True)


def get_bytes(unit: ByteUnit, mantissa: int | Fraction) -> int:
    """
    Bytes in `mantissa` units, truncated toward zero and capped at 2**128 - 1.

    The mantissa is exact, an int or a decimal Fraction, so the product is
    exact too: "1.035 KB" is 1035 bytes and "1.5 YB" is 15×10²³.

    Examples:
        >>> get_bytes(ByteUnit.KiB, Fraction(25, 2))
        12800
        >>> get_bytes(ByteUnit.YB, 1)
        1000000000000000000000000
    """
    return _truncate(mantissa * unit.multiplier)


def n_bytes(n: int, unit: ByteUnit | str) -> int:
    """
    Exact number of bytes in n whole units.

    Examples:
        >>> n_bytes(3, "KiB")
        3072
        >>> n_bytes(2, ByteUnit.GB)
        2000000000
    """
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"n must be an int, got {type(n).__name__}")
    return n * ByteUnit(unit).multiplier


# Private methods ------------------------------------------------------------------------------------------------------

def _is_digit(char: str) -> bool:
    """ASCII digits only, str.isdigit() also accepts other scripts."""
    return "0" <= char <= "9"


def _ascii_upper(char: str) -> str:
    return char.upper() if char.isascii() else char


def _expect_end(chars: Iterator[str]) -> None:
    """No character may follow."""
    extra = next(chars, None)
    if extra is not None:
        raise UnitIncorrectError(extra, (), also_expect_no_character=False)


def _read_binary_suffix(chars: Iterator[str]) -> bool:
    """
    Read what follows a magnitude letter: nothing, 'i', 'iB' or 'B'.

    Returns:
        bool: True for a binary unit, False for a decimal one.
    """
    current = next(chars, None)
    if current is None:
        return True

    upper = _ascii_upper(current)
    if upper == "I":
        current = next(chars, None)
        if current is None:
            return True
        if _ascii_upper(current) != "B":
            raise UnitIncorrectError(current, ("B",), also_expect_no_character=True)
        _expect_end(chars)
        return True

    if upper == "B":
        _expect_end(chars)
        return False

    raise UnitIncorrectError(current, ("B", "i"), also_expect_no_character=True)


def _truncate(number: int | Fraction) -> int:
    """Toward zero, saturating to [0, 2**128 - 1]."""
    if number <= 0:
        return 0
    if number >= U128_MAX:
        return U128_MAX
    return int(number)


# Module Sanity Checks -------------------------------------------------------------------------------------------------

# Ensure every unit has a multiplier.
if set(UNIT_MULTIPLIERS) != set(ByteUnit):
    raise AssertionError(
        "Configuration Error: UNIT_MULTIPLIERS must define a multiplier for every ByteUnit."
    )
