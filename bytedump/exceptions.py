"""
Byte-size parsing errors.

Each error keeps its payload as data (the offending character, the expected
characters) and only builds the human-readable text in __str__.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Iterable


# Classes --------------------------------------------------------------------------------------------------------------

class SizeError(ValueError):
    """Base class for every byte-size string parsing failure."""


class NotNumberError(SizeError):
    """A digit was mandatory but another character was found."""

    def __init__(self, character: str):
        self.character = character
        super().__init__(character)

    def __str__(self) -> str:
        return f"the character {self.character!r} is not a number"


class NoValueError(SizeError):
    """The input was empty after trimming whitespace."""

    def __str__(self) -> str:
        return "no value"


class UnitIncorrectError(SizeError):
    """
    The unit suffix contains a character the scanner did not expect.

    Attributes:
        character: The offending character.
        expected_characters: Characters that would have been accepted, in order.
        also_expect_no_character: True when the end of input was acceptable too.
    """

    def __init__(
            self,
            character: str,
            expected_characters: Iterable[str] = (),
            also_expect_no_character: bool = False,
    ):
        self.character = character
        self.expected_characters = tuple(expected_characters)
        self.also_expect_no_character = also_expect_no_character
        super().__init__(character, self.expected_characters, also_expect_no_character)

    def __str__(self) -> str:
        head = f"The character {self.character!r} is incorrect."
        expected = [repr(c) for c in self.expected_characters]

        if not expected:
            return f"{head} No character is expected."

        if len(expected) == 1:
            if self.also_expect_no_character:
                return f"{head} {expected[0]} or no character is expected."
            return f"{head} {expected[0]} is expected."

        if self.also_expect_no_character:
            return f"{head} {', '.join(expected)} or no character is expected."
        return f"{head} {', '.join(expected[:-1])} or {expected[-1]} is expected."
