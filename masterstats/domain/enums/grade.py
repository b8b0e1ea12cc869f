"""Champion grade enumerations."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..errors import DataInconsistency

# Grade string the game-data service sends for "no grade yet".
NO_GRADE = "null"


class GradeLetter(Enum):
    """Base grade letters, declared from best to worst."""

    S = "S"
    A = "A"
    B = "B"
    C = "C"
    D = "D"

    @property
    def rank(self) -> int:
        return _LETTER_RANKS[self]

    @classmethod
    def all_letters(cls) -> list['GradeLetter']:
        return list(cls)


class GradeModifier(Enum):
    """Sub-grade modifiers, declared from best to worst."""

    PLUS = "+"
    NONE = " "
    MINUS = "-"

    @property
    def rank(self) -> int:
        return _MODIFIER_RANKS[self]

    @classmethod
    def all_modifiers(cls) -> list['GradeModifier']:
        return list(cls)

    @classmethod
    def parse(cls, value: str) -> 'GradeModifier':
        if isinstance(value, GradeModifier):
            return value
        if value == "":
            return cls.NONE
        try:
            return cls(value)
        except ValueError:
            raise DataInconsistency(f"unknown grade modifier '{value}'") from None


_LETTER_RANKS = {letter: index for index, letter in enumerate(GradeLetter)}
_MODIFIER_RANKS = {modifier: index for index, modifier in enumerate(GradeModifier)}


@dataclass(frozen=True)
class Grade:
    """A highest-grade value such as ``S+`` or ``B``."""

    letter: GradeLetter
    modifier: GradeModifier = GradeModifier.NONE

    def __str__(self) -> str:
        return f"{self.letter.value}{self.modifier.value}".rstrip()

    @property
    def rank(self) -> tuple[int, int]:
        return self.letter.rank, self.modifier.rank

    @classmethod
    def lowest(cls) -> 'Grade':
        return cls(GradeLetter.D, GradeModifier.MINUS)

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional['Grade']:
        """Parse a raw grade string.

        Returns ``None`` for the no-grade sentinel. A one-character grade has
        no modifier; a two-character grade carries its second character as
        the modifier.

        Raises:
            DataInconsistency: for any other shape or an unknown letter.
        """
        if isinstance(value, Grade):
            return value
        if value is None or value == NO_GRADE or value == "":
            return None
        if len(value) > 2:
            raise DataInconsistency(f"unknown grade '{value}'")
        try:
            letter = GradeLetter(value[0].upper())
        except ValueError:
            raise DataInconsistency(f"unknown grade '{value}'") from None
        if len(value) == 1:
            return cls(letter)
        return cls(letter, GradeModifier.parse(value[1]))
