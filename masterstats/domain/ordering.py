"""Total orders for tiers and grades.

Lexical order is wrong for both: ``"BRONZE" < "CHALLENGER"`` and
``"S" > "A"``. Each comparator is a pure rank lookup returning a negative
number when the first argument ranks higher (sorts first), zero when equal
and a positive number otherwise.

Values outside the rank tables are logged as data inconsistencies and
compared as the lowest rank.
"""
from __future__ import annotations

from typing import Optional, Union

from masterstats.core.logging.logger import get_logger
from .enums import Grade, GradeLetter, GradeModifier, Tier
from .errors import DataInconsistency

_log = get_logger(__name__, service="ordering")

TierLike = Union[Tier, str, None]
GradeLike = Union[Grade, str, None]
ModifierLike = Union[GradeModifier, str]

# Rank given to the no-grade sentinel: after every real grade.
_NO_GRADE_RANK = (len(GradeLetter), len(GradeModifier))


def resolve_tier(value: TierLike) -> Tier:
    """Parse a tier, clamping unknown strings to the lowest tier."""
    try:
        return Tier.parse(value)
    except DataInconsistency as exc:
        _log.warning(lambda: f"data-inconsistency {exc}; treating as {Tier.lowest().value}")
        return Tier.lowest()


def resolve_grade(value: GradeLike) -> Optional[Grade]:
    """Parse a grade, clamping unknown strings to the lowest grade.

    Returns ``None`` for the no-grade sentinel.
    """
    try:
        return Grade.parse(value)
    except DataInconsistency as exc:
        _log.warning(lambda: f"data-inconsistency {exc}; treating as {Grade.lowest()}")
        return Grade.lowest()


def resolve_modifier(value: ModifierLike) -> GradeModifier:
    try:
        return GradeModifier.parse(value)
    except DataInconsistency as exc:
        _log.warning(lambda: f"data-inconsistency {exc}; treating as {GradeModifier.MINUS.value!r}")
        return GradeModifier.MINUS


def tier_sort_key(value: TierLike) -> int:
    return resolve_tier(value).rank


def grade_sort_key(value: GradeLike) -> tuple[int, int]:
    grade = resolve_grade(value)
    if grade is None:
        return _NO_GRADE_RANK
    return grade.rank


def modifier_sort_key(value: ModifierLike) -> int:
    return resolve_modifier(value).rank


def compare_tiers(a: TierLike, b: TierLike) -> int:
    """Compare two tiers; Challenger sorts first, Unranked last."""
    return tier_sort_key(a) - tier_sort_key(b)


def compare_grades(a: GradeLike, b: GradeLike) -> int:
    """Compare two grades; the base letter dominates, then ``+``, ``" "``, ``-``."""
    letter_a, modifier_a = grade_sort_key(a)
    letter_b, modifier_b = grade_sort_key(b)
    if letter_a != letter_b:
        return letter_a - letter_b
    return modifier_a - modifier_b


def compare_modifiers(a: ModifierLike, b: ModifierLike) -> int:
    """Compare sub-grades for stacked-series ordering."""
    return modifier_sort_key(a) - modifier_sort_key(b)
