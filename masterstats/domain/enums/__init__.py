"""Domain enumerations."""
from .region import Region
from .tier import Tier
from .grade import Grade, GradeLetter, GradeModifier, NO_GRADE

__all__ = [
    'Region',
    'Tier',
    'Grade',
    'GradeLetter',
    'GradeModifier',
    'NO_GRADE',
]
