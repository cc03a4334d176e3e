"""
Recipe Constants

Difficulty and rating scales stored on every recipe, plus fixed values
used by the import/export formats.
"""

from enum import IntEnum


class Difficulty(IntEnum):
    """Recipe difficulty, stored as its integer code."""
    NOT_SET = 0
    EASY = 1
    SOMEWHAT_EASY = 2
    MEDIUM = 3
    SLIGHTLY_DIFFICULT = 4
    DIFFICULT = 5

    @classmethod
    def from_code(cls, code):
        """Map an external integer code to a Difficulty, NOT_SET if unknown."""
        try:
            return cls(int(code))
        except (TypeError, ValueError):
            return cls.NOT_SET


class Rating(IntEnum):
    """User rating from one to five stars."""
    NOT_SET = 0
    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5

    @classmethod
    def from_code(cls, code):
        """Map an external integer code to a Rating, NOT_SET if unknown."""
        try:
            return cls(int(code))
        except (TypeError, ValueError):
            return cls.NOT_SET


# MacGourmet writes this in place of an empty course
COURSE_PLACEHOLDER = '--'

# Current canonical export format version
EXPORT_VERSION = '1.0'
