"""
Constants Package

Lookup tables and fixed values shared by the parsers, the persistence
engine and the HTTP layer.
"""

from .recipe import Difficulty, Rating, COURSE_PLACEHOLDER, EXPORT_VERSION
from .macgourmet import (
    MG_NOTE_TYPES, MG_TIME_TYPES, MG_TIME_UNITS, MG_DEFAULT_LABEL,
)
from .text import (
    LIST_MARKERS, NUTRITION_UNIT_SUFFIXES, NUTRITION_FIELDS, CORE_NUTRITION_FIELDS,
)
from .validation import (
    MAX_LENGTHS, ALLOWED_IMAGE_FORMATS, MACGOURMET_EXTENSIONS, CANONICAL_EXTENSIONS,
)

__all__ = [
    'Difficulty',
    'Rating',
    'COURSE_PLACEHOLDER',
    'EXPORT_VERSION',
    'MG_NOTE_TYPES',
    'MG_TIME_TYPES',
    'MG_TIME_UNITS',
    'MG_DEFAULT_LABEL',
    'LIST_MARKERS',
    'NUTRITION_UNIT_SUFFIXES',
    'NUTRITION_FIELDS',
    'CORE_NUTRITION_FIELDS',
    'MAX_LENGTHS',
    'ALLOWED_IMAGE_FORMATS',
    'MACGOURMET_EXTENSIONS',
    'CANONICAL_EXTENSIONS',
]
