"""
MacGourmet Import Parser

Parses MacGourmet (.mgourmet) exports, an XML property list holding an
array of recipe dictionaries keyed by upper-case field names, into recipe
drafts. A file that does not decode to an array of dictionaries is rejected
as a whole; individual fields that are missing or malformed are skipped.
"""

import logging
import plistlib
from xml.parsers.expat import ExpatError

from constants import (
    Difficulty, COURSE_PLACEHOLDER,
    MG_NOTE_TYPES, MG_TIME_TYPES, MG_TIME_UNITS, MG_DEFAULT_LABEL,
)
from .drafts import (
    RecipeDraft, RecipeSideData, ParsedRecipe,
    DirectionDraft, IngredientDraft, NoteDraft, PreparationTimeDraft,
)
from .errors import DecodeError, NoDataFound
from .text import compose_ingredient_text

logger = logging.getLogger(__name__)


# ============================================
# FIELD ACCESSORS
# ============================================

def _text(record, key):
    """String value for key, or None. Numbers are accepted and converted."""
    value = record.get(key)
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _int(record, key, default=None):
    value = record.get(key)
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def _bool(record, key):
    value = record.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes')
    return False


def _records(record, key):
    """List of dictionaries under key; anything else in the list is ignored."""
    value = record.get(key)
    if not isinstance(value, list):
        return None
    return [item for item in value if isinstance(item, dict)]


def _non_blank(value):
    return value is not None and value.strip() != ''


# ============================================
# FIELD CONVERSION
# ============================================

def prep_time_string(prep_time):
    """Build e.g. '1 hr 30 min' from a PREP_TIMES entry's amounts and unit codes."""
    amount = _int(prep_time, 'AMOUNT', 0)
    amount2 = _int(prep_time, 'AMOUNT_2', 0)
    unit = MG_TIME_UNITS.get(_int(prep_time, 'TIME_UNIT_ID', 0), '')
    unit2 = MG_TIME_UNITS.get(_int(prep_time, 'TIME_UNIT_2_ID', 0), '')

    parts = []
    if amount > 0:
        parts.append(f"{amount} {unit}".strip())
    if amount2 > 0:
        parts.append(f"{amount2} {unit2}".strip())
    return ' '.join(parts)


def convert_directions(entries):
    """Each entry yields an optional heading (LABEL_TEXT) then an optional body (DIRECTION_TEXT)."""
    directions = []
    for entry in entries:
        label = _text(entry, 'LABEL_TEXT')
        if _non_blank(label):
            directions.append(DirectionDraft(text=label, is_heading=True))
        body = _text(entry, 'DIRECTION_TEXT')
        if _non_blank(body):
            directions.append(DirectionDraft(text=body, is_heading=False))
    return directions


def convert_ingredients(entries):
    ingredients = []
    for entry in entries:
        is_divider = _bool(entry, 'IS_DIVIDER')
        text = compose_ingredient_text(
            quantity=_text(entry, 'QUANTITY'),
            measurement=_text(entry, 'MEASUREMENT'),
            description=_text(entry, 'DESCRIPTION'),
            direction=_text(entry, 'DIRECTION'),
            is_divider=is_divider,
        )
        ingredients.append(IngredientDraft(text=text, is_heading=is_divider, is_main=_bool(entry, 'IS_MAIN')))
    return ingredients


def convert_notes(entries):
    return [
        NoteDraft(
            title=MG_NOTE_TYPES.get(_int(entry, 'TYPE_ID', 0), MG_DEFAULT_LABEL),
            content=_text(entry, 'NOTE_TEXT') or '',
        )
        for entry in entries
    ]


def convert_prep_times(entries):
    return [
        PreparationTimeDraft(
            type=MG_TIME_TYPES.get(_int(entry, 'TIME_TYPE_ID', 0), MG_DEFAULT_LABEL),
            time_string=prep_time_string(entry),
        )
        for entry in entries
    ]


def convert_record(record):
    """
    Convert one MacGourmet recipe dictionary into a draft and its side data.

    Args:
        record: dict decoded from the property list

    Returns:
        ParsedRecipe
    """
    url = _text(record, 'URL')
    publication_page = _text(record, 'PUBLICATION_PAGE')
    if url:
        source_details = url
    elif publication_page:
        source_details = publication_page
    else:
        source_details = ''

    difficulty = _int(record, 'DIFFICULTY')
    draft = RecipeDraft(
        name=_text(record, 'NAME') or '',
        source=_text(record, 'SOURCE') or '',
        source_details=source_details,
        introduction=_text(record, 'SUMMARY') or '',
        difficulty=Difficulty.from_code(difficulty) if difficulty is not None else Difficulty.NOT_SET,
        yield_text=_text(record, 'YIELD') or '',
    )

    servings = _int(record, 'SERVINGS')
    if servings is not None and servings > 0:
        draft.servings = servings

    directions = _records(record, 'DIRECTIONS_LIST')
    if directions is not None:
        draft.directions = convert_directions(directions)

    ingredients = _records(record, 'INGREDIENTS')
    if ingredients is not None:
        draft.ingredients = convert_ingredients(ingredients)

    notes = _records(record, 'NOTES_LIST')
    if notes is not None:
        draft.notes = convert_notes(notes)

    prep_times = _records(record, 'PREP_TIMES')
    if prep_times is not None:
        draft.preparation_times = convert_prep_times(prep_times)

    side = RecipeSideData()

    image = record.get('IMAGE')
    if isinstance(image, (bytes, bytearray)) and image:
        side.image_data = bytes(image)

    categories = _records(record, 'CATEGORIES')
    if categories is not None:
        side.categories = [name for name in (_text(cat, 'NAME') for cat in categories) if name]

    course = _text(record, 'COURSE_NAME')
    if course and course != COURSE_PLACEHOLDER:
        side.course = course

    return ParsedRecipe(draft, side)


# ============================================
# CONTAINER
# ============================================

def parse_macgourmet(data):
    """
    Parse a MacGourmet export.

    Args:
        data: Raw bytes of the .mgourmet property list

    Returns:
        list of ParsedRecipe, one per recipe in the file

    Raises:
        NoDataFound: If data is empty
        DecodeError: If the file is not a property-list array of recipes
    """
    if not data:
        raise NoDataFound()

    try:
        records = plistlib.loads(data)
    except (plistlib.InvalidFileException, ExpatError, ValueError, TypeError, OverflowError) as e:
        logger.error("Could not decode MacGourmet file: %s", e)
        raise DecodeError("not a property list", cause=e) from e

    if not isinstance(records, list):
        raise DecodeError(f"expected an array of recipes, found {type(records).__name__}")
    if not all(isinstance(record, dict) for record in records):
        raise DecodeError("expected every recipe to be a dictionary")

    logger.info("Found %d MacGourmet recipes to import", len(records))
    return [convert_record(record) for record in records]
