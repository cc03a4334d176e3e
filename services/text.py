"""
Text Heuristics

Pure functions that normalize durations, nutrition values and ingredient
phrases, and that turn bulk-edited text into ordered directions and
ingredients with heading detection. None of these raise: input that does
not match is returned unchanged (or as None).
"""

import re

from constants import LIST_MARKERS, NUTRITION_UNIT_SUFFIXES
from .drafts import DirectionDraft, IngredientDraft

# Heading detection modes
HEADING_MODE_BLANK_LINE = 'blank_line'
HEADING_MODE_DOUBLE_BLANK_OR_COLON = 'double_blank_or_colon'

_DURATION_RE = re.compile(r'^PT(?:(\d+)H)?(?:(\d+)M)?(?:\d+(?:\.\d+)?S)?$')
_NUMBERED_PREFIX_RE = re.compile(r'^\d+[.)]\s*')
_NON_DIGITS_RE = re.compile(r'\D+')


def format_duration(raw):
    """
    Convert an ISO-8601 duration like 'PT1H30M' into '1 hr 30 min'.

    Hour or minute components that are missing are left out. Anything that
    is not a PT<n>H<n>M duration (or has neither component) is returned as-is.
    """
    if not isinstance(raw, str):
        return raw
    match = _DURATION_RE.match(raw.strip().upper())
    if not match:
        return raw

    hours, minutes = match.groups()
    parts = []
    if hours is not None:
        parts.append(f"{int(hours)} hr")
    if minutes is not None:
        parts.append(f"{int(minutes)} min")
    if not parts:
        return raw
    return ' '.join(parts)


def parse_numeric_measurement(raw):
    """Extract the number from nutrition strings like '240 calories', '9g' or '300mg'."""
    if not isinstance(raw, str):
        return None
    value = raw.strip().replace(',', '')
    lowered = value.lower()
    for suffix in NUTRITION_UNIT_SUFFIXES:
        if lowered.endswith(suffix.lower()):
            value = value[:-len(suffix)]
            break
    value = value.strip()
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def first_integer(raw):
    """Return the first run of digits in raw as an int, e.g. 'Serves 6' -> 6."""
    if not isinstance(raw, str):
        return None
    for token in _NON_DIGITS_RE.split(raw):
        if token:
            return int(token)
    return None


def strip_list_markers(line, numbered=False):
    """
    Remove one leading bullet (and, for directions, a '1.' / '2)' prefix).

    Args:
        line: A single line of pasted text
        numbered: Also strip numbered-list prefixes (directions variant)

    Returns:
        The cleaned, whitespace-trimmed line
    """
    cleaned = line.strip()
    for marker in LIST_MARKERS:
        if cleaned.startswith(marker):
            cleaned = cleaned[len(marker):]
            break
    if numbered:
        cleaned = _NUMBERED_PREFIX_RE.sub('', cleaned.strip(), count=1)
    return cleaned.strip()


def clean_up_text(text, numbered=False):
    """Apply strip_list_markers to every line of a block of text."""
    return '\n'.join(strip_list_markers(line, numbered=numbered) for line in text.splitlines())


def compose_ingredient_text(quantity=None, measurement=None, description=None, direction=None, is_divider=False):
    """
    Build ingredient text as '<quantity> <measurement> <description> (<direction>)'.

    Absent parts are collapsed. Divider (heading) ingredients use only the
    bare description.
    """
    description = description or ''
    if is_divider:
        return description

    parts = [part.strip() for part in (quantity, measurement, description) if part and part.strip()]
    text = ' '.join(parts)
    if direction and direction.strip():
        text += f" ({direction.strip()})"
    return text.strip()


def _is_blank(line):
    return not line.strip()


def detect_heading_lines(lines, mode=HEADING_MODE_DOUBLE_BLANK_OR_COLON):
    """
    Split bulk-edited lines into (text, is_heading) pairs.

    Modes:
    - HEADING_MODE_BLANK_LINE: a line right after a blank line, or ending in
      ':', is a heading. Every non-blank line becomes one entry.
    - HEADING_MODE_DOUBLE_BLANK_OR_COLON: a line after two blank lines, or
      ending in ':', is a heading. Consecutive body lines are joined with a
      space until a blank-line break or a colon-terminated line.

    Blank lines are separators and never appear in the result.
    """
    lines = list(lines)
    if mode == HEADING_MODE_BLANK_LINE:
        return _detect_single_blank(lines)
    if mode == HEADING_MODE_DOUBLE_BLANK_OR_COLON:
        return _detect_double_blank_or_colon(lines)
    raise ValueError(f"Unknown heading mode: {mode}")


def _detect_single_blank(lines):
    result = []
    for i, raw in enumerate(lines):
        line = raw.strip()
        if not line:
            continue
        is_heading = i > 0 and _is_blank(lines[i - 1])
        if line.endswith(':'):
            is_heading = True
            line = line[:-1].strip()
        result.append((line, is_heading))
    return result


def _detect_double_blank_or_colon(lines):
    result = []
    i = 0
    count = len(lines)
    while i < count:
        line = lines[i].strip()
        if not line:
            i += 1
            continue

        is_heading = i > 1 and _is_blank(lines[i - 1]) and _is_blank(lines[i - 2])
        if line.endswith(':'):
            is_heading = True
            line = line[:-1].strip()

        text = line
        j = i + 1
        if not is_heading:
            while j < count:
                next_line = lines[j].strip()
                if not next_line:
                    # A blank run followed by more content ends this direction
                    k = j + 1
                    while k < count and _is_blank(lines[k]):
                        k += 1
                    if k < count:
                        break
                    j += 1
                    continue
                if next_line.endswith(':'):
                    break
                text += ' ' + next_line
                j += 1

        result.append((text, is_heading))
        i = j
    return result


def parse_directions_text(text):
    """Parse bulk direction text into DirectionDraft objects."""
    pairs = detect_heading_lines(clean_up_text(text, numbered=True).splitlines(), HEADING_MODE_DOUBLE_BLANK_OR_COLON)
    return [DirectionDraft(text=line, is_heading=is_heading) for line, is_heading in pairs]


def parse_ingredients_text(text, existing=None):
    """
    Parse bulk ingredient text into IngredientDraft objects.

    Args:
        text: One ingredient per line, headings after a blank line or ending in ':'
        existing: Previous ingredients; is_main is carried over for identical text

    Returns:
        list of IngredientDraft
    """
    main_by_text = {ingredient.text: ingredient.is_main for ingredient in (existing or [])}
    pairs = detect_heading_lines(clean_up_text(text).splitlines(), HEADING_MODE_BLANK_LINE)
    return [
        IngredientDraft(
            text=line,
            is_heading=is_heading,
            is_main=main_by_text.get(line, False) and not is_heading,
        )
        for line, is_heading in pairs
    ]


def format_directions_text(directions):
    """Format directions for bulk editing; headings get two blank lines before them."""
    lines = []
    for direction in directions:
        if direction.is_heading:
            lines.extend(['', '', direction.text])
        else:
            if lines:
                lines.append('')
            lines.append(direction.text)
    return '\n'.join(lines)


def format_ingredients_text(ingredients):
    """Format ingredients for bulk editing; headings get a blank line before them."""
    lines = []
    for ingredient in ingredients:
        if ingredient.is_heading:
            lines.append('')
        lines.append(ingredient.text)
    return '\n'.join(lines)
