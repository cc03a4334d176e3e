"""
Schema.org Recipe Parser

Extracts https://schema.org/Recipe data from the JSON-LD blocks embedded in
recipe web pages. Recipe sites disagree on the shape of almost every field
(strings vs. objects vs. arrays), so every field goes through an accessor
that narrows the type and returns None instead of failing.
"""

import json
import logging

from bs4 import BeautifulSoup

from constants import NUTRITION_FIELDS, CORE_NUTRITION_FIELDS, MAX_LENGTHS
from utils.sanitizer import sanitize_text, sanitize_name, sanitize_url
from .drafts import (
    RecipeDraft, RecipeSideData, ParsedRecipe,
    DirectionDraft, IngredientDraft, NoteDraft, PreparationTimeDraft,
    NutritionInformation,
)
from .text import format_duration, parse_numeric_measurement, first_integer

logger = logging.getLogger(__name__)

RECIPE_TYPE = 'Recipe'

TIME_FIELDS = (
    ('prepTime', 'Prep'),
    ('cookTime', 'Cook'),
    ('totalTime', 'Total'),
)

NOTE_FIELDS = (
    ('keywords', 'Keywords'),
    ('recipeCategory', 'Category'),
    ('recipeCuisine', 'Cuisine'),
)


# ============================================
# JSON VALUE ACCESSORS
# ============================================

def get_string(obj, key):
    """Trimmed string at key, or None if missing or not a string."""
    value = obj.get(key)
    if isinstance(value, str):
        return value.strip()
    return None


def get_dict(obj, key):
    value = obj.get(key)
    return value if isinstance(value, dict) else None


def get_list(obj, key):
    value = obj.get(key)
    return value if isinstance(value, list) else None


def get_number(value):
    """Float from a JSON number or a measurement string like '9 g'."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        return parse_numeric_measurement(value)
    return None


def get_joined_text(obj, key, separator=', '):
    """A string, or a list of strings joined with separator."""
    value = obj.get(key)
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, list):
        items = [item.strip() for item in value if isinstance(item, str) and item.strip()]
        return separator.join(items)
    return None


def is_recipe_type(obj):
    """True if @type is 'Recipe' or a list containing 'Recipe'."""
    value = obj.get('@type')
    if isinstance(value, str):
        return value == RECIPE_TYPE
    if isinstance(value, list):
        return RECIPE_TYPE in value
    return False


# ============================================
# FIELD EXTRACTION
# ============================================

def extract_author(obj):
    author = obj.get('author')
    if isinstance(author, str):
        return sanitize_name(author, MAX_LENGTHS['source'])
    if isinstance(author, dict):
        return sanitize_name(get_string(author, 'name') or '', MAX_LENGTHS['source'])
    if isinstance(author, list):
        names = []
        for item in author:
            if isinstance(item, dict):
                name = get_string(item, 'name')
            elif isinstance(item, str):
                name = item.strip()
            else:
                name = None
            if name:
                names.append(sanitize_name(name))
        return sanitize_name(', '.join(names), MAX_LENGTHS['source'])
    return ''


def extract_yield(obj):
    value = obj.get('recipeYield')
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, bool):
        return ''
    if isinstance(value, str):
        return sanitize_name(value, MAX_LENGTHS['yield'])
    if isinstance(value, (int, float)):
        return str(int(value)) if float(value).is_integer() else str(value)
    return ''


def _servings_from(value):
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        return first_integer(value)
    return None


def extract_servings(obj):
    """Servings from recipeYield, falling back to nutrition.servingSize."""
    servings = _servings_from(obj.get('recipeYield'))
    if servings is None:
        nutrition = get_dict(obj, 'nutrition')
        if nutrition is not None:
            servings = _servings_from(get_string(nutrition, 'servingSize'))
    if servings is not None and servings > 0:
        return servings
    return None


def _add_instruction(directions, text, is_heading=False):
    text = sanitize_text(text)
    if text:
        directions.append(DirectionDraft(text=text, is_heading=is_heading))


def _collect_instructions(items, directions):
    for item in items:
        if isinstance(item, str):
            _add_instruction(directions, item)
        elif isinstance(item, dict):
            steps = get_list(item, 'itemListElement')
            if steps is not None:
                # HowToSection: its name heads the nested steps
                section_name = get_string(item, 'name')
                if section_name:
                    _add_instruction(directions, section_name, is_heading=True)
                _collect_instructions(steps, directions)
            else:
                text = get_string(item, 'text')
                if text:
                    _add_instruction(directions, text)


def extract_directions(obj):
    value = obj.get('recipeInstructions')
    directions = []
    if isinstance(value, str):
        _add_instruction(directions, value)
    elif isinstance(value, list):
        _collect_instructions(value, directions)
    elif isinstance(value, dict):
        _collect_instructions([value], directions)
    return directions


def extract_ingredients(obj):
    ingredients = []
    for item in get_list(obj, 'recipeIngredient') or []:
        if not isinstance(item, str):
            continue
        text = sanitize_text(item)
        if text:
            ingredients.append(IngredientDraft(text=text, is_heading=False, is_main=False))
    return ingredients


def extract_preparation_times(obj):
    times = []
    for key, label in TIME_FIELDS:
        value = get_string(obj, key)
        if value:
            times.append(PreparationTimeDraft(type=label, time_string=format_duration(value)))
    return times


def extract_notes(obj):
    notes = []
    for key, title in NOTE_FIELDS:
        content = get_joined_text(obj, key)
        if content:
            notes.append(NoteDraft(title=title, content=sanitize_text(content)))
    return notes


def extract_nutrition(obj):
    """
    Map a NutritionInformation object onto our nutrition fields.

    Returns None unless at least one core value (calories, macros, sodium,
    cholesterol or serving size) could be read.
    """
    nutrition = get_dict(obj, 'nutrition')
    if nutrition is None:
        return None

    info = NutritionInformation()
    serving_size = nutrition.get('servingSize')
    if isinstance(serving_size, str) and serving_size.strip():
        info.serving_size = sanitize_name(serving_size)
    elif isinstance(serving_size, (int, float)) and not isinstance(serving_size, bool):
        info.serving_size = str(serving_size)

    for schema_key, field_name in NUTRITION_FIELDS.items():
        if schema_key in nutrition:
            setattr(info, field_name, get_number(nutrition[schema_key]))

    if any(getattr(info, field_name) is not None for field_name in CORE_NUTRITION_FIELDS):
        return info
    return None


def extract_image_url(obj):
    image = obj.get('image')
    if isinstance(image, list):
        image = image[0] if image else None
    if isinstance(image, str):
        return sanitize_url(image) or None
    if isinstance(image, dict):
        return sanitize_url(get_string(image, 'url')) or None
    return None


def convert_recipe(obj):
    """Build a draft from one JSON-LD object already known to be a Recipe."""
    draft = RecipeDraft(
        name=sanitize_name(get_string(obj, 'name') or '', MAX_LENGTHS['recipe_name']),
        source=extract_author(obj),
        source_details=sanitize_url(get_string(obj, 'url')) or '',
        introduction=sanitize_text(get_string(obj, 'description')),
        yield_text=extract_yield(obj),
        servings=extract_servings(obj),
        directions=extract_directions(obj),
        ingredients=extract_ingredients(obj),
        notes=extract_notes(obj),
        preparation_times=extract_preparation_times(obj),
        nutrition=extract_nutrition(obj),
    )
    return ParsedRecipe(draft, RecipeSideData(image_url=extract_image_url(obj)))


# ============================================
# DOCUMENT
# ============================================

def candidate_objects(data):
    """Top-level object, elements of a top-level array, and elements of @graph."""
    if isinstance(data, dict):
        yield data
        for item in get_list(data, '@graph') or []:
            if isinstance(item, dict):
                yield item
    elif isinstance(data, list):
        for item in data:
            if isinstance(item, dict):
                yield item


def parse_json_ld(content):
    """Parse one JSON-LD block; malformed JSON yields no recipes."""
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning("Skipping malformed JSON-LD block: %s", e)
        return []
    return [convert_recipe(obj) for obj in candidate_objects(data) if is_recipe_type(obj)]


def parse_schema_org(html):
    """
    Find every schema.org Recipe in an HTML document.

    Args:
        html: HTML text of a recipe page

    Returns:
        list of ParsedRecipe (empty if the page has no Recipe JSON-LD)
    """
    if not html:
        return []

    soup = BeautifulSoup(html, 'html.parser')
    scripts = soup.find_all('script', type='application/ld+json')
    logger.info("Found %d JSON-LD script tags", len(scripts))

    recipes = []
    for script in scripts:
        content = script.string if script.string is not None else script.get_text()
        if content and content.strip():
            recipes.extend(parse_json_ld(content))

    logger.info("Parsed %d recipes from HTML", len(recipes))
    return recipes
