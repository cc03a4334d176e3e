"""
Canonical Recipe Export Format

Reads and writes this application's own JSON interchange format: one
recipe object, or an array of them, carrying image bytes inline (base64)
and course/category/tag references by name instead of by id.
"""

import base64
import binascii
import json
import logging
from datetime import datetime, timezone

from constants import Difficulty, Rating, EXPORT_VERSION
from .drafts import (
    RecipeDraft, RecipeSideData, ParsedRecipe,
    DirectionDraft, IngredientDraft, NoteDraft, PreparationTimeDraft,
    NutritionInformation,
)
from .errors import DecodeError, NoDataFound

logger = logging.getLogger(__name__)

# Nutrition field -> JSON key
NUTRITION_KEYS = {
    'serving_size': 'servingSize',
    'calories': 'calories',
    'protein': 'protein',
    'carbohydrates': 'carbohydrates',
    'fat': 'fat',
    'saturated_fat': 'saturatedFat',
    'trans_fat': 'transFat',
    'fiber': 'fiber',
    'sugar': 'sugar',
    'added_sugar': 'addedSugar',
    'sodium': 'sodium',
    'cholesterol': 'cholesterol',
    'vitamin_d': 'vitaminD',
    'calcium': 'calcium',
    'iron': 'iron',
    'potassium': 'potassium',
    'vitamin_a': 'vitaminA',
    'vitamin_c': 'vitaminC',
}


# ============================================
# DATES
# ============================================

def parse_date(value):
    """ISO-8601 string to an aware datetime (UTC if no offset); None if unparseable."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.warning("Ignoring unparseable date %r", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_date(value):
    """Aware or naive (assumed UTC) datetime to 'YYYY-MM-DDTHH:MM:SSZ'."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).replace(microsecond=0).isoformat().replace('+00:00', 'Z')


# ============================================
# IMPORT
# ============================================

def _opt_str(obj, key):
    value = obj.get(key)
    return value if isinstance(value, str) else None


def _opt_bool(obj, key):
    value = obj.get(key)
    return value if isinstance(value, bool) else None


def _opt_int(obj, key):
    value = obj.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)


def _opt_names(obj, key):
    value = obj.get(key)
    if not isinstance(value, list):
        return None
    return [item for item in value if isinstance(item, str)]


def _items(obj, key):
    value = obj.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def decode_image(value):
    if not isinstance(value, str) or not value:
        return None
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        logger.warning("Ignoring image data that is not valid base64")
        return None


def decode_nutrition(value):
    if not isinstance(value, dict):
        return None
    info = NutritionInformation()
    for field_name, key in NUTRITION_KEYS.items():
        item = value.get(key)
        if field_name == 'serving_size':
            if isinstance(item, str):
                info.serving_size = item
        elif isinstance(item, (int, float)) and not isinstance(item, bool):
            setattr(info, field_name, float(item))
    return info


def convert_export(obj):
    """
    Convert one exported recipe object into a draft and its side data.

    The exported id is ignored; importing always creates a new recipe.
    """
    draft = RecipeDraft(name=obj['name'])

    created = parse_date(obj.get('createdDate'))
    if created is not None:
        draft.created_date = created
    modified = parse_date(obj.get('lastModifiedDate'))
    if modified is not None:
        draft.last_modified_date = modified
    draft.last_prepared = parse_date(obj.get('lastPrepared'))

    draft.source = _opt_str(obj, 'source') or ''
    draft.source_details = _opt_str(obj, 'sourceDetails') or ''
    draft.introduction = _opt_str(obj, 'introduction') or ''
    draft.difficulty = Difficulty.from_code(_opt_int(obj, 'difficulty'))
    draft.rating = Rating.from_code(_opt_int(obj, 'rating'))
    draft.is_favorite = bool(_opt_bool(obj, 'isFavorite'))
    draft.want_to_make = bool(_opt_bool(obj, 'wantToMake'))
    draft.yield_text = _opt_str(obj, 'yield') or ''
    servings = _opt_int(obj, 'servings')
    if servings is not None and servings > 0:
        draft.servings = servings

    draft.directions = [
        DirectionDraft(text=item.get('text') or '', is_heading=bool(item.get('isHeading')))
        for item in _items(obj, 'directions')
    ]
    draft.ingredients = [
        IngredientDraft(
            text=item.get('text') or '',
            is_heading=bool(item.get('isHeading')),
            is_main=bool(item.get('isMain')),
        )
        for item in _items(obj, 'ingredients')
    ]
    draft.notes = [
        NoteDraft(title=item.get('title') or '', content=item.get('content') or '')
        for item in _items(obj, 'notes')
    ]
    draft.preparation_times = [
        PreparationTimeDraft(type=item.get('type') or '', time_string=item.get('timeString') or '')
        for item in _items(obj, 'preparationTimes')
    ]
    draft.nutrition = decode_nutrition(obj.get('nutrition'))

    side = RecipeSideData(
        image_data=decode_image(obj.get('imageData')),
        categories=_opt_names(obj, 'categories'),
        tags=_opt_names(obj, 'tags'),
        course=_opt_str(obj, 'course'),
    )
    return ParsedRecipe(draft, side)


def _check_recipe_object(obj, index):
    if not isinstance(obj, dict):
        raise DecodeError(f"recipe {index} is not an object")
    if not isinstance(obj.get('name'), str):
        raise DecodeError(f"recipe {index} has no name")
    version = obj.get('version')
    if version is not None and version != EXPORT_VERSION:
        logger.warning("Recipe %d has export version %r, expected %r", index, version, EXPORT_VERSION)


def parse_canonical(data):
    """
    Parse a canonical export file.

    The array form is tried first, then a single recipe object.

    Args:
        data: Raw JSON bytes or text

    Returns:
        list of ParsedRecipe

    Raises:
        NoDataFound: If data is empty
        DecodeError: If the JSON is invalid or not recipe-shaped
    """
    if not data:
        raise NoDataFound()

    try:
        payload = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error("Could not decode recipe export: %s", e)
        raise DecodeError("invalid JSON", cause=e) from e

    if isinstance(payload, list):
        objects = payload
    elif isinstance(payload, dict):
        objects = [payload]
    else:
        raise DecodeError(f"expected a recipe object or array, found {type(payload).__name__}")

    for index, obj in enumerate(objects):
        _check_recipe_object(obj, index)

    logger.info("Found %d exported recipes to import", len(objects))
    return [convert_export(obj) for obj in objects]


# ============================================
# EXPORT
# ============================================

def _sorted_names(names):
    return sorted(names, key=lambda name: (name.casefold(), name))


def export_recipe(recipe, image_store=None):
    """
    Build the export dictionary for a persisted recipe.

    Args:
        recipe: models.Recipe with its course and join rows loaded
        image_store: ImageStore used to inline the full image, if any

    Returns:
        dict ready for json.dumps
    """
    export = {
        'version': EXPORT_VERSION,
        'id': recipe.id,
        'name': recipe.name,
        'difficulty': int(recipe.difficulty or 0),
        'rating': int(recipe.rating or 0),
        'isFavorite': bool(recipe.is_favorite),
        'wantToMake': bool(recipe.want_to_make),
        'directions': [
            {'text': item.get('text', ''), 'isHeading': bool(item.get('is_heading'))}
            for item in recipe.directions or []
        ],
        'ingredients': [],
        'notes': [
            {'title': item.get('title', ''), 'content': item.get('content', '')}
            for item in recipe.notes or []
        ],
        'preparationTimes': [
            {'type': item.get('type', ''), 'timeString': item.get('time_string', '')}
            for item in recipe.preparation_times or []
        ],
    }

    for item in recipe.ingredients or []:
        ingredient = {'text': item.get('text', '')}
        if item.get('is_heading'):
            ingredient['isHeading'] = True
        if item.get('is_main'):
            ingredient['isMain'] = True
        export['ingredients'].append(ingredient)

    # Unset optional fields are omitted
    for key, value in (
        ('createdDate', format_date(recipe.created_date)),
        ('lastModifiedDate', format_date(recipe.last_modified_date)),
        ('lastPrepared', format_date(recipe.last_prepared)),
        ('source', recipe.source),
        ('sourceDetails', recipe.source_details),
        ('introduction', recipe.introduction),
        ('yield', recipe.yield_text),
        ('servings', recipe.servings),
        ('course', recipe.course.name if recipe.course else None),
    ):
        if value:
            export[key] = value

    categories = _sorted_names(link.category.name for link in recipe.recipe_categories)
    if categories:
        export['categories'] = categories
    tags = _sorted_names(link.tag.name for link in recipe.recipe_tags)
    if tags:
        export['tags'] = tags

    if recipe.nutrition:
        nutrition = {
            NUTRITION_KEYS[key]: value
            for key, value in recipe.nutrition.items()
            if key in NUTRITION_KEYS and value is not None
        }
        if nutrition:
            export['nutrition'] = nutrition

    if image_store is not None and recipe.image_filename:
        image_data = image_store.load(recipe.image_filename)
        if image_data:
            export['imageData'] = base64.b64encode(image_data).decode('ascii')

    return export


def export_recipes_json(recipes, image_store=None, indent=None):
    """Serialize recipes: a single object for one recipe, an array otherwise."""
    exports = [export_recipe(recipe, image_store) for recipe in recipes]
    payload = exports[0] if len(exports) == 1 else exports
    return json.dumps(payload, indent=indent, sort_keys=True, ensure_ascii=False)
