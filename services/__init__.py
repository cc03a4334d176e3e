"""
Services Package

Parsing, persistence and import/export logic for the recipe library.
"""

from .errors import RecipeImportError, NoDataFound, DecodeError

from .drafts import (
    RecipeDraft,
    RecipeSideData,
    ParsedRecipe,
    DirectionDraft,
    IngredientDraft,
    NoteDraft,
    PreparationTimeDraft,
    NutritionInformation,
)

from .text import (
    format_duration,
    parse_numeric_measurement,
    first_integer,
    detect_heading_lines,
    strip_list_markers,
    compose_ingredient_text,
    parse_directions_text,
    parse_ingredients_text,
)

from .macgourmet import parse_macgourmet
from .schema_org import parse_schema_org
from .canonical import parse_canonical, export_recipe, export_recipes_json

from .persistence import commit_recipe

from .importer import (
    ImportResult,
    import_batch,
    import_macgourmet,
    import_canonical,
    import_web_page,
    import_from_url,
    import_file,
)

__all__ = [
    # Errors
    'RecipeImportError',
    'NoDataFound',
    'DecodeError',
    # Drafts
    'RecipeDraft',
    'RecipeSideData',
    'ParsedRecipe',
    'DirectionDraft',
    'IngredientDraft',
    'NoteDraft',
    'PreparationTimeDraft',
    'NutritionInformation',
    # Text
    'format_duration',
    'parse_numeric_measurement',
    'first_integer',
    'detect_heading_lines',
    'strip_list_markers',
    'compose_ingredient_text',
    'parse_directions_text',
    'parse_ingredients_text',
    # Parsers
    'parse_macgourmet',
    'parse_schema_org',
    'parse_canonical',
    # Export
    'export_recipe',
    'export_recipes_json',
    # Persistence
    'commit_recipe',
    # Import
    'ImportResult',
    'import_batch',
    'import_macgourmet',
    'import_canonical',
    'import_web_page',
    'import_from_url',
    'import_file',
]
