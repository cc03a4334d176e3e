import pytest

from services.drafts import DirectionDraft, IngredientDraft
from services.text import (
    HEADING_MODE_BLANK_LINE,
    HEADING_MODE_DOUBLE_BLANK_OR_COLON,
    format_duration,
    parse_numeric_measurement,
    first_integer,
    strip_list_markers,
    compose_ingredient_text,
    detect_heading_lines,
    parse_directions_text,
    parse_ingredients_text,
    format_directions_text,
    format_ingredients_text,
)


@pytest.mark.parametrize('raw,expected', [
    ('PT1H30M', '1 hr 30 min'),
    ('PT45M', '45 min'),
    ('PT2H', '2 hr'),
    ('pt10m', '10 min'),
    ('garbage', 'garbage'),
    ('PT', 'PT'),
    ('', ''),
])
def test_format_duration(raw, expected):
    assert format_duration(raw) == expected


@pytest.mark.parametrize('raw,expected', [
    ('240 calories', 240.0),
    ('9g', 9.0),
    ('300mg', 300.0),
    ('12 mcg', 12.0),
    ('5 µg', 5.0),
    ('5 Âµg', 5.0),
    ('1,200 mg', 1200.0),
    ('3.5', 3.5),
])
def test_parse_numeric_measurement(raw, expected):
    assert parse_numeric_measurement(raw) == expected


def test_parse_numeric_measurement_rejects_text():
    assert parse_numeric_measurement('abc') is None
    assert parse_numeric_measurement('') is None
    assert parse_numeric_measurement(None) is None
    assert parse_numeric_measurement(12) is None


def test_first_integer():
    assert first_integer('Serves 6') == 6
    assert first_integer('6-8 servings') == 6
    assert first_integer('no numbers') is None
    assert first_integer(None) is None


def test_strip_list_markers():
    assert strip_list_markers('• 2 eggs') == '2 eggs'
    assert strip_list_markers('- salt') == 'salt'
    assert strip_list_markers('1. Preheat oven', numbered=True) == 'Preheat oven'
    assert strip_list_markers('2) Stir', numbered=True) == 'Stir'
    # Only directions drop numbering
    assert strip_list_markers('2 eggs') == '2 eggs'


def test_compose_ingredient_text():
    assert compose_ingredient_text('1', 'cup', 'flour', 'sifted') == '1 cup flour (sifted)'
    assert compose_ingredient_text(None, None, 'salt', None) == 'salt'
    assert compose_ingredient_text('2', '', 'eggs') == '2 eggs'
    assert compose_ingredient_text('1', 'cup', 'For the sauce', 'x', is_divider=True) == 'For the sauce'


def test_double_blank_or_colon_headings():
    lines = ['', '', 'Sauce:', 'Mix well', '', 'Bake']
    assert detect_heading_lines(lines, HEADING_MODE_DOUBLE_BLANK_OR_COLON) == [
        ('Sauce', True),
        ('Mix well', False),
        ('Bake', False),
    ]


def test_double_blank_joins_wrapped_lines():
    lines = ['Whisk the eggs', 'until pale.', '', 'Fold in flour.']
    assert detect_heading_lines(lines, HEADING_MODE_DOUBLE_BLANK_OR_COLON) == [
        ('Whisk the eggs until pale.', False),
        ('Fold in flour.', False),
    ]


def test_double_blank_heading_after_two_blank_lines():
    lines = ['Boil water.', '', '', 'Topping', 'Grate cheese.']
    assert detect_heading_lines(lines, HEADING_MODE_DOUBLE_BLANK_OR_COLON) == [
        ('Boil water.', False),
        ('Topping', True),
        ('Grate cheese.', False),
    ]


def test_single_blank_headings():
    lines = ['2 eggs', '1 cup milk', '', 'Topping', 'Cheese', 'Glaze:', 'Sugar']
    assert detect_heading_lines(lines, HEADING_MODE_BLANK_LINE) == [
        ('2 eggs', False),
        ('1 cup milk', False),
        ('Topping', True),
        ('Cheese', False),
        ('Glaze', True),
        ('Sugar', False),
    ]


def test_unknown_heading_mode():
    with pytest.raises(ValueError):
        detect_heading_lines(['a'], 'nope')


def test_parse_directions_text_strips_numbering():
    directions = parse_directions_text('1. Preheat oven.\n\n2. Bake 20 minutes.')
    assert directions == [
        DirectionDraft('Preheat oven.', False),
        DirectionDraft('Bake 20 minutes.', False),
    ]


def test_parse_ingredients_text_keeps_main_flags():
    existing = [IngredientDraft('1 lb chicken', is_main=True)]
    ingredients = parse_ingredients_text('• 1 lb chicken\n• salt\n\nSauce\n• cream', existing)
    assert ingredients == [
        IngredientDraft('1 lb chicken', False, True),
        IngredientDraft('salt', False, False),
        IngredientDraft('Sauce', True, False),
        IngredientDraft('cream', False, False),
    ]


def test_directions_text_survives_formatting():
    directions = [
        DirectionDraft('Chop onions.'),
        DirectionDraft('Sauce', is_heading=True),
        DirectionDraft('Simmer tomatoes.'),
    ]
    assert parse_directions_text(format_directions_text(directions)) == directions


def test_ingredients_text_survives_formatting():
    ingredients = [
        IngredientDraft('Dough', is_heading=True),
        IngredientDraft('2 cups flour'),
        IngredientDraft('Filling', is_heading=True),
        IngredientDraft('3 apples'),
    ]
    assert parse_ingredients_text(format_ingredients_text(ingredients)) == ingredients
