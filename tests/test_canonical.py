import base64
import json
from datetime import datetime, timezone

import pytest

from constants import Difficulty, Rating
from models import Recipe
from services.canonical import (
    parse_canonical,
    parse_date,
    format_date,
    export_recipe,
    export_recipes_json,
)
from services.errors import DecodeError, NoDataFound
from services.importer import import_canonical


EXPORTED = {
    'version': '1.0',
    'id': 'not-reused',
    'name': 'Lemon Tart',
    'createdDate': '2023-04-01T10:00:00Z',
    'lastModifiedDate': '2023-04-02T11:30:00Z',
    'source': 'Family',
    'sourceDetails': 'https://example.com/tart',
    'introduction': 'Bright and sharp.',
    'difficulty': 3,
    'rating': 5,
    'isFavorite': True,
    'wantToMake': False,
    'yield': '1 tart',
    'servings': 8,
    'course': 'Dessert',
    'categories': ['Baking', 'Citrus'],
    'tags': ['party'],
    'directions': [
        {'text': 'Crust', 'isHeading': True},
        {'text': 'Blind bake the shell.', 'isHeading': False},
    ],
    'ingredients': [
        {'text': 'Filling', 'isHeading': True},
        {'text': '4 lemons', 'isMain': True},
        {'text': '3 eggs'},
    ],
    'notes': [{'title': 'Tip', 'content': 'Chill overnight.'}],
    'preparationTimes': [{'type': 'Bake', 'timeString': '35 min'}],
    'nutrition': {'servingSize': '1 slice', 'calories': 320, 'sugar': 21.5},
}


def test_parse_single_object():
    [(draft, side)] = parse_canonical(json.dumps(EXPORTED))

    assert draft.name == 'Lemon Tart'
    assert draft.created_date == datetime(2023, 4, 1, 10, 0, tzinfo=timezone.utc)
    assert draft.difficulty == Difficulty.MEDIUM
    assert draft.rating == Rating.FIVE
    assert draft.is_favorite is True
    assert draft.servings == 8
    assert [(i.text, i.is_heading, i.is_main) for i in draft.ingredients] == [
        ('Filling', True, False),
        ('4 lemons', False, True),
        ('3 eggs', False, False),
    ]
    assert draft.nutrition.calories == 320.0
    assert draft.nutrition.serving_size == '1 slice'
    assert side.categories == ['Baking', 'Citrus']
    assert side.tags == ['party']
    assert side.course == 'Dessert'
    assert side.image_data is None


@pytest.mark.parametrize('servings', [0, -3, 'four'])
def test_servings_must_be_positive(servings):
    [(draft, _side)] = parse_canonical(json.dumps({'name': 'X', 'servings': servings}))
    assert draft.servings is None


def test_parse_array():
    data = json.dumps([{'name': 'One'}, {'name': 'Two'}]).encode('utf-8')
    assert [draft.name for draft, _side in parse_canonical(data)] == ['One', 'Two']


def test_unknown_codes_are_not_set():
    [(draft, _side)] = parse_canonical(json.dumps({'name': 'X', 'difficulty': 42, 'rating': 'five'}))
    assert draft.difficulty == Difficulty.NOT_SET
    assert draft.rating == Rating.NOT_SET


def test_image_data_is_decoded(png_bytes):
    obj = {'name': 'X', 'imageData': base64.b64encode(png_bytes).decode('ascii')}
    [(_draft, side)] = parse_canonical(json.dumps(obj))
    assert side.image_data == png_bytes


@pytest.mark.parametrize('data', [
    '{not json',
    '"just a string"',
    json.dumps([{'name': 'ok'}, {'title': 'no name'}]),
    json.dumps([{'name': 'ok'}, 'nope']),
])
def test_container_errors(data):
    with pytest.raises(DecodeError):
        parse_canonical(data)


def test_empty_input():
    with pytest.raises(NoDataFound):
        parse_canonical(b'')


def test_dates():
    assert parse_date('2023-04-01T10:00:00Z') == datetime(2023, 4, 1, 10, 0, tzinfo=timezone.utc)
    assert parse_date('2023-04-01T12:00:00+02:00') == datetime(2023, 4, 1, 10, 0, tzinfo=timezone.utc)
    assert parse_date('yesterday') is None
    assert format_date(datetime(2023, 4, 1, 10, 0, 5, 123)) == '2023-04-01T10:00:05Z'
    assert format_date(None) is None


def test_export_omits_unset_fields(session):
    result = import_canonical(json.dumps({'name': 'Plain'}), session)
    recipe = session.get(Recipe, result.recipe_ids[0])

    exported = export_recipe(recipe)

    assert exported['version'] == '1.0'
    assert exported['id'] == recipe.id
    assert exported['name'] == 'Plain'
    assert exported['difficulty'] == 0
    assert exported['isFavorite'] is False
    for key in ('source', 'introduction', 'yield', 'servings', 'course',
                'categories', 'tags', 'nutrition', 'imageData', 'lastPrepared'):
        assert key not in exported


def test_export_sorts_reference_names(session):
    obj = {'name': 'Sorted', 'categories': ['soups', 'Bread', 'apples'], 'tags': ['Zesty', 'mild']}
    result = import_canonical(json.dumps(obj), session)
    recipe = session.get(Recipe, result.recipe_ids[0])

    exported = export_recipe(recipe)

    assert exported['categories'] == ['apples', 'Bread', 'soups']
    assert exported['tags'] == ['mild', 'Zesty']


def test_round_trip(session, image_store, png_bytes):
    obj = dict(EXPORTED, imageData=base64.b64encode(png_bytes).decode('ascii'))
    first = import_canonical(json.dumps(obj), session, image_store)
    original = session.get(Recipe, first.recipe_ids[0])

    exported = export_recipe(original, image_store)
    assert base64.b64decode(exported['imageData']) == png_bytes
    assert exported['createdDate'] == '2023-04-01T10:00:00Z'
    assert exported['ingredients'][2] == {'text': '3 eggs'}
    assert exported['directions'][1] == {'text': 'Blind bake the shell.', 'isHeading': False}

    second = import_canonical(export_recipes_json([original], image_store), session, image_store)
    copy = session.get(Recipe, second.recipe_ids[0])

    assert copy.id != original.id
    assert copy.directions == original.directions
    assert copy.ingredients == original.ingredients
    assert copy.notes == original.notes
    assert copy.preparation_times == original.preparation_times
    assert copy.nutrition == original.nutrition
    assert copy.course_id == original.course_id
    assert sorted(link.category_id for link in copy.recipe_categories) == \
        sorted(link.category_id for link in original.recipe_categories)
    assert [link.tag_id for link in copy.recipe_tags] == [link.tag_id for link in original.recipe_tags]
    assert image_store.load(copy.image_filename) == png_bytes


def test_export_many_is_an_array(session):
    result = import_canonical(json.dumps([{'name': 'A'}, {'name': 'B'}]), session)
    recipes = [session.get(Recipe, recipe_id) for recipe_id in result.recipe_ids]

    payload = json.loads(export_recipes_json(recipes))
    assert [item['name'] for item in payload] == ['A', 'B']

    single = json.loads(export_recipes_json(recipes[:1]))
    assert single['name'] == 'A'
