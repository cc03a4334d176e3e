import os

import pytest

from models import Recipe, Category, Tag, Course, RecipeCategory, RecipeTag
from services.drafts import (
    RecipeDraft, RecipeSideData, DirectionDraft, IngredientDraft, NutritionInformation,
)
from services.persistence import (
    commit_recipe,
    find_or_create_category,
    link_category,
    unique_names,
)
from utils.image_store import ImageValidationError, StoredImage


def make_draft(name='Chili', **fields):
    return RecipeDraft(
        name=name,
        directions=[DirectionDraft('Brown the beef.'), DirectionDraft('Simmer.')],
        ingredients=[IngredientDraft('1 lb beef', is_main=True), IngredientDraft('1 can beans')],
        **fields
    )


def test_inserts_recipe_with_owned_lists(session):
    draft = make_draft(nutrition=NutritionInformation(calories=410.0))
    recipe = commit_recipe(draft, RecipeSideData(), session)
    session.commit()

    stored = session.get(Recipe, recipe.id)
    assert len(stored.id) == 36
    assert stored.directions == [
        {'text': 'Brown the beef.', 'is_heading': False},
        {'text': 'Simmer.', 'is_heading': False},
    ]
    assert stored.ingredients[0] == {'text': '1 lb beef', 'is_heading': False, 'is_main': True}
    assert stored.nutrition == {'calories': 410.0}
    assert stored.image_filename is None
    assert stored.course_id is None


def test_duplicate_categories_in_one_draft(session):
    side = RecipeSideData(categories=['Mexican', 'mexican', 'Mexican', '  '], tags=['spicy', 'Spicy'])
    recipe = commit_recipe(make_draft(), side, session)
    session.commit()

    assert Category.query.count() == 1
    assert RecipeCategory.query.filter_by(recipe_id=recipe.id).count() == 1
    assert Tag.query.count() == 1
    assert RecipeTag.query.filter_by(recipe_id=recipe.id).count() == 1


def test_reference_rows_reused_across_recipes(session):
    first = commit_recipe(make_draft('One'), RecipeSideData(categories=['Soups'], course='Main'), session)
    second = commit_recipe(make_draft('Two'), RecipeSideData(categories=['SOUPS'], course=' main '), session)
    session.commit()

    assert Category.query.count() == 1
    assert Course.query.count() == 1
    assert first.course_id == second.course_id
    assert first.recipe_categories[0].category_id == second.recipe_categories[0].category_id
    assert Category.query.one().name == 'Soups'


def test_blank_course_ignored(session):
    recipe = commit_recipe(make_draft(), RecipeSideData(course='   '), session)
    session.commit()
    assert recipe.course_id is None
    assert Course.query.count() == 0


def test_link_is_idempotent(session):
    recipe = commit_recipe(make_draft(), RecipeSideData(), session)
    category = find_or_create_category(session, 'Stews')

    first = link_category(session, recipe, category)
    second = link_category(session, recipe, category)
    session.commit()

    assert first.id == second.id
    assert RecipeCategory.query.count() == 1


def test_image_is_stored_under_recipe_id(session, image_store, png_bytes):
    recipe = commit_recipe(make_draft(), RecipeSideData(image_data=png_bytes), session, image_store)
    session.commit()

    assert recipe.image_filename == f'{recipe.id}.png'
    assert os.path.exists(os.path.join(image_store.folder, recipe.image_filename))
    assert recipe.image_thumbnail.startswith(b'\xff\xd8')  # JPEG


def test_invalid_image_raises(session, image_store):
    with pytest.raises(ImageValidationError):
        commit_recipe(make_draft(), RecipeSideData(image_data=b'not an image'), session, image_store)
    session.rollback()
    assert Recipe.query.count() == 0


def test_image_skipped_without_store(session, png_bytes):
    recipe = commit_recipe(make_draft(), RecipeSideData(image_data=png_bytes), session)
    session.commit()
    assert recipe.image_filename is None


def test_unique_names():
    assert unique_names(['b', ' a ', 'b', '', None, '   ']) == ['a', 'b']


class FakeImageStore:

    def __init__(self):
        self.saved = {}

    def store(self, owner_id, image_data):
        self.saved[owner_id] = image_data
        return StoredImage(f'{owner_id}.bin', b'thumb')

    def load(self, filename):
        return self.saved.get(filename.rsplit('.', 1)[0])


def test_image_store_is_injected(session):
    store = FakeImageStore()
    recipe = commit_recipe(make_draft(), RecipeSideData(image_data=b'raw'), session, store)
    session.commit()

    assert store.saved == {recipe.id: b'raw'}
    assert recipe.image_filename == f'{recipe.id}.bin'
    assert recipe.image_thumbnail == b'thumb'


def test_non_ascii_names_fold_case(session):
    commit_recipe(make_draft('One'), RecipeSideData(categories=['Café'], tags=['Straße']), session)
    commit_recipe(make_draft('Two'), RecipeSideData(categories=['CAFÉ'], tags=['STRASSE'], course='Ελληνικό'), session)
    commit_recipe(make_draft('Three'), RecipeSideData(course='ΕΛΛΗΝΙΚΌ'), session)
    session.commit()

    assert [category.name for category in Category.query.all()] == ['Café']
    assert [tag.name for tag in Tag.query.all()] == ['Straße']
    assert Course.query.count() == 1
