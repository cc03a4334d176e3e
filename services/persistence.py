"""
Recipe Persistence Service

Writes one parsed recipe into the database: the recipe row, its image, and
its links to categories, tags and a course. Reference rows are looked up by
casefolded name and created only when missing; join rows are checked
before insert so a recipe is never linked to the same category or tag twice.

The caller owns the transaction. Nothing here commits; any exception leaves
the session for the caller to roll back.

Known limitation: the look-up-then-create sequence is not safe against a
concurrent writer in another process, which could create the same name in
between. Imports are expected to run through a single writer.
"""

import logging
from dataclasses import asdict

from constants import MAX_LENGTHS
from models import new_id, fold_name, Recipe, Category, Tag, Course, RecipeCategory, RecipeTag

logger = logging.getLogger(__name__)


# ============================================
# REFERENCE ROWS
# ============================================

def unique_names(names):
    """Distinct, trimmed, non-blank names (exact-match dedup; case is resolved by lookup)."""
    limit = MAX_LENGTHS['reference_name']
    return sorted({name.strip()[:limit] for name in names if name and name.strip()})


def find_by_name(session, model, name):
    """Case-insensitive lookup of a Category, Tag or Course by name."""
    return session.query(model).filter(model.name_key == fold_name(name)).first()


def find_or_create(session, model, name):
    """Return the existing reference row for name, creating it if absent."""
    row = find_by_name(session, model, name)
    if row is None:
        row = model(id=new_id(), name=name, name_key=fold_name(name))
        session.add(row)
        session.flush()
        logger.debug("Created %s %r", model.__name__, name)
    return row


def find_or_create_category(session, name):
    return find_or_create(session, Category, name)


def find_or_create_tag(session, name):
    return find_or_create(session, Tag, name)


def find_or_create_course(session, name):
    return find_or_create(session, Course, name)


def link_category(session, recipe, category):
    """Create the recipe/category join row unless it already exists."""
    existing = session.query(RecipeCategory).filter_by(
        recipe_id=recipe.id, category_id=category.id
    ).first()
    if existing is not None:
        return existing
    link = RecipeCategory(id=new_id(), recipe_id=recipe.id, category_id=category.id)
    session.add(link)
    session.flush()
    return link


def link_tag(session, recipe, tag):
    """Create the recipe/tag join row unless it already exists."""
    existing = session.query(RecipeTag).filter_by(
        recipe_id=recipe.id, tag_id=tag.id
    ).first()
    if existing is not None:
        return existing
    link = RecipeTag(id=new_id(), recipe_id=recipe.id, tag_id=tag.id)
    session.add(link)
    session.flush()
    return link


# ============================================
# RECIPE ROW
# ============================================

def build_recipe(draft):
    """New Recipe row from a draft, with a fresh id and no image or course."""
    return Recipe(
        id=new_id(),
        name=draft.name,
        created_date=draft.created_date,
        last_modified_date=draft.last_modified_date,
        last_prepared=draft.last_prepared,
        source=draft.source,
        source_details=draft.source_details,
        introduction=draft.introduction,
        difficulty=int(draft.difficulty),
        rating=int(draft.rating),
        is_favorite=draft.is_favorite,
        want_to_make=draft.want_to_make,
        yield_text=draft.yield_text,
        servings=draft.servings,
        directions=[asdict(item) for item in draft.directions],
        ingredients=[asdict(item) for item in draft.ingredients],
        notes=[asdict(item) for item in draft.notes],
        preparation_times=[asdict(item) for item in draft.preparation_times],
        nutrition=draft.nutrition.to_dict() if draft.nutrition else None,
    )


def attach_image(session, recipe, image_data, image_store):
    """Save image bytes under the recipe's id and record the filename and thumbnail."""
    stored = image_store.store(recipe.id, image_data)
    recipe.image_filename = stored.filename
    recipe.image_thumbnail = stored.thumbnail
    session.flush()


def commit_recipe(draft, side, session, image_store=None):
    """
    Insert one parsed recipe and link its reference data.

    Runs in two passes: the recipe row is inserted first, then updated with
    image metadata and the course id, since both need the row to exist.

    Args:
        draft: RecipeDraft
        side: RecipeSideData with image bytes and category/tag/course names
        session: SQLAlchemy session; the caller commits or rolls back
        image_store: ImageStore for image bytes (images are skipped without one)

    Returns:
        The flushed Recipe
    """
    # Pass 1: base row
    recipe = build_recipe(draft)
    session.add(recipe)
    session.flush()

    # Pass 2: image, reference links, course
    stored_filename = None
    try:
        if side.image_data:
            if image_store is None:
                logger.warning("No image store configured; dropping image for '%s'", draft.name)
            else:
                attach_image(session, recipe, side.image_data, image_store)
                stored_filename = recipe.image_filename

        if side.categories is not None:
            for name in unique_names(side.categories):
                link_category(session, recipe, find_or_create_category(session, name))

        if side.tags is not None:
            for name in unique_names(side.tags):
                link_tag(session, recipe, find_or_create_tag(session, name))

        course_name = (side.course or '').strip()[:MAX_LENGTHS['reference_name']]
        if course_name:
            course = find_or_create_course(session, course_name)
            recipe.course_id = course.id
            session.flush()
    except Exception:
        # The row will be rolled back; don't leave its image file behind
        if stored_filename:
            image_store.delete(stored_filename)
        raise

    return recipe
