"""
Import Orchestrator

Runs parsed recipes through the persistence service one at a time, each in
its own transaction. A recipe that fails is rolled back, logged and counted;
the rest of the batch carries on and earlier recipes stay committed.
Container-level errors from the parsers propagate before anything is written.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Tuple

from constants import MACGOURMET_EXTENSIONS, CANONICAL_EXTENSIONS
from utils.url_validator import fetch_page
from .canonical import parse_canonical
from .errors import DecodeError, NoDataFound
from .macgourmet import parse_macgourmet
from .persistence import commit_recipe
from .schema_org import parse_schema_org

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    success_count: int = 0
    failure_count: int = 0
    failures: List[Tuple[str, str]] = field(default_factory=list)  # (recipe name, error)
    recipe_ids: List[str] = field(default_factory=list)

    def to_dict(self):
        return {
            'success_count': self.success_count,
            'failure_count': self.failure_count,
            'failures': [{'name': name, 'error': error} for name, error in self.failures],
            'recipe_ids': list(self.recipe_ids),
        }


def _download_image(parsed, download_image):
    """Fill in image bytes from the recipe's image URL; a failed download only loses the image."""
    draft, side = parsed
    if side.image_data or not side.image_url or download_image is None:
        return
    try:
        side.image_data = download_image(side.image_url)
    except Exception as e:
        logger.warning("Could not download image for '%s' from %s: %s", draft.name, side.image_url, e)


def import_batch(parsed_recipes, session, image_store=None, download_image=None):
    """
    Persist parsed recipes in order, one transaction each.

    Args:
        parsed_recipes: Sequence of ParsedRecipe
        session: SQLAlchemy session (db.session)
        image_store: ImageStore for recipe images
        download_image: Optional callable(url) -> bytes for web image URLs

    Returns:
        ImportResult
    """
    result = ImportResult()

    for parsed in parsed_recipes:
        draft, side = parsed
        _download_image(parsed, download_image)
        stored_filename = None
        try:
            recipe = commit_recipe(draft, side, session, image_store)
            stored_filename = recipe.image_filename
            session.commit()
        except Exception as e:
            session.rollback()
            if stored_filename and image_store is not None:
                image_store.delete(stored_filename)
            result.failure_count += 1
            result.failures.append((draft.name, str(e)))
            logger.error("Failed to import recipe '%s': %s", draft.name, e)
            continue

        result.success_count += 1
        result.recipe_ids.append(recipe.id)
        logger.debug("Imported recipe '%s' as %s", draft.name, recipe.id)

    logger.info("Import completed: %d successful, %d failed", result.success_count, result.failure_count)
    return result


# ============================================
# ENTRY POINTS
# ============================================

def import_macgourmet(data, session, image_store=None):
    """Import every recipe in a MacGourmet export."""
    return import_batch(parse_macgourmet(data), session, image_store)


def import_canonical(data, session, image_store=None):
    """Import one recipe or an array of recipes in the canonical export format."""
    return import_batch(parse_canonical(data), session, image_store)


def import_web_page(html, session, image_store=None, download_image=None, page_url=None):
    """
    Import every schema.org Recipe found in an HTML document.

    Raises:
        NoDataFound: If the page has no Recipe JSON-LD
    """
    parsed = parse_schema_org(html)
    if not parsed:
        raise NoDataFound("No schema.org Recipe data found on the page")

    if page_url:
        for draft, _side in parsed:
            if not draft.source_details:
                draft.source_details = page_url

    return import_batch(parsed, session, image_store, download_image=download_image)


def import_from_url(url, session, image_store=None, fetch=fetch_page, download_image=None):
    """Fetch a recipe page and import the recipes it describes."""
    html = fetch(url)
    return import_web_page(html, session, image_store, download_image=download_image, page_url=url)


def import_file(filename, data, session, image_store=None):
    """
    Import an uploaded file, choosing the parser from its extension.

    Raises:
        DecodeError: If the extension is not a supported import format
    """
    extension = os.path.splitext(filename or '')[1].lstrip('.').lower()
    if extension in MACGOURMET_EXTENSIONS:
        return import_macgourmet(data, session, image_store)
    if extension in CANONICAL_EXTENSIONS:
        return import_canonical(data, session, image_store)
    raise DecodeError(f"unsupported file type '.{extension}'")
