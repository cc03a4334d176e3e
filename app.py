import logging
import os

import requests
from flask import Flask, request, jsonify, abort, Response, current_app
from flask_migrate import Migrate
from sqlalchemy.orm import joinedload

from config import get_config
from models import db, Recipe, RecipeCategory, RecipeTag
from services import (
    RecipeImportError,
    import_file,
    import_web_page,
    import_from_url,
    export_recipes_json,
)
from utils.image_store import ImageStore
from utils.url_validator import fetch_page, fetch_bytes, SSRFError
from utils.sanitizer import sanitize_url

logger = logging.getLogger(__name__)

migrate = Migrate()


def create_app(config_name=None, **overrides):
    """
    Build the recipe library app.

    Args:
        config_name: 'development', 'production' or 'testing' (defaults to FLASK_ENV)
        **overrides: Config values applied on top of the selected config
    """
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))
    app.config.update(overrides)

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    db.init_app(app)
    migrate.init_app(app, db)

    app.extensions['image_store'] = ImageStore(
        app.config['IMAGE_FOLDER'],
        thumbnail_size=app.config['THUMBNAIL_SIZE'],
    )

    register_routes(app)
    return app


def get_image_store():
    return current_app.extensions['image_store']


def _fetch_page(url):
    return fetch_page(
        url,
        timeout=current_app.config['FETCH_TIMEOUT'],
        max_size=current_app.config['FETCH_MAX_SIZE'],
    )


def _fetch_image(url):
    return fetch_bytes(
        url,
        timeout=current_app.config['FETCH_TIMEOUT'],
        max_size=current_app.config['FETCH_MAX_SIZE'],
    )


def _image_downloader():
    if current_app.config.get('DOWNLOAD_WEB_IMAGES'):
        return _fetch_image
    return None


def _load_recipes(ids):
    """Recipes with their course and category/tag links, in the order of ids."""
    recipes = Recipe.query.options(
        joinedload(Recipe.course),
        joinedload(Recipe.recipe_categories).joinedload(RecipeCategory.category),
        joinedload(Recipe.recipe_tags).joinedload(RecipeTag.tag),
    ).filter(Recipe.id.in_(ids)).all()
    by_id = {recipe.id: recipe for recipe in recipes}
    return [by_id[recipe_id] for recipe_id in ids if recipe_id in by_id]


def _export_response(recipes, filename):
    body = export_recipes_json(recipes, get_image_store(), indent=2)
    return Response(
        body,
        mimetype='application/json',
        headers={'Content-Disposition': f'attachment; filename="{filename}"'},
    )


def _error(message, status):
    return jsonify({'error': message}), status


def register_routes(app):

    # ============================================
    # IMPORT
    # ============================================

    @app.route('/import/file', methods=['POST'])
    def import_upload():
        file = request.files.get('file')
        if file is None or file.filename == '':
            return _error('No file selected', 400)

        try:
            result = import_file(file.filename, file.read(), db.session, get_image_store())
        except RecipeImportError as e:
            logger.warning("Rejected import of %s: %s", file.filename, e)
            return _error(str(e), 400)

        return jsonify(result.to_dict())

    @app.route('/import/web', methods=['POST'])
    def import_web():
        url = request.form.get('url', '').strip()
        html = request.form.get('html', '')

        if not url and not html.strip():
            return _error('Please provide a URL or page HTML', 400)

        try:
            if url:
                if not sanitize_url(url):
                    return _error('Invalid URL. Only http and https URLs are allowed.', 400)
                result = import_from_url(
                    url, db.session, get_image_store(),
                    fetch=_fetch_page, download_image=_image_downloader(),
                )
            else:
                result = import_web_page(
                    html, db.session, get_image_store(),
                    download_image=_image_downloader(),
                )
        except SSRFError as e:
            return _error(f'URL blocked for security: {str(e)}', 400)
        except requests.RequestException as e:
            return _error(f'Could not fetch URL: {str(e)}', 502)
        except RecipeImportError as e:
            return _error(str(e), 400)

        return jsonify(result.to_dict())

    # ============================================
    # EXPORT
    # ============================================

    @app.route('/recipe/<recipe_id>/export')
    def recipe_export(recipe_id):
        recipes = _load_recipes([recipe_id])
        if not recipes:
            abort(404)
        return _export_response(recipes, f'{recipe_id}.saltyRecipe')

    @app.route('/recipes/export', methods=['POST'])
    def recipes_export():
        if request.is_json:
            ids = (request.get_json(silent=True) or {}).get('ids') or []
        else:
            ids = request.form.getlist('ids')
        ids = [recipe_id for recipe_id in ids if isinstance(recipe_id, str) and recipe_id]
        if not ids:
            return _error('No recipes selected', 400)

        recipes = _load_recipes(ids)
        if not recipes:
            abort(404)
        return _export_response(recipes, 'recipes.json')

    # ============================================
    # LIBRARY
    # ============================================

    @app.route('/recipes')
    def recipes_list():
        recipes = Recipe.query.order_by(Recipe.name).all()
        return jsonify([{'id': recipe.id, 'name': recipe.name} for recipe in recipes])

    @app.errorhandler(404)
    def not_found(e):
        return _error('Not found', 404)

    @app.errorhandler(413)
    def too_large(e):
        return _error('Upload too large', 413)


# ============================================
# INITIALIZE DATABASE
# ============================================

def init_db(app):
    with app.app_context():
        # Enable SQLite foreign key enforcement
        from sqlalchemy import event
        from sqlalchemy.engine import Engine
        import sqlite3

        @event.listens_for(Engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            if isinstance(dbapi_connection, sqlite3.Connection):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        db.create_all()


if __name__ == '__main__':
    app = create_app(os.environ.get('FLASK_ENV'))
    init_db(app)
    # host='0.0.0.0' allows access from other devices on the network
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=5000, use_reloader=False)
