"""
Smoke tests for the recipe library.
Run with: python tests/smoke.py (or under pytest)
"""

import sys
import os
import tempfile

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

def test_app_imports():
    """Verify the app factory can be imported without errors."""
    from app import create_app, init_db
    assert callable(create_app)
    assert callable(init_db)
    print("OK: App imports successfully")

def test_models_import():
    """Verify models can be imported."""
    from models import db, Recipe, Course, Category, Tag, RecipeCategory, RecipeTag
    assert db is not None
    assert Recipe.__tablename__ == 'recipe'
    assert RecipeCategory.__tablename__ == 'recipe_category'
    assert RecipeTag.__tablename__ == 'recipe_tag'
    print("OK: Models import successfully")

def test_security_utils_import():
    """Verify security utilities can be imported."""
    from utils import safe_fetch, ImageStore, sanitize_text
    assert callable(safe_fetch)
    assert callable(ImageStore)
    assert callable(sanitize_text)
    print("OK: Security utils import successfully")

def test_constants_unchanged():
    """Verify codes shared with other recipe apps keep their values."""
    from constants import Difficulty, Rating, EXPORT_VERSION, COURSE_PLACEHOLDER, MG_TIME_UNITS

    # These values must not change
    assert EXPORT_VERSION == '1.0'
    assert COURSE_PLACEHOLDER == '--'
    assert int(Difficulty.DIFFICULT) == 5
    assert int(Rating.FIVE) == 5
    assert MG_TIME_UNITS[1] == 'hr'
    assert MG_TIME_UNITS[2] == 'min'
    print("OK: Constants unchanged")

def test_app_runs():
    """Verify app can create test client and serve the recipe list."""
    from app import create_app
    from models import db
    with tempfile.TemporaryDirectory() as folder:
        app = create_app('testing', IMAGE_FOLDER=folder)
        with app.app_context():
            db.create_all()
            with app.test_client() as client:
                response = client.get('/recipes')
                assert response.status_code == 200
                assert response.get_json() == []
            db.session.remove()
            db.drop_all()
    print("OK: App serves recipe list")

if __name__ == '__main__':
    print("Running smoke tests...\n")

    tests = [
        test_app_imports,
        test_models_import,
        test_security_utils_import,
        test_constants_unchanged,
        test_app_runs,
    ]

    failed = 0
    for test in tests:
        try:
            test()
        except Exception as e:
            print(f"FAIL: {test.__name__} - {e}")
            failed += 1

    print(f"\n{'='*40}")
    if failed:
        print(f"FAILED: {failed}/{len(tests)} tests")
        sys.exit(1)
    else:
        print(f"PASSED: {len(tests)}/{len(tests)} tests")
        sys.exit(0)
