# tests/conftest.py
from io import BytesIO

import pytest
from PIL import Image

from app import create_app
from models import db


@pytest.fixture
def app(tmp_path):
    app = create_app('testing', IMAGE_FOLDER=str(tmp_path / 'images'))
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session(app):
    return db.session


@pytest.fixture
def image_store(app):
    return app.extensions['image_store']


@pytest.fixture
def png_bytes():
    img = Image.new('RGB', (40, 20), (200, 30, 30))
    output = BytesIO()
    img.save(output, 'PNG')
    return output.getvalue()

