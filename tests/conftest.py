from datetime import timedelta

import pytest

from booklend import create_app
from booklend.config import TestConfig
from booklend.extensions import db
from booklend.utils.timeutil import utcnow


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def catalog(app):
    return app.extensions["catalog"]


@pytest.fixture
def lending(app):
    return app.extensions["lending"]


@pytest.fixture
def future():
    return utcnow() + timedelta(days=7)


@pytest.fixture
def make_book(catalog):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "title": f"Book {counter['n']}",
            "author": "Some Author",
            "genre": "FICTION",
            "isbn": f"978-0-00-{counter['n']:06d}",
            "copies": 3,
        }
        data.update(overrides)
        return catalog.create(data)

    return _make
