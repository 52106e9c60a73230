from __future__ import annotations

import pytest

from zyracss.engine import Engine
from zyracss.web.app import create_app


@pytest.fixture
def engine():
    """A fresh engine with its own caches for each test."""
    eng = Engine()
    yield eng
    eng.shutdown()


@pytest.fixture
def app(engine):
    """Create a Flask app for testing."""
    application = create_app(engine=engine)
    application.config["TESTING"] = True
    return application


@pytest.fixture
def client(app):
    """Create a Flask test client."""
    return app.test_client()
