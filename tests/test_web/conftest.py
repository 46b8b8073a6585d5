from __future__ import annotations

import pytest

from silkcss.runtime import StyleSystem
from silkcss.web.app import create_app


@pytest.fixture
def system():
    """A fresh style system for each test."""
    return StyleSystem()


@pytest.fixture
def app(system):
    """Create a Flask app for testing."""
    application = create_app(system=system)
    application.config["TESTING"] = True
    return application


@pytest.fixture
def client(app):
    """Create a Flask test client."""
    return app.test_client()
