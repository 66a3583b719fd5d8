"""
Pytest fixtures for the gadgetplotting test suite.
"""

import pytest
from app import create_app
from data.samples import make_disk_galaxy


@pytest.fixture
def app():
    """Create application for testing."""
    return create_app({"TESTING": True})


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture(scope="session")
def disk_galaxy():
    """Deterministic synthetic disk galaxy (M_sun, kpc, K, Myr)."""
    return make_disk_galaxy()
