"""Shared test fixtures and configuration."""
import pytest
import yaml
from pathlib import Path
from fastapi.testclient import TestClient

from food_ordering.main import app
from food_ordering.core.dependencies import get_catalog, get_submission_service
from food_ordering.services.menu.base import Menu, MenuItem
from food_ordering.services.menu.catalog import Catalog
from food_ordering.services.menu.in_memory_menu import InMemoryMenuProvider
from food_ordering.services.order_session import manager as session_manager
from food_ordering.services.order_session.session import OrderSession
from food_ordering.services.ordering.cart import Cart
from food_ordering.services.ordering.submission import InMemoryOrderSubmissionService
from food_ordering.services.ordering.validator import OrderValidator


@pytest.fixture
def test_menu_path():
    """Return path to test menu YAML file."""
    return Path(__file__).parent / "fixtures" / "test_menu.yaml"


@pytest.fixture
def test_menu_provider(test_menu_path):
    """Menu provider reading the test fixture menu."""
    return InMemoryMenuProvider(menu_file=str(test_menu_path))


@pytest.fixture
def test_catalog(test_menu_path):
    """Create catalog with test data."""
    with open(test_menu_path, "r") as f:
        data = yaml.safe_load(f)
    return Catalog(Menu(items=[MenuItem(**item) for item in data["items"]]))


@pytest.fixture
def submission_service():
    """In-memory order submission service."""
    return InMemoryOrderSubmissionService()


@pytest.fixture
def cart(test_catalog):
    """Empty cart over the test catalog."""
    return Cart(test_catalog)


@pytest.fixture
def validator(cart, submission_service):
    """Order validator over the test cart."""
    return OrderValidator(cart, submission_service)


@pytest.fixture
def order_session(test_catalog, submission_service):
    """Order session over the test catalog."""
    return OrderSession("test-session", test_catalog, submission_service)


@pytest.fixture(autouse=True)
def clean_order_sessions():
    """Clean up order sessions before and after tests."""
    session_manager._sessions.clear()
    yield
    session_manager._sessions.clear()


@pytest.fixture
def test_client(test_catalog, submission_service):
    """Create FastAPI test client with overrides."""
    app.dependency_overrides[get_catalog] = lambda: test_catalog
    app.dependency_overrides[get_submission_service] = lambda: submission_service

    client = TestClient(app)

    yield client

    # Clear overrides
    app.dependency_overrides.clear()


@pytest.fixture
def session_id(test_client):
    """Create an order session through the API."""
    response = test_client.post("/api/sessions")
    assert response.status_code == 200
    return response.json()["session_id"]
