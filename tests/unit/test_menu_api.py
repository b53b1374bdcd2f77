"""Unit tests for menu API endpoints."""
from fastapi.testclient import TestClient

from food_ordering.core.dependencies import get_catalog
from food_ordering.core.exceptions import CatalogUnavailable
from food_ordering.main import app


class TestMenuAPI:
    """Test menu API endpoints."""

    def test_get_menu_success(self, test_client):
        """Test GET /api/menu returns full menu."""
        response = test_client.get("/api/menu")

        assert response.status_code == 200
        data = response.json()
        assert len(data["items"]) == 5
        assert data["categories"] == ["Pizza", "Burger", "Salad", "Desserts"]

    def test_menu_item_fields(self, test_client):
        """Test menu items are serialized with exact prices."""
        response = test_client.get("/api/menu")

        item = response.json()["items"][0]
        assert item == {
            "id": 1,
            "name": "Margherita Pizza",
            "description": "Fresh tomatoes, mozzarella, basil",
            "price": "12.99",
            "category": "Pizza",
            "rating": 4.5,
            "preparation_time": 20,
            "popular": True,
            "vegetarian": True,
            "spicy": False,
        }

    def test_get_menu_filtered(self, test_client):
        """Test category and search filters."""
        response = test_client.get("/api/menu", params={"category": "Pizza"})
        assert [i["id"] for i in response.json()["items"]] == [1, 5]

        response = test_client.get("/api/menu", params={"q": "burger"})
        assert [i["id"] for i in response.json()["items"]] == [2]

        response = test_client.get("/api/menu", params={"category": "All", "q": "zzz"})
        assert response.json()["items"] == []

    def test_get_menu_item(self, test_client):
        """Test GET /api/menu/items/{id}."""
        response = test_client.get("/api/menu/items/4")

        assert response.status_code == 200
        assert response.json()["name"] == "Chocolate Brownie"
        assert response.json()["price"] == "5.00"

    def test_get_menu_item_not_found(self, test_client):
        """Test unknown items return 404."""
        response = test_client.get("/api/menu/items/999")

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "item_not_found"

    def test_catalog_unavailable(self, test_client):
        """Test a missing catalog returns 503."""

        def _unavailable():
            raise CatalogUnavailable()

        app.dependency_overrides[get_catalog] = _unavailable

        response = test_client.get("/api/menu")

        assert response.status_code == 503
        assert response.json()["detail"]["code"] == "catalog_unavailable"


class TestHealthAPI:
    """Test health endpoint."""

    def test_health(self, test_client):
        response = test_client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_startup_loads_bundled_catalog(self):
        """Test the lifespan hook loads the bundled menu."""
        with TestClient(app) as client:
            health = client.get("/health").json()
            menu = client.get("/api/menu").json()

        assert health["catalog_loaded"] is True
        assert len(menu["items"]) == 13
