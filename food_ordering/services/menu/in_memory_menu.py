"""In-memory menu provider."""
import logging
from pathlib import Path
from typing import Optional

import yaml

from food_ordering.services.menu.base import Category, Menu, MenuItem, MenuProvider

logger = logging.getLogger(__name__)


DEFAULT_MENU = Menu(
    items=[
        MenuItem(
            id=1,
            name="Margherita Pizza",
            description="Fresh tomatoes, mozzarella, basil, olive oil",
            price="12.99",
            category=Category.PIZZA,
            rating=4.5,
            preparation_time=20,
            popular=True,
            vegetarian=True,
        ),
        MenuItem(
            id=3,
            name="Classic Burger",
            description="Beef patty, lettuce, tomato, onion, pickle",
            price="9.99",
            category=Category.BURGER,
            rating=4.3,
            preparation_time=15,
            popular=True,
        ),
        MenuItem(
            id=7,
            name="Caesar Salad",
            description="Romaine lettuce, croutons, parmesan, caesar dressing",
            price="8.99",
            category=Category.SALAD,
            rating=4.1,
            preparation_time=8,
            vegetarian=True,
        ),
    ]
)


class InMemoryMenuProvider(MenuProvider):
    """In-memory menu provider using YAML configuration."""

    def __init__(self, menu_file: Optional[str] = None):
        """Initialize with optional menu file path."""
        if menu_file is None:
            menu_file = Path(__file__).parent / "data" / "menu.yaml"
        self.menu_file = Path(menu_file)
        self._menu: Optional[Menu] = None

    async def _load_menu(self) -> Menu:
        """Load menu from YAML file."""
        if self._menu is None:
            if not self.menu_file.exists():
                logger.warning(f"[MENU] Menu file {self.menu_file} not found, using default menu")
                self._menu = DEFAULT_MENU
            else:
                with open(self.menu_file, "r") as f:
                    data = yaml.safe_load(f) or {}
                items = [MenuItem(**item) for item in data.get("items", [])]
                self._menu = Menu(
                    items=items,
                    categories=data.get("categories", []),
                )
                logger.info(f"[MENU] Loaded {len(items)} items from {self.menu_file}")
        return self._menu

    async def get_menu(self) -> Menu:
        """Get the full menu."""
        return await self._load_menu()
