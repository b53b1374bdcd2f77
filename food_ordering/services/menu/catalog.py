"""Read-only menu catalog."""
import logging
from typing import Dict, List, Optional, Union

from food_ordering.core.exceptions import CatalogUnavailable, ItemNotFound
from food_ordering.services.menu.base import Category, Menu, MenuItem, MenuProvider

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "All"


class Catalog:
    """Immutable view over the menu, indexed by item id.

    The catalog is fetched once from a ``MenuProvider`` and never changes
    afterwards; cart and pricing code look items up here.
    """

    def __init__(self, menu: Menu):
        self._items: tuple[MenuItem, ...] = tuple(menu.items)
        self._by_id: Dict[int, MenuItem] = {item.id: item for item in self._items}
        self._categories: tuple[Category, ...] = tuple(menu.categories)

    @classmethod
    async def load(cls, provider: MenuProvider) -> "Catalog":
        """Fetch the menu from a provider and build a catalog from it.

        Raises:
            CatalogUnavailable: the provider failed for any reason. No retry.
        """
        try:
            menu = await provider.get_menu()
        except Exception as e:
            logger.error(
                f"[CATALOG] Menu provider failed - Error: {type(e).__name__}: {str(e)}",
                exc_info=True,
            )
            raise CatalogUnavailable(f"Menu is currently unavailable: {e}") from e
        logger.info(f"[CATALOG] Catalog ready - {len(menu.items)} items")
        return cls(menu)

    def list_items(self) -> List[MenuItem]:
        """All items in catalog order."""
        return list(self._items)

    def find_item(self, item_id: int) -> Optional[MenuItem]:
        return self._by_id.get(item_id)

    def get_item(self, item_id: int) -> MenuItem:
        item = self._by_id.get(item_id)
        if item is None:
            raise ItemNotFound(item_id)
        return item

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._by_id

    def __len__(self) -> int:
        return len(self._items)

    @property
    def categories(self) -> List[Category]:
        return list(self._categories)

    def filter_items(
        self,
        category: Optional[Union[Category, str]] = None,
        query: Optional[str] = None,
    ) -> List[MenuItem]:
        """
        Filter items by category and name search.

        Args:
            category: Category to keep; None or "All" keeps every category
            query: Case-insensitive substring matched against item names

        Returns:
            Matching items in catalog order
        """
        wanted: Optional[str] = None
        if category is not None and str(category) != ALL_CATEGORIES:
            wanted = str(category).lower()

        needle = (query or "").strip().lower()

        return [
            item
            for item in self._items
            if (wanted is None or item.category.value.lower() == wanted)
            and (not needle or needle in item.name.lower())
        ]
