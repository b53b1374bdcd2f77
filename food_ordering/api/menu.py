"""Menu API endpoints."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from food_ordering.core.dependencies import get_catalog
from food_ordering.services.menu.base import MenuItem
from food_ordering.services.menu.catalog import Catalog
from food_ordering.services.ordering.pricing import round_money

router = APIRouter()
logger = logging.getLogger(__name__)


class MenuItemResponse(BaseModel):
    """Menu item response model."""
    id: int
    name: str
    description: str = ""
    price: str
    category: str
    rating: float
    preparation_time: int
    popular: bool = False
    vegetarian: bool = False
    spicy: bool = False

    @classmethod
    def from_item(cls, item: MenuItem) -> "MenuItemResponse":
        return cls(
            id=item.id,
            name=item.name,
            description=item.description,
            price=str(round_money(item.price)),
            category=item.category.value,
            rating=item.rating,
            preparation_time=item.preparation_time,
            popular=item.popular,
            vegetarian=item.vegetarian,
            spicy=item.spicy,
        )


class MenuResponse(BaseModel):
    """Menu response model."""
    items: List[MenuItemResponse]
    categories: List[str] = []


@router.get("/api/menu", response_model=MenuResponse)
async def get_menu(
    request: Request,
    category: Optional[str] = None,
    q: Optional[str] = None,
    catalog: Catalog = Depends(get_catalog),
):
    """Get the menu, optionally filtered by category and name search."""
    logger.info(
        f"[MENU] Request received - category: {category}, q: {q}, "
        f"Client: {request.client.host if request.client else 'unknown'}"
    )

    try:
        items = catalog.filter_items(category=category, query=q)
        logger.info(f"[MENU] Returning {len(items)} of {len(catalog)} items")
        return MenuResponse(
            items=[MenuItemResponse.from_item(item) for item in items],
            categories=[c.value for c in catalog.categories],
        )

    except Exception as e:
        logger.error(
            f"[MENU] Error fetching menu - Error: {type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail=f"Error fetching menu: {str(e)}")


@router.get("/api/menu/items/{item_id}", response_model=MenuItemResponse)
async def get_menu_item(item_id: int, catalog: Catalog = Depends(get_catalog)):
    """Get a single menu item."""
    return MenuItemResponse.from_item(catalog.get_item(item_id))
