"""FastAPI dependencies."""
from typing import Optional

from fastapi import Depends

from food_ordering.core.config import settings
from food_ordering.core.exceptions import CatalogUnavailable
from food_ordering.services.menu.base import MenuProvider
from food_ordering.services.menu.catalog import Catalog
from food_ordering.services.menu.in_memory_menu import InMemoryMenuProvider
from food_ordering.services.order_session.manager import OrderSessionManager
from food_ordering.services.ordering.pricing import PricingPolicy
from food_ordering.services.ordering.submission import (
    InMemoryOrderSubmissionService,
    OrderSubmissionService,
)

_catalog: Optional[Catalog] = None
_submission_service: Optional[OrderSubmissionService] = None


def get_menu_provider() -> MenuProvider:
    """Get menu provider instance."""
    return InMemoryMenuProvider(menu_file=settings.menu_file)


async def init_catalog(provider: Optional[MenuProvider] = None) -> Catalog:
    """Load the catalog once at startup."""
    global _catalog
    _catalog = await Catalog.load(provider or get_menu_provider())
    return _catalog


def get_catalog() -> Catalog:
    """Get the loaded catalog."""
    if _catalog is None:
        raise CatalogUnavailable("Menu has not been loaded")
    return _catalog


def get_submission_service() -> OrderSubmissionService:
    """Get order submission service instance."""
    global _submission_service
    if _submission_service is None:
        _submission_service = InMemoryOrderSubmissionService(
            delay_seconds=settings.submission_delay_seconds
        )
    return _submission_service


def get_session_manager(
    catalog: Catalog = Depends(get_catalog),
    submission_service: OrderSubmissionService = Depends(get_submission_service),
) -> OrderSessionManager:
    """Get order session manager."""
    return OrderSessionManager(
        catalog,
        submission_service,
        policy=PricingPolicy.from_settings(settings),
        submission_timeout=settings.submission_timeout_seconds,
        session_ttl=settings.session_ttl_seconds,
    )


def catalog_loaded() -> bool:
    return _catalog is not None
