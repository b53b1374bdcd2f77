"""Menu provider interface."""
from abc import ABC, abstractmethod
from decimal import Decimal
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Category(str, Enum):
    """Menu categories."""

    PIZZA = "Pizza"
    BURGER = "Burger"
    PASTA = "Pasta"
    SALAD = "Salad"
    MEXICAN = "Mexican"
    DESSERTS = "Desserts"
    ASIAN = "Asian"

    def __str__(self) -> str:
        return self.value


class MenuItem(BaseModel):
    """Menu item model."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    description: str = ""
    price: Decimal = Field(ge=0)
    category: Category
    rating: float = Field(default=0.0, ge=0, le=5)
    preparation_time: int = Field(default=15, ge=0)  # minutes
    popular: bool = False
    vegetarian: bool = False
    spicy: bool = False

    @field_validator("price", mode="before")
    @classmethod
    def _price_from_text(cls, value):
        # YAML hands us floats; go through str so 12.99 stays 12.99
        if isinstance(value, float):
            return str(value)
        return value


class Menu(BaseModel):
    """Menu model."""

    items: List[MenuItem]
    categories: List[Category] = []

    @model_validator(mode="after")
    def _collect_categories(self) -> "Menu":
        if not self.categories:
            seen: List[Category] = []
            for item in self.items:
                if item.category not in seen:
                    seen.append(item.category)
            self.categories = seen
        return self

    @field_validator("items")
    @classmethod
    def _unique_ids(cls, items: List[MenuItem]) -> List[MenuItem]:
        ids = [item.id for item in items]
        if len(ids) != len(set(ids)):
            raise ValueError("menu item ids must be unique")
        return items


class MenuProvider(ABC):
    """Abstract base class for menu providers."""

    @abstractmethod
    async def get_menu(self) -> Menu:
        """Get the full menu."""
        pass
