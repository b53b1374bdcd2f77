"""Order models."""
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from food_ordering.services.menu.base import MenuItem


class PaymentMethod(str, Enum):
    """Accepted payment methods."""

    CREDIT_CARD = "Credit Card"
    DEBIT_CARD = "Debit Card"
    CASH_ON_DELIVERY = "Cash on Delivery"
    DIGITAL_WALLET = "Digital Wallet"

    def __str__(self) -> str:
        return self.value


class SubmissionState(str, Enum):
    """Checkout states for an order session."""

    EMPTY = "empty"  # Nothing in the cart
    FILLING = "filling"  # Items in the cart, not submittable yet
    READY_TO_SUBMIT = "ready_to_submit"  # Cart and delivery address present
    SUBMITTING = "submitting"  # Waiting on the submission service
    SUBMITTED = "submitted"  # Last attempt was confirmed

    def __str__(self) -> str:
        return self.value


class CartLine(BaseModel):
    """One item and its quantity in a cart."""

    model_config = ConfigDict(frozen=True)

    item: MenuItem
    quantity: int = Field(ge=1)

    @property
    def line_total(self) -> Decimal:
        return self.item.price * self.quantity


class PricedOrder(BaseModel):
    """Derived pricing for a cart. Never edited, always recomputed."""

    model_config = ConfigDict(frozen=True)

    subtotal: Decimal
    delivery_fee: Decimal
    tax: Decimal
    discount: Decimal
    total: Decimal  # Full precision
    display_total: Decimal  # Rounded to cents
    estimated_delivery_minutes: int
    item_count: int
    amount_to_free_delivery: Decimal

    @property
    def free_delivery(self) -> bool:
        return self.delivery_fee == 0


class OrderRequest(BaseModel):
    """Snapshot handed to the order submission service."""

    model_config = ConfigDict(frozen=True)

    lines: Tuple[CartLine, ...]
    delivery_address: str
    special_instructions: Optional[str] = None
    payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD
    total: Decimal

    @field_validator("delivery_address")
    @classmethod
    def _address_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("delivery address must not be blank")
        return value

    @field_validator("special_instructions")
    @classmethod
    def _blank_instructions_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    @field_validator("lines")
    @classmethod
    def _lines_not_empty(cls, value: Tuple[CartLine, ...]) -> Tuple[CartLine, ...]:
        if not value:
            raise ValueError("order must contain at least one line")
        return value


class OrderConfirmation(BaseModel):
    """Confirmation returned by the order submission service."""

    model_config = ConfigDict(frozen=True)

    order_id: str
    total: Decimal
    estimated_delivery_minutes: Optional[int] = None
