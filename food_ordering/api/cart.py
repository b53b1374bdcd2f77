"""Cart and checkout API endpoints."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from food_ordering.core.dependencies import get_session_manager
from food_ordering.services.order_session.manager import OrderSessionManager
from food_ordering.services.order_session.models import CartSummary
from food_ordering.services.ordering.models import OrderConfirmation, PaymentMethod
from food_ordering.services.ordering.pricing import round_money

router = APIRouter()
logger = logging.getLogger(__name__)


def money(value) -> str:
    return str(round_money(value))


class CartLineResponse(BaseModel):
    """Cart line response model."""
    item_id: int
    name: str
    unit_price: str
    quantity: int
    line_total: str


class PricingResponse(BaseModel):
    """Pricing response model."""
    subtotal: str
    delivery_fee: str
    tax: str
    discount: str
    total: str
    estimated_delivery_minutes: int
    item_count: int
    free_delivery: bool
    amount_to_free_delivery: str


class CartResponse(BaseModel):
    """Cart response model."""
    session_id: str
    state: str
    lines: List[CartLineResponse] = []
    pricing: PricingResponse
    delivery_address: str = ""
    last_order_id: Optional[str] = None

    @classmethod
    def from_summary(cls, summary: CartSummary) -> "CartResponse":
        pricing = summary.pricing
        return cls(
            session_id=summary.session_id,
            state=summary.state.value,
            lines=[
                CartLineResponse(
                    item_id=line.item.id,
                    name=line.item.name,
                    unit_price=money(line.item.price),
                    quantity=line.quantity,
                    line_total=money(line.line_total),
                )
                for line in summary.lines
            ],
            pricing=PricingResponse(
                subtotal=money(pricing.subtotal),
                delivery_fee=money(pricing.delivery_fee),
                tax=money(pricing.tax),
                discount=money(pricing.discount),
                total=str(pricing.display_total),
                estimated_delivery_minutes=pricing.estimated_delivery_minutes,
                item_count=pricing.item_count,
                free_delivery=pricing.free_delivery,
                amount_to_free_delivery=money(pricing.amount_to_free_delivery),
            ),
            delivery_address=summary.delivery_address,
            last_order_id=summary.last_order_id,
        )


class QuantityRequest(BaseModel):
    """Set quantity request model."""
    quantity: int


class CheckoutRequest(BaseModel):
    """Checkout request model."""
    delivery_address: Optional[str] = None
    special_instructions: Optional[str] = None
    payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD
    timeout: Optional[float] = Field(default=None, gt=0)


class OrderConfirmationResponse(BaseModel):
    """Order confirmation response model."""
    order_id: str
    total: str
    estimated_delivery_minutes: Optional[int] = None

    @classmethod
    def from_confirmation(cls, confirmation: OrderConfirmation) -> "OrderConfirmationResponse":
        return cls(
            order_id=confirmation.order_id,
            total=money(confirmation.total),
            estimated_delivery_minutes=confirmation.estimated_delivery_minutes,
        )


@router.post("/api/sessions", response_model=CartResponse)
async def create_session(manager: OrderSessionManager = Depends(get_session_manager)):
    """Start a new order session with an empty cart."""
    session = manager.create_session()
    return CartResponse.from_summary(session.summary())


@router.delete("/api/sessions/{session_id}")
async def end_session(session_id: str, manager: OrderSessionManager = Depends(get_session_manager)):
    """End an order session and drop its cart."""
    manager.end_session(session_id)
    return {"success": True}


@router.get("/api/sessions/{session_id}/cart", response_model=CartResponse)
async def get_cart(session_id: str, manager: OrderSessionManager = Depends(get_session_manager)):
    """Get cart lines and pricing."""
    return CartResponse.from_summary(manager.get_session(session_id).summary())


@router.post("/api/sessions/{session_id}/cart/items/{item_id}", response_model=CartResponse)
async def add_item(
    session_id: str,
    item_id: int,
    manager: OrderSessionManager = Depends(get_session_manager),
):
    """Add one unit of an item."""
    logger.info(f"[CART] Add item {item_id} - session: {session_id}")
    summary = manager.get_session(session_id).add_item(item_id)
    return CartResponse.from_summary(summary)


@router.delete("/api/sessions/{session_id}/cart/items/{item_id}", response_model=CartResponse)
async def remove_item(
    session_id: str,
    item_id: int,
    manager: OrderSessionManager = Depends(get_session_manager),
):
    """Remove one unit of an item."""
    logger.info(f"[CART] Remove item {item_id} - session: {session_id}")
    summary = manager.get_session(session_id).remove_item(item_id)
    return CartResponse.from_summary(summary)


@router.put("/api/sessions/{session_id}/cart/items/{item_id}", response_model=CartResponse)
async def set_quantity(
    session_id: str,
    item_id: int,
    body: QuantityRequest,
    manager: OrderSessionManager = Depends(get_session_manager),
):
    """Set the exact quantity of an item; zero or less removes it."""
    logger.info(f"[CART] Set item {item_id} to {body.quantity} - session: {session_id}")
    summary = manager.get_session(session_id).set_quantity(item_id, body.quantity)
    return CartResponse.from_summary(summary)


@router.delete("/api/sessions/{session_id}/cart", response_model=CartResponse)
async def clear_cart(session_id: str, manager: OrderSessionManager = Depends(get_session_manager)):
    """Remove every item from the cart."""
    logger.info(f"[CART] Clear cart - session: {session_id}")
    return CartResponse.from_summary(manager.get_session(session_id).clear())


@router.post("/api/sessions/{session_id}/checkout", response_model=OrderConfirmationResponse)
async def checkout(
    session_id: str,
    body: CheckoutRequest,
    manager: OrderSessionManager = Depends(get_session_manager),
):
    """Place the order in the cart."""
    logger.info(f"[CHECKOUT] Checkout requested - session: {session_id}")
    session = manager.get_session(session_id)
    confirmation = await session.submit(
        delivery_address=body.delivery_address,
        payment_method=body.payment_method,
        special_instructions=body.special_instructions,
        timeout=body.timeout,
    )
    return OrderConfirmationResponse.from_confirmation(confirmation)
