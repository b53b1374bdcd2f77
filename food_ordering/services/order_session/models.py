"""Order session models."""
from typing import Callable, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from food_ordering.services.ordering.models import CartLine, PricedOrder, SubmissionState


class CartSummary(BaseModel):
    """Everything a presentation layer needs to render a cart."""

    model_config = ConfigDict(frozen=True)

    session_id: str
    lines: Tuple[CartLine, ...]
    pricing: PricedOrder
    state: SubmissionState
    delivery_address: str = ""
    last_order_id: Optional[str] = None


CartObserver = Callable[[CartSummary], None]
