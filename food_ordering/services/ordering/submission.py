"""Order submission services."""
import asyncio
import logging
import uuid
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from food_ordering.services.ordering.models import OrderConfirmation, OrderRequest

logger = logging.getLogger(__name__)


class OrderSubmissionService(ABC):
    """Abstract base class for services that accept placed orders."""

    @abstractmethod
    async def submit(self, request: OrderRequest) -> OrderConfirmation:
        """
        Submit an order.

        Returns:
            Confirmation carrying an opaque order id

        Raises:
            SubmissionRejected: the service refused the order
        """
        pass


class InMemoryOrderSubmissionService(OrderSubmissionService):
    """Accepts every order and keeps it in memory."""

    def __init__(self, delay_seconds: float = 0.0):
        self.delay_seconds = delay_seconds
        self._orders: Dict[str, OrderRequest] = {}

    async def submit(self, request: OrderRequest) -> OrderConfirmation:
        """Store the order and return a confirmation."""
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)

        order_id = uuid.uuid4().hex
        self._orders[order_id] = request
        logger.info(
            f"[ORDERS] Order {order_id} accepted - {len(request.lines)} lines, "
            f"total ${request.total:.2f}, payment: {request.payment_method.value}"
        )
        return OrderConfirmation(order_id=order_id, total=request.total)

    def get_order(self, order_id: str) -> Optional[OrderRequest]:
        return self._orders.get(order_id)

    def list_orders(self) -> List[OrderRequest]:
        return list(self._orders.values())
