"""Order session: one cart, its checkout and its observers."""
import logging
from datetime import datetime
from typing import Callable, List, Optional

from food_ordering.services.menu.catalog import Catalog
from food_ordering.services.order_session.models import CartObserver, CartSummary
from food_ordering.services.ordering.cart import Cart
from food_ordering.services.ordering.models import (
    OrderConfirmation,
    PaymentMethod,
    SubmissionState,
)
from food_ordering.services.ordering.pricing import DEFAULT_POLICY, PricingPolicy, price_lines
from food_ordering.services.ordering.submission import OrderSubmissionService
from food_ordering.services.ordering.validator import OrderValidator

logger = logging.getLogger(__name__)


class OrderSession:
    """A user's ordering session.

    Every cart mutation goes through here so that pricing is recomputed and
    pushed to subscribers right after the change. Subscribers never see a
    summary whose pricing disagrees with its lines.
    """

    def __init__(
        self,
        session_id: str,
        catalog: Catalog,
        submission_service: OrderSubmissionService,
        policy: PricingPolicy = DEFAULT_POLICY,
        submission_timeout: Optional[float] = None,
    ):
        self.session_id = session_id
        self.catalog = catalog
        self.policy = policy
        self.cart = Cart(catalog)
        self.validator = OrderValidator(
            self.cart,
            submission_service,
            policy=policy,
            default_timeout=submission_timeout,
        )
        self._observers: List[CartObserver] = []
        self.expires_at: Optional[datetime] = None  # Set by the session manager

    # Observation

    def subscribe(self, observer: CartObserver) -> Callable[[], None]:
        """Register an observer. Returns a function that unregisters it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def summary(self, state: Optional[SubmissionState] = None) -> CartSummary:
        lines = self.cart.snapshot()
        confirmation = self.validator.last_confirmation
        return CartSummary(
            session_id=self.session_id,
            lines=lines,
            pricing=price_lines(((line.item, line.quantity) for line in lines), self.policy),
            state=state or self.validator.state,
            delivery_address=self.validator.delivery_address,
            last_order_id=confirmation.order_id if confirmation else None,
        )

    def _notify(self, state: Optional[SubmissionState] = None) -> CartSummary:
        summary = self.summary(state)
        for observer in list(self._observers):
            try:
                observer(summary)
            except Exception as e:
                # The cart change stands even if an observer fails
                logger.error(
                    f"[SESSION] Observer {observer!r} failed for session {self.session_id} - "
                    f"Error: {type(e).__name__}: {str(e)}",
                    exc_info=True,
                )
        return summary

    # Cart operations

    def add_item(self, item_id: int) -> CartSummary:
        self.cart.add_item(item_id)
        return self._notify()

    def remove_item(self, item_id: int) -> CartSummary:
        self.cart.remove_item(item_id)
        return self._notify()

    def set_quantity(self, item_id: int, quantity: int) -> CartSummary:
        self.cart.set_quantity(item_id, quantity)
        return self._notify()

    def clear(self) -> CartSummary:
        self.cart.clear()
        return self._notify()

    def reset(self) -> None:
        """Forget the cart and checkout details, e.g. on logout."""
        self.cart.clear()
        self.validator.delivery_address = ""
        self.validator.special_instructions = None
        self.validator.payment_method = PaymentMethod.CREDIT_CARD
        self._notify()
        self._observers.clear()

    # Checkout

    def update_details(
        self,
        delivery_address: Optional[str] = None,
        special_instructions: Optional[str] = None,
        payment_method: Optional[PaymentMethod] = None,
    ) -> CartSummary:
        self.validator.update_details(delivery_address, special_instructions, payment_method)
        return self._notify()

    async def submit(
        self,
        delivery_address: Optional[str] = None,
        payment_method: Optional[PaymentMethod] = None,
        special_instructions: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> OrderConfirmation:
        """Place the order. Observers see SUBMITTING, then SUBMITTED or the failure state."""
        if not self.validator.in_flight and self.validator.can_submit(delivery_address):
            self._notify(SubmissionState.SUBMITTING)
        try:
            confirmation = await self.validator.submit(
                delivery_address=delivery_address,
                payment_method=payment_method,
                special_instructions=special_instructions,
                timeout=timeout,
            )
        except Exception:
            self._notify()
            raise
        self._notify(SubmissionState.SUBMITTED)
        logger.info(f"[SESSION] Session {self.session_id} placed order {confirmation.order_id}")
        return confirmation
