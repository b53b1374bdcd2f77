"""Order validation and submission."""
import asyncio
import logging
from typing import Optional

from food_ordering.core.exceptions import (
    EmptyCartSubmission,
    MissingDeliveryAddress,
    OrderingError,
    SubmissionFailed,
    SubmissionInProgress,
    SubmissionRejected,
    SubmissionTimeout,
)
from food_ordering.services.ordering.cart import Cart
from food_ordering.services.ordering.models import (
    OrderConfirmation,
    OrderRequest,
    PaymentMethod,
    SubmissionState,
)
from food_ordering.services.ordering.pricing import DEFAULT_POLICY, PricingPolicy, price_lines
from food_ordering.services.ordering.submission import OrderSubmissionService

logger = logging.getLogger(__name__)


class OrderValidator:
    """Gates and performs order submission for one cart.

    The checkout state is never stored as a flag. It is worked out from the
    cart contents, the delivery address and whether a submission is
    currently in flight.
    """

    def __init__(
        self,
        cart: Cart,
        submission_service: OrderSubmissionService,
        policy: PricingPolicy = DEFAULT_POLICY,
        default_timeout: Optional[float] = None,
    ):
        self.cart = cart
        self.submission_service = submission_service
        self.policy = policy
        self.default_timeout = default_timeout

        # Checkout form
        self.delivery_address: str = ""
        self.special_instructions: Optional[str] = None
        self.payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD

        self.last_confirmation: Optional[OrderConfirmation] = None
        self.last_error: Optional[OrderingError] = None
        self._in_flight = False

    def update_details(
        self,
        delivery_address: Optional[str] = None,
        special_instructions: Optional[str] = None,
        payment_method: Optional[PaymentMethod] = None,
    ) -> None:
        """Update checkout details. Arguments left as None keep their value."""
        if delivery_address is not None:
            self.delivery_address = delivery_address
        if special_instructions is not None:
            self.special_instructions = special_instructions
        if payment_method is not None:
            self.payment_method = PaymentMethod(payment_method)

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def state(self) -> SubmissionState:
        if self._in_flight:
            return SubmissionState.SUBMITTING
        if self.can_submit():
            return SubmissionState.READY_TO_SUBMIT
        if self.cart.total_quantity() > 0:
            return SubmissionState.FILLING
        return SubmissionState.EMPTY

    def check(self, delivery_address: Optional[str] = None) -> None:
        """
        Check submission preconditions.

        Raises:
            EmptyCartSubmission: the cart holds no items
            MissingDeliveryAddress: the address is empty or only whitespace
        """
        address = self.delivery_address if delivery_address is None else delivery_address
        if self.cart.total_quantity() <= 0:
            raise EmptyCartSubmission()
        if not address.strip():
            raise MissingDeliveryAddress()

    def can_submit(self, delivery_address: Optional[str] = None) -> bool:
        try:
            self.check(delivery_address)
        except OrderingError:
            return False
        return True

    async def submit(
        self,
        delivery_address: Optional[str] = None,
        payment_method: Optional[PaymentMethod] = None,
        special_instructions: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> OrderConfirmation:
        """
        Place the order currently in the cart.

        Args:
            delivery_address: Overrides the stored delivery address
            payment_method: Overrides the stored payment method
            special_instructions: Overrides the stored instructions
            timeout: Seconds to wait for the submission service; falls back
                to the validator's default, None waits forever

        Returns:
            Confirmation from the submission service

        Raises:
            SubmissionInProgress: another submission has not finished yet
            EmptyCartSubmission: the cart is empty
            MissingDeliveryAddress: no usable delivery address
            SubmissionFailed: the submission service reported a failure
            SubmissionTimeout: the service did not answer in time
        """
        if self._in_flight:
            logger.warning("[CHECKOUT] Rejected submit - another submission is in flight")
            raise SubmissionInProgress()

        self.update_details(delivery_address, special_instructions, payment_method)
        self.check()

        # Claim the slot before the first await so a concurrent submit sees it
        self._in_flight = True
        timeout = self.default_timeout if timeout is None else timeout
        try:
            lines = self.cart.snapshot()
            priced = price_lines(((line.item, line.quantity) for line in lines), self.policy)
            request = OrderRequest(
                lines=lines,
                delivery_address=self.delivery_address,
                special_instructions=self.special_instructions,
                payment_method=self.payment_method,
                total=priced.display_total,
            )
            logger.info(
                f"[CHECKOUT] Submitting order - {priced.item_count} items, "
                f"total ${priced.display_total}, payment: {request.payment_method.value}"
            )
            confirmation = await self._call_service(request, timeout)
        except OrderingError as e:
            self.last_error = e
            logger.warning(f"[CHECKOUT] Submission failed - {e.code}: {e.message}")
            raise
        finally:
            self._in_flight = False

        if confirmation.estimated_delivery_minutes is None:
            confirmation = confirmation.model_copy(
                update={"estimated_delivery_minutes": priced.estimated_delivery_minutes}
            )
        kept = self.cart.remove_lines(lines)
        self.last_confirmation = confirmation
        self.last_error = None
        if kept:
            logger.info(
                f"[CHECKOUT] Order {confirmation.order_id} submitted - kept "
                f"{[(line.item.id, line.quantity) for line in kept]} added during submission"
            )
        else:
            logger.info(f"[CHECKOUT] Order {confirmation.order_id} submitted - cart cleared")
        return confirmation

    async def _call_service(self, request: OrderRequest, timeout: Optional[float]) -> OrderConfirmation:
        try:
            if timeout is None:
                return await self._submit_once(request)
            return await asyncio.wait_for(self._submit_once(request), timeout)
        except asyncio.TimeoutError as e:
            # Only the wait_for above gets here; service timeouts are wrapped below
            raise SubmissionTimeout(timeout) from e

    async def _submit_once(self, request: OrderRequest) -> OrderConfirmation:
        try:
            return await self.submission_service.submit(request)
        except SubmissionRejected as e:
            raise SubmissionFailed(e.message) from e
        except OrderingError:
            raise
        except Exception as e:
            logger.error(
                f"[CHECKOUT] Submission service error - {type(e).__name__}: {str(e)}",
                exc_info=True,
            )
            raise SubmissionFailed(f"{type(e).__name__}: {e}") from e
