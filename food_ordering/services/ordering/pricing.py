"""Order pricing.

All money math is done with ``Decimal`` at full precision. Only the final
total is rounded, and only for display.
"""
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from food_ordering.core.config import Settings, settings
from food_ordering.services.menu.base import MenuItem
from food_ordering.services.ordering.models import PricedOrder

CENTS = Decimal("0.01")
ZERO = Decimal("0")

Lines = Iterable[Tuple[MenuItem, int]]


class PricingPolicy(BaseModel):
    """Fee, tax and discount constants."""

    model_config = ConfigDict(frozen=True)

    free_delivery_threshold: Decimal = Decimal("25.00")
    delivery_fee: Decimal = Decimal("2.99")
    tax_rate: Decimal = Decimal("0.08")
    discount_threshold: Decimal = Decimal("50.00")
    discount_rate: Decimal = Decimal("0.10")
    delivery_transit_minutes: int = 15
    empty_cart_delivery_minutes: int = 30

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "PricingPolicy":
        config = config or settings
        return cls(
            free_delivery_threshold=config.free_delivery_threshold,
            delivery_fee=config.delivery_fee,
            tax_rate=config.tax_rate,
            discount_threshold=config.discount_threshold,
            discount_rate=config.discount_rate,
            delivery_transit_minutes=config.delivery_transit_minutes,
            empty_cart_delivery_minutes=config.empty_cart_delivery_minutes,
        )


DEFAULT_POLICY = PricingPolicy()


def round_money(amount: Decimal) -> Decimal:
    """Round an amount to cents, half up."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def subtotal(lines: Lines) -> Decimal:
    return sum((item.price * quantity for item, quantity in lines), ZERO)


def delivery_fee(amount: Decimal, policy: PricingPolicy = DEFAULT_POLICY) -> Decimal:
    """Flat delivery fee, waived once the subtotal is strictly above the threshold."""
    if amount > policy.free_delivery_threshold:
        return ZERO
    return policy.delivery_fee


def tax(amount: Decimal, policy: PricingPolicy = DEFAULT_POLICY) -> Decimal:
    """Tax on the subtotal only, not on fees or after discount."""
    return amount * policy.tax_rate


def discount(amount: Decimal, policy: PricingPolicy = DEFAULT_POLICY) -> Decimal:
    if amount >= policy.discount_threshold:
        return amount * policy.discount_rate
    return ZERO


def amount_to_free_delivery(amount: Decimal, policy: PricingPolicy = DEFAULT_POLICY) -> Decimal:
    """How much more must be added before delivery becomes free.

    Zero for an empty cart and once delivery is already free. Because the
    threshold is strict, a subtotal exactly on it still needs one cent.
    """
    if amount <= ZERO or amount > policy.free_delivery_threshold:
        return ZERO
    remaining = policy.free_delivery_threshold - amount
    return remaining if remaining > ZERO else CENTS


def final_total(amount: Decimal, policy: PricingPolicy = DEFAULT_POLICY) -> Decimal:
    """Subtotal plus delivery fee, minus discount, plus tax. Not rounded."""
    return amount + delivery_fee(amount, policy) - discount(amount, policy) + tax(amount, policy)


def estimated_delivery_minutes(lines: Lines, policy: PricingPolicy = DEFAULT_POLICY) -> int:
    """Slowest item's preparation time plus transit.

    Kitchen prep runs in parallel, so only the longest item counts.
    """
    prep_times = [item.preparation_time for item, _ in lines]
    if not prep_times:
        return policy.empty_cart_delivery_minutes
    return max(prep_times) + policy.delivery_transit_minutes


def price_lines(lines: Lines, policy: PricingPolicy = DEFAULT_POLICY) -> PricedOrder:
    """Compute every derived value for a set of cart lines in one pass."""
    lines = tuple(lines)
    amount = subtotal(lines)
    fee = delivery_fee(amount, policy)
    tax_amount = tax(amount, policy)
    discount_amount = discount(amount, policy)
    total = amount + fee - discount_amount + tax_amount
    return PricedOrder(
        subtotal=amount,
        delivery_fee=fee,
        tax=tax_amount,
        discount=discount_amount,
        total=total,
        display_total=round_money(total),
        estimated_delivery_minutes=estimated_delivery_minutes(lines, policy),
        item_count=sum(quantity for _, quantity in lines),
        amount_to_free_delivery=amount_to_free_delivery(amount, policy),
    )


def price_cart(cart, policy: PricingPolicy = DEFAULT_POLICY) -> PricedOrder:
    """Price the current contents of a cart."""
    return price_lines(cart.lines(), policy)
