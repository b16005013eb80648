"""
Promo discount calculation.

Pure functions over in-memory values. Callers validate the promo (active,
within its window, usage limits) before asking for a discount.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from apps.common.utils import to_money
from apps.common.validators import parse_optional_decimal

logger = logging.getLogger(__name__)

ZERO = Decimal('0')

PERCENTAGE = 'percentage'
FIXED_AMOUNT = 'fixed_amount'
FREE_SHIPPING = 'free_shipping'
BXGY = 'bxgy'


@dataclass(frozen=True)
class PromoTerms:
    """Pricing-relevant fields of a promo code"""
    code: str
    discount_type: str
    discount_value: Decimal = ZERO
    min_order_amount: Optional[Decimal] = None
    max_discount_amount: Optional[Decimal] = None
    auto_apply_eligible: bool = False
    is_active: bool = True

    @classmethod
    def from_record(cls, record) -> 'PromoTerms':
        """Build from a PromoCode instance or a dict of its columns"""
        if isinstance(record, dict):
            getter = record.get
        else:
            def getter(name):
                return getattr(record, name, None)
        return cls(
            code=(getter('code') or '').upper(),
            discount_type=getter('discount_type') or '',
            discount_value=parse_optional_decimal(getter('discount_value')) or ZERO,
            min_order_amount=parse_optional_decimal(getter('min_order_amount')),
            max_discount_amount=parse_optional_decimal(getter('max_discount_amount')),
            auto_apply_eligible=bool(getter('auto_apply_eligible')),
            is_active=bool(getter('is_active')),
        )


@dataclass(frozen=True)
class DiscountResult:
    discount_amount: Decimal
    adjusted_delivery_fee: Decimal
    is_free_shipping: bool = False


class PromoDiscountCalculator:
    """Compute the discount a validated promo gives an order"""

    # Nominal value for buy-x-get-y promos without a configured amount
    DEFAULT_BXGY_VALUE = Decimal('10')

    @classmethod
    def percentage_discount(cls, promo: PromoTerms, amount: Decimal) -> Decimal:
        """amount * value / 100, clamped to max_discount_amount when set"""
        discount = amount * promo.discount_value / Decimal('100')
        if promo.max_discount_amount is not None and discount > promo.max_discount_amount:
            discount = promo.max_discount_amount
        return discount

    @classmethod
    def apply_promo(cls, promo: PromoTerms, subtotal: Decimal, delivery_fee: Decimal) -> DiscountResult:
        """
        Discount for an order with the given subtotal and delivery fee.

        Percentage and fixed discounts leave the delivery fee alone. Free
        shipping discounts exactly the delivery fee and zeroes it. Fixed and
        buy-x-get-y discounts never exceed the subtotal. Amounts are
        quantized to two decimal places.
        """
        discount_type = promo.discount_type

        if discount_type == FREE_SHIPPING:
            return DiscountResult(
                discount_amount=to_money(delivery_fee),
                adjusted_delivery_fee=to_money(ZERO),
                is_free_shipping=True,
            )

        if discount_type == PERCENTAGE:
            discount = cls.percentage_discount(promo, subtotal)
        elif discount_type == BXGY:
            discount = promo.discount_value or cls.DEFAULT_BXGY_VALUE
        else:
            if discount_type != FIXED_AMOUNT:
                logger.warning(f"Unknown discount type {discount_type!r} on {promo.code}, treating as fixed amount")
            discount = promo.discount_value

        discount = max(ZERO, min(discount, subtotal))
        return DiscountResult(
            discount_amount=to_money(discount),
            adjusted_delivery_fee=to_money(delivery_fee),
            is_free_shipping=False,
        )
