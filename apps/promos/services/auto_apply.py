"""
Auto-apply promo selection.

Ranks the promos a customer could get without typing a code and picks the
one with the largest estimated saving. The estimate only orders the
candidates; the real discount always comes from PromoDiscountCalculator.
"""
from decimal import Decimal
from typing import Iterable, List, Optional

from .promo_calculator import (
    PromoDiscountCalculator, PromoTerms, ZERO, PERCENTAGE, FREE_SHIPPING, BXGY
)


class AutoApplyPromoSelector:
    """Pick the best auto-apply promo for an order total"""

    DEFAULT_FREE_SHIPPING_ESTIMATE = Decimal('8')
    DEFAULT_BXGY_ESTIMATE = Decimal('10')

    def __init__(self, free_shipping_estimate: Optional[Decimal] = None,
                 bxgy_estimate: Optional[Decimal] = None):
        self.free_shipping_estimate = (
            free_shipping_estimate if free_shipping_estimate is not None
            else self.DEFAULT_FREE_SHIPPING_ESTIMATE
        )
        self.bxgy_estimate = bxgy_estimate if bxgy_estimate is not None else self.DEFAULT_BXGY_ESTIMATE

    @staticmethod
    def is_eligible(promo: PromoTerms, order_total: Decimal) -> bool:
        return (
            promo.auto_apply_eligible
            and promo.is_active
            and order_total >= (promo.min_order_amount or ZERO)
        )

    def eligible_promos(self, promos: Iterable[PromoTerms], order_total: Decimal) -> List[PromoTerms]:
        return [promo for promo in promos if self.is_eligible(promo, order_total)]

    def estimate_savings(self, promo: PromoTerms, order_total: Decimal) -> Decimal:
        """
        Estimated saving used for ranking, capped at the order total.

        Free shipping is valued at its max_discount_amount, or the configured
        estimate when none is set, since the delivery fee is not known yet.
        """
        if promo.discount_type == PERCENTAGE:
            savings = PromoDiscountCalculator.percentage_discount(promo, order_total)
        elif promo.discount_type == FREE_SHIPPING:
            savings = promo.max_discount_amount or self.free_shipping_estimate
        elif promo.discount_type == BXGY:
            savings = promo.discount_value or self.bxgy_estimate
        else:
            savings = promo.discount_value
        return min(savings, order_total)

    def rank(self, promos: Iterable[PromoTerms], order_total: Decimal) -> List[PromoTerms]:
        """
        Eligible promos, best first.

        Ties on savings prefer percentage promos, then the larger raw
        discount_value, then the code alphabetically.
        """
        candidates = self.eligible_promos(promos, order_total)
        return sorted(
            candidates,
            key=lambda promo: (
                -self.estimate_savings(promo, order_total),
                0 if promo.discount_type == PERCENTAGE else 1,
                -promo.discount_value,
                promo.code,
            )
        )

    def select_best_promo(self, promos: Iterable[PromoTerms], order_total: Decimal) -> Optional[PromoTerms]:
        ranked = self.rank(promos, order_total)
        return ranked[0] if ranked else None
