"""
Promo services module.
"""
from .promo_calculator import PromoTerms, DiscountResult, PromoDiscountCalculator
from .auto_apply import AutoApplyPromoSelector
from .shipping_conditions import ShippingConditionService, ShippingOrderContext
from .promo_service import PromoService

__all__ = [
    'PromoTerms',
    'DiscountResult',
    'PromoDiscountCalculator',
    'AutoApplyPromoSelector',
    'ShippingConditionService',
    'ShippingOrderContext',
    'PromoService',
]
