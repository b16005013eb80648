"""
Promo models module.
"""
from .promo_code import PromoCode
from .promo_usage import PromoCodeUsage
from .shipping_condition import PromoConditionGroup, PromoShippingCondition

__all__ = [
    'PromoCode',
    'PromoCodeUsage',
    'PromoConditionGroup',
    'PromoShippingCondition',
]
