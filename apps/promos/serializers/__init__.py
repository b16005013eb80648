"""
Promo serializers module.
"""
from .promo_serializers import (
    PromoCodeSerializer, PromoCodeListSerializer, PublicPromoSerializer, PromoListQuerySerializer,
    PromoValidateSerializer, AutoApplyRequestSerializer, ShippingValidateSerializer,
    ShippingConditionGroupInputSerializer, UsageReportQuerySerializer
)

__all__ = [
    'PromoCodeSerializer',
    'PromoCodeListSerializer',
    'PublicPromoSerializer',
    'PromoListQuerySerializer',
    'PromoValidateSerializer',
    'AutoApplyRequestSerializer',
    'ShippingValidateSerializer',
    'ShippingConditionGroupInputSerializer',
    'UsageReportQuerySerializer',
]
