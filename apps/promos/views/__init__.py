"""
Promo views module.
"""
from .admin_promo_views import (
    PromoListCreateView, PromoDetailView, PromoToggleStatusView, PromoStatsView,
    PromoUsageReportView, PromoShippingConditionsView, PromoShippingConditionGroupView
)
from .promo_views import (
    ValidatePromoView, ValidatePromoGuestView, AvailablePromosView, AutoApplyPromoView, ValidateShippingView
)

__all__ = [
    'PromoListCreateView',
    'PromoDetailView',
    'PromoToggleStatusView',
    'PromoStatsView',
    'PromoUsageReportView',
    'PromoShippingConditionsView',
    'PromoShippingConditionGroupView',
    'ValidatePromoView',
    'ValidatePromoGuestView',
    'AvailablePromosView',
    'AutoApplyPromoView',
    'ValidateShippingView',
]
