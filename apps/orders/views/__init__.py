"""
Order views module.

All views are exported from this module to maintain backward compatibility.
"""
from .order_views import (
    CalculateOrderView, OrderListCreateView, OrderDetailView, CancelOrderView, ApplyPromoView
)

__all__ = [
    'CalculateOrderView',
    'OrderListCreateView',
    'OrderDetailView',
    'CancelOrderView',
    'ApplyPromoView',
]
