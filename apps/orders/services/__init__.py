"""
Order services module.

All services are exported from this module to maintain backward compatibility.
"""
from .checkout_service import CheckoutService, OrderPricing, PricedItem
from .order_service import OrderService

__all__ = [
    'CheckoutService',
    'OrderPricing',
    'PricedItem',
    'OrderService',
]
