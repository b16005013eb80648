"""
Order serializers module.

All serializers are exported from this module to maintain backward compatibility.
"""
from .order_serializers import (
    OrderItemSerializer, OrderDiscountSerializer, OrderSerializer, OrderListSerializer,
    OrderItemInputSerializer, OrderCalculateSerializer, OrderCreateSerializer,
    OrderListQuerySerializer, ApplyPromoSerializer, OrderCancelSerializer
)

__all__ = [
    'OrderItemSerializer',
    'OrderDiscountSerializer',
    'OrderSerializer',
    'OrderListSerializer',
    'OrderItemInputSerializer',
    'OrderCalculateSerializer',
    'OrderCreateSerializer',
    'OrderListQuerySerializer',
    'ApplyPromoSerializer',
    'OrderCancelSerializer',
]
