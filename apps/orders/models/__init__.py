"""
Order models module.
"""
from .order import Order
from .order_item import OrderItem
from .order_discount import OrderDiscount

__all__ = [
    'Order',
    'OrderItem',
    'OrderDiscount',
]
