"""
Product models module.
"""
from .category import Category
from .product import Product
from .product_variant import ProductVariant

__all__ = [
    'Category',
    'Product',
    'ProductVariant',
]
