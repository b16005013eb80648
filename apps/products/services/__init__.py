"""
Product services module.
"""
from .variant_pricing import VariantPricing, VariantPriceResolver
from .product_service import ProductService

__all__ = [
    'VariantPricing',
    'VariantPriceResolver',
    'ProductService',
]
