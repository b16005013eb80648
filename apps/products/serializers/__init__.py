"""
Product serializers module.
"""
from .product_serializers import (
    CategorySerializer, ProductVariantSerializer, ProductListSerializer, PricePreviewSerializer
)

__all__ = [
    'CategorySerializer',
    'ProductVariantSerializer',
    'ProductListSerializer',
    'PricePreviewSerializer',
]
