"""
Product views module.
"""
from .product_views import ProductListView, ProductDetailView, ProductPriceView

__all__ = [
    'ProductListView',
    'ProductDetailView',
    'ProductPriceView',
]
