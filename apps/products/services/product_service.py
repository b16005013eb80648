"""
Product service for catalogue reads and selection pricing.
"""
import logging
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Tuple

from django.db.models import Prefetch, Q

from apps.common.utils import to_money
from ..models import Product, ProductVariant
from .variant_pricing import VariantPriceResolver

logger = logging.getLogger(__name__)


class ProductService:
    """Service for product queries and variant pricing"""

    @staticmethod
    def active_products(keyword: str = '', category_id: Optional[int] = None):
        """Active products with their active variants prefetched"""
        query = Q(is_active=True)
        if keyword:
            query &= Q(title_en__icontains=keyword) | Q(title_ar__icontains=keyword)
        if category_id:
            query &= Q(category_id=category_id)
        return Product.objects.filter(query).select_related('category').prefetch_related(
            Prefetch('variants', queryset=ProductVariant.objects.filter(is_active=True))
        ).order_by('-is_featured', '-created_at')

    @staticmethod
    def price_selection(product: Product, variants: Sequence[ProductVariant]) -> Decimal:
        """Unit price of a product with the given variants selected, in order"""
        return VariantPriceResolver.accumulate_price(
            product.effective_price,
            [variant.pricing for variant in variants]
        )

    @staticmethod
    def resolve_selected_variants(product: Product, variant_ids: List[int]) -> Tuple[Optional[List[ProductVariant]], str]:
        """
        Load variants by id, keeping request order.

        Returns (variants, error_message).
        """
        if not variant_ids:
            return [], ""
        if len(set(variant_ids)) != len(variant_ids):
            return None, "Duplicate variant in selection"

        found = {
            variant.id: variant
            for variant in ProductVariant.objects.filter(product=product, id__in=variant_ids)
        }
        variants = []
        for variant_id in variant_ids:
            variant = found.get(variant_id)
            if variant is None:
                return None, f"Variant {variant_id} does not belong to product {product.id}"
            if not variant.is_active:
                return None, f"Variant {variant.title_en} is not available"
            variants.append(variant)
        return variants, ""

    @staticmethod
    def get_product_detail(product: Product) -> Dict:
        """Product data with each active variant's display price"""
        base = product.effective_price
        variants = []
        for variant in product.variants.all():
            if not variant.is_active:
                continue
            variants.append({
                'id': variant.id,
                'title_en': variant.title_en,
                'title_ar': variant.title_ar,
                'price': variant.price,
                'price_modifier': variant.price_modifier,
                'price_behavior': variant.price_behavior,
                'stock_quantity': variant.stock_quantity,
                'display_price': to_money(VariantPriceResolver.resolve_unit_price(base, variant.pricing)),
            })
        return {
            'id': product.id,
            'title_en': product.title_en,
            'title_ar': product.title_ar,
            'description_en': product.description_en,
            'description_ar': product.description_ar,
            'base_price': product.base_price,
            'sale_price': product.sale_price,
            'effective_price': product.effective_price,
            'stock_status': product.stock_status,
            'category': product.category.name if product.category else None,
            'variants': variants,
        }
