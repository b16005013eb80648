"""
Checkout pricing: line items, delivery fee, promo discount and order total.
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from django.conf import settings

from apps.common.utils import to_money
from apps.products.models import Product
from apps.products.services import ProductService
from apps.promos.models import PromoCode
from apps.promos.services import (
    DiscountResult, PromoDiscountCalculator, PromoService, ShippingConditionService, ShippingOrderContext
)
from ..models import Order

logger = logging.getLogger(__name__)

ZERO = Decimal('0')


@dataclass(frozen=True)
class PricedItem:
    product: Product
    variants: tuple
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    special_instructions: str = ''

    def snapshot(self) -> Dict:
        """JSON-safe copy of what the customer bought"""
        return {
            'title_en': self.product.title_en,
            'title_ar': self.product.title_ar,
            'base_price': str(self.product.effective_price),
            'variants': [
                {'id': variant.id, 'title_en': variant.title_en, 'title_ar': variant.title_ar}
                for variant in self.variants
            ],
        }


@dataclass(frozen=True)
class OrderPricing:
    """Everything needed to show or persist an order's price"""
    order_type: str
    items: tuple
    subtotal: Decimal
    delivery_fee: Decimal
    discount_amount: Decimal = ZERO
    adjusted_delivery_fee: Decimal = ZERO
    total_amount: Decimal = ZERO
    promo: Optional[PromoCode] = None
    is_free_shipping: bool = False
    auto_applied: bool = False
    warnings: tuple = field(default_factory=tuple)

    def as_dict(self) -> Dict:
        return {
            'order_type': self.order_type,
            'items': [
                {
                    'product_id': item.product.id,
                    'variant_ids': [variant.id for variant in item.variants],
                    'quantity': item.quantity,
                    'unit_price': item.unit_price,
                    'total_price': item.total_price,
                    **item.snapshot(),
                }
                for item in self.items
            ],
            'subtotal': self.subtotal,
            'delivery_fee': self.delivery_fee,
            'discount_amount': self.discount_amount,
            'adjusted_delivery_fee': self.adjusted_delivery_fee,
            'total_amount': self.total_amount,
            'promo_code': self.promo.code if self.promo else None,
            'discount_type': self.promo.discount_type if self.promo else None,
            'is_free_shipping': self.is_free_shipping,
            'auto_applied': self.auto_applied,
            'warnings': list(self.warnings),
        }


class CheckoutService:
    """Price an order before it is created"""

    @staticmethod
    def get_delivery_fee(order_type: str) -> Decimal:
        pricing = settings.PRICING_CONFIG
        if order_type == Order.TYPE_PICKUP:
            return to_money(pricing.get('PICKUP_FEE', ZERO))
        return to_money(pricing['DELIVERY_FEE'])

    @staticmethod
    def order_total(subtotal: Decimal, delivery_fee: Decimal, discount_amount: Decimal) -> Decimal:
        """subtotal + delivery_fee - discount_amount, never negative"""
        return to_money(max(ZERO, subtotal + delivery_fee - discount_amount))

    @staticmethod
    def price_items(items: List[Dict]) -> Tuple[Optional[List[PricedItem]], str]:
        """
        Resolve products, variants and unit prices for request items.

        Returns (priced_items, error_message).
        """
        if not items:
            return None, "Order must contain at least one item"

        product_ids = {item.get('product_id') for item in items}
        products = Product.objects.in_bulk([pid for pid in product_ids if pid is not None])

        priced = []
        for item in items:
            quantity = item.get('quantity') or 0
            if item.get('product_id') is None or quantity <= 0:
                return None, "Each item must have product_id and a positive quantity"

            product = products.get(item['product_id'])
            if product is None:
                return None, f"Product {item['product_id']} not found"
            if not product.is_orderable:
                return None, f"{product.title_en} is not available"

            variants, error_msg = ProductService.resolve_selected_variants(product, list(item.get('variant_ids') or []))
            if variants is None:
                return None, error_msg
            for variant in variants:
                if variant.stock_quantity < quantity:
                    return None, f"Insufficient stock for {product.title_en} ({variant.title_en})"

            unit_price = to_money(ProductService.price_selection(product, variants))
            priced.append(PricedItem(
                product=product,
                variants=tuple(variants),
                quantity=quantity,
                unit_price=unit_price,
                total_price=to_money(unit_price * quantity),
                special_instructions=item.get('special_instructions') or '',
            ))
        return priced, ""

    @staticmethod
    def user_type(user) -> str:
        if user is not None and getattr(user, 'is_authenticated', False):
            return 'registered'
        return 'guest'

    @classmethod
    def shipping_context(cls, priced_items: List[PricedItem], subtotal: Decimal, user=None,
                         location: Optional[str] = None) -> ShippingOrderContext:
        return ShippingOrderContext(
            order_total=subtotal,
            items=tuple(
                {
                    'product_id': item.product.id,
                    'category_id': item.product.category_id,
                    'quantity': item.quantity,
                }
                for item in priced_items
            ),
            user_type=cls.user_type(user),
            location=location,
        )

    @classmethod
    def calculate(cls, items: List[Dict], order_type: str = Order.TYPE_DELIVERY, promo_code: Optional[str] = None,
                  user=None, auto_apply: bool = True, location: Optional[str] = None) -> Tuple[Optional[OrderPricing], str]:
        """
        Price an order. Returns (pricing, error_message).

        An explicit promo code must validate or the whole calculation fails.
        Without one, the best auto-apply promo is used when auto_apply is set.
        """
        priced_items, error_msg = cls.price_items(items)
        if priced_items is None:
            return None, error_msg

        subtotal = to_money(sum((item.total_price for item in priced_items), ZERO))
        delivery_fee = cls.get_delivery_fee(order_type)
        shipping_context = cls.shipping_context(priced_items, subtotal, user, location)

        promo = None
        auto_applied = False
        warnings = []
        if promo_code:
            promo, error_msg = PromoService.validate_promo_code(promo_code, subtotal, user=user)
            if promo is None:
                return None, error_msg
            if promo.discount_type == PromoCode.TYPE_FREE_SHIPPING:
                if order_type == Order.TYPE_PICKUP:
                    return None, "Free shipping promo codes apply to delivery orders only"
                if not ShippingConditionService.check_order(promo, shipping_context):
                    return None, "Order does not qualify for free shipping"
        elif auto_apply:
            def qualifies(candidate: PromoCode) -> bool:
                if candidate.discount_type != PromoCode.TYPE_FREE_SHIPPING:
                    return True
                if ShippingConditionService.check_order(candidate, shipping_context):
                    return True
                warnings.append(f"{candidate.code} skipped: order does not qualify for free shipping")
                return False

            promo = PromoService.find_best_auto_apply_promo(
                subtotal, user=user, exclude_free_shipping=order_type == Order.TYPE_PICKUP,
                qualifies=qualifies,
            )
            auto_applied = promo is not None

        if promo is not None:
            result = PromoDiscountCalculator.apply_promo(promo.terms, subtotal, delivery_fee)
        else:
            result = DiscountResult(discount_amount=to_money(ZERO), adjusted_delivery_fee=delivery_fee)

        pricing = OrderPricing(
            order_type=order_type,
            items=tuple(priced_items),
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            discount_amount=result.discount_amount,
            adjusted_delivery_fee=result.adjusted_delivery_fee,
            total_amount=cls.order_total(subtotal, delivery_fee, result.discount_amount),
            promo=promo,
            is_free_shipping=result.is_free_shipping,
            auto_applied=auto_applied,
            warnings=tuple(warnings),
        )
        logger.debug(
            f"Priced order: subtotal={pricing.subtotal} delivery={pricing.delivery_fee} "
            f"discount={pricing.discount_amount} total={pricing.total_amount} "
            f"promo={promo.code if promo else None}"
        )
        return pricing, ""
