"""
Core order service for order creation, query, cancellation and late promo application.
"""
import logging
import uuid
from typing import Dict, Optional, Tuple

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.common.exceptions import InsufficientStockError, ServiceError, CheckoutError
from apps.products.models import ProductVariant
from apps.promos.models import PromoCode
from apps.promos.services import PromoDiscountCalculator, PromoService, ShippingConditionService, ShippingOrderContext
from ..models import Order, OrderItem, OrderDiscount
from .checkout_service import CheckoutService, OrderPricing

logger = logging.getLogger(__name__)


class OrderService:
    """Service class for core order business logic"""

    @staticmethod
    def generate_order_number() -> str:
        return f"ORD-{timezone.now():%Y%m%d}-{uuid.uuid4().hex[:8].upper()}"

    @staticmethod
    def _record_discount(order: Order, promo: PromoCode, discount_amount, subtotal, delivery_fee,
                         adjusted_delivery_fee, auto_applied: bool = False) -> OrderDiscount:
        return OrderDiscount.objects.create(
            order=order,
            promo_code=promo,
            discount_type=promo.discount_type,
            discount_amount=discount_amount,
            description=f"Promo {promo.code}",
            discount_details={
                'subtotal': str(subtotal),
                'delivery_fee': str(delivery_fee),
                'adjusted_delivery_fee': str(adjusted_delivery_fee),
                'auto_applied': auto_applied,
            },
        )

    @staticmethod
    def _take_stock(variant: ProductVariant, quantity: int):
        updated = ProductVariant.objects.filter(
            pk=variant.pk, stock_quantity__gte=quantity
        ).update(stock_quantity=F('stock_quantity') - quantity)
        if not updated:
            raise InsufficientStockError(f"Insufficient stock for {variant.title_en}")

    @classmethod
    @transaction.atomic
    def _persist_order(cls, user, pricing: OrderPricing, data: Dict) -> Order:
        order = Order.objects.create(
            order_number=cls.generate_order_number(),
            user=user,
            order_type=pricing.order_type,
            location=data.get('location') or '',
            subtotal=pricing.subtotal,
            delivery_fee=pricing.delivery_fee,
            discount_amount=pricing.discount_amount,
            total_amount=pricing.total_amount,
            promo_code=pricing.promo,
            special_instructions=data.get('special_instructions') or '',
        )

        for item in pricing.items:
            for variant in item.variants:
                cls._take_stock(variant, item.quantity)
            OrderItem.objects.create(
                order=order,
                product=item.product,
                variant=item.variants[0] if item.variants else None,
                quantity=item.quantity,
                unit_price=item.unit_price,
                total_price=item.total_price,
                product_info=item.snapshot(),
                special_instructions=item.special_instructions,
            )

        if pricing.promo is not None:
            PromoService.redeem(pricing.promo, user, order, pricing.discount_amount)
            cls._record_discount(
                order, pricing.promo, pricing.discount_amount, pricing.subtotal,
                pricing.delivery_fee, pricing.adjusted_delivery_fee, pricing.auto_applied
            )
        return order

    @classmethod
    def create_order(cls, user, order_data: Dict) -> Tuple[Optional[Order], str]:
        """
        Price and create an order.

        Stock, the order rows and the promo redemption are committed together
        or not at all. Returns (Order, error_message).
        """
        pricing, error_msg = CheckoutService.calculate(
            order_data['items'],
            order_type=order_data.get('order_type', Order.TYPE_DELIVERY),
            promo_code=order_data.get('promo_code'),
            user=user,
            auto_apply=order_data.get('auto_apply', True),
            location=order_data.get('location'),
        )
        if pricing is None:
            return None, error_msg

        try:
            order = cls._persist_order(user, pricing, order_data)
        except ServiceError as e:
            logger.warning(f"Order creation rolled back for user {getattr(user, 'id', None)}: {e}")
            return None, e.message

        logger.info(
            f"Order {order.order_number} created: total={order.total_amount} "
            f"promo={pricing.promo.code if pricing.promo else None}"
        )
        return order, ""

    @staticmethod
    def get_user_orders(user, filters: Dict):
        """User's orders with status/keyword filtering and paging"""
        queryset = Order.objects.filter(user=user).prefetch_related('items', 'discounts').select_related('promo_code')

        status = filters.get('status')
        if status and status != 'all':
            queryset = queryset.filter(status=status)

        keyword = filters.get('keyword')
        if keyword:
            queryset = queryset.filter(order_number__icontains=keyword)

        page_index = int(filters.get('pageIndex', 0))
        page_size = int(filters.get('pageSize', 10))
        start = page_index * page_size
        return queryset.order_by('-created_at')[start:start + page_size]

    @staticmethod
    def get_order_detail(user, order_number: str) -> Optional[Order]:
        return Order.objects.select_related('promo_code').prefetch_related('items', 'discounts').filter(
            order_number=order_number, user=user
        ).first()

    @staticmethod
    @transaction.atomic
    def cancel(order: Order, reason: str):
        """Cancel a locked order row: restock variants and release its promo usage"""
        for item in order.items.all():
            variant_ids = item.variant_ids
            if variant_ids:
                ProductVariant.objects.filter(id__in=variant_ids).update(
                    stock_quantity=F('stock_quantity') + item.quantity
                )
        PromoService.release(order)
        order.status = Order.STATUS_CANCELLED
        order.cancelled_at = timezone.now()
        order.cancellation_reason = reason or 'Cancelled by customer'
        order.save(update_fields=['status', 'cancelled_at', 'cancellation_reason', 'updated_at'])

    @classmethod
    def cancel_order(cls, user, order_number: str, reason: str = '') -> Tuple[bool, str]:
        """Cancel a pending or confirmed order, restoring stock and promo usage"""
        with transaction.atomic():
            order = Order.objects.select_for_update().filter(order_number=order_number, user=user).first()
            if order is None:
                return False, "Order not found"
            if not order.is_cancellable:
                return False, "Order cannot be cancelled in current status"
            cls.cancel(order, reason)

        logger.info(f"Order {order_number} cancelled")
        return True, "Order cancelled successfully"

    @classmethod
    def apply_promo_to_order(cls, user, order_number: str, code: str) -> Tuple[Optional[Order], str]:
        """
        Apply a promo code to a pending order that has none yet.

        The discount is computed from the stored subtotal and delivery fee.
        Returns (Order, error_message).
        """
        try:
            with transaction.atomic():
                order = Order.objects.select_for_update().filter(order_number=order_number, user=user).first()
                if order is None:
                    return None, "Order not found"
                if order.status != Order.STATUS_PENDING:
                    return None, "Promo codes can only be applied to pending orders"
                if order.promo_code_id is not None:
                    return None, "Order already has a promo code"

                promo, error_msg = PromoService.validate_promo_code(code, order.subtotal, user=user)
                if promo is None:
                    return None, error_msg

                if promo.discount_type == PromoCode.TYPE_FREE_SHIPPING:
                    if order.order_type == Order.TYPE_PICKUP:
                        return None, "Free shipping promo codes apply to delivery orders only"
                    context = ShippingOrderContext(
                        order_total=order.subtotal,
                        items=tuple(
                            {
                                'product_id': item.product_id,
                                'category_id': item.product.category_id,
                                'quantity': item.quantity,
                            }
                            for item in order.items.select_related('product')
                        ),
                        user_type=CheckoutService.user_type(user),
                        location=order.location or None,
                    )
                    if not ShippingConditionService.check_order(promo, context):
                        return None, "Order does not qualify for free shipping"

                result = PromoDiscountCalculator.apply_promo(promo.terms, order.subtotal, order.delivery_fee)
                if result.discount_amount <= 0 and not result.is_free_shipping:
                    raise CheckoutError("Promo code gives no discount for this order")

                PromoService.redeem(promo, user, order, result.discount_amount)
                order.promo_code = promo
                order.discount_amount = result.discount_amount
                order.total_amount = CheckoutService.order_total(
                    order.subtotal, order.delivery_fee, result.discount_amount
                )
                order.save(update_fields=['promo_code', 'discount_amount', 'total_amount', 'updated_at'])
                cls._record_discount(
                    order, promo, result.discount_amount, order.subtotal,
                    order.delivery_fee, result.adjusted_delivery_fee
                )
        except ServiceError as e:
            return None, e.message

        logger.info(f"Promo {promo.code} applied to order {order_number}: discount={order.discount_amount}")
        return order, ""
