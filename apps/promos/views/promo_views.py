"""
Customer-facing promo views: validation, auto-apply and free-shipping checks.
"""
from django.conf import settings
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from apps.common.utils import success_response, error_response
from ..models import PromoCode
from ..serializers import (
    PublicPromoSerializer, PromoValidateSerializer, AutoApplyRequestSerializer, ShippingValidateSerializer
)
from ..services import PromoService, ShippingConditionService, ShippingOrderContext


def _discount_payload(promo, order_total, delivery_fee):
    result = PromoService.preview_discount(promo, order_total, delivery_fee)
    subtotal_discount = 0 if result.is_free_shipping else result.discount_amount
    return {
        'promo_code': PublicPromoSerializer(promo).data,
        'discount_amount': result.discount_amount,
        'adjusted_delivery_fee': result.adjusted_delivery_fee,
        'is_free_shipping': result.is_free_shipping,
        'final_total': max(order_total - subtotal_discount, 0) + result.adjusted_delivery_fee,
    }


class ValidatePromoView(APIView):
    """POST /api/promos/validate/ for signed-in customers"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = PromoValidateSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response('Validation failed', serializer.errors)

        data = serializer.validated_data
        promo, error_msg = PromoService.validate_promo_code(data['code'], data['order_total'], user=request.user)
        if promo is None:
            return error_response(error_msg)

        delivery_fee = data.get('delivery_fee')
        if delivery_fee is None:
            delivery_fee = settings.PRICING_CONFIG['DELIVERY_FEE']
        return success_response(
            _discount_payload(promo, data['order_total'], delivery_fee), 'Promo code is valid'
        )


class ValidatePromoGuestView(ValidatePromoView):
    """POST /api/promos/validate-guest/; per-user limits do not apply"""
    permission_classes = [AllowAny]
    authentication_classes = []


class AvailablePromosView(APIView):
    """GET /api/promos/available/"""
    permission_classes = [AllowAny]

    def get(self, request):
        promos = PromoService.get_available_promos()
        return success_response(
            PublicPromoSerializer(promos, many=True).data, 'Available promo codes retrieved'
        )


class AutoApplyPromoView(APIView):
    """POST /api/promos/auto-apply/ picks the best auto-apply promo"""
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = AutoApplyRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response('Validation failed', serializer.errors)

        order_total = serializer.validated_data['order_total']
        user = request.user if request.user.is_authenticated else None
        promo = PromoService.find_best_auto_apply_promo(order_total, user=user)
        if promo is None:
            return success_response(None, 'No auto-apply promo available')

        delivery_fee = serializer.validated_data.get('delivery_fee')
        if delivery_fee is None:
            delivery_fee = settings.PRICING_CONFIG['DELIVERY_FEE']
        return success_response(
            _discount_payload(promo, order_total, delivery_fee), 'Auto-apply promo found'
        )


class ValidateShippingView(APIView):
    """POST /api/promos/validate-shipping/"""
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = ShippingValidateSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response('Promo code and order total are required', serializer.errors)

        data = serializer.validated_data
        promo = PromoCode.objects.currently_valid().filter(
            code=PromoService.normalize_code(data['promo_code']),
            discount_type=PromoCode.TYPE_FREE_SHIPPING,
        ).first()
        if promo is None:
            return error_response(
                'Free shipping promo code not found or not valid', status_code=status.HTTP_404_NOT_FOUND
            )

        context = ShippingOrderContext(
            order_total=data['order_total'],
            items=tuple(dict(item) for item in data['items']),
            user_type=data['user_type'],
            location=data['location'] or None,
        )
        qualifies = ShippingConditionService.check_order(promo, context)
        return success_response(
            {'qualifies': qualifies},
            'Order qualifies for free shipping' if qualifies else 'Order does not qualify for free shipping'
        )
