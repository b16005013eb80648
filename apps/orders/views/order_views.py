"""
Order pricing, creation and query views.
"""
import logging

from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from apps.common.utils import success_response, error_response
from ..serializers import (
    OrderSerializer, OrderListSerializer, OrderCalculateSerializer, OrderCreateSerializer,
    OrderListQuerySerializer, ApplyPromoSerializer, OrderCancelSerializer
)
from ..services import CheckoutService, OrderService

logger = logging.getLogger(__name__)


class CalculateOrderView(APIView):
    """POST /api/orders/calculate/ prices a cart without creating an order"""
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = OrderCalculateSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid order data", serializer.errors)

        data = serializer.validated_data
        user = request.user if request.user.is_authenticated else None
        pricing, error_msg = CheckoutService.calculate(
            data['items'],
            order_type=data['order_type'],
            promo_code=data['promo_code'],
            user=user,
            auto_apply=data['auto_apply'],
            location=data['location'],
        )
        if pricing is None:
            return error_response(error_msg)
        return success_response(pricing.as_dict(), "Order total calculated")


class OrderListCreateView(APIView):
    """GET lists the caller's orders, POST creates one"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        query = OrderListQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return error_response("Invalid query parameters", query.errors)

        orders = OrderService.get_user_orders(request.user, query.validated_data)
        return success_response(OrderListSerializer(orders, many=True).data)

    def post(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        if not serializer.is_valid():
            logger.info(f"Order data rejected for user {request.user.id}: {serializer.errors}")
            return error_response("Invalid order data", serializer.errors)

        order, error_msg = OrderService.create_order(request.user, serializer.validated_data)
        if order is None:
            return error_response(error_msg)

        return success_response(
            OrderSerializer(order).data, "Order created successfully", status.HTTP_201_CREATED
        )


class OrderDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, order_number):
        order = OrderService.get_order_detail(request.user, order_number)
        if order is None:
            return error_response("Order not found", status_code=status.HTTP_404_NOT_FOUND)
        return success_response(OrderSerializer(order).data)


class CancelOrderView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, order_number):
        serializer = OrderCancelSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid request", serializer.errors)

        success, message = OrderService.cancel_order(
            request.user, order_number, serializer.validated_data['reason']
        )
        if not success:
            return error_response(message)
        return success_response(None, message)


class ApplyPromoView(APIView):
    """POST /api/orders/<order_number>/apply-promo/"""
    permission_classes = [IsAuthenticated]

    def post(self, request, order_number):
        serializer = ApplyPromoSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Promo code is required", serializer.errors)

        order, error_msg = OrderService.apply_promo_to_order(
            request.user, order_number, serializer.validated_data['code']
        )
        if order is None:
            return error_response(error_msg)
        return success_response(OrderSerializer(order).data, "Promo code applied")
