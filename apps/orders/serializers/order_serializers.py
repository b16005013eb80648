"""
Order serializers for list, detail, pricing and create operations.
"""
from rest_framework import serializers

from apps.common.validators import validate_quantity
from ..models import Order, OrderItem, OrderDiscount


class OrderItemSerializer(serializers.ModelSerializer):
    """Serializer for order items"""
    variant_ids = serializers.ListField(child=serializers.IntegerField(), read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            'id', 'product', 'variant', 'variant_ids', 'quantity', 'unit_price',
            'total_price', 'product_info', 'special_instructions'
        ]


class OrderDiscountSerializer(serializers.ModelSerializer):
    """Serializer for order discounts"""
    promo_code = serializers.CharField(source='promo_code.code', read_only=True, allow_null=True)

    class Meta:
        model = OrderDiscount
        fields = [
            'promo_code', 'discount_type', 'discount_amount', 'description', 'discount_details'
        ]


class OrderSerializer(serializers.ModelSerializer):
    """Order detail with items and discount lines"""

    items = OrderItemSerializer(many=True, read_only=True)
    discounts = OrderDiscountSerializer(many=True, read_only=True)
    promo_code = serializers.CharField(source='promo_code.code', read_only=True, allow_null=True)
    is_cancellable = serializers.BooleanField(read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'order_number', 'order_type', 'location', 'status', 'subtotal', 'delivery_fee',
            'discount_amount', 'total_amount', 'promo_code', 'special_instructions',
            'cancellation_reason', 'cancelled_at', 'is_cancellable', 'items', 'discounts',
            'created_at', 'updated_at'
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Simplified serializer for order listing"""
    promo_code = serializers.CharField(source='promo_code.code', read_only=True, allow_null=True)
    item_count = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'id', 'order_number', 'order_type', 'status', 'subtotal', 'delivery_fee',
            'discount_amount', 'total_amount', 'promo_code', 'item_count', 'created_at'
        ]

    def get_item_count(self, obj):
        return sum(item.quantity for item in obj.items.all())


class OrderItemInputSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(validators=[validate_quantity])
    variant_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1), required=False, default=list
    )
    special_instructions = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')

    def validate_variant_ids(self, value):
        if len(set(value)) != len(value):
            raise serializers.ValidationError("A variant can only be selected once per item")
        return value


class OrderCalculateSerializer(serializers.Serializer):
    """Cart pricing request; also the base for order creation"""

    items = OrderItemInputSerializer(many=True, allow_empty=False)
    order_type = serializers.ChoiceField(choices=Order.TYPE_CHOICES, required=False, default=Order.TYPE_DELIVERY)
    promo_code = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True, default=None)
    auto_apply = serializers.BooleanField(required=False, default=True)
    location = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True, default=None)

    def validate_promo_code(self, value):
        if not value:
            return None
        return value.strip() or None

    def validate_location(self, value):
        return value or None


class OrderCreateSerializer(OrderCalculateSerializer):
    special_instructions = serializers.CharField(required=False, allow_blank=True, default='')


class OrderListQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=['all'] + [choice for choice, _ in Order.STATUS_CHOICES], required=False, default='all'
    )
    keyword = serializers.CharField(required=False, allow_blank=True, default='')
    pageIndex = serializers.IntegerField(required=False, default=0, min_value=0)
    pageSize = serializers.IntegerField(required=False, default=10, min_value=1, max_value=100)


class ApplyPromoSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=50, trim_whitespace=True)


class OrderCancelSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
