"""
Promo code serializers for admin management and checkout validation.
"""
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from rest_framework import serializers

from apps.common.validators import (
    validate_promo_code_format, validate_discount_value, validate_validity_window,
    validate_min_order_amount, validate_max_discount_amount, validate_usage_limit
)
from ..models import PromoCode, PromoConditionGroup, PromoShippingCondition


class PromoCodeSerializer(serializers.ModelSerializer):
    """Admin create/update/detail serializer"""
    status = serializers.SerializerMethodField()

    class Meta:
        model = PromoCode
        fields = [
            'id', 'code', 'title_en', 'title_ar', 'description_en', 'description_ar',
            'discount_type', 'discount_value', 'min_order_amount', 'max_discount_amount',
            'usage_limit', 'usage_count', 'user_usage_limit', 'auto_apply_eligible',
            'is_active', 'valid_from', 'valid_until', 'status', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'usage_count', 'status', 'created_at', 'updated_at']
        extra_kwargs = {
            # uniqueness is checked case-insensitively in validate_code
            'code': {'validators': []},
        }

    def get_status(self, obj):
        return obj.get_status()

    def validate_code(self, value):
        code = validate_promo_code_format(value)
        duplicates = PromoCode.objects.filter(code=code)
        if self.instance is not None:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise serializers.ValidationError("Promo code already exists.")
        return code

    def validate_min_order_amount(self, value):
        return validate_min_order_amount(value)

    def validate_max_discount_amount(self, value):
        return validate_max_discount_amount(value)

    def validate_usage_limit(self, value):
        return validate_usage_limit(value)

    def validate_user_usage_limit(self, value):
        if value is not None and value <= 0:
            raise serializers.ValidationError("User usage limit must be a positive integer.")
        return value

    def validate(self, attrs):
        instance = self.instance

        def current(name):
            if name in attrs:
                return attrs[name]
            return getattr(instance, name, None)

        discount_type = current('discount_type')
        validate_discount_value(discount_type, current('discount_value'))
        validate_validity_window(current('valid_from'), current('valid_until'), is_create=instance is None)

        if instance is not None and 'discount_type' in attrs and attrs['discount_type'] != instance.discount_type:
            if attrs['discount_type'] != PromoCode.TYPE_FREE_SHIPPING and instance.condition_groups.exists():
                raise serializers.ValidationError({
                    'discount_type': 'Remove shipping conditions before changing the discount type.'
                })
        return attrs


class PromoCodeListSerializer(serializers.ModelSerializer):
    status = serializers.SerializerMethodField()

    class Meta:
        model = PromoCode
        fields = [
            'id', 'code', 'title_en', 'title_ar', 'discount_type', 'discount_value',
            'min_order_amount', 'max_discount_amount', 'usage_limit', 'usage_count',
            'user_usage_limit', 'auto_apply_eligible', 'is_active', 'valid_from',
            'valid_until', 'status', 'created_at'
        ]

    def get_status(self, obj):
        return obj.get_status(self.context.get('now'))


class PublicPromoSerializer(serializers.ModelSerializer):
    """Fields customers may see for available promos"""

    class Meta:
        model = PromoCode
        fields = [
            'code', 'title_en', 'title_ar', 'description_en', 'description_ar',
            'discount_type', 'discount_value', 'min_order_amount', 'max_discount_amount',
            'valid_until'
        ]


class PromoListQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True, default='')
    status = serializers.ChoiceField(
        choices=['all', 'active', 'inactive', 'expired', 'upcoming'], required=False, default='all'
    )
    type = serializers.ChoiceField(
        choices=['all'] + [choice for choice, _ in PromoCode.DISCOUNT_TYPE_CHOICES],
        required=False, default='all'
    )
    sort = serializers.ChoiceField(
        choices=['created_at', 'code', 'discount_value', 'usage_count', 'valid_from', 'valid_until'],
        required=False, default='created_at'
    )
    order = serializers.ChoiceField(choices=['asc', 'desc'], required=False, default='desc')
    page = serializers.IntegerField(required=False, default=1, min_value=1)
    limit = serializers.IntegerField(required=False, default=10, min_value=1, max_value=100)


class PromoValidateSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=50, trim_whitespace=True)
    order_total = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0'), default=Decimal('0'))
    delivery_fee = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal('0'), required=False, allow_null=True
    )


class AutoApplyRequestSerializer(serializers.Serializer):
    order_total = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0'))
    delivery_fee = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal('0'), required=False, allow_null=True
    )


class ShippingItemSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(required=False)
    category_id = serializers.IntegerField(required=False, allow_null=True)
    quantity = serializers.IntegerField(min_value=0, default=0)


class ShippingValidateSerializer(serializers.Serializer):
    promo_code = serializers.CharField(max_length=50)
    order_total = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0'))
    items = ShippingItemSerializer(many=True, required=False, default=list)
    user_type = serializers.CharField(max_length=30, required=False, default='guest')
    location = serializers.CharField(max_length=100, required=False, allow_null=True, allow_blank=True, default=None)


class ShippingConditionInputSerializer(serializers.Serializer):
    condition_type = serializers.ChoiceField(choices=PromoShippingCondition.CONDITION_TYPE_CHOICES)
    condition_operator = serializers.ChoiceField(choices=PromoShippingCondition.OPERATOR_CHOICES, default='>=')
    condition_value = serializers.CharField(max_length=255)
    condition_value_numeric = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, allow_null=True, default=None
    )


class ShippingConditionGroupInputSerializer(serializers.Serializer):
    logic_operator = serializers.ChoiceField(choices=PromoConditionGroup.LOGIC_CHOICES, default='AND')
    conditions = ShippingConditionInputSerializer(many=True, allow_empty=False)


class UsageReportQuerySerializer(serializers.Serializer):
    start_date = serializers.DateTimeField(required=False, allow_null=True, default=None)
    end_date = serializers.DateTimeField(required=False, allow_null=True, default=None)
    promo_code_id = serializers.IntegerField(required=False, allow_null=True, default=None, min_value=1)
    format = serializers.ChoiceField(choices=['json', 'csv'], required=False, default='json')

    def validate(self, attrs):
        start, end = attrs.get('start_date'), attrs.get('end_date')
        if start and end:
            if end <= start:
                raise serializers.ValidationError({'end_date': 'End date must be after start date.'})
            max_days = settings.PRICING_CONFIG.get('USAGE_REPORT_MAX_DAYS', 365)
            if end - start > timedelta(days=max_days):
                raise serializers.ValidationError({'end_date': f'Date range cannot exceed {max_days} days.'})
        return attrs
