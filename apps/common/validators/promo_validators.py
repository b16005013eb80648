"""
Promo code validators.
"""
import re

from django.utils import timezone
from rest_framework import serializers

PROMO_CODE_PATTERN = re.compile(r'^[A-Z0-9_-]+$', re.IGNORECASE)
PROMO_CODE_MIN_LENGTH = 3


def validate_promo_code_format(value):
    """
    Validate and normalize a promo code.

    Codes are at least 3 characters of letters, digits, underscores and
    hyphens. Returns the upper-cased code.
    """
    code = (value or '').strip()
    if len(code) < PROMO_CODE_MIN_LENGTH:
        raise serializers.ValidationError(
            f"Code must be at least {PROMO_CODE_MIN_LENGTH} characters long."
        )
    if not PROMO_CODE_PATTERN.match(code):
        raise serializers.ValidationError(
            "Code can only contain letters, numbers, underscores, and hyphens."
        )
    return code.upper()


def validate_discount_value(discount_type, discount_value):
    """
    Object-level check of discount_value against discount_type.

    Free shipping promos carry no amount of their own, so zero is allowed
    for them. Every other type needs a positive value and percentages are
    capped at 100.
    """
    if discount_value is None:
        raise serializers.ValidationError({'discount_value': 'Discount value is required.'})
    if discount_type == 'free_shipping':
        if discount_value < 0:
            raise serializers.ValidationError({'discount_value': 'Discount value must not be negative.'})
        return discount_value
    if discount_value <= 0:
        raise serializers.ValidationError({'discount_value': 'Discount value must be a positive number.'})
    if discount_type == 'percentage' and discount_value > 100:
        raise serializers.ValidationError({'discount_value': 'Percentage discount cannot exceed 100%.'})
    return discount_value


def validate_validity_window(valid_from, valid_until, is_create=False):
    """
    valid_until must come strictly after valid_from. New promos must also
    end in the future; updates may keep a past end date.
    """
    if valid_from is None or valid_until is None:
        return
    if valid_from >= valid_until:
        raise serializers.ValidationError({'valid_until': 'Valid until date must be after valid from date.'})
    if is_create and valid_until <= timezone.now():
        raise serializers.ValidationError({'valid_until': 'Valid until date must be in the future.'})


def validate_min_order_amount(value):
    if value is not None and value < 0:
        raise serializers.ValidationError("Minimum order amount must be a non-negative number.")
    return value


def validate_max_discount_amount(value):
    if value is not None and value <= 0:
        raise serializers.ValidationError("Maximum discount amount must be a positive number.")
    return value


def validate_usage_limit(value):
    if value is not None and value <= 0:
        raise serializers.ValidationError("Usage limit must be a positive integer.")
    return value
