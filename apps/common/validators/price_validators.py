"""
Price and quantity validators.
"""
from decimal import Decimal, InvalidOperation
from typing import Optional

from rest_framework import serializers


def parse_optional_decimal(value) -> Optional[Decimal]:
    """
    Parse a nullable numeric column into a Decimal.

    None, empty strings, non-numeric text, NaN and infinities all map to
    None. Booleans are not numbers here.

    >>> parse_optional_decimal('3.50')
    Decimal('3.50')
    >>> parse_optional_decimal('abc') is None
    True
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, (int, float)):
        parsed = Decimal(str(value))
    elif isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            parsed = Decimal(value)
        except InvalidOperation:
            return None
    else:
        return None

    if not parsed.is_finite():
        return None
    return parsed


def validate_price_range(value, min_value=0, max_value=None):
    """
    Validate price is within acceptable range.

    Args:
        value: Price decimal
        min_value: Minimum allowed price (default: 0)
        max_value: Maximum allowed price (optional)

    Raises:
        serializers.ValidationError: If price is outside valid range

    Returns:
        decimal.Decimal: Validated price
    """
    if value < min_value:
        raise serializers.ValidationError(f"Price must be at least {min_value}.")

    if max_value is not None and value > max_value:
        raise serializers.ValidationError(f"Price must not exceed {max_value}.")

    return value


def validate_quantity(value, min_value=1):
    """
    Validate quantity is positive and meets minimum requirement.

    Raises:
        serializers.ValidationError: If quantity is invalid
    """
    if value < min_value:
        raise serializers.ValidationError(f"Quantity must be at least {min_value}.")

    return value


def validate_variant_pricing(price, price_modifier, price_behavior):
    """
    Object-level check for a variant's pricing columns.

    A direct price must be non-negative. An override modifier is the unit
    price itself, so it must be non-negative too.
    """
    errors = {}
    if price is not None and price < 0:
        errors['price'] = 'Variant price must not be negative.'
    if price_behavior == 'override' and price is None and price_modifier is not None and price_modifier < 0:
        errors['price_modifier'] = 'Override price must not be negative.'
    if errors:
        raise serializers.ValidationError(errors)
