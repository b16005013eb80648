"""
Common validators module.
"""
from .price_validators import (
    parse_optional_decimal, validate_price_range, validate_quantity, validate_variant_pricing
)
from .promo_validators import (
    validate_promo_code_format, validate_discount_value, validate_validity_window,
    validate_min_order_amount, validate_max_discount_amount, validate_usage_limit
)

__all__ = [
    'parse_optional_decimal',
    'validate_price_range',
    'validate_quantity',
    'validate_variant_pricing',
    'validate_promo_code_format',
    'validate_discount_value',
    'validate_validity_window',
    'validate_min_order_amount',
    'validate_max_discount_amount',
    'validate_usage_limit',
]
