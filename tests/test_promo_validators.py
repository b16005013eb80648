"""
Promo and price validators.
"""
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework import serializers

from apps.common.validators import (
    parse_optional_decimal, validate_promo_code_format, validate_discount_value,
    validate_validity_window, validate_usage_limit, validate_max_discount_amount,
    validate_min_order_amount, validate_variant_pricing
)


class TestParseOptionalDecimal:

    @pytest.mark.parametrize('raw, expected', [
        ('3.50', Decimal('3.50')),
        (' 4 ', Decimal('4')),
        (2, Decimal('2')),
        (1.5, Decimal('1.5')),
        (Decimal('7.25'), Decimal('7.25')),
    ])
    def test_numbers(self, raw, expected):
        assert parse_optional_decimal(raw) == expected

    @pytest.mark.parametrize('raw', [None, '', '   ', 'abc', 'NaN', 'Infinity', True, object()])
    def test_absent_or_malformed(self, raw):
        assert parse_optional_decimal(raw) is None


class TestPromoCodeFormat:

    def test_upper_cases(self):
        assert validate_promo_code_format(' summer-24 ') == 'SUMMER-24'

    @pytest.mark.parametrize('code', ['AB', '', 'HAS SPACE', 'BAD!', 'Ünicode'])
    def test_rejects(self, code):
        with pytest.raises(serializers.ValidationError):
            validate_promo_code_format(code)


class TestDiscountValue:

    def test_free_shipping_allows_zero(self):
        assert validate_discount_value('free_shipping', Decimal('0')) == Decimal('0')

    @pytest.mark.parametrize('discount_type, value', [
        ('percentage', Decimal('0')),
        ('percentage', Decimal('100.01')),
        ('fixed_amount', Decimal('-1')),
        ('free_shipping', Decimal('-0.01')),
        ('bxgy', None),
    ])
    def test_rejects(self, discount_type, value):
        with pytest.raises(serializers.ValidationError):
            validate_discount_value(discount_type, value)

    def test_percentage_upper_bound_inclusive(self):
        assert validate_discount_value('percentage', Decimal('100')) == Decimal('100')


class TestValidityWindow:

    def test_end_must_follow_start(self):
        now = timezone.now()
        with pytest.raises(serializers.ValidationError):
            validate_validity_window(now, now)

    def test_new_promo_must_end_in_future(self):
        now = timezone.now()
        with pytest.raises(serializers.ValidationError):
            validate_validity_window(now - timedelta(days=3), now - timedelta(days=1), is_create=True)
        validate_validity_window(now - timedelta(days=3), now - timedelta(days=1), is_create=False)

    def test_missing_bound_skipped(self):
        validate_validity_window(None, timezone.now())


class TestAmountsAndLimits:

    def test_limits(self):
        assert validate_usage_limit(None) is None
        assert validate_usage_limit(5) == 5
        with pytest.raises(serializers.ValidationError):
            validate_usage_limit(0)

    def test_amounts(self):
        assert validate_min_order_amount(Decimal('0')) == Decimal('0')
        with pytest.raises(serializers.ValidationError):
            validate_min_order_amount(Decimal('-1'))
        with pytest.raises(serializers.ValidationError):
            validate_max_discount_amount(Decimal('0'))

    def test_variant_pricing(self):
        validate_variant_pricing(None, Decimal('-2'), 'add')
        with pytest.raises(serializers.ValidationError):
            validate_variant_pricing(Decimal('-1'), None, 'add')
        with pytest.raises(serializers.ValidationError):
            validate_variant_pricing(None, Decimal('-2'), 'override')
