"""
Promo discount calculation.
"""
from decimal import Decimal

import pytest
from hypothesis import given, settings, strategies as st

from apps.promos.services import PromoDiscountCalculator, PromoTerms

money = st.decimals(min_value=Decimal('0'), max_value=Decimal('9999.99'), places=2)


def terms(discount_type, value='0', max_discount=None, code='TEST'):
    return PromoTerms(
        code=code,
        discount_type=discount_type,
        discount_value=Decimal(value),
        max_discount_amount=None if max_discount is None else Decimal(max_discount),
    )


class TestApplyPromo:

    def test_percentage_under_cap(self):
        result = PromoDiscountCalculator.apply_promo(
            terms('percentage', '20', max_discount='50'), Decimal('100'), Decimal('2.00')
        )
        assert result.discount_amount == Decimal('20.00')
        assert result.adjusted_delivery_fee == Decimal('2.00')
        assert result.is_free_shipping is False

    def test_percentage_clamped_to_max_discount(self):
        result = PromoDiscountCalculator.apply_promo(
            terms('percentage', '50', max_discount='10'), Decimal('100'), Decimal('2.00')
        )
        assert result.discount_amount == Decimal('10.00')

    def test_percentage_rounds_half_up(self):
        result = PromoDiscountCalculator.apply_promo(terms('percentage', '12'), Decimal('10.25'), Decimal('0'))
        # 10.25 * 0.12 = 1.23
        assert result.discount_amount == Decimal('1.23')
        result = PromoDiscountCalculator.apply_promo(terms('percentage', '10'), Decimal('0.05'), Decimal('0'))
        assert result.discount_amount == Decimal('0.01')

    def test_free_shipping_discounts_delivery_fee(self):
        result = PromoDiscountCalculator.apply_promo(terms('free_shipping'), Decimal('36.99'), Decimal('7.50'))
        assert result.discount_amount == Decimal('7.50')
        assert result.adjusted_delivery_fee == Decimal('0.00')
        assert result.is_free_shipping is True

    def test_free_shipping_ignores_max_discount(self):
        result = PromoDiscountCalculator.apply_promo(
            terms('free_shipping', max_discount='1'), Decimal('36.99'), Decimal('7.50')
        )
        assert result.discount_amount == Decimal('7.50')

    def test_fixed_amount(self):
        result = PromoDiscountCalculator.apply_promo(terms('fixed_amount', '3.5'), Decimal('20'), Decimal('2'))
        assert result.discount_amount == Decimal('3.50')
        assert result.adjusted_delivery_fee == Decimal('2.00')

    def test_fixed_amount_capped_at_subtotal(self):
        result = PromoDiscountCalculator.apply_promo(terms('fixed_amount', '25'), Decimal('20'), Decimal('2'))
        assert result.discount_amount == Decimal('20.00')

    def test_bxgy_uses_default_value(self):
        result = PromoDiscountCalculator.apply_promo(terms('bxgy', '0'), Decimal('50'), Decimal('2'))
        assert result.discount_amount == Decimal('10.00')

    def test_unknown_type_behaves_as_fixed(self):
        result = PromoDiscountCalculator.apply_promo(terms('mystery', '4'), Decimal('50'), Decimal('2'))
        assert result.discount_amount == Decimal('4.00')
        assert result.is_free_shipping is False

    def test_terms_from_dict_with_bad_numbers(self):
        promo = PromoTerms.from_record({
            'code': 'abc', 'discount_type': 'percentage', 'discount_value': 'oops',
            'max_discount_amount': None, 'is_active': True,
        })
        assert promo.code == 'ABC'
        assert promo.discount_value == Decimal('0')
        result = PromoDiscountCalculator.apply_promo(promo, Decimal('10'), Decimal('2'))
        assert result.discount_amount == Decimal('0.00')

    @pytest.mark.parametrize('discount_type', ['percentage', 'fixed_amount', 'free_shipping', 'bxgy'])
    def test_repeated_calls_agree(self, discount_type):
        promo = terms(discount_type, '15', max_discount='5')
        first = PromoDiscountCalculator.apply_promo(promo, Decimal('40'), Decimal('2'))
        second = PromoDiscountCalculator.apply_promo(promo, Decimal('40'), Decimal('2'))
        assert first == second


class TestDiscountProperties:

    @given(subtotal=money, fee=money, value=st.decimals(min_value=Decimal('0.01'), max_value=Decimal('100'), places=2),
           cap=st.none() | money)
    @settings(max_examples=100, deadline=None)
    def test_percentage_bounds(self, subtotal, fee, value, cap):
        promo = PromoTerms(code='P', discount_type='percentage', discount_value=value, max_discount_amount=cap)
        result = PromoDiscountCalculator.apply_promo(promo, subtotal, fee)
        assert Decimal('0') <= result.discount_amount <= subtotal
        if cap is not None:
            assert result.discount_amount <= cap
        assert result.adjusted_delivery_fee == fee

    @given(subtotal=money, fee=money)
    @settings(max_examples=100, deadline=None)
    def test_free_shipping_zeroes_fee(self, subtotal, fee):
        result = PromoDiscountCalculator.apply_promo(terms('free_shipping'), subtotal, fee)
        assert result.discount_amount == fee
        assert result.adjusted_delivery_fee == Decimal('0')
        assert result.is_free_shipping

    @given(subtotal=money, fee=money, value=money)
    @settings(max_examples=100, deadline=None)
    def test_fixed_never_exceeds_subtotal(self, subtotal, fee, value):
        promo = PromoTerms(code='F', discount_type='fixed_amount', discount_value=value)
        result = PromoDiscountCalculator.apply_promo(promo, subtotal, fee)
        assert result.discount_amount == min(value, subtotal)
        assert result.adjusted_delivery_fee == fee
