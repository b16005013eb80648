"""
Checkout pricing: item prices, delivery fee, promo discount and total.
"""
from decimal import Decimal

import pytest

from apps.orders.services import CheckoutService
from apps.promos.models import PromoCode
from tests.factories import (
    ProductFactory, ProductVariantFactory, PromoCodeFactory, PromoShippingConditionFactory, UserFactory
)

pytestmark = pytest.mark.django_db


def variants_of(product):
    cream = product.variants.get(title_en='Extra cream')
    large = product.variants.get(title_en='Large')
    return cream, large


class TestPriceItems:

    def test_variant_selection_order(self, sample_product):
        cream, large = variants_of(sample_product)
        pricing, error = CheckoutService.calculate([
            {'product_id': sample_product.id, 'quantity': 2, 'variant_ids': [cream.id]},
            {'product_id': sample_product.id, 'quantity': 1, 'variant_ids': [cream.id, large.id]},
            {'product_id': sample_product.id, 'quantity': 1, 'variant_ids': [large.id, cream.id]},
        ], auto_apply=False)
        assert error == ''
        assert [item.unit_price for item in pricing.items] == [Decimal('13.00'), Decimal('15.00'), Decimal('18.00')]
        assert pricing.items[0].total_price == Decimal('26.00')
        assert pricing.subtotal == Decimal('59.00')

    def test_sale_price_is_base(self):
        product = ProductFactory(base_price=Decimal('10.00'), sale_price=Decimal('8.00'))
        pricing, _ = CheckoutService.calculate([{'product_id': product.id, 'quantity': 1}], auto_apply=False)
        assert pricing.subtotal == Decimal('8.00')

    @pytest.mark.parametrize('mutate, message', [
        (lambda p: setattr(p, 'is_active', False), 'is not available'),
        (lambda p: setattr(p, 'stock_status', 'out_of_stock'), 'is not available'),
    ])
    def test_unavailable_product(self, sample_product, mutate, message):
        mutate(sample_product)
        sample_product.save()
        pricing, error = CheckoutService.calculate([{'product_id': sample_product.id, 'quantity': 1}])
        assert pricing is None
        assert message in error

    def test_foreign_variant_rejected(self, sample_product):
        stranger = ProductVariantFactory()
        pricing, error = CheckoutService.calculate([
            {'product_id': sample_product.id, 'quantity': 1, 'variant_ids': [stranger.id]}
        ])
        assert pricing is None
        assert 'does not belong' in error

    def test_insufficient_stock(self, sample_product):
        cream, _ = variants_of(sample_product)
        pricing, error = CheckoutService.calculate([
            {'product_id': sample_product.id, 'quantity': 6, 'variant_ids': [cream.id]}
        ])
        assert pricing is None
        assert 'Insufficient stock' in error

    def test_missing_product_and_empty_cart(self):
        assert CheckoutService.calculate([])[0] is None
        assert CheckoutService.calculate([{'product_id': 999999, 'quantity': 1}]) == (None, "Product 999999 not found")


class TestTotals:

    def test_delivery_and_pickup_fees(self, sample_product):
        items = [{'product_id': sample_product.id, 'quantity': 1}]
        delivery, _ = CheckoutService.calculate(items, order_type='delivery', auto_apply=False)
        pickup, _ = CheckoutService.calculate(items, order_type='pickup', auto_apply=False)
        assert delivery.delivery_fee == Decimal('2.00')
        assert delivery.total_amount == Decimal('12.00')
        assert pickup.delivery_fee == Decimal('0.00')
        assert pickup.total_amount == Decimal('10.00')

    def test_explicit_percentage_code(self, sample_product):
        PromoCodeFactory(code='TWENTY', discount_value=Decimal('20'))
        pricing, error = CheckoutService.calculate(
            [{'product_id': sample_product.id, 'quantity': 3}], promo_code='twenty'
        )
        assert error == ''
        assert pricing.promo.code == 'TWENTY'
        assert pricing.discount_amount == Decimal('6.00')
        assert pricing.total_amount == Decimal('26.00')
        assert pricing.auto_applied is False

    def test_explicit_invalid_code_fails(self, sample_product):
        pricing, error = CheckoutService.calculate(
            [{'product_id': sample_product.id, 'quantity': 1}], promo_code='MISSING'
        )
        assert pricing is None
        assert error == "Invalid or expired promo code"

    def test_free_shipping_code(self, sample_product):
        PromoCodeFactory(code='SHIPFREE', discount_type=PromoCode.TYPE_FREE_SHIPPING, discount_value=Decimal('0'))
        pricing, _ = CheckoutService.calculate(
            [{'product_id': sample_product.id, 'quantity': 1}], promo_code='SHIPFREE'
        )
        assert pricing.is_free_shipping
        assert pricing.delivery_fee == Decimal('2.00')
        assert pricing.adjusted_delivery_fee == Decimal('0.00')
        assert pricing.discount_amount == Decimal('2.00')
        assert pricing.total_amount == Decimal('10.00')

    def test_free_shipping_code_refused_for_pickup(self, sample_product):
        PromoCodeFactory(code='SHIPFREE', discount_type=PromoCode.TYPE_FREE_SHIPPING, discount_value=Decimal('0'))
        pricing, error = CheckoutService.calculate(
            [{'product_id': sample_product.id, 'quantity': 1}], order_type='pickup', promo_code='SHIPFREE'
        )
        assert pricing is None
        assert 'delivery orders only' in error

    def test_free_shipping_code_requires_conditions(self, sample_product):
        condition = PromoShippingConditionFactory(condition_value='50', condition_value_numeric=Decimal('50'))
        code = condition.promo_code.code
        pricing, error = CheckoutService.calculate(
            [{'product_id': sample_product.id, 'quantity': 1}], promo_code=code
        )
        assert pricing is None
        assert error == "Order does not qualify for free shipping"

        pricing, error = CheckoutService.calculate(
            [{'product_id': sample_product.id, 'quantity': 5}], promo_code=code
        )
        assert pricing.is_free_shipping

    def test_auto_apply_best_promo(self, sample_product):
        PromoCodeFactory(code='AUTO5', discount_type='fixed_amount', discount_value=Decimal('5'), auto_apply_eligible=True)
        PromoCodeFactory(code='AUTO10PCT', discount_value=Decimal('10'), auto_apply_eligible=True)
        pricing, _ = CheckoutService.calculate([{'product_id': sample_product.id, 'quantity': 2}])
        assert pricing.promo.code == 'AUTO5'
        assert pricing.auto_applied is True
        assert pricing.total_amount == Decimal('17.00')

        pricing, _ = CheckoutService.calculate([{'product_id': sample_product.id, 'quantity': 2}], auto_apply=False)
        assert pricing.promo is None
        assert pricing.total_amount == Decimal('22.00')

    def test_auto_apply_drops_unqualified_free_shipping(self, sample_product):
        condition = PromoShippingConditionFactory(condition_value='50', condition_value_numeric=Decimal('50'))
        condition.promo_code.auto_apply_eligible = True
        condition.promo_code.save()

        pricing, _ = CheckoutService.calculate([{'product_id': sample_product.id, 'quantity': 1}])
        assert pricing.promo is None
        assert len(pricing.warnings) == 1

    def test_auto_apply_falls_back_when_free_shipping_does_not_qualify(self, sample_product):
        PromoCodeFactory(code='PCT10', discount_value=Decimal('10'), auto_apply_eligible=True)
        condition = PromoShippingConditionFactory(condition_value='1000', condition_value_numeric=Decimal('1000'))
        shipping = condition.promo_code
        shipping.auto_apply_eligible = True
        shipping.max_discount_amount = Decimal('10')
        shipping.save()

        pricing, error = CheckoutService.calculate([{'product_id': sample_product.id, 'quantity': 2}])
        assert error == ''
        assert pricing.promo.code == 'PCT10'
        assert pricing.auto_applied is True
        assert pricing.discount_amount == Decimal('2.00')
        assert pricing.total_amount == Decimal('20.00')
        assert pricing.warnings == (f"{shipping.code} skipped: order does not qualify for free shipping",)

    def test_auto_apply_skips_free_shipping_for_pickup(self, sample_product):
        PromoCodeFactory(code='AUTOSHIP', discount_type=PromoCode.TYPE_FREE_SHIPPING,
                         discount_value=Decimal('0'), auto_apply_eligible=True)
        pricing, _ = CheckoutService.calculate([{'product_id': sample_product.id, 'quantity': 1}], order_type='pickup')
        assert pricing.promo is None

    def test_user_type_condition(self, sample_product):
        condition = PromoShippingConditionFactory(
            condition_type='user_type', condition_operator='=', condition_value='registered',
            condition_value_numeric=None
        )
        items = [{'product_id': sample_product.id, 'quantity': 1}]
        code = condition.promo_code.code
        assert CheckoutService.calculate(items, promo_code=code)[0] is None
        assert CheckoutService.calculate(items, promo_code=code, user=UserFactory())[0].is_free_shipping

    def test_as_dict(self, sample_product):
        pricing, _ = CheckoutService.calculate([{'product_id': sample_product.id, 'quantity': 1}], auto_apply=False)
        data = pricing.as_dict()
        assert data['subtotal'] == Decimal('10.00')
        assert data['promo_code'] is None
        assert data['items'][0]['title_en'] == sample_product.title_en
