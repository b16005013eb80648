"""
Free-shipping condition evaluation and management.
"""
from decimal import Decimal

import pytest

from apps.promos.models import PromoCode, PromoShippingCondition
from apps.promos.services import ShippingConditionService, ShippingOrderContext
from tests.factories import PromoCodeFactory, PromoConditionGroupFactory, PromoShippingConditionFactory


def condition(condition_type, value, operator='>=', numeric=None):
    return PromoShippingCondition(
        condition_type=condition_type,
        condition_operator=operator,
        condition_value=value,
        condition_value_numeric=numeric,
    )


CONTEXT = ShippingOrderContext(
    order_total=Decimal('25.00'),
    items=(
        {'product_id': 1, 'category_id': 10, 'quantity': 2},
        {'product_id': 2, 'category_id': 11, 'quantity': 1},
    ),
    user_type='registered',
    location='Salmiya',
)


class TestEvaluateCondition:

    @pytest.mark.parametrize('cond, expected', [
        (condition('min_order_amount', '20'), True),
        (condition('min_order_amount', '30'), False),
        (condition('min_order_amount', 'ignored', numeric=Decimal('25')), True),
        (condition('min_order_amount', '25', operator='='), True),
        (condition('min_order_amount', '25', operator='!='), False),
        (condition('min_order_amount', '20', operator='<='), False),
        (condition('min_order_amount', '20', operator='>'), False),
        (condition('min_order_amount', 'abc'), False),
        (condition('min_quantity', '3'), True),
        (condition('min_quantity', '4'), False),
        (condition('specific_category', '5, 11'), True),
        (condition('specific_category', '5,x'), False),
        (condition('specific_product', '2'), True),
        (condition('specific_product', '3'), False),
        (condition('user_type', 'registered,vip'), True),
        (condition('user_type', 'guest'), False),
        (condition('location', 'salmiya, Hawally'), True),
        (condition('location', 'Jahra'), False),
        (condition('unknown', '1'), False),
    ])
    def test_conditions(self, cond, expected):
        assert ShippingConditionService.evaluate_condition(cond, CONTEXT) is expected

    def test_location_required(self):
        context = ShippingOrderContext(order_total=Decimal('25'))
        assert ShippingConditionService.evaluate_condition(condition('location', 'Salmiya'), context) is False

    def test_group_logic(self):
        passing = condition('min_order_amount', '20')
        failing = condition('min_quantity', '10')
        assert ShippingConditionService.evaluate_group('AND', [passing, failing], CONTEXT) is False
        assert ShippingConditionService.evaluate_group('OR', [passing, failing], CONTEXT) is True


@pytest.mark.django_db
class TestCheckOrder:

    def test_no_groups_qualifies(self):
        promo = PromoCodeFactory(discount_type=PromoCode.TYPE_FREE_SHIPPING)
        assert ShippingConditionService.check_order(promo, CONTEXT) is True

    def test_groups_combine_with_or(self):
        first = PromoShippingConditionFactory(condition_value='100', condition_value_numeric=Decimal('100'))
        promo = first.promo_code
        assert ShippingConditionService.check_order(promo, CONTEXT) is False

        second_group = PromoConditionGroupFactory(promo_code=promo)
        PromoShippingConditionFactory(
            group=second_group, condition_type='user_type', condition_operator='=',
            condition_value='registered', condition_value_numeric=None
        )
        assert ShippingConditionService.check_order(promo, CONTEXT) is True

    def test_inactive_conditions_ignored(self):
        cond = PromoShippingConditionFactory(condition_value='100', condition_value_numeric=Decimal('100'))
        cond.is_active = False
        cond.save()
        assert ShippingConditionService.check_order(cond.promo_code, CONTEXT) is True


@pytest.mark.django_db
class TestManageConditions:

    def test_add_list_delete(self):
        promo = PromoCodeFactory(discount_type=PromoCode.TYPE_FREE_SHIPPING, discount_value=Decimal('0'))
        group, error = ShippingConditionService.add_conditions(promo, [
            {'condition_type': 'min_order_amount', 'condition_operator': '>=', 'condition_value': '15'},
            {'condition_type': 'location', 'condition_operator': '=', 'condition_value': 'Salmiya'},
        ], 'AND')
        assert error == ''
        assert group.conditions.count() == 2
        assert group.conditions.get(condition_type='min_order_amount').condition_value_numeric == Decimal('15')

        listed = ShippingConditionService.list_groups(promo)
        assert len(listed) == 1
        assert listed[0]['logic_operator'] == 'AND'
        assert len(listed[0]['conditions']) == 2

        assert ShippingConditionService.check_order(promo, CONTEXT) is True

        success, _ = ShippingConditionService.delete_group(promo, group.id)
        assert success
        assert ShippingConditionService.delete_group(promo, group.id) == (False, "Condition group not found")

    @pytest.mark.parametrize('conditions, logic, message', [
        ([], 'AND', "At least one condition is required"),
        ([{'condition_type': 'min_order_amount', 'condition_value': '1'}], 'XOR', "logic_operator must be AND or OR"),
        ([{'condition_type': 'weather', 'condition_value': 'sunny'}], 'AND', "Unknown condition type weather"),
        ([{'condition_type': 'min_order_amount'}], 'AND', "condition_type and condition_value are required"),
    ])
    def test_rejects_bad_input(self, conditions, logic, message):
        promo = PromoCodeFactory(discount_type=PromoCode.TYPE_FREE_SHIPPING)
        assert ShippingConditionService.add_conditions(promo, conditions, logic) == (None, message)

    def test_only_free_shipping_promos(self):
        promo = PromoCodeFactory(discount_type=PromoCode.TYPE_PERCENTAGE)
        group, error = ShippingConditionService.add_conditions(
            promo, [{'condition_type': 'min_order_amount', 'condition_value': '1'}]
        )
        assert group is None
        assert 'free shipping' in error
