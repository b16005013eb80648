"""
Free-shipping qualification rules.

A free-shipping promo may carry condition groups. Conditions inside a group
are combined with the group's AND/OR operator; groups are combined with OR.
A promo without active conditions qualifies every order.
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from django.db import transaction

from apps.common.validators import parse_optional_decimal
from ..models import PromoCode, PromoConditionGroup, PromoShippingCondition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShippingOrderContext:
    """What the rules can look at"""
    order_total: Decimal
    items: Tuple[Dict, ...] = field(default_factory=tuple)
    user_type: str = 'guest'
    location: Optional[str] = None

    @property
    def total_quantity(self) -> int:
        return sum(int(item.get('quantity') or 0) for item in self.items)


def _split_values(raw: str) -> List[str]:
    return [part.strip() for part in (raw or '').split(',') if part.strip()]


def _split_ids(raw: str) -> List[int]:
    ids = []
    for part in _split_values(raw):
        try:
            ids.append(int(part))
        except ValueError:
            continue
    return ids


class ShippingConditionService:
    """Evaluate and manage free-shipping condition groups"""

    VALID_LOGIC_OPERATORS = ('AND', 'OR')
    VALID_CONDITION_TYPES = {choice for choice, _ in PromoShippingCondition.CONDITION_TYPE_CHOICES}
    VALID_OPERATORS = {choice for choice, _ in PromoShippingCondition.OPERATOR_CHOICES}

    @staticmethod
    def compare_numeric(value, operator: str, target) -> bool:
        """Unknown operators and non-numeric operands never match"""
        value = parse_optional_decimal(value)
        target = parse_optional_decimal(target)
        if value is None or target is None:
            return False
        if operator == '>=':
            return value >= target
        if operator == '<=':
            return value <= target
        if operator == '=':
            return value == target
        if operator == '!=':
            return value != target
        return False

    @classmethod
    def evaluate_condition(cls, condition, context: ShippingOrderContext) -> bool:
        condition_type = condition.condition_type
        target = condition.condition_value_numeric
        if target is None:
            target = condition.condition_value

        if condition_type == 'min_order_amount':
            return cls.compare_numeric(context.order_total, condition.condition_operator, target)
        if condition_type == 'min_quantity':
            return cls.compare_numeric(context.total_quantity, condition.condition_operator, target)
        if condition_type == 'specific_category':
            category_ids = _split_ids(condition.condition_value)
            return any(item.get('category_id') in category_ids for item in context.items)
        if condition_type == 'specific_product':
            product_ids = _split_ids(condition.condition_value)
            return any(item.get('product_id') in product_ids for item in context.items)
        if condition_type == 'user_type':
            return context.user_type in _split_values(condition.condition_value)
        if condition_type == 'location':
            if not context.location:
                return False
            allowed = [value.lower() for value in _split_values(condition.condition_value)]
            return context.location.lower() in allowed
        return False

    @classmethod
    def evaluate_group(cls, logic_operator: str, conditions, context: ShippingOrderContext) -> bool:
        results = [cls.evaluate_condition(condition, context) for condition in conditions]
        if logic_operator == 'AND':
            return all(results)
        return any(results)

    @classmethod
    def check_order(cls, promo: PromoCode, context: ShippingOrderContext) -> bool:
        """True when the order satisfies at least one active group"""
        groups = []
        for group in promo.condition_groups.filter(is_active=True).prefetch_related('conditions'):
            conditions = [condition for condition in group.conditions.all() if condition.is_active]
            if conditions:
                groups.append((group, conditions))

        if not groups:
            return True

        return any(
            cls.evaluate_group(group.logic_operator, conditions, context)
            for group, conditions in groups
        )

    @classmethod
    def add_conditions(cls, promo: PromoCode, conditions: List[Dict],
                       logic_operator: str = 'AND') -> Tuple[Optional[PromoConditionGroup], str]:
        """
        Create a condition group with its conditions.

        Returns (group, error_message).
        """
        if promo.discount_type != PromoCode.TYPE_FREE_SHIPPING:
            return None, "Shipping conditions can only be added to free shipping promos"
        if not isinstance(conditions, list) or not conditions:
            return None, "At least one condition is required"
        if logic_operator not in cls.VALID_LOGIC_OPERATORS:
            return None, "logic_operator must be AND or OR"

        for condition in conditions:
            if not condition.get('condition_type') or not condition.get('condition_value'):
                return None, "condition_type and condition_value are required"
            if condition['condition_type'] not in cls.VALID_CONDITION_TYPES:
                return None, f"Unknown condition type {condition['condition_type']}"
            if condition.get('condition_operator', '>=') not in cls.VALID_OPERATORS:
                return None, f"Unknown condition operator {condition.get('condition_operator')}"

        with transaction.atomic():
            group = PromoConditionGroup.objects.create(
                promo_code=promo,
                group_name='Shipping Conditions',
                logic_operator=logic_operator,
                sort_order=promo.condition_groups.count(),
            )
            for condition in conditions:
                value = str(condition['condition_value'])
                numeric = parse_optional_decimal(condition.get('condition_value_numeric'))
                if numeric is None and condition['condition_type'] in ('min_order_amount', 'min_quantity'):
                    numeric = parse_optional_decimal(value)
                PromoShippingCondition.objects.create(
                    promo_code=promo,
                    group=group,
                    condition_type=condition['condition_type'],
                    condition_operator=condition.get('condition_operator', '>='),
                    condition_value=value,
                    condition_value_numeric=numeric,
                )

        logger.info(f"Added shipping condition group {group.id} to promo {promo.code}")
        return group, ""

    @staticmethod
    def list_groups(promo: PromoCode) -> List[Dict]:
        groups = []
        for group in promo.condition_groups.filter(is_active=True).prefetch_related('conditions'):
            groups.append({
                'group_id': group.id,
                'group_name': group.group_name,
                'logic_operator': group.logic_operator,
                'sort_order': group.sort_order,
                'conditions': [
                    {
                        'condition_id': condition.id,
                        'condition_type': condition.condition_type,
                        'condition_operator': condition.condition_operator,
                        'condition_value': condition.condition_value,
                        'condition_value_numeric': condition.condition_value_numeric,
                        'is_active': condition.is_active,
                    }
                    for condition in group.conditions.all()
                ],
            })
        return groups

    @staticmethod
    def delete_group(promo: PromoCode, group_id: int) -> Tuple[bool, str]:
        deleted, _ = PromoConditionGroup.objects.filter(promo_code=promo, id=group_id).delete()
        if not deleted:
            return False, "Condition group not found"
        logger.info(f"Deleted shipping condition group {group_id} from promo {promo.code}")
        return True, "Shipping condition group deleted"
