"""
Variant price resolution.

Pure functions over in-memory values; nothing here touches the database.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from apps.common.validators import parse_optional_decimal


@dataclass(frozen=True)
class VariantPricing:
    """Parsed pricing columns of a single variant"""
    price: Optional[Decimal] = None
    price_modifier: Optional[Decimal] = None
    price_behavior: Optional[str] = None

    @property
    def behavior(self) -> str:
        return self.price_behavior or VariantPriceResolver.ADD

    @classmethod
    def from_record(cls, record) -> 'VariantPricing':
        """
        Build from a model instance or a plain dict.

        Malformed numbers become None so they are treated as absent.
        """
        if record is None:
            return cls()
        if isinstance(record, dict):
            getter = record.get
        else:
            def getter(name):
                return getattr(record, name, None)
        return cls(
            price=parse_optional_decimal(getter('price')),
            price_modifier=parse_optional_decimal(getter('price_modifier')),
            price_behavior=getter('price_behavior') or None,
        )


class VariantPriceResolver:
    """Resolve unit prices from a base price and selected variants"""

    ADD = 'add'
    OVERRIDE = 'override'

    @classmethod
    def resolve_unit_price(cls, base_price: Decimal, variant: Optional[VariantPricing]) -> Decimal:
        """
        Unit price for one variant.

        A direct price wins. Otherwise an override modifier replaces the base
        and an add modifier (the default) is added to it. With neither, the
        base price is returned unchanged.
        """
        if variant is None:
            return base_price
        if variant.price is not None:
            return variant.price
        if variant.price_modifier is not None:
            if variant.behavior == cls.OVERRIDE:
                return variant.price_modifier
            return base_price + variant.price_modifier
        return base_price

    @classmethod
    def contribution(cls, base_price: Decimal, variant: VariantPricing) -> Decimal:
        """Amount an additive variant adds on top of the base price"""
        return cls.resolve_unit_price(base_price, variant) - base_price

    @classmethod
    def accumulate_price(cls, base_price: Decimal, variants: Iterable[VariantPricing]) -> Decimal:
        """
        Fold selected variants over the base price, in selection order.

        Override variants reset the running price to their own resolved
        price (computed from the original base, not the running total), so a
        later override discards earlier additions. Additive variants add
        their contribution against the original base.
        """
        current = base_price
        for variant in variants:
            if variant is None:
                continue
            if variant.behavior == cls.OVERRIDE:
                current = cls.resolve_unit_price(base_price, variant)
            else:
                current += cls.contribution(base_price, variant)
        return current
