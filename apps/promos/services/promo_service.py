"""
Promo code service: validation, redemption, administration and reporting.
"""
import csv
import io
import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Tuple

from django.conf import settings
from django.db import transaction
from django.db.models import Avg, Count, F, Q, Sum, Value, DecimalField, IntegerField
from django.db.models.functions import Coalesce
from django.utils import timezone

from apps.common.exceptions import PromoUnavailableError
from ..models import PromoCode, PromoCodeUsage
from .auto_apply import AutoApplyPromoSelector
from .promo_calculator import DiscountResult, PromoDiscountCalculator

logger = logging.getLogger(__name__)


class PromoService:
    """Service class for promo code business logic"""

    SORT_FIELDS = ('created_at', 'code', 'discount_value', 'usage_count', 'valid_from', 'valid_until')
    STATUS_FILTERS = ('all', 'active', 'inactive', 'expired', 'upcoming')

    INVALID_CODE_MSG = "Invalid or expired promo code"
    USAGE_LIMIT_MSG = "Promo code usage limit exceeded"
    USER_LIMIT_MSG = "You have already used this promo code the maximum number of times"

    @staticmethod
    def normalize_code(code: str) -> str:
        return (code or '').strip().upper()

    @classmethod
    def get_by_code(cls, code: str) -> Optional[PromoCode]:
        return PromoCode.objects.filter(code=cls.normalize_code(code)).first()

    @staticmethod
    def user_usage_count(promo: PromoCode, user) -> int:
        if user is None or not getattr(user, 'is_authenticated', False):
            return 0
        return PromoCodeUsage.objects.filter(promo_code=promo, user=user).count()

    @classmethod
    def validate_promo_code(cls, code: str, order_total: Decimal, user=None,
                            now=None) -> Tuple[Optional[PromoCode], str]:
        """
        Check that a code can be used for an order of this size.

        Returns (promo, error_message). Per-user limits are skipped for guests.
        """
        normalized = cls.normalize_code(code)
        if not normalized:
            return None, "Promo code is required"

        promo = PromoCode.objects.currently_valid(now).filter(code=normalized).first()
        if promo is None:
            return None, cls.INVALID_CODE_MSG

        if promo.min_order_amount and order_total < promo.min_order_amount:
            return None, f"Minimum order amount of {promo.min_order_amount} required for this promo code"

        if promo.is_exhausted:
            return None, cls.USAGE_LIMIT_MSG

        if promo.user_usage_limit and cls.user_usage_count(promo, user) >= promo.user_usage_limit:
            return None, cls.USER_LIMIT_MSG

        return promo, ""

    @staticmethod
    def preview_discount(promo: PromoCode, subtotal: Decimal, delivery_fee: Decimal) -> DiscountResult:
        return PromoDiscountCalculator.apply_promo(promo.terms, subtotal, delivery_fee)

    @staticmethod
    def get_available_promos(now=None):
        """Auto-apply promos a customer can currently receive"""
        return PromoCode.objects.currently_valid(now).not_exhausted().filter(
            auto_apply_eligible=True
        ).order_by('-discount_value', 'code')

    @staticmethod
    def get_selector() -> AutoApplyPromoSelector:
        pricing = settings.PRICING_CONFIG
        return AutoApplyPromoSelector(
            free_shipping_estimate=pricing.get('FREE_SHIPPING_ESTIMATE'),
            bxgy_estimate=pricing.get('BXGY_ESTIMATE'),
        )

    @classmethod
    def find_best_auto_apply_promo(cls, order_total: Decimal, user=None, now=None,
                                   exclude_free_shipping: bool = False,
                                   qualifies: Optional[Callable[[PromoCode], bool]] = None) -> Optional[PromoCode]:
        """
        Best auto-apply promo for the order, honouring per-user limits.

        When qualifies is given, ranked candidates it rejects are passed
        over in favour of the next best one.
        """
        candidates = {}
        for promo in cls.get_available_promos(now):
            if exclude_free_shipping and promo.discount_type == PromoCode.TYPE_FREE_SHIPPING:
                continue
            if promo.user_usage_limit and cls.user_usage_count(promo, user) >= promo.user_usage_limit:
                continue
            candidates[promo.code] = promo

        ranked = cls.get_selector().rank([promo.terms for promo in candidates.values()], order_total)
        for terms in ranked:
            promo = candidates[terms.code]
            if qualifies is not None and not qualifies(promo):
                continue
            logger.debug(f"Auto-apply picked {promo.code} for order total {order_total}")
            return promo
        return None

    @classmethod
    @transaction.atomic
    def redeem(cls, promo: PromoCode, user, order, discount_amount: Decimal) -> PromoCodeUsage:
        """
        Count one use of the promo for an order.

        The usage counter is bumped by a single conditional UPDATE so
        concurrent checkouts cannot push it past usage_limit. Raises
        PromoUnavailableError when the promo is used up.
        """
        locked = PromoCode.objects.select_for_update().get(pk=promo.pk)
        if not locked.is_active:
            raise PromoUnavailableError(cls.INVALID_CODE_MSG, code='inactive')

        if locked.user_usage_limit and cls.user_usage_count(locked, user) >= locked.user_usage_limit:
            raise PromoUnavailableError(cls.USER_LIMIT_MSG, code='user_limit')

        updated = PromoCode.objects.filter(pk=locked.pk).not_exhausted().update(
            usage_count=F('usage_count') + 1,
            updated_at=timezone.now(),
        )
        if not updated:
            raise PromoUnavailableError(cls.USAGE_LIMIT_MSG, code='exhausted')

        usage = PromoCodeUsage.objects.create(
            promo_code=locked,
            user=user if getattr(user, 'is_authenticated', False) else None,
            order=order,
            discount_amount=discount_amount,
        )
        logger.info(f"Promo {locked.code} redeemed by order {order.order_number} for {discount_amount}")
        return usage

    @staticmethod
    @transaction.atomic
    def release(order) -> int:
        """
        Undo the redemptions recorded for an order.

        The counter never drops below zero. Returns how many were released.
        """
        released = 0
        for usage in PromoCodeUsage.objects.select_related('promo_code').filter(order=order):
            PromoCode.objects.filter(pk=usage.promo_code_id, usage_count__gt=0).update(
                usage_count=F('usage_count') - 1,
                updated_at=timezone.now(),
            )
            logger.info(f"Promo {usage.promo_code.code} released by order {order.order_number}")
            usage.delete()
            released += 1
        return released

    @classmethod
    def list_promos(cls, filters: Dict, now=None):
        """Admin list queryset; filters are already validated"""
        queryset = PromoCode.objects.all()

        search = (filters.get('search') or '').strip()
        if search:
            queryset = queryset.filter(
                Q(code__icontains=search) | Q(title_en__icontains=search) | Q(title_ar__icontains=search)
            )

        status = filters.get('status') or 'all'
        if status != 'all':
            queryset = queryset.with_status(status, now)

        discount_type = filters.get('type') or 'all'
        if discount_type != 'all':
            queryset = queryset.filter(discount_type=discount_type)

        sort = filters.get('sort') or 'created_at'
        if sort not in cls.SORT_FIELDS:
            sort = 'created_at'
        order = '' if (filters.get('order') or 'desc').lower() == 'asc' else '-'
        return queryset.order_by(f"{order}{sort}", 'id')

    @staticmethod
    def toggle_status(promo: PromoCode) -> bool:
        promo.is_active = not promo.is_active
        promo.save(update_fields=['is_active', 'updated_at'])
        logger.info(f"Promo {promo.code} {'activated' if promo.is_active else 'deactivated'}")
        return promo.is_active

    @staticmethod
    def delete_promo(promo: PromoCode, hard_delete: bool = False) -> Tuple[bool, str]:
        """
        Soft delete deactivates the promo. Hard delete removes it and is
        refused once the promo has been used.
        """
        if hard_delete:
            if promo.usages.exists():
                return False, "Cannot hard delete promo code that has been used. Use soft delete instead."
            code = promo.code
            promo.delete()
            logger.info(f"Promo {code} deleted permanently")
            return True, "Promo code deleted permanently"

        promo.is_active = False
        promo.save(update_fields=['is_active', 'updated_at'])
        logger.info(f"Promo {promo.code} deactivated")
        return True, "Promo code deactivated successfully"

    @staticmethod
    def _usage_row(usage: PromoCodeUsage) -> Dict:
        user = usage.user
        order = usage.order
        return {
            'code': usage.promo_code.code,
            'title_en': usage.promo_code.title_en,
            'discount_type': usage.promo_code.discount_type,
            'discount_value': usage.promo_code.discount_value,
            'used_at': usage.used_at,
            'discount_amount': usage.discount_amount,
            'customer_name': user.get_full_name() if user else '',
            'customer_email': user.email if user else '',
            'order_number': order.order_number,
            'order_total': order.total_amount,
            'order_status': order.status,
        }

    @classmethod
    def get_promo_usages(cls, promo: PromoCode) -> List[Dict]:
        usages = promo.usages.select_related('promo_code', 'user', 'order')
        return [cls._usage_row(usage) for usage in usages]

    @classmethod
    def get_stats(cls, now=None) -> Dict:
        now = now or timezone.now()
        money = DecimalField(max_digits=12, decimal_places=2)

        overview = PromoCode.objects.aggregate(
            total_codes=Count('id'),
            active_codes=Count('id', filter=Q(is_active=True, valid_from__lte=now, valid_until__gte=now)),
            expired_codes=Count('id', filter=Q(valid_until__lt=now)),
            upcoming_codes=Count('id', filter=Q(valid_from__gt=now)),
            exhausted_codes=Count('id', filter=Q(usage_limit__isnull=False, usage_count__gte=F('usage_limit'))),
            total_usages=Coalesce(Sum('usage_count'), Value(0), output_field=IntegerField()),
            avg_discount_value=Avg('discount_value'),
            total_fixed_discounts=Coalesce(
                Sum(F('usage_count') * F('discount_value'), filter=Q(discount_type=PromoCode.TYPE_FIXED_AMOUNT),
                    output_field=money),
                Value(Decimal('0')),
                output_field=money,
            ),
        )

        recent = PromoCodeUsage.objects.select_related('promo_code', 'user', 'order')[:10]

        top = PromoCode.objects.filter(usage_count__gt=0).annotate(
            total_discount_given=Coalesce(Sum('usages__discount_amount'), Value(Decimal('0')), output_field=money)
        ).order_by('-usage_count', '-total_discount_given')[:10]

        return {
            'overview': overview,
            'recent_usages': [cls._usage_row(usage) for usage in recent],
            'top_performing': [
                {
                    'code': promo.code,
                    'title_en': promo.title_en,
                    'discount_type': promo.discount_type,
                    'discount_value': promo.discount_value,
                    'usage_count': promo.usage_count,
                    'usage_limit': promo.usage_limit,
                    'total_discount_given': promo.total_discount_given,
                }
                for promo in top
            ],
        }

    @classmethod
    def get_usage_report(cls, start: Optional[datetime] = None, end: Optional[datetime] = None,
                         promo_id: Optional[int] = None) -> Dict:
        usages = PromoCodeUsage.objects.select_related('promo_code', 'user', 'order')
        if start:
            usages = usages.filter(used_at__gte=start)
        if end:
            usages = usages.filter(used_at__lte=end)
        if promo_id:
            usages = usages.filter(promo_code_id=promo_id)

        summary = usages.aggregate(
            total_usages=Count('id'),
            unique_codes_used=Count('promo_code', distinct=True),
            unique_users=Count('user', distinct=True),
            total_discount_given=Sum('discount_amount'),
            avg_discount_amount=Avg('discount_amount'),
        )
        return {
            'summary': summary,
            'usage_details': [cls._usage_row(usage) for usage in usages],
        }

    USAGE_CSV_HEADER = [
        'Code', 'Title', 'Type', 'Value', 'Used At', 'Discount Amount', 'Customer Name',
        'Customer Email', 'Order Number', 'Order Total', 'Order Status',
    ]

    @classmethod
    def render_usage_csv(cls, rows: List[Dict]) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(cls.USAGE_CSV_HEADER)
        for row in rows:
            writer.writerow([
                row['code'], row['title_en'], row['discount_type'], row['discount_value'],
                row['used_at'].isoformat() if row['used_at'] else '', row['discount_amount'],
                row['customer_name'], row['customer_email'], row['order_number'],
                row['order_total'], row['order_status'],
            ])
        return buffer.getvalue()
