from django.db import models
from django.db.models import F, Q
from django.utils import timezone


class PromoCodeQuerySet(models.QuerySet):

    def currently_valid(self, now=None):
        """Active promos whose validity window contains now"""
        now = now or timezone.now()
        return self.filter(is_active=True, valid_from__lte=now, valid_until__gte=now)

    def not_exhausted(self):
        return self.filter(Q(usage_limit__isnull=True) | Q(usage_count__lt=F('usage_limit')))

    def with_status(self, status, now=None):
        """Filter by the status names used in the admin list"""
        now = now or timezone.now()
        if status == PromoCode.STATUS_ACTIVE:
            return self.currently_valid(now)
        if status == PromoCode.STATUS_INACTIVE:
            return self.filter(is_active=False)
        if status == PromoCode.STATUS_EXPIRED:
            return self.filter(valid_until__lt=now)
        if status == PromoCode.STATUS_UPCOMING:
            return self.filter(valid_from__gt=now)
        if status == PromoCode.STATUS_EXHAUSTED:
            return self.filter(usage_limit__isnull=False, usage_count__gte=F('usage_limit'))
        return self


class PromoCode(models.Model):
    """Promotional code redeemable at checkout"""

    TYPE_PERCENTAGE = 'percentage'
    TYPE_FIXED_AMOUNT = 'fixed_amount'
    TYPE_FREE_SHIPPING = 'free_shipping'
    TYPE_BXGY = 'bxgy'
    DISCOUNT_TYPE_CHOICES = [
        (TYPE_PERCENTAGE, 'Percentage'),
        (TYPE_FIXED_AMOUNT, 'Fixed amount'),
        (TYPE_FREE_SHIPPING, 'Free shipping'),
        (TYPE_BXGY, 'Buy X get Y'),
    ]

    STATUS_ACTIVE = 'active'
    STATUS_INACTIVE = 'inactive'
    STATUS_EXPIRED = 'expired'
    STATUS_UPCOMING = 'upcoming'
    STATUS_EXHAUSTED = 'exhausted'

    code = models.CharField(max_length=50, unique=True, help_text="Stored upper-case")
    title_en = models.CharField(max_length=200, blank=True, default='')
    title_ar = models.CharField(max_length=200, blank=True, default='')
    description_en = models.TextField(blank=True, default='')
    description_ar = models.TextField(blank=True, default='')

    discount_type = models.CharField(max_length=20, choices=DISCOUNT_TYPE_CHOICES)
    discount_value = models.DecimalField(max_digits=10, decimal_places=2)
    min_order_amount = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    max_discount_amount = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)

    usage_limit = models.PositiveIntegerField(null=True, blank=True, help_text="Total redemptions allowed")
    usage_count = models.PositiveIntegerField(default=0)
    user_usage_limit = models.PositiveIntegerField(null=True, blank=True, help_text="Redemptions allowed per user")

    auto_apply_eligible = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    valid_from = models.DateTimeField()
    valid_until = models.DateTimeField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PromoCodeQuerySet.as_manager()

    class Meta:
        db_table = 'promo_codes'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['is_active', 'valid_from', 'valid_until'], name='promo_codes_active_window_idx'),
            models.Index(fields=['auto_apply_eligible'], name='promo_codes_auto_apply_idx'),
        ]

    def __str__(self):
        return f"{self.code} ({self.discount_type} {self.discount_value})"

    def save(self, *args, **kwargs):
        if self.code:
            self.code = self.code.strip().upper()
        super().save(*args, **kwargs)

    @property
    def is_exhausted(self):
        return self.usage_limit is not None and self.usage_count >= self.usage_limit

    def get_status(self, now=None):
        """inactive, upcoming, expired, exhausted or active, checked in that order"""
        now = now or timezone.now()
        if not self.is_active:
            return self.STATUS_INACTIVE
        if self.valid_from > now:
            return self.STATUS_UPCOMING
        if self.valid_until < now:
            return self.STATUS_EXPIRED
        if self.is_exhausted:
            return self.STATUS_EXHAUSTED
        return self.STATUS_ACTIVE

    @property
    def status(self):
        return self.get_status()

    @property
    def terms(self):
        from ..services.promo_calculator import PromoTerms
        return PromoTerms.from_record(self)
