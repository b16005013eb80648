from django.conf import settings
from django.db import models


class PromoCodeUsage(models.Model):
    """One redemption of a promo code by an order"""

    promo_code = models.ForeignKey('PromoCode', on_delete=models.PROTECT, related_name='usages')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='promo_usages'
    )
    order = models.ForeignKey('orders.Order', on_delete=models.CASCADE, related_name='promo_usages')
    discount_amount = models.DecimalField(max_digits=10, decimal_places=2)
    used_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'promo_code_usages'
        ordering = ['-used_at']
        indexes = [
            models.Index(fields=['promo_code', 'user'], name='promo_usage_code_user_idx'),
            models.Index(fields=['used_at'], name='promo_usage_used_at_idx'),
        ]

    def __str__(self):
        return f"{self.promo_code.code} on order {self.order_id}"
