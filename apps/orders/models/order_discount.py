from django.db import models


class OrderDiscount(models.Model):
    """Promo discount line recorded on an order"""

    order = models.ForeignKey('Order', on_delete=models.CASCADE, related_name='discounts')
    promo_code = models.ForeignKey(
        'promos.PromoCode', on_delete=models.SET_NULL, null=True, blank=True, related_name='order_discounts'
    )
    discount_type = models.CharField(max_length=20)
    discount_amount = models.DecimalField(max_digits=10, decimal_places=2)
    description = models.CharField(max_length=200, help_text="Discount description")

    # subtotal, delivery fee, adjusted delivery fee, auto-applied flag
    discount_details = models.JSONField(default=dict)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'order_discounts'
        indexes = [
            models.Index(fields=['discount_type'], name='order_disc_type_idx'),
        ]

    def __str__(self):
        return f"Discount {self.discount_type} - {self.discount_amount}"
