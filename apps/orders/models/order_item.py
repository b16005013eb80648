from django.db import models


class OrderItem(models.Model):
    """Order line with the unit price resolved at checkout"""

    order = models.ForeignKey('Order', on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey('products.Product', on_delete=models.PROTECT, related_name='order_items')
    variant = models.ForeignKey(
        'products.ProductVariant', on_delete=models.SET_NULL, null=True, blank=True,
        related_name='order_items', help_text="First selected variant"
    )
    quantity = models.PositiveIntegerField()
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    total_price = models.DecimalField(max_digits=10, decimal_places=2, help_text="quantity * unit_price")

    # Titles, base price and every selected variant at the time of ordering
    product_info = models.JSONField(default=dict)
    special_instructions = models.CharField(max_length=255, blank=True, default='')

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'order_items'
        ordering = ['id']

    def __str__(self):
        return f"{self.quantity} x {self.product_id} on {self.order_id}"

    @property
    def variant_ids(self):
        return [variant['id'] for variant in self.product_info.get('variants', [])]
