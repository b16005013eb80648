from django.db import models


class ProductVariant(models.Model):
    """
    Purchasable option of a product (size, filling, topping).

    Pricing columns:
      price           direct unit price; wins over everything else
      price_modifier  amount added to the base ('add') or the full unit
                      price ('override')
    """

    BEHAVIOR_ADD = 'add'
    BEHAVIOR_OVERRIDE = 'override'
    PRICE_BEHAVIOR_CHOICES = [
        (BEHAVIOR_ADD, 'Add to base price'),
        (BEHAVIOR_OVERRIDE, 'Override base price'),
    ]

    product = models.ForeignKey('Product', on_delete=models.CASCADE, related_name='variants')
    title_en = models.CharField(max_length=200)
    title_ar = models.CharField(max_length=200, blank=True, default='')

    price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    price_modifier = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    price_behavior = models.CharField(max_length=10, choices=PRICE_BEHAVIOR_CHOICES, default=BEHAVIOR_ADD)

    stock_quantity = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)
    sort_order = models.IntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'product_variants'
        ordering = ['sort_order', 'id']
        indexes = [
            models.Index(fields=['product', 'is_active'], name='product_var_product_2c8e4d_idx'),
        ]

    def __str__(self):
        return f"{self.product.title_en} / {self.title_en}"

    @property
    def pricing(self):
        from ..services.variant_pricing import VariantPricing
        return VariantPricing.from_record(self)
