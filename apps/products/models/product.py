from decimal import Decimal

from django.db import models


class Product(models.Model):
    """Catalogue product; variants adjust its base price"""

    STOCK_STATUS_CHOICES = [
        ('in_stock', 'In stock'),
        ('out_of_stock', 'Out of stock'),
        ('limited', 'Limited'),
    ]

    title_en = models.CharField(max_length=200)
    title_ar = models.CharField(max_length=200, blank=True, default='')
    description_en = models.TextField(blank=True, default='')
    description_ar = models.TextField(blank=True, default='')

    base_price = models.DecimalField(max_digits=10, decimal_places=2)
    sale_price = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True,
        help_text="Replaces base_price when set"
    )

    category = models.ForeignKey('Category', on_delete=models.SET_NULL, null=True, blank=True, related_name='products')
    stock_status = models.CharField(max_length=20, choices=STOCK_STATUS_CHOICES, default='in_stock')
    is_active = models.BooleanField(default=True)
    is_featured = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        indexes = [
            models.Index(fields=['is_active'], name='products_is_acti_4f1c2e_idx'),
            models.Index(fields=['category'], name='products_categor_9b2d1a_idx'),
            models.Index(fields=['created_at'], name='products_created_7e3a5b_idx'),
        ]

    def __str__(self):
        return f"{self.title_en} (id: {self.id})"

    @property
    def effective_price(self) -> Decimal:
        """Price variants are resolved against"""
        if self.sale_price is not None:
            return self.sale_price
        return self.base_price

    @property
    def is_orderable(self):
        return self.is_active and self.stock_status != 'out_of_stock'
