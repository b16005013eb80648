from django.db import models


class PromoConditionGroup(models.Model):
    """Set of shipping conditions combined with AND or OR"""

    LOGIC_CHOICES = [
        ('AND', 'All conditions'),
        ('OR', 'Any condition'),
    ]

    promo_code = models.ForeignKey('PromoCode', on_delete=models.CASCADE, related_name='condition_groups')
    group_name = models.CharField(max_length=100, default='Shipping Conditions')
    logic_operator = models.CharField(max_length=3, choices=LOGIC_CHOICES, default='AND')
    sort_order = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'promo_condition_groups'
        ordering = ['sort_order', 'id']

    def __str__(self):
        return f"{self.promo_code.code}: {self.group_name} ({self.logic_operator})"


class PromoShippingCondition(models.Model):
    """Single free-shipping qualification rule"""

    CONDITION_TYPE_CHOICES = [
        ('min_order_amount', 'Minimum order amount'),
        ('min_quantity', 'Minimum item quantity'),
        ('specific_category', 'Contains category'),
        ('specific_product', 'Contains product'),
        ('user_type', 'User type'),
        ('location', 'Delivery location'),
    ]
    OPERATOR_CHOICES = [
        ('>=', '>='),
        ('<=', '<='),
        ('=', '='),
        ('!=', '!='),
    ]

    promo_code = models.ForeignKey('PromoCode', on_delete=models.CASCADE, related_name='shipping_conditions')
    group = models.ForeignKey('PromoConditionGroup', on_delete=models.CASCADE, related_name='conditions')
    condition_type = models.CharField(max_length=30, choices=CONDITION_TYPE_CHOICES)
    condition_operator = models.CharField(max_length=2, choices=OPERATOR_CHOICES, default='>=')
    condition_value = models.CharField(max_length=255)
    condition_value_numeric = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'promo_shipping_conditions'
        ordering = ['id']

    def __str__(self):
        return f"{self.condition_type} {self.condition_operator} {self.condition_value}"
