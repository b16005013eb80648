from django.db import models
from django.conf import settings


class Order(models.Model):
    """Customer order with its price breakdown"""

    STATUS_PENDING = 'pending'
    STATUS_CONFIRMED = 'confirmed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_CONFIRMED, 'Confirmed'),
        ('preparing', 'Preparing'),
        ('ready', 'Ready'),
        ('out_for_delivery', 'Out for delivery'),
        ('delivered', 'Delivered'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]
    CANCELLABLE_STATUSES = (STATUS_PENDING, STATUS_CONFIRMED)

    TYPE_DELIVERY = 'delivery'
    TYPE_PICKUP = 'pickup'
    TYPE_CHOICES = [
        (TYPE_DELIVERY, 'Delivery'),
        (TYPE_PICKUP, 'Pickup'),
    ]

    order_number = models.CharField(max_length=50, unique=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='orders'
    )
    order_type = models.CharField(max_length=10, choices=TYPE_CHOICES, default=TYPE_DELIVERY)
    location = models.CharField(max_length=100, blank=True, default='', help_text='Delivery area given at checkout')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)

    # total_amount = subtotal + delivery_fee - discount_amount
    subtotal = models.DecimalField(max_digits=10, decimal_places=2)
    delivery_fee = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    discount_amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    total_amount = models.DecimalField(max_digits=10, decimal_places=2)
    promo_code = models.ForeignKey(
        'promos.PromoCode', on_delete=models.SET_NULL, null=True, blank=True, related_name='orders'
    )

    special_instructions = models.TextField(blank=True, default='')
    cancellation_reason = models.CharField(max_length=255, blank=True, default='')
    cancelled_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'status'], name='orders_user_status_idx'),
            models.Index(fields=['created_at'], name='orders_created_at_idx'),
        ]

    def __str__(self):
        return f"Order {self.order_number} - {self.total_amount}"

    @property
    def is_cancellable(self):
        return self.status in self.CANCELLABLE_STATUSES
