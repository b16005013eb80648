from django.contrib import admin
from django.db import transaction
from django.utils.html import format_html

from .models import Order, OrderItem, OrderDiscount
from .services import OrderService


class OrderItemInline(admin.TabularInline):
    """Inline admin for order items"""
    model = OrderItem
    extra = 0
    readonly_fields = ['product', 'variant', 'quantity', 'unit_price', 'total_price', 'product_info', 'created_at']
    fields = ['product', 'variant', 'quantity', 'unit_price', 'total_price', 'product_info', 'special_instructions']
    can_delete = False


class OrderDiscountInline(admin.TabularInline):
    """Inline admin for order discounts"""
    model = OrderDiscount
    extra = 0
    readonly_fields = ['promo_code', 'discount_type', 'discount_amount', 'description', 'discount_details', 'created_at']
    fields = ['promo_code', 'discount_type', 'discount_amount', 'description', 'discount_details']
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Order admin with price breakdown"""

    list_display = [
        'order_number', 'user', 'status_display', 'order_type', 'subtotal',
        'delivery_fee', 'discount_amount', 'total_amount', 'promo_code', 'created_at'
    ]
    list_filter = ['status', 'order_type', 'created_at']
    search_fields = ['order_number', 'user__username', 'promo_code__code']
    ordering = ['-created_at']
    readonly_fields = [
        'order_number', 'subtotal', 'delivery_fee', 'discount_amount', 'total_amount',
        'promo_code', 'cancelled_at', 'created_at', 'updated_at'
    ]

    fieldsets = (
        ('Basic Information', {
            'fields': ('order_number', 'user', 'order_type', 'location', 'status', 'special_instructions')
        }),
        ('Pricing', {
            'fields': ('subtotal', 'delivery_fee', 'discount_amount', 'total_amount', 'promo_code')
        }),
        ('Cancellation', {
            'fields': ('cancellation_reason', 'cancelled_at'),
            'classes': ('collapse',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at')
        }),
    )

    inlines = [OrderItemInline, OrderDiscountInline]
    actions = ['cancel_orders']

    STATUS_COLORS = {
        Order.STATUS_PENDING: '#ffc107',
        Order.STATUS_CONFIRMED: '#28a745',
        Order.STATUS_CANCELLED: '#dc3545',
    }

    def status_display(self, obj):
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            self.STATUS_COLORS.get(obj.status, '#17a2b8'), obj.get_status_display()
        )
    status_display.short_description = 'Status'
    status_display.admin_order_field = 'status'

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('user', 'promo_code')

    def cancel_orders(self, request, queryset):
        """Cancel selected orders, restocking and releasing promo usage"""
        cancelled = 0
        for order_id in queryset.filter(status__in=Order.CANCELLABLE_STATUSES).values_list('id', flat=True):
            with transaction.atomic():
                order = Order.objects.select_for_update().get(pk=order_id)
                if order.is_cancellable:
                    OrderService.cancel(order, 'Cancelled by admin')
                    cancelled += 1
        self.message_user(request, f'{cancelled} orders cancelled.')
    cancel_orders.short_description = 'Cancel orders'


@admin.register(OrderDiscount)
class OrderDiscountAdmin(admin.ModelAdmin):
    list_display = ['order', 'promo_code', 'discount_type', 'discount_amount', 'description', 'created_at']
    list_filter = ['discount_type', 'created_at']
    search_fields = ['order__order_number', 'promo_code__code', 'description']
    ordering = ['-created_at']
    readonly_fields = ['created_at']
