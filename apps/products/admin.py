from django.contrib import admin

from .models import Category, Product, ProductVariant
from .services import VariantPriceResolver


class ProductVariantInline(admin.TabularInline):
    model = ProductVariant
    extra = 1
    fields = ['title_en', 'title_ar', 'price', 'price_modifier', 'price_behavior',
              'display_price', 'stock_quantity', 'is_active', 'sort_order']
    readonly_fields = ['display_price']

    def display_price(self, obj):
        if obj is None or obj.pk is None:
            return '-'
        return VariantPriceResolver.resolve_unit_price(obj.product.effective_price, obj.pricing)
    display_price.short_description = 'Unit price'


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'parent', 'sort_order', 'is_active', 'created_at']
    list_filter = ['is_active', 'parent']
    search_fields = ['name']
    ordering = ['sort_order', 'name']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['id', 'title_en', 'base_price', 'sale_price', 'stock_status', 'is_active', 'is_featured', 'created_at']
    list_filter = ['is_active', 'is_featured', 'stock_status', 'category']
    search_fields = ['id', 'title_en', 'title_ar']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [ProductVariantInline]

    fieldsets = (
        ('Basic Information', {
            'fields': ('title_en', 'title_ar', 'description_en', 'description_ar', 'category')
        }),
        ('Pricing', {
            'fields': ('base_price', 'sale_price')
        }),
        ('Status', {
            'fields': ('is_active', 'is_featured', 'stock_status')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
