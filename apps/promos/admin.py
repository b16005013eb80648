from django.contrib import admin

from .models import PromoCode, PromoCodeUsage, PromoConditionGroup, PromoShippingCondition


class PromoCodeUsageInline(admin.TabularInline):
    model = PromoCodeUsage
    extra = 0
    readonly_fields = ['user', 'order', 'discount_amount', 'used_at']
    can_delete = False


class PromoConditionGroupInline(admin.TabularInline):
    model = PromoConditionGroup
    extra = 0
    fields = ['group_name', 'logic_operator', 'sort_order', 'is_active']


class PromoShippingConditionInline(admin.TabularInline):
    model = PromoShippingCondition
    extra = 1
    fields = ['condition_type', 'condition_operator', 'condition_value', 'condition_value_numeric', 'is_active']


@admin.register(PromoCode)
class PromoCodeAdmin(admin.ModelAdmin):
    list_display = [
        'code', 'discount_type', 'discount_value', 'min_order_amount', 'usage_count',
        'usage_limit', 'auto_apply_eligible', 'is_active', 'promo_status', 'valid_until'
    ]
    list_filter = ['discount_type', 'is_active', 'auto_apply_eligible', 'valid_from', 'valid_until']
    search_fields = ['code', 'title_en', 'title_ar']
    readonly_fields = ['usage_count', 'created_at', 'updated_at']
    inlines = [PromoConditionGroupInline, PromoCodeUsageInline]
    actions = ['activate_promos', 'deactivate_promos']

    fieldsets = (
        ('Code', {
            'fields': ('code', 'title_en', 'title_ar', 'description_en', 'description_ar')
        }),
        ('Discount', {
            'fields': ('discount_type', 'discount_value', 'min_order_amount', 'max_discount_amount')
        }),
        ('Limits', {
            'fields': ('usage_limit', 'usage_count', 'user_usage_limit')
        }),
        ('Availability', {
            'fields': ('is_active', 'auto_apply_eligible', 'valid_from', 'valid_until')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def promo_status(self, obj):
        return obj.get_status()
    promo_status.short_description = 'Status'

    def activate_promos(self, request, queryset):
        updated = queryset.update(is_active=True)
        self.message_user(request, f'{updated} promo codes activated.')
    activate_promos.short_description = 'Activate selected promo codes'

    def deactivate_promos(self, request, queryset):
        updated = queryset.update(is_active=False)
        self.message_user(request, f'{updated} promo codes deactivated.')
    deactivate_promos.short_description = 'Deactivate selected promo codes'


@admin.register(PromoConditionGroup)
class PromoConditionGroupAdmin(admin.ModelAdmin):
    list_display = ['promo_code', 'group_name', 'logic_operator', 'sort_order', 'is_active']
    list_filter = ['logic_operator', 'is_active']
    inlines = [PromoShippingConditionInline]

    def save_formset(self, request, form, formset, change):
        conditions = formset.save(commit=False)
        for condition in conditions:
            condition.promo_code = form.instance.promo_code
            condition.save()
        for obj in formset.deleted_objects:
            obj.delete()
        formset.save_m2m()


@admin.register(PromoCodeUsage)
class PromoCodeUsageAdmin(admin.ModelAdmin):
    list_display = ['promo_code', 'user', 'order', 'discount_amount', 'used_at']
    list_filter = ['used_at']
    search_fields = ['promo_code__code', 'order__order_number', 'user__email']
    readonly_fields = ['promo_code', 'user', 'order', 'discount_amount', 'used_at']
