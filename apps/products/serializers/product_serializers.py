"""
Product serializers for list, detail and price preview.
"""
from rest_framework import serializers

from apps.common.validators import validate_variant_pricing
from ..models import Product, ProductVariant, Category


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ['id', 'name', 'parent', 'sort_order']


class ProductVariantSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductVariant
        fields = [
            'id', 'product', 'title_en', 'title_ar', 'price', 'price_modifier',
            'price_behavior', 'stock_quantity', 'is_active', 'sort_order'
        ]

    def validate(self, attrs):
        instance = self.instance
        validate_variant_pricing(
            attrs.get('price', getattr(instance, 'price', None)),
            attrs.get('price_modifier', getattr(instance, 'price_modifier', None)),
            attrs.get('price_behavior', getattr(instance, 'price_behavior', ProductVariant.BEHAVIOR_ADD)),
        )
        return attrs


class ProductListSerializer(serializers.ModelSerializer):
    """Serializer for product list view - GET /api/products/"""
    effective_price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    category_name = serializers.CharField(source='category.name', read_only=True, default=None)
    variant_count = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id', 'title_en', 'title_ar', 'base_price', 'sale_price', 'effective_price',
            'category', 'category_name', 'stock_status', 'is_featured', 'variant_count'
        ]

    def get_variant_count(self, obj):
        return len(obj.variants.all())


class PricePreviewSerializer(serializers.Serializer):
    """Body of POST /api/products/<id>/price"""
    variant_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        required=False,
        default=list
    )
