"""
Product list, detail and price preview views.
"""
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from apps.common.utils import success_response, error_response, parse_page_params, page_info, to_money
from ..models import Product
from ..serializers import ProductListSerializer, PricePreviewSerializer
from ..services import ProductService


class ProductListView(APIView):
    """Product list endpoint - GET /api/products/"""
    permission_classes = [AllowAny]

    def get(self, request):
        try:
            page, limit = parse_page_params(request)
            category_id = request.GET.get('category')
            category_id = int(category_id) if category_id else None
        except ValueError as e:
            return error_response(str(e))

        products = ProductService.active_products(
            keyword=request.GET.get('keyword', '').strip(),
            category_id=category_id
        )
        total = products.count()
        start = (page - 1) * limit
        serializer = ProductListSerializer(products[start:start + limit], many=True)

        return success_response({
            'list': serializer.data,
            'page': page_info(page, limit, total),
        }, 'Products retrieved successfully')


class ProductDetailView(APIView):
    """Product detail endpoint - GET /api/products/<id>/"""
    permission_classes = [AllowAny]

    def get(self, request, id):
        product = get_object_or_404(
            Product.objects.select_related('category').prefetch_related('variants'), id=id
        )
        if not product.is_active:
            return error_response('Product is not available', status_code=status.HTTP_404_NOT_FOUND)

        return success_response(ProductService.get_product_detail(product), 'Product retrieved successfully')


class ProductPriceView(APIView):
    """Unit price preview for a variant selection - POST /api/products/<id>/price/"""
    permission_classes = [AllowAny]

    def post(self, request, id):
        product = get_object_or_404(Product, id=id, is_active=True)
        serializer = PricePreviewSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response('Invalid variant selection', serializer.errors)

        variants, error_msg = ProductService.resolve_selected_variants(
            product, serializer.validated_data['variant_ids']
        )
        if variants is None:
            return error_response(error_msg)

        unit_price = ProductService.price_selection(product, variants)
        return success_response({
            'product_id': product.id,
            'base_price': product.effective_price,
            'variant_ids': [variant.id for variant in variants],
            'unit_price': to_money(unit_price),
        }, 'Price calculated')
