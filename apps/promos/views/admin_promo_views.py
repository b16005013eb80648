"""
Admin promo code management views.
"""
import logging

from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import IsAdminUser
from rest_framework.views import APIView

from apps.common.utils import success_response, error_response, page_info
from ..models import PromoCode
from ..serializers import (
    PromoCodeSerializer, PromoCodeListSerializer, PromoListQuerySerializer,
    ShippingConditionGroupInputSerializer, UsageReportQuerySerializer
)
from ..services import PromoService, ShippingConditionService

logger = logging.getLogger(__name__)


class PromoListCreateView(APIView):
    """GET/POST /api/promos/"""
    permission_classes = [IsAdminUser]

    def get(self, request):
        query = PromoListQuerySerializer(data=request.GET)
        if not query.is_valid():
            return error_response('Invalid filters', query.errors)

        filters = query.validated_data
        now = timezone.now()
        promos = PromoService.list_promos(filters, now=now)

        total = promos.count()
        page, limit = filters['page'], filters['limit']
        start = (page - 1) * limit
        serializer = PromoCodeListSerializer(promos[start:start + limit], many=True, context={'now': now})

        return success_response({
            'list': serializer.data,
            'page': page_info(page, limit, total),
        }, 'Promo codes retrieved successfully')

    def post(self, request):
        serializer = PromoCodeSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response('Validation failed', serializer.errors)

        promo = serializer.save()
        logger.info(f"Promo {promo.code} created by user {request.user.id}")
        return success_response(
            PromoCodeSerializer(promo).data, 'Promo code created successfully',
            status_code=status.HTTP_201_CREATED
        )


class PromoDetailView(APIView):
    """GET/PUT/DELETE /api/promos/<id>/"""
    permission_classes = [IsAdminUser]

    def get(self, request, pk):
        promo = get_object_or_404(PromoCode, pk=pk)
        data = PromoCodeSerializer(promo).data
        data['usages'] = PromoService.get_promo_usages(promo)
        return success_response(data, 'Promo code retrieved successfully')

    def put(self, request, pk):
        promo = get_object_or_404(PromoCode, pk=pk)
        serializer = PromoCodeSerializer(promo, data=request.data, partial=True)
        if not serializer.is_valid():
            return error_response('Validation failed', serializer.errors)

        promo = serializer.save()
        logger.info(f"Promo {promo.code} updated by user {request.user.id}")
        return success_response(PromoCodeSerializer(promo).data, 'Promo code updated successfully')

    def delete(self, request, pk):
        promo = get_object_or_404(PromoCode, pk=pk)
        hard_delete = request.GET.get('hard_delete', 'false').lower() == 'true'

        success, message = PromoService.delete_promo(promo, hard_delete=hard_delete)
        if not success:
            return error_response(message)
        return success_response(None, message)


class PromoToggleStatusView(APIView):
    """POST /api/promos/<id>/toggle-status/"""
    permission_classes = [IsAdminUser]

    def post(self, request, pk):
        promo = get_object_or_404(PromoCode, pk=pk)
        is_active = PromoService.toggle_status(promo)
        return success_response(
            {'is_active': is_active},
            f"Promo code {'activated' if is_active else 'deactivated'} successfully"
        )


class PromoStatsView(APIView):
    """GET /api/promos/stats/"""
    permission_classes = [IsAdminUser]

    def get(self, request):
        return success_response(PromoService.get_stats(), 'Promo statistics retrieved successfully')


class PromoUsageReportView(APIView):
    """GET /api/promos/usage-report/?format=json|csv"""
    permission_classes = [IsAdminUser]

    def get(self, request):
        query = UsageReportQuerySerializer(data=request.GET)
        if not query.is_valid():
            return error_response('Invalid report parameters', query.errors)

        params = query.validated_data
        report = PromoService.get_usage_report(
            start=params['start_date'], end=params['end_date'], promo_id=params['promo_code_id']
        )

        if params['format'] == 'csv':
            response = HttpResponse(
                PromoService.render_usage_csv(report['usage_details']), content_type='text/csv'
            )
            response['Content-Disposition'] = 'attachment; filename="promo-usage-report.csv"'
            return response

        return success_response(report, 'Usage report generated successfully')


class PromoShippingConditionsView(APIView):
    """GET/POST /api/promos/<id>/shipping-conditions/"""
    permission_classes = [IsAdminUser]

    def get(self, request, pk):
        promo = get_object_or_404(PromoCode, pk=pk)
        return success_response(ShippingConditionService.list_groups(promo), 'Shipping conditions retrieved')

    def post(self, request, pk):
        promo = get_object_or_404(PromoCode, pk=pk)
        serializer = ShippingConditionGroupInputSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response('Validation failed', serializer.errors)

        group, error_msg = ShippingConditionService.add_conditions(
            promo,
            [dict(condition) for condition in serializer.validated_data['conditions']],
            serializer.validated_data['logic_operator'],
        )
        if group is None:
            return error_response(error_msg)
        return success_response(
            {'group_id': group.id}, 'Shipping conditions added successfully',
            status_code=status.HTTP_201_CREATED
        )


class PromoShippingConditionGroupView(APIView):
    """DELETE /api/promos/<id>/shipping-conditions/<group_id>/"""
    permission_classes = [IsAdminUser]

    def delete(self, request, pk, group_id):
        promo = get_object_or_404(PromoCode, pk=pk)
        success, message = ShippingConditionService.delete_group(promo, group_id)
        if not success:
            return error_response(message, status_code=status.HTTP_404_NOT_FOUND)
        return success_response(None, message)
