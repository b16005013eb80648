"""
Promo code HTTP endpoints.
"""
from datetime import timedelta
from decimal import Decimal

import pytest
from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from apps.promos.models import PromoCode
from apps.promos.services import PromoService
from tests.factories import OrderFactory, PromoCodeFactory

pytestmark = pytest.mark.django_db


def money(value):
    return Decimal(str(value))


class TestCustomerEndpoints:

    def test_validate_requires_login(self, api_client):
        response = api_client.post(reverse('promo-validate'), {'code': 'ANY', 'order_total': '10'}, format='json')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_validate_returns_discount(self, auth_client):
        PromoCodeFactory(code='SAVE20', discount_value=Decimal('20'), max_discount_amount=Decimal('50'))
        response = auth_client.post(
            reverse('promo-validate'), {'code': 'save20', 'order_total': '100', 'delivery_fee': '2'}, format='json'
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.data['data']
        assert data['promo_code']['code'] == 'SAVE20'
        assert money(data['discount_amount']) == Decimal('20.00')
        assert money(data['final_total']) == Decimal('82.00')

    def test_guest_validate_free_shipping(self, api_client):
        PromoCodeFactory(code='SHIPIT', discount_type=PromoCode.TYPE_FREE_SHIPPING, discount_value=Decimal('0'))
        response = api_client.post(
            reverse('promo-validate-guest'),
            {'code': 'SHIPIT', 'order_total': '36.99', 'delivery_fee': '7.50'}, format='json'
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.data['data']
        assert data['is_free_shipping'] is True
        assert money(data['discount_amount']) == Decimal('7.50')
        assert money(data['adjusted_delivery_fee']) == Decimal('0.00')
        assert money(data['final_total']) == Decimal('36.99')

    def test_guest_validate_error(self, api_client):
        response = api_client.post(reverse('promo-validate-guest'), {'code': 'NOPE', 'order_total': '5'}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['msg'] == PromoService.INVALID_CODE_MSG

    def test_available_and_auto_apply(self, api_client):
        PromoCodeFactory(code='LF5K6CPE', discount_value=Decimal('12'), auto_apply_eligible=True)
        PromoCodeFactory(code='E0HNNOGJ', discount_type=PromoCode.TYPE_FREE_SHIPPING, discount_value=Decimal('0'),
                         min_order_amount=Decimal('2'), max_discount_amount=Decimal('10'), auto_apply_eligible=True)
        PromoCodeFactory(code='HIDDEN', discount_value=Decimal('50'))

        available = api_client.get(reverse('promo-available'))
        assert {p['code'] for p in available.data['data']} == {'LF5K6CPE', 'E0HNNOGJ'}

        response = api_client.post(reverse('promo-auto-apply'), {'order_total': '5'}, format='json')
        assert response.data['data']['promo_code']['code'] == 'E0HNNOGJ'

        response = api_client.post(reverse('promo-auto-apply'), {'order_total': '1'}, format='json')
        assert response.data['data']['promo_code']['code'] == 'LF5K6CPE'

    def test_auto_apply_nothing(self, api_client):
        response = api_client.post(reverse('promo-auto-apply'), {'order_total': '5'}, format='json')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['data'] is None

    def test_validate_shipping(self, api_client):
        promo = PromoCodeFactory(code='SHIPLOC', discount_type=PromoCode.TYPE_FREE_SHIPPING)
        promo.condition_groups.create(logic_operator='AND').conditions.create(
            promo_code=promo, condition_type='location', condition_operator='=', condition_value='Salmiya'
        )
        url = reverse('promo-validate-shipping')

        response = api_client.post(url, {'promo_code': 'shiploc', 'order_total': '10', 'location': 'salmiya'},
                                   format='json')
        assert response.data['data'] == {'qualifies': True}

        response = api_client.post(url, {'promo_code': 'SHIPLOC', 'order_total': '10'}, format='json')
        assert response.data['data'] == {'qualifies': False}

        response = api_client.post(url, {'promo_code': 'MISSING', 'order_total': '10'}, format='json')
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestAdminEndpoints:

    def payload(self, **overrides):
        data = {
            'code': 'newyear',
            'title_en': 'New year',
            'discount_type': 'percentage',
            'discount_value': '15',
            'valid_from': (timezone.now() - timedelta(days=1)).isoformat(),
            'valid_until': (timezone.now() + timedelta(days=10)).isoformat(),
        }
        data.update(overrides)
        return data

    def test_customers_are_forbidden(self, auth_client):
        assert auth_client.get(reverse('promo-list')).status_code == status.HTTP_403_FORBIDDEN
        assert auth_client.get(reverse('promo-stats')).status_code == status.HTTP_403_FORBIDDEN

    def test_create_normalizes_code(self, admin_client):
        response = admin_client.post(reverse('promo-list'), self.payload(), format='json')
        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['data']['code'] == 'NEWYEAR'
        assert response.data['data']['status'] == PromoCode.STATUS_ACTIVE

        duplicate = admin_client.post(reverse('promo-list'), self.payload(code='NewYear'), format='json')
        assert duplicate.status_code == status.HTTP_400_BAD_REQUEST
        assert 'code' in duplicate.data['errors']

    @pytest.mark.parametrize('overrides, field', [
        ({'discount_value': '150'}, 'discount_value'),
        ({'code': 'x'}, 'code'),
        ({'valid_until': (timezone.now() - timedelta(days=2)).isoformat()}, 'valid_until'),
        ({'usage_limit': 0}, 'usage_limit'),
    ])
    def test_create_validation(self, admin_client, overrides, field):
        response = admin_client.post(reverse('promo-list'), self.payload(**overrides), format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert field in response.data['errors']

    def test_list_detail_update_toggle_delete(self, admin_client):
        promo = PromoCodeFactory(code='MANAGE')
        PromoCodeFactory(code='OTHER', is_active=False)

        listing = admin_client.get(reverse('promo-list'), {'status': 'active'})
        assert [p['code'] for p in listing.data['data']['list']] == ['MANAGE']
        assert listing.data['data']['page']['total'] == 1

        detail = admin_client.get(reverse('promo-detail', args=[promo.id]))
        assert detail.data['data']['usages'] == []

        updated = admin_client.put(reverse('promo-detail', args=[promo.id]), {'discount_value': '25'}, format='json')
        assert updated.status_code == status.HTTP_200_OK
        promo.refresh_from_db()
        assert promo.discount_value == Decimal('25')

        toggled = admin_client.post(reverse('promo-toggle-status', args=[promo.id]))
        assert toggled.data['data'] == {'is_active': False}

        deleted = admin_client.delete(reverse('promo-detail', args=[promo.id]) + '?hard_delete=true')
        assert deleted.status_code == status.HTTP_200_OK
        assert not PromoCode.objects.filter(pk=promo.pk).exists()

    def test_shipping_condition_groups(self, admin_client):
        promo = PromoCodeFactory(discount_type=PromoCode.TYPE_FREE_SHIPPING, discount_value=Decimal('0'))
        url = reverse('promo-shipping-conditions', args=[promo.id])
        response = admin_client.post(url, {
            'logic_operator': 'OR',
            'conditions': [
                {'condition_type': 'min_order_amount', 'condition_operator': '>=', 'condition_value': '20'},
                {'condition_type': 'user_type', 'condition_operator': '=', 'condition_value': 'registered'},
            ],
        }, format='json')
        assert response.status_code == status.HTTP_201_CREATED

        groups = admin_client.get(url).data['data']
        assert len(groups) == 1
        assert groups[0]['logic_operator'] == 'OR'

        group_url = reverse('promo-shipping-condition-group', args=[promo.id, groups[0]['group_id']])
        assert admin_client.delete(group_url).status_code == status.HTTP_200_OK
        assert admin_client.delete(group_url).status_code == status.HTTP_404_NOT_FOUND

    def test_stats_and_csv_report(self, admin_client):
        promo = PromoCodeFactory(code='CSVME')
        PromoService.redeem(promo, None, OrderFactory(order_number='ORD-CSV-1'), Decimal('1.50'))

        stats = admin_client.get(reverse('promo-stats'))
        assert stats.data['data']['overview']['total_usages'] == 1

        report = admin_client.get(reverse('promo-usage-report'))
        assert report.data['data']['summary']['total_usages'] == 1

        csv_response = admin_client.get(reverse('promo-usage-report'), {'format': 'csv'})
        assert csv_response['Content-Type'].startswith('text/csv')
        body = csv_response.content.decode()
        assert body.startswith('Code,Title')
        assert 'ORD-CSV-1' in body

    def test_report_range_validation(self, admin_client):
        start = timezone.now()
        response = admin_client.get(reverse('promo-usage-report'), {
            'start_date': start.isoformat(),
            'end_date': (start - timedelta(days=1)).isoformat(),
        })
        assert response.status_code == status.HTTP_400_BAD_REQUEST
