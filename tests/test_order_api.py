"""
Order and product HTTP endpoints.
"""
from decimal import Decimal

import pytest
from django.urls import reverse
from rest_framework import status

from apps.orders.models import Order
from tests.factories import PromoCodeFactory, UserFactory

pytestmark = pytest.mark.django_db


def money(value):
    return Decimal(str(value))


class TestProductEndpoints:

    def test_detail_lists_variant_prices(self, api_client, sample_product):
        response = api_client.get(reverse('product-detail', args=[sample_product.id]))
        assert response.status_code == status.HTTP_200_OK
        prices = {v['title_en']: money(v['display_price']) for v in response.data['data']['variants']}
        assert prices == {'Extra cream': Decimal('13.00'), 'Large': Decimal('15.00')}

    def test_price_preview(self, api_client, sample_product):
        cream = sample_product.variants.get(title_en='Extra cream')
        large = sample_product.variants.get(title_en='Large')
        url = reverse('product-price', args=[sample_product.id])

        response = api_client.post(url, {'variant_ids': [large.id, cream.id]}, format='json')
        assert money(response.data['data']['unit_price']) == Decimal('18.00')

        response = api_client.post(url, {'variant_ids': [cream.id, cream.id]}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_list(self, api_client, sample_product):
        response = api_client.get(reverse('product-list'), {'keyword': sample_product.title_en})
        assert [p['id'] for p in response.data['data']['list']] == [sample_product.id]


class TestOrderEndpoints:

    def items(self, product, quantity=1, variant_ids=None):
        return [{'product_id': product.id, 'quantity': quantity, 'variant_ids': variant_ids or []}]

    def test_calculate_as_guest(self, api_client, sample_product):
        PromoCodeFactory(code='WELCOME', discount_type='fixed_amount', discount_value=Decimal('3'))
        response = api_client.post(reverse('order-calculate'), {
            'items': self.items(sample_product, 2),
            'promo_code': 'welcome',
        }, format='json')
        assert response.status_code == status.HTTP_200_OK
        data = response.data['data']
        assert money(data['subtotal']) == Decimal('20.00')
        assert money(data['discount_amount']) == Decimal('3.00')
        assert money(data['total_amount']) == Decimal('19.00')
        assert data['promo_code'] == 'WELCOME'

    def test_calculate_rejects_bad_input(self, api_client, sample_product):
        response = api_client.post(reverse('order-calculate'), {'items': []}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

        response = api_client.post(reverse('order-calculate'), {
            'items': [{'product_id': sample_product.id, 'quantity': 0}]
        }, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_requires_login(self, api_client, sample_product):
        response = api_client.post(reverse('order-list-create'), {'items': self.items(sample_product)}, format='json')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_order_lifecycle(self, auth_client, test_user, sample_product):
        cream = sample_product.variants.get(title_en='Extra cream')
        created = auth_client.post(reverse('order-list-create'), {
            'items': self.items(sample_product, 1, [cream.id]),
            'order_type': 'pickup',
            'auto_apply': False,
            'special_instructions': 'Happy birthday',
        }, format='json')
        assert created.status_code == status.HTTP_201_CREATED
        order_number = created.data['data']['order_number']
        assert money(created.data['data']['total_amount']) == Decimal('13.00')

        listing = auth_client.get(reverse('order-list-create'))
        assert [o['order_number'] for o in listing.data['data']] == [order_number]

        PromoCodeFactory(code='LATER', discount_value=Decimal('50'))
        applied = auth_client.post(reverse('order-apply-promo', args=[order_number]), {'code': 'LATER'}, format='json')
        assert applied.status_code == status.HTTP_200_OK
        assert money(applied.data['data']['total_amount']) == Decimal('6.50')

        detail = auth_client.get(reverse('order-detail', args=[order_number]))
        assert detail.data['data']['promo_code'] == 'LATER'
        assert detail.data['data']['special_instructions'] == 'Happy birthday'

        cancelled = auth_client.post(reverse('order-cancel', args=[order_number]), {'reason': 'Oops'}, format='json')
        assert cancelled.status_code == status.HTTP_200_OK
        assert Order.objects.get(order_number=order_number).status == Order.STATUS_CANCELLED

        again = auth_client.post(reverse('order-cancel', args=[order_number]), {}, format='json')
        assert again.status_code == status.HTTP_400_BAD_REQUEST

    def test_orders_are_private(self, api_client, auth_client, sample_product):
        created = auth_client.post(reverse('order-list-create'), {'items': self.items(sample_product)}, format='json')
        order_number = created.data['data']['order_number']

        api_client.force_authenticate(user=UserFactory())
        response = api_client.get(reverse('order-detail', args=[order_number]))
        assert response.status_code == status.HTTP_404_NOT_FOUND
