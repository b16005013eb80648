"""
Test configuration for the bakery server.
"""
from decimal import Decimal

import pytest
from rest_framework.test import APIClient


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user_factory():
    """Factory for creating test users."""
    from tests.factories import UserFactory
    return UserFactory


@pytest.fixture
def test_user(db):
    from tests.factories import UserFactory
    return UserFactory()


@pytest.fixture
def admin_user(db):
    from tests.factories import AdminUserFactory
    return AdminUserFactory()


@pytest.fixture
def auth_client(api_client, test_user):
    api_client.force_authenticate(user=test_user)
    return api_client


@pytest.fixture
def admin_client(api_client, admin_user):
    api_client.force_authenticate(user=admin_user)
    return api_client


@pytest.fixture
def sample_category(db):
    """Create a sample category for testing."""
    from tests.factories import CategoryFactory
    return CategoryFactory()


@pytest.fixture
def sample_product(sample_category):
    """A 10.00 cake with an add-on and an override size."""
    from tests.factories import ProductFactory, ProductVariantFactory
    from apps.products.models import ProductVariant

    product = ProductFactory(category=sample_category, base_price=Decimal('10.00'))
    ProductVariantFactory(
        product=product, title_en='Extra cream',
        price_modifier=Decimal('3.00'), price_behavior=ProductVariant.BEHAVIOR_ADD, stock_quantity=5
    )
    ProductVariantFactory(
        product=product, title_en='Large',
        price_modifier=Decimal('15.00'), price_behavior=ProductVariant.BEHAVIOR_OVERRIDE, stock_quantity=5
    )
    return product
