"""
Test settings for bakery_server project.
"""

from .base import *  # noqa: F401,F403

# Use SQLite for testing
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}


# Disable migrations for faster testing
class DisableMigrations:
    def __contains__(self, item):
        return True

    def __getitem__(self, item):
        return None


MIGRATION_MODULES = DisableMigrations()

# Use faster password hasher for testing
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

# Disable logging during tests
LOGGING_CONFIG = None

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    }
}

CSRF_COOKIE_SECURE = False
SESSION_COOKIE_SECURE = False

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

PRICING_CONFIG = {
    **PRICING_CONFIG,  # noqa: F405
    'DELIVERY_FEE': Decimal('2.00'),  # noqa: F405
    'FREE_SHIPPING_ESTIMATE': Decimal('8'),  # noqa: F405
    'BXGY_ESTIMATE': Decimal('10'),  # noqa: F405
}
