from django.urls import path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .health_views import HealthCheckView

app_name = 'common'

urlpatterns = [
    path('health/', HealthCheckView.as_view(), name='health_check'),
    path('auth/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
]
