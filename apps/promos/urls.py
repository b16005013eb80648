from django.urls import path
from . import views

urlpatterns = [
    # Customer endpoints
    path('validate/', views.ValidatePromoView.as_view(), name='promo-validate'),
    path('validate-guest/', views.ValidatePromoGuestView.as_view(), name='promo-validate-guest'),
    path('available/', views.AvailablePromosView.as_view(), name='promo-available'),
    path('auto-apply/', views.AutoApplyPromoView.as_view(), name='promo-auto-apply'),
    path('validate-shipping/', views.ValidateShippingView.as_view(), name='promo-validate-shipping'),

    # Admin endpoints
    path('stats/', views.PromoStatsView.as_view(), name='promo-stats'),
    path('usage-report/', views.PromoUsageReportView.as_view(), name='promo-usage-report'),
    path('<int:pk>/toggle-status/', views.PromoToggleStatusView.as_view(), name='promo-toggle-status'),
    path('<int:pk>/shipping-conditions/', views.PromoShippingConditionsView.as_view(), name='promo-shipping-conditions'),
    path('<int:pk>/shipping-conditions/<int:group_id>/', views.PromoShippingConditionGroupView.as_view(),
         name='promo-shipping-condition-group'),
    path('<int:pk>/', views.PromoDetailView.as_view(), name='promo-detail'),
    path('', views.PromoListCreateView.as_view(), name='promo-list'),
]
