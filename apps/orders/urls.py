from django.urls import path
from . import views

urlpatterns = [
    path('calculate/', views.CalculateOrderView.as_view(), name='order-calculate'),
    path('', views.OrderListCreateView.as_view(), name='order-list-create'),
    path('<str:order_number>/', views.OrderDetailView.as_view(), name='order-detail'),
    path('<str:order_number>/cancel/', views.CancelOrderView.as_view(), name='order-cancel'),
    path('<str:order_number>/apply-promo/', views.ApplyPromoView.as_view(), name='order-apply-promo'),
]
