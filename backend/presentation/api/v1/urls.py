"""
API v1 URL Configuration.

All API endpoints for version 1.
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import (
    CustomerViewSet,
    PartViewSet,
    ServiceOrderViewSet,
    ServiceViewSet,
    VehicleViewSet,
)

# Create router
router = DefaultRouter()

# Customers & Vehicles
router.register(r'customers', CustomerViewSet, basename='customers')
router.register(r'vehicles', VehicleViewSet, basename='vehicles')

# Catalog
router.register(r'services', ServiceViewSet, basename='services')
router.register(r'parts', PartViewSet, basename='parts')

# Service Orders
router.register(r'service-orders', ServiceOrderViewSet, basename='service-orders')

app_name = 'api_v1'

urlpatterns = [
    path('', include(router.urls)),
]
