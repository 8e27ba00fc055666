"""
Persistence Models Package.

All Django ORM models for the auto shop.
"""

# Base mixins and managers
from .base import (
    TimeStampedMixin,
    VersionedMixin,
    AuditMixin,
    ActiveManager,
)

# Customer models
from .customers import (
    CustomerModel,
    VehicleModel,
    DocumentTypeChoices,
)

# Catalog models
from .catalog import (
    ServiceModel,
    PartModel,
    ServiceCategoryChoices,
)

# Service order models
from .service_orders import (
    ServiceOrderModel,
    ServiceOrderItemModel,
    PartOrderItemModel,
    ServiceOrderStatusHistoryModel,
    OrderNumberSequence,
    ServiceOrderStatusChoices,
    PriorityChoices,
    LineItemStatusChoices,
)

__all__ = [
    # Base
    'TimeStampedMixin',
    'VersionedMixin',
    'AuditMixin',
    'ActiveManager',
    # Customers
    'CustomerModel',
    'VehicleModel',
    'DocumentTypeChoices',
    # Catalog
    'ServiceModel',
    'PartModel',
    'ServiceCategoryChoices',
    # Service orders
    'ServiceOrderModel',
    'ServiceOrderItemModel',
    'PartOrderItemModel',
    'ServiceOrderStatusHistoryModel',
    'OrderNumberSequence',
    'ServiceOrderStatusChoices',
    'PriorityChoices',
    'LineItemStatusChoices',
]
