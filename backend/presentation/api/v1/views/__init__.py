"""
Views Package.

ViewSets for the auto shop API. Each view validates the request, calls one
application use case and renders the result.
"""

from .customers import CustomerViewSet, VehicleViewSet
from .catalog import ServiceViewSet, PartViewSet
from .service_orders import ServiceOrderViewSet
