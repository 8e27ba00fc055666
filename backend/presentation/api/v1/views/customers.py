"""
Customer Views.

Endpoints:
- /customers/ - list, register
- /customers/{id}/ - retrieve, update, deactivate
- /customers/{id}/vehicles/ - vehicles of a customer
- /customers/{id}/service-orders/ - orders of a customer
- /vehicles/ - list, register
- /vehicles/{id}/ - retrieve
"""

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response

from application.use_cases.customers import (
    CreateCustomerInput,
    CreateCustomerUseCase,
    DeactivateCustomerUseCase,
    GetCustomerUseCase,
    ListCustomersUseCase,
    UpdateCustomerInput,
    UpdateCustomerUseCase,
)
from application.use_cases.service_orders import ListServiceOrdersUseCase
from application.use_cases.vehicles import (
    CreateVehicleInput,
    CreateVehicleUseCase,
    GetVehicleUseCase,
    ListCustomerVehiclesUseCase,
    ListVehiclesUseCase,
)
from ..dependencies import customer_repository, service_order_repository, vehicle_repository
from ..serializers import (
    CustomerCreateSerializer,
    CustomerUpdateSerializer,
    VehicleCreateSerializer,
)
from ..filters import CustomerFilterSet, VehicleFilterSet
from .base import UseCaseViewSet


class CustomerViewSet(UseCaseViewSet):
    """Shop customers. DELETE deactivates instead of removing."""

    def list(self, request):
        filters = self.filters(CustomerFilterSet)
        page, limit = self.page_params()
        result = ListCustomersUseCase(customer_repository()).execute(
            active=filters['active'],
            page=page,
            limit=limit,
        )
        return self.paginated(result)

    def create(self, request):
        data = self.validated(CustomerCreateSerializer)
        customer = CreateCustomerUseCase(customer_repository()).execute(CreateCustomerInput(**data))
        return self.created(customer)

    def retrieve(self, request, pk=None):
        return self.ok(GetCustomerUseCase(customer_repository()).execute(self.get_uuid(pk)))

    def partial_update(self, request, pk=None):
        data = self.validated(CustomerUpdateSerializer, partial=True)
        customer = UpdateCustomerUseCase(customer_repository()).execute(
            UpdateCustomerInput(customer_id=self.get_uuid(pk), **data)
        )
        return self.ok(customer)

    def destroy(self, request, pk=None):
        DeactivateCustomerUseCase(customer_repository()).execute(
            self.get_uuid(pk), request.query_params.get('user_id')
        )
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get'])
    def vehicles(self, request, pk=None):
        vehicles = ListCustomerVehiclesUseCase(customer_repository(), vehicle_repository()).execute(
            self.get_uuid(pk)
        )
        return Response([vehicle.to_dict() for vehicle in vehicles])

    @action(detail=True, methods=['get'], url_path='service-orders')
    def service_orders(self, request, pk=None):
        customer = GetCustomerUseCase(customer_repository()).execute(self.get_uuid(pk))
        page, limit = self.page_params()
        result = ListServiceOrdersUseCase(service_order_repository()).execute(
            customer_id=customer.id, page=page, limit=limit
        )
        return self.paginated(result)


class VehicleViewSet(UseCaseViewSet):
    """Customer vehicles. Filter the list with ?customer_id=."""

    def list(self, request):
        filters = self.filters(VehicleFilterSet)
        if filters['customer_id'] is not None:
            vehicles = ListCustomerVehiclesUseCase(customer_repository(), vehicle_repository()).execute(
                filters['customer_id']
            )
            return Response([vehicle.to_dict() for vehicle in vehicles])

        page, limit = self.page_params()
        result = ListVehiclesUseCase(vehicle_repository()).execute(
            active=filters['active'], page=page, limit=limit
        )
        return self.paginated(result)

    def create(self, request):
        data = self.validated(VehicleCreateSerializer)
        vehicle = CreateVehicleUseCase(customer_repository(), vehicle_repository()).execute(
            CreateVehicleInput(**data)
        )
        return self.created(vehicle)

    def retrieve(self, request, pk=None):
        return self.ok(GetVehicleUseCase(vehicle_repository()).execute(self.get_uuid(pk)))
