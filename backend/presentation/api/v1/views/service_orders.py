"""
Service Order Views.

Endpoints:
- /service-orders/ - list (?status=, ?customer_id=, ?vehicle_id=), open
- /service-orders/{id}/ - retrieve, update diagnosis/priority/estimate
- /service-orders/{id}/status/ - move along the lifecycle
- /service-orders/{id}/approve/ - record the customer's approval
- /service-orders/{id}/observations/ - append an observation
- /service-orders/{id}/assign/ - assign to a mechanic
- /service-orders/by-number/{number}/ - lookup by order number
- /service-orders/metrics/ - execution time and status counts
"""

from rest_framework.decorators import action
from rest_framework.response import Response

from application.use_cases.service_orders import (
    AddObservationUseCase,
    ApproveServiceOrderUseCase,
    AssignServiceOrderUseCase,
    CreateServiceOrderRequest,
    GetServiceOrderByNumberUseCase,
    GetServiceOrderUseCase,
    ListServiceOrdersUseCase,
    OrderLineRequest,
    ServiceOrderMetricsUseCase,
    UpdateServiceOrderInput,
    UpdateServiceOrderStatusUseCase,
    UpdateServiceOrderUseCase,
)
from ..dependencies import create_service_order_use_case, service_order_repository
from ..serializers import (
    ApproveSerializer,
    AssignSerializer,
    ObservationSerializer,
    ServiceOrderCreateSerializer,
    ServiceOrderUpdateSerializer,
    StatusUpdateSerializer,
)
from ..filters import ServiceOrderFilterSet
from .base import UseCaseViewSet


class ServiceOrderViewSet(UseCaseViewSet):
    """
    ViewSet for service orders.

    Orders are never deleted through the API; CANCELLED is the terminal
    state for abandoned jobs.
    """

    def list(self, request):
        filters = self.filters(ServiceOrderFilterSet)
        page, limit = self.page_params()
        result = ListServiceOrdersUseCase(service_order_repository()).execute(
            status=filters['status'],
            customer_id=filters['customer_id'],
            vehicle_id=filters['vehicle_id'],
            page=page,
            limit=limit,
        )
        return self.paginated(result)

    def create(self, request):
        data = self.validated(ServiceOrderCreateSerializer)
        order = create_service_order_use_case().execute(CreateServiceOrderRequest(
            customer_id=data['customer_id'],
            vehicle_id=data['vehicle_id'],
            description=data['description'],
            priority=data['priority'],
            services=[
                OrderLineRequest(item_id=line['service_id'], quantity=line['quantity'])
                for line in data['services']
            ],
            parts=[
                OrderLineRequest(item_id=line['part_id'], quantity=line['quantity'])
                for line in data['parts']
            ],
            estimated_completion=data.get('estimated_completion'),
            created_by=data.get('created_by'),
        ))
        return self.created(order)

    def retrieve(self, request, pk=None):
        return self.ok(GetServiceOrderUseCase(service_order_repository()).execute(self.get_uuid(pk)))

    def partial_update(self, request, pk=None):
        data = self.validated(ServiceOrderUpdateSerializer, partial=True)
        order = UpdateServiceOrderUseCase(service_order_repository()).execute(
            UpdateServiceOrderInput(order_id=self.get_uuid(pk), **data)
        )
        return self.ok(order)

    @action(detail=True, methods=['post', 'patch'])
    def status(self, request, pk=None):
        data = self.validated(StatusUpdateSerializer)
        order = UpdateServiceOrderStatusUseCase(service_order_repository()).execute(
            self.get_uuid(pk),
            data['status'],
            reason=data.get('reason') or None,
            changed_by=data.get('changed_by'),
        )
        return self.ok(order)

    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        data = self.validated(ApproveSerializer)
        order = ApproveServiceOrderUseCase(service_order_repository()).execute(
            self.get_uuid(pk),
            data['approved_by'],
            data.get('approved_amount'),
        )
        return self.ok(order)

    @action(detail=True, methods=['post'])
    def observations(self, request, pk=None):
        data = self.validated(ObservationSerializer)
        order = AddObservationUseCase(service_order_repository()).execute(
            self.get_uuid(pk), data['text'], data.get('user_id')
        )
        return self.ok(order)

    @action(detail=True, methods=['post'])
    def assign(self, request, pk=None):
        data = self.validated(AssignSerializer)
        order = AssignServiceOrderUseCase(service_order_repository()).execute(
            self.get_uuid(pk), data['assigned_to'], data.get('user_id')
        )
        return self.ok(order)

    @action(detail=False, methods=['get'], url_path=r'by-number/(?P<order_number>[A-Za-z0-9]+)')
    def by_number(self, request, order_number=None):
        return self.ok(GetServiceOrderByNumberUseCase(service_order_repository()).execute(order_number))

    @action(detail=False, methods=['get'])
    def metrics(self, request):
        return Response(ServiceOrderMetricsUseCase(service_order_repository()).execute())
