"""
Catalog Views.

Endpoints:
- /services/ - list (?category=, ?active=), create
- /services/{id}/ - retrieve
- /parts/ - list, create
- /parts/{id}/ - retrieve
- /parts/low-stock/ - parts at or below their minimum level
- /parts/{id}/stock/ - add, remove or set stock
"""

from rest_framework.decorators import action
from rest_framework.response import Response

from application.use_cases.catalog import (
    AdjustPartStockUseCase,
    AdjustStockInput,
    CreatePartInput,
    CreatePartUseCase,
    CreateServiceInput,
    CreateServiceUseCase,
    GetPartUseCase,
    GetServiceUseCase,
    ListLowStockPartsUseCase,
    ListPartsUseCase,
    ListServicesUseCase,
)
from ..dependencies import part_repository, service_repository
from ..serializers import PartCreateSerializer, ServiceCreateSerializer, StockAdjustSerializer
from ..filters import PartFilterSet, ServiceFilterSet
from .base import UseCaseViewSet


class ServiceViewSet(UseCaseViewSet):

    def list(self, request):
        filters = self.filters(ServiceFilterSet)
        page, limit = self.page_params()
        result = ListServicesUseCase(service_repository()).execute(
            category=filters['category'],
            active=filters['active'],
            page=page,
            limit=limit,
        )
        return self.paginated(result)

    def create(self, request):
        data = self.validated(ServiceCreateSerializer)
        service = CreateServiceUseCase(service_repository()).execute(CreateServiceInput(**data))
        return self.created(service)

    def retrieve(self, request, pk=None):
        return self.ok(GetServiceUseCase(service_repository()).execute(self.get_uuid(pk)))


class PartViewSet(UseCaseViewSet):

    def list(self, request):
        filters = self.filters(PartFilterSet)
        page, limit = self.page_params()
        result = ListPartsUseCase(part_repository()).execute(
            active=filters['active'],
            page=page,
            limit=limit,
        )
        return self.paginated(result)

    def create(self, request):
        data = self.validated(PartCreateSerializer)
        part = CreatePartUseCase(part_repository()).execute(CreatePartInput(**data))
        return self.created(part)

    def retrieve(self, request, pk=None):
        return self.ok(GetPartUseCase(part_repository()).execute(self.get_uuid(pk)))

    @action(detail=False, methods=['get'], url_path='low-stock')
    def low_stock(self, request):
        parts = ListLowStockPartsUseCase(part_repository()).execute()
        return Response([part.to_dict() for part in parts])

    @action(detail=True, methods=['post'])
    def stock(self, request, pk=None):
        data = self.validated(StockAdjustSerializer)
        part = AdjustPartStockUseCase(part_repository()).execute(
            AdjustStockInput(part_id=self.get_uuid(pk), **data)
        )
        return self.ok(part)
