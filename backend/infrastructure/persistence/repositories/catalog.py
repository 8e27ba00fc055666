"""
Django adapters for the service and part repositories.
"""

from typing import List, Optional
from uuid import UUID

from django.db import IntegrityError, transaction

from domain.catalog.aggregates import Part, Service
from domain.catalog.repositories import PartRepository, ServiceRepository
from domain.shared.exceptions import EntityAlreadyExistsException
from domain.shared.pagination import Page
from domain.shared.value_objects import ServiceCategory
from infrastructure.persistence.models import PartModel, ServiceModel

from .base import compare_and_swap, paginate


def service_to_domain(obj: ServiceModel) -> Service:
    return Service(
        id=obj.id,
        created_at=obj.created_at,
        updated_at=obj.updated_at,
        version=obj.version,
        created_by=obj.created_by,
        updated_by=obj.updated_by,
        name=obj.name,
        description=obj.description,
        estimated_duration=obj.estimated_duration,
        price=obj.price,
        category=obj.category,
        is_active=obj.is_active,
    )


def part_to_domain(obj: PartModel) -> Part:
    return Part(
        id=obj.id,
        created_at=obj.created_at,
        updated_at=obj.updated_at,
        version=obj.version,
        created_by=obj.created_by,
        updated_by=obj.updated_by,
        name=obj.name,
        description=obj.description,
        part_number=obj.part_number,
        manufacturer=obj.manufacturer,
        price=obj.price,
        stock_quantity=obj.stock_quantity,
        min_stock_level=obj.min_stock_level,
        unit=obj.unit,
        is_active=obj.is_active,
    )


class DjangoServiceRepository(ServiceRepository):

    def add(self, service: Service) -> Service:
        obj = ServiceModel.objects.create(
            id=service.id,
            version=service.version,
            created_by=service.created_by,
            updated_by=service.updated_by,
            name=service.name,
            description=service.description,
            estimated_duration=service.estimated_duration,
            price=service.price,
            category=service.category.value,
            is_active=service.is_active,
        )
        return service_to_domain(obj)

    def get_by_id(self, service_id: UUID) -> Optional[Service]:
        obj = ServiceModel.objects.filter(pk=service_id).first()
        return service_to_domain(obj) if obj else None

    def list_by_category(self, category: ServiceCategory) -> List[Service]:
        return [service_to_domain(obj) for obj in ServiceModel.active.filter(category=category.value)]

    def list(self, active: Optional[bool] = None, page: int = 1, limit: int = 10) -> Page[Service]:
        queryset = ServiceModel.objects.all()
        if active is not None:
            queryset = queryset.filter(is_active=active)
        return paginate(queryset, page, limit, service_to_domain)

    def save(self, service: Service) -> Service:
        with transaction.atomic():
            compare_and_swap(
                ServiceModel, service, "Service",
                updated_by=service.updated_by,
                name=service.name,
                description=service.description,
                estimated_duration=service.estimated_duration,
                price=service.price,
                category=service.category.value,
                is_active=service.is_active,
            )
        return service

    def delete(self, service_id: UUID) -> bool:
        deleted, _ = ServiceModel.objects.filter(pk=service_id).delete()
        return deleted > 0


class DjangoPartRepository(PartRepository):

    def add(self, part: Part) -> Part:
        try:
            with transaction.atomic():
                obj = PartModel.objects.create(
                    id=part.id,
                    version=part.version,
                    created_by=part.created_by,
                    updated_by=part.updated_by,
                    name=part.name,
                    description=part.description,
                    part_number=part.part_number,
                    manufacturer=part.manufacturer,
                    price=part.price,
                    stock_quantity=part.stock_quantity,
                    min_stock_level=part.min_stock_level,
                    unit=part.unit,
                    is_active=part.is_active,
                )
        except IntegrityError:
            raise EntityAlreadyExistsException("Part", "part_number", part.part_number)
        return part_to_domain(obj)

    def get_by_id(self, part_id: UUID) -> Optional[Part]:
        obj = PartModel.objects.filter(pk=part_id).first()
        return part_to_domain(obj) if obj else None

    def get_by_part_number(self, part_number: str) -> Optional[Part]:
        obj = PartModel.objects.filter(part_number=part_number).first()
        return part_to_domain(obj) if obj else None

    def list_low_stock(self) -> List[Part]:
        queryset = PartModel.active.low_stock().order_by('stock_quantity', 'name')
        return [part_to_domain(obj) for obj in queryset]

    def list(self, active: Optional[bool] = None, page: int = 1, limit: int = 10) -> Page[Part]:
        queryset = PartModel.objects.all()
        if active is not None:
            queryset = queryset.filter(is_active=active)
        return paginate(queryset, page, limit, part_to_domain)

    def save(self, part: Part) -> Part:
        with transaction.atomic():
            compare_and_swap(
                PartModel, part, "Part",
                updated_by=part.updated_by,
                name=part.name,
                description=part.description,
                manufacturer=part.manufacturer,
                price=part.price,
                stock_quantity=part.stock_quantity,
                min_stock_level=part.min_stock_level,
                unit=part.unit,
                is_active=part.is_active,
            )
        return part

    def delete(self, part_id: UUID) -> bool:
        deleted, _ = PartModel.objects.filter(pk=part_id).delete()
        return deleted > 0
