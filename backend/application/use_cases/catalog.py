"""
Use Cases: Catalog

Services and parts that service orders are priced from, plus stock
adjustments on parts.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Union
from uuid import UUID

from application.events import dispatch_events
from domain.catalog.aggregates import DEFAULT_MIN_STOCK_LEVEL, DEFAULT_UNIT, Part, Service
from domain.catalog.repositories import PartRepository, ServiceRepository
from domain.shared.exceptions import EntityAlreadyExistsException, EntityNotFoundException
from domain.shared.pagination import Page
from domain.shared.value_objects import ServiceCategory, parse_enum

logger = logging.getLogger(__name__)


class StockOperation(str, Enum):
    ADD = "add"
    REMOVE = "remove"
    SET = "set"


@dataclass
class CreateServiceInput:
    name: str
    estimated_duration: int
    price: Decimal
    category: str = ServiceCategory.OTHER.value
    description: Optional[str] = None
    user_id: Optional[str] = None


@dataclass
class CreatePartInput:
    name: str
    part_number: str
    price: Decimal
    stock_quantity: int = 0
    min_stock_level: int = DEFAULT_MIN_STOCK_LEVEL
    unit: str = DEFAULT_UNIT
    description: Optional[str] = None
    manufacturer: Optional[str] = None
    user_id: Optional[str] = None


@dataclass
class AdjustStockInput:
    part_id: UUID
    operation: Union[StockOperation, str]
    quantity: int
    user_id: Optional[str] = None


# =============================================================================
# SERVICES
# =============================================================================

class CreateServiceUseCase:

    def __init__(self, services: ServiceRepository):
        self.services = services

    def execute(self, data: CreateServiceInput) -> Service:
        service = Service.create(
            name=data.name,
            estimated_duration=data.estimated_duration,
            price=data.price,
            category=parse_enum(ServiceCategory, data.category, "category"),
            description=data.description,
            user_id=data.user_id,
        )
        saved = self.services.add(service)
        logger.info("Service %s created (%s, price %s)", saved.id, saved.category.value, saved.price)
        return saved


class GetServiceUseCase:

    def __init__(self, services: ServiceRepository):
        self.services = services

    def execute(self, service_id: UUID) -> Service:
        service = self.services.get_by_id(service_id)
        if service is None:
            raise EntityNotFoundException("Service", service_id)
        return service


class ListServicesUseCase:
    """List services. Filtering by category returns active services only."""

    def __init__(self, services: ServiceRepository):
        self.services = services

    def execute(
        self,
        category: Optional[str] = None,
        active: Optional[bool] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Page[Service]:
        page, limit, offset = Page.bounds(page, limit)
        if category is not None:
            matching = self.services.list_by_category(parse_enum(ServiceCategory, category, "category"))
            return Page(items=matching[offset:offset + limit], total=len(matching), page=page, limit=limit)
        return self.services.list(active=active, page=page, limit=limit)


# =============================================================================
# PARTS
# =============================================================================

def load_part(parts: PartRepository, part_id: UUID) -> Part:
    part = parts.get_by_id(part_id)
    if part is None:
        raise EntityNotFoundException("Part", part_id)
    return part


class CreatePartUseCase:
    """Register a part. Part numbers are unique."""

    def __init__(self, parts: PartRepository):
        self.parts = parts

    def execute(self, data: CreatePartInput) -> Part:
        part_number = (data.part_number or "").strip()
        if part_number and self.parts.get_by_part_number(part_number) is not None:
            raise EntityAlreadyExistsException("Part", "part_number", part_number)

        part = Part.create(
            name=data.name,
            part_number=part_number,
            price=data.price,
            stock_quantity=data.stock_quantity,
            min_stock_level=data.min_stock_level,
            unit=data.unit,
            description=data.description,
            manufacturer=data.manufacturer,
            user_id=data.user_id,
        )
        saved = self.parts.add(part)
        logger.info("Part %s created with stock %s", saved.part_number, saved.stock_quantity)
        return saved


class GetPartUseCase:

    def __init__(self, parts: PartRepository):
        self.parts = parts

    def execute(self, part_id: UUID) -> Part:
        return load_part(self.parts, part_id)


class ListPartsUseCase:

    def __init__(self, parts: PartRepository):
        self.parts = parts

    def execute(self, active: Optional[bool] = None, page: int = 1, limit: int = 10) -> Page[Part]:
        page, limit, _ = Page.bounds(page, limit)
        return self.parts.list(active=active, page=page, limit=limit)


class AdjustPartStockUseCase:
    """Add to, remove from or overwrite the stock of a part."""

    def __init__(self, parts: PartRepository):
        self.parts = parts

    def execute(self, data: AdjustStockInput) -> Part:
        operation = parse_enum(StockOperation, data.operation, "operation")
        part = load_part(self.parts, data.part_id)

        if operation is StockOperation.ADD:
            part.add_stock(data.quantity, data.user_id)
        elif operation is StockOperation.REMOVE:
            part.remove_stock(data.quantity, data.user_id)
        else:
            part.set_stock(data.quantity, data.user_id)

        part = self.parts.save(part)
        dispatch_events(part)
        logger.info(
            "Stock of part %s adjusted (%s %s), now %s",
            part.part_number, operation.value, data.quantity, part.stock_quantity
        )
        if part.is_low_stock:
            logger.warning("Part %s is low on stock (%s <= %s)",
                           part.part_number, part.stock_quantity, part.min_stock_level)
        return part


class ListLowStockPartsUseCase:

    def __init__(self, parts: PartRepository):
        self.parts = parts

    def execute(self) -> List[Part]:
        return self.parts.list_low_stock()
