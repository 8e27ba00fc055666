"""
In-memory repository implementations for use case tests.

Stored aggregates are deep copies, so a test only sees a change after it
has gone through the repository.
"""

import copy
from collections import Counter
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from domain.catalog.aggregates import Part, Service
from domain.catalog.repositories import PartRepository, ServiceRepository
from domain.customers.aggregates import Customer, Vehicle
from domain.customers.repositories import CustomerRepository, VehicleRepository
from domain.service_orders.aggregates import ServiceOrder
from domain.service_orders.entities import PartLineItem, ServiceLineItem
from domain.service_orders.repositories import ServiceOrderRepository
from domain.shared.exceptions import (
    ConcurrencyException,
    EntityAlreadyExistsException,
    EntityNotFoundException,
    InsufficientStockException,
)
from domain.shared.pagination import Page
from domain.shared.value_objects import LicensePlate, ServiceCategory, ServiceOrderStatus


def _page(items: List, page: int, limit: int) -> Page:
    page, limit, offset = Page.bounds(page, limit)
    return Page(items=items[offset:offset + limit], total=len(items), page=page, limit=limit)


class InMemoryStore:
    """Dict of deep-copied aggregates with a version check on save."""

    entity_type = "Entity"

    def __init__(self):
        self.rows: Dict[UUID, object] = {}

    def _put(self, entity):
        self.rows[entity.id] = copy.deepcopy(entity)
        return copy.deepcopy(entity)

    def _get(self, entity_id):
        entity = self.rows.get(entity_id)
        return copy.deepcopy(entity) if entity is not None else None

    def _save(self, entity):
        stored = self.rows.get(entity.id)
        if stored is None:
            raise EntityNotFoundException(self.entity_type, entity.id)
        if stored.version != entity.version:
            raise ConcurrencyException(self.entity_type, entity.id, entity.version)
        entity.increment_version()
        self.rows[entity.id] = copy.deepcopy(entity)
        return entity

    def _all(self, active=None):
        items = [copy.deepcopy(e) for e in self.rows.values()]
        if active is not None:
            items = [e for e in items if e.is_active == active]
        return items

    def delete(self, entity_id) -> bool:
        return self.rows.pop(entity_id, None) is not None


class InMemoryCustomerRepository(InMemoryStore, CustomerRepository):
    entity_type = "Customer"

    def add(self, customer: Customer) -> Customer:
        if self.get_by_document(customer.document.value) is not None:
            raise EntityAlreadyExistsException("Customer", "document", customer.document.value)
        if self.get_by_email(customer.email.value) is not None:
            raise EntityAlreadyExistsException("Customer", "email", customer.email.value)
        return self._put(customer)

    def get_by_id(self, customer_id: UUID) -> Optional[Customer]:
        return self._get(customer_id)

    def get_by_document(self, document: str) -> Optional[Customer]:
        return next((c for c in self._all() if c.document.value == document), None)

    def get_by_email(self, email: str) -> Optional[Customer]:
        email = email.strip().lower()
        return next((c for c in self._all() if c.email.value == email), None)

    def list(self, active=None, page=1, limit=10) -> Page[Customer]:
        return _page(self._all(active), page, limit)

    def save(self, customer: Customer) -> Customer:
        return self._save(customer)


class InMemoryVehicleRepository(InMemoryStore, VehicleRepository):
    entity_type = "Vehicle"

    def add(self, vehicle: Vehicle) -> Vehicle:
        if self.get_by_license_plate(vehicle.license_plate.value) is not None:
            raise EntityAlreadyExistsException("Vehicle", "license_plate", vehicle.license_plate.value)
        return self._put(vehicle)

    def get_by_id(self, vehicle_id: UUID) -> Optional[Vehicle]:
        return self._get(vehicle_id)

    def get_by_license_plate(self, license_plate: str) -> Optional[Vehicle]:
        plate = LicensePlate(license_plate).value
        return next((v for v in self._all() if v.license_plate.value == plate), None)

    def list_by_customer(self, customer_id: UUID) -> List[Vehicle]:
        return [v for v in self._all() if v.customer_id == customer_id]

    def list(self, active=None, page=1, limit=10) -> Page[Vehicle]:
        return _page(self._all(active), page, limit)

    def save(self, vehicle: Vehicle) -> Vehicle:
        return self._save(vehicle)


class InMemoryServiceRepository(InMemoryStore, ServiceRepository):
    entity_type = "Service"

    def add(self, service: Service) -> Service:
        return self._put(service)

    def get_by_id(self, service_id: UUID) -> Optional[Service]:
        return self._get(service_id)

    def list_by_category(self, category: ServiceCategory) -> List[Service]:
        return [s for s in self._all(active=True) if s.category is category]

    def list(self, active=None, page=1, limit=10) -> Page[Service]:
        return _page(self._all(active), page, limit)

    def save(self, service: Service) -> Service:
        return self._save(service)


class InMemoryPartRepository(InMemoryStore, PartRepository):
    entity_type = "Part"

    def add(self, part: Part) -> Part:
        if self.get_by_part_number(part.part_number) is not None:
            raise EntityAlreadyExistsException("Part", "part_number", part.part_number)
        return self._put(part)

    def get_by_id(self, part_id: UUID) -> Optional[Part]:
        return self._get(part_id)

    def get_by_part_number(self, part_number: str) -> Optional[Part]:
        return next((p for p in self._all() if p.part_number == part_number), None)

    def list_low_stock(self) -> List[Part]:
        return [p for p in self._all(active=True) if p.is_low_stock]

    def list(self, active=None, page=1, limit=10) -> Page[Part]:
        return _page(self._all(active), page, limit)

    def save(self, part: Part) -> Part:
        return self._save(part)


class InMemoryServiceOrderRepository(InMemoryStore, ServiceOrderRepository):
    """
    Order store. Stock reservation needs the part store it draws from.
    """

    entity_type = "ServiceOrder"

    def __init__(self, parts: Optional[InMemoryPartRepository] = None, prefix: str = "OS"):
        super().__init__()
        self.parts = parts
        self.prefix = prefix
        self.last_number = 0

    def create(
        self,
        order: ServiceOrder,
        service_items: Sequence[ServiceLineItem],
        part_items: Sequence[PartLineItem],
        reserve_stock: bool = False,
    ) -> ServiceOrder:
        if reserve_stock:
            # Check everything first so a failure leaves all stock untouched.
            for item in part_items:
                part = self.parts.rows.get(item.part_id)
                if part is None:
                    raise EntityNotFoundException("Part", item.part_id)
                if part.stock_quantity < item.quantity:
                    raise InsufficientStockException(
                        part.id, item.quantity, part.stock_quantity, part.name
                    )
            for item in part_items:
                part = self.parts.rows[item.part_id]
                part.stock_quantity -= item.quantity
                part.increment_version()

        self.last_number += 1
        order.order_number = f"{self.prefix}{self.last_number:06d}"
        order.service_items = tuple(service_items)
        order.part_items = tuple(part_items)
        order.seed_history(order.created_by)
        stored = copy.deepcopy(order)
        stored.clear_domain_events()
        self.rows[order.id] = stored
        return copy.deepcopy(stored)

    def get_by_id(self, order_id: UUID) -> Optional[ServiceOrder]:
        return self._get(order_id)

    def get_by_order_number(self, order_number: str) -> Optional[ServiceOrder]:
        return next((o for o in self._all() if o.order_number == order_number), None)

    def list(self, status=None, customer_id=None, vehicle_id=None, page=1, limit=10) -> Page[ServiceOrder]:
        items = self._all()
        if status is not None:
            items = [o for o in items if o.status is status]
        if customer_id is not None:
            items = [o for o in items if o.customer_id == customer_id]
        if vehicle_id is not None:
            items = [o for o in items if o.vehicle_id == vehicle_id]
        return _page(items, page, limit)

    def list_by_customer(self, customer_id: UUID) -> List[ServiceOrder]:
        return [o for o in self._all() if o.customer_id == customer_id]

    def list_by_vehicle(self, vehicle_id: UUID) -> List[ServiceOrder]:
        return [o for o in self._all() if o.vehicle_id == vehicle_id]

    def list_by_status(self, status: ServiceOrderStatus) -> List[ServiceOrder]:
        return [o for o in self._all() if o.status is status]

    def update(self, order: ServiceOrder) -> ServiceOrder:
        self._save(order)
        return self._get(order.id)

    def update_status(self, order_id, status, reason=None, changed_by=None) -> ServiceOrder:
        order = self._get(order_id)
        if order is None:
            raise EntityNotFoundException("ServiceOrder", order_id)
        order.update_status(status, changed_by=changed_by, reason=reason)
        return self.update(order)

    def average_execution_hours(self) -> float:
        durations = [
            (o.actual_completion - o.created_at).total_seconds() / 3600
            for o in self._all()
            if o.is_completed and o.actual_completion is not None
        ]
        return sum(durations) / len(durations) if durations else 0.0

    def count_by_status(self) -> Dict[ServiceOrderStatus, int]:
        return dict(Counter(o.status for o in self._all()))
