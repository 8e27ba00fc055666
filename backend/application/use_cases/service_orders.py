"""
Use Cases: Service Orders

Order assembly (lookup, validation and pricing of a new order), the status
lifecycle, approval and day-to-day edits of open orders.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from application.events import dispatch_events
from domain.catalog.repositories import PartRepository, ServiceRepository
from domain.customers.repositories import CustomerRepository, VehicleRepository
from domain.service_orders.aggregates import ServiceOrder
from domain.service_orders.entities import PartLineItem, ServiceLineItem
from domain.service_orders.repositories import ServiceOrderRepository
from domain.shared.exceptions import (
    EntityNotFoundException,
    InactiveEntityException,
    InsufficientStockException,
    VehicleOwnershipException,
)
from domain.shared.pagination import Page
from domain.shared.value_objects import Priority, ServiceOrderStatus, parse_enum

logger = logging.getLogger(__name__)


@dataclass
class OrderLineRequest:
    """A requested quantity of a catalog service or part."""

    item_id: UUID
    quantity: int = 1


@dataclass
class CreateServiceOrderRequest:
    customer_id: UUID
    vehicle_id: UUID
    description: str
    priority: str = Priority.NORMAL.value
    services: List[OrderLineRequest] = field(default_factory=list)
    parts: List[OrderLineRequest] = field(default_factory=list)
    estimated_completion: Optional[datetime] = None
    created_by: Optional[str] = None


@dataclass
class OrderAssembly:
    """An unsaved order together with the lines it was priced from."""

    order: ServiceOrder
    service_items: Tuple[ServiceLineItem, ...]
    part_items: Tuple[PartLineItem, ...]


def load_order(orders: ServiceOrderRepository, order_id: UUID) -> ServiceOrder:
    order = orders.get_by_id(order_id)
    if order is None:
        raise EntityNotFoundException("ServiceOrder", order_id)
    return order


# =============================================================================
# ORDER ASSEMBLY
# =============================================================================

class ServiceOrderAssembler:
    """
    Build a priced, validated ServiceOrder from a creation request.

    Checks run in a fixed order: customer, vehicle, each service in request
    order, then each part in request order. The first failure aborts the
    assembly. Stock is checked here but not decremented.
    """

    def __init__(
        self,
        customers: CustomerRepository,
        vehicles: VehicleRepository,
        services: ServiceRepository,
        parts: PartRepository,
    ):
        self.customers = customers
        self.vehicles = vehicles
        self.services = services
        self.parts = parts

    def assemble(self, request: CreateServiceOrderRequest) -> OrderAssembly:
        customer = self.customers.get_by_id(request.customer_id)
        if customer is None:
            raise EntityNotFoundException("Customer", request.customer_id)
        if not customer.is_active:
            raise InactiveEntityException("Customer", customer.id, customer.name)

        vehicle = self.vehicles.get_by_id(request.vehicle_id)
        if vehicle is None:
            raise EntityNotFoundException("Vehicle", request.vehicle_id)
        if not vehicle.belongs_to(customer.id):
            raise VehicleOwnershipException(vehicle.id, customer.id, vehicle.customer_id)
        if not vehicle.is_active:
            raise InactiveEntityException("Vehicle", vehicle.id, vehicle.license_plate.formatted)

        total = Decimal("0.00")

        service_items: List[ServiceLineItem] = []
        for line in request.services:
            service = self.services.get_by_id(line.item_id)
            if service is None:
                raise EntityNotFoundException("Service", line.item_id)
            if not service.is_active:
                raise InactiveEntityException("Service", service.id, service.name)
            item = ServiceLineItem(service_id=service.id, quantity=line.quantity, unit_price=service.price)
            total += item.total_price
            service_items.append(item)

        # Repeated parts draw on the same stock.
        requested: Dict[UUID, int] = defaultdict(int)
        part_items: List[PartLineItem] = []
        for line in request.parts:
            part = self.parts.get_by_id(line.item_id)
            if part is None:
                raise EntityNotFoundException("Part", line.item_id)
            if not part.is_active:
                raise InactiveEntityException("Part", part.id, part.name)
            item = PartLineItem(part_id=part.id, quantity=line.quantity, unit_price=part.price)
            requested[part.id] += item.quantity
            if not part.has_stock_for(requested[part.id]):
                raise InsufficientStockException(
                    part.id, requested[part.id], part.stock_quantity, part.name
                )
            total += item.total_price
            part_items.append(item)

        order = ServiceOrder.open(
            customer_id=customer.id,
            vehicle_id=vehicle.id,
            description=request.description,
            total_amount=total,
            service_items=service_items,
            part_items=part_items,
            priority=request.priority,
            estimated_completion=request.estimated_completion,
            created_by=request.created_by,
        )
        return OrderAssembly(order=order, service_items=tuple(service_items), part_items=tuple(part_items))


class CreateServiceOrderUseCase:
    """
    Assemble a new order and persist it in one repository call.

    With ``reserve_stock`` the repository also takes the parts out of stock
    in the same unit of work.
    """

    def __init__(
        self,
        assembler: ServiceOrderAssembler,
        orders: ServiceOrderRepository,
        reserve_stock: bool = False,
    ):
        self.assembler = assembler
        self.orders = orders
        self.reserve_stock = reserve_stock

    def execute(self, request: CreateServiceOrderRequest) -> ServiceOrder:
        assembly = self.assembler.assemble(request)
        order = self.orders.create(
            assembly.order,
            assembly.service_items,
            assembly.part_items,
            reserve_stock=self.reserve_stock,
        )
        dispatch_events(assembly.order)
        logger.info(
            "Service order %s opened for vehicle %s (total %s)",
            order.order_number, order.vehicle_id, order.total_amount
        )
        return order


# =============================================================================
# QUERIES
# =============================================================================

class GetServiceOrderUseCase:

    def __init__(self, orders: ServiceOrderRepository):
        self.orders = orders

    def execute(self, order_id: UUID) -> ServiceOrder:
        return load_order(self.orders, order_id)


class GetServiceOrderByNumberUseCase:

    def __init__(self, orders: ServiceOrderRepository):
        self.orders = orders

    def execute(self, order_number: str) -> ServiceOrder:
        order = self.orders.get_by_order_number(order_number.strip().upper())
        if order is None:
            raise EntityNotFoundException("ServiceOrder", order_number)
        return order


class ListServiceOrdersUseCase:

    def __init__(self, orders: ServiceOrderRepository):
        self.orders = orders

    def execute(
        self,
        status: Optional[str] = None,
        customer_id: Optional[UUID] = None,
        vehicle_id: Optional[UUID] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Page[ServiceOrder]:
        page, limit, _ = Page.bounds(page, limit)
        return self.orders.list(
            status=parse_enum(ServiceOrderStatus, status, "status") if status else None,
            customer_id=customer_id,
            vehicle_id=vehicle_id,
            page=page,
            limit=limit,
        )


class ServiceOrderMetricsUseCase:

    def __init__(self, orders: ServiceOrderRepository):
        self.orders = orders

    def execute(self) -> Dict[str, Any]:
        counts = self.orders.count_by_status()
        by_status = {status.value: counts.get(status, 0) for status in ServiceOrderStatus}
        return {
            "average_execution_hours": round(self.orders.average_execution_hours(), 2),
            "orders_by_status": by_status,
            "total_orders": sum(by_status.values()),
        }


# =============================================================================
# COMMANDS
# =============================================================================

class UpdateServiceOrderStatusUseCase:
    """Move an order along its lifecycle. The repository re-checks under lock."""

    def __init__(self, orders: ServiceOrderRepository):
        self.orders = orders

    def execute(
        self,
        order_id: UUID,
        status: str,
        reason: Optional[str] = None,
        changed_by: Optional[str] = None,
    ) -> ServiceOrder:
        target = parse_enum(ServiceOrderStatus, status, "status")
        order = self.orders.update_status(order_id, target, reason=reason, changed_by=changed_by)
        logger.info("Service order %s moved to %s", order.order_number, target.value)
        return order


class ApproveServiceOrderUseCase:

    def __init__(self, orders: ServiceOrderRepository):
        self.orders = orders

    def execute(
        self,
        order_id: UUID,
        approved_by: str,
        approved_amount: Optional[Decimal] = None,
    ) -> ServiceOrder:
        order = load_order(self.orders, order_id)
        order.approve(approved_by, approved_amount)
        saved = self.orders.update(order)
        dispatch_events(order)
        logger.info(
            "Service order %s approved by %s (amount %s)",
            saved.order_number, approved_by, saved.approved_amount
        )
        return saved


class AddObservationUseCase:

    def __init__(self, orders: ServiceOrderRepository):
        self.orders = orders

    def execute(self, order_id: UUID, text: str, user_id: Optional[str] = None) -> ServiceOrder:
        order = load_order(self.orders, order_id)
        order.add_observation(text, user_id)
        return self.orders.update(order)


class AssignServiceOrderUseCase:

    def __init__(self, orders: ServiceOrderRepository):
        self.orders = orders

    def execute(
        self,
        order_id: UUID,
        assignee: Optional[str],
        user_id: Optional[str] = None,
    ) -> ServiceOrder:
        order = load_order(self.orders, order_id)
        order.assign_to(assignee, user_id)
        saved = self.orders.update(order)
        logger.info("Service order %s assigned to %s", saved.order_number, assignee)
        return saved


@dataclass
class UpdateServiceOrderInput:
    order_id: UUID
    diagnosis: Optional[str] = None
    priority: Optional[str] = None
    estimated_completion: Optional[datetime] = None
    total_amount: Optional[Decimal] = None
    user_id: Optional[str] = None


class UpdateServiceOrderUseCase:
    """Edit diagnosis, priority, estimated completion and quoted total of an order."""

    def __init__(self, orders: ServiceOrderRepository):
        self.orders = orders

    def execute(self, data: UpdateServiceOrderInput) -> ServiceOrder:
        order = load_order(self.orders, data.order_id)
        if data.diagnosis is not None:
            order.update_diagnosis(data.diagnosis, data.user_id)
        if data.priority is not None:
            order.update_priority(data.priority, data.user_id)
        if data.estimated_completion is not None:
            order.set_estimated_completion(data.estimated_completion, data.user_id)
        if data.total_amount is not None:
            order.update_total_amount(data.total_amount, data.user_id)
        return self.orders.update(order)
