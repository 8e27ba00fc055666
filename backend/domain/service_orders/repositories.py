"""
Service Orders Domain - Repository Interfaces.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from domain.shared.pagination import Page
from domain.shared.value_objects import ServiceOrderStatus

from .aggregates import ServiceOrder
from .entities import PartLineItem, ServiceLineItem


class ServiceOrderRepository(ABC):
    """
    Repository interface for the ServiceOrder aggregate.

    Implementations own the atomicity of order creation (order number, line
    items, opening history entry and optional stock reservation in one unit)
    and serialize status changes on the same order.
    """

    @abstractmethod
    def create(
        self,
        order: ServiceOrder,
        service_items: Sequence[ServiceLineItem],
        part_items: Sequence[PartLineItem],
        reserve_stock: bool = False
    ) -> ServiceOrder:
        """
        Persist a new order with its lines.

        Assigns the order number and seeds the status history. With
        ``reserve_stock`` each part's stock is decremented in the same unit,
        raising InsufficientStockException if any part ran short.
        """

    @abstractmethod
    def get_by_id(self, order_id: UUID) -> Optional[ServiceOrder]:
        """Get order by ID, with lines and history."""

    @abstractmethod
    def get_by_order_number(self, order_number: str) -> Optional[ServiceOrder]:
        """Get order by its number (e.g. OS000042)."""

    @abstractmethod
    def list(
        self,
        status: Optional[ServiceOrderStatus] = None,
        customer_id: Optional[UUID] = None,
        vehicle_id: Optional[UUID] = None,
        page: int = 1,
        limit: int = 10
    ) -> Page[ServiceOrder]:
        """List orders, newest first, optionally filtered."""

    @abstractmethod
    def list_by_customer(self, customer_id: UUID) -> List[ServiceOrder]:
        """Get all orders of a customer."""

    @abstractmethod
    def list_by_vehicle(self, vehicle_id: UUID) -> List[ServiceOrder]:
        """Get all orders of a vehicle."""

    @abstractmethod
    def list_by_status(self, status: ServiceOrderStatus) -> List[ServiceOrder]:
        """Get all orders in a status."""

    @abstractmethod
    def update(self, order: ServiceOrder) -> ServiceOrder:
        """
        Persist all fields of an existing order.

        Raises ConcurrencyException if the stored version differs from
        ``order.version``. History entries not yet stored are appended.
        """

    @abstractmethod
    def update_status(
        self,
        order_id: UUID,
        status: ServiceOrderStatus,
        reason: Optional[str] = None,
        changed_by: Optional[str] = None
    ) -> ServiceOrder:
        """
        Change the status of an order under a lock.

        The transition is validated against the locked state and written
        together with its history entry.
        """

    @abstractmethod
    def average_execution_hours(self) -> float:
        """Mean hours from creation to completion over finished orders."""

    @abstractmethod
    def count_by_status(self) -> Dict[ServiceOrderStatus, int]:
        """Number of orders per status. Statuses without orders may be absent."""

    @abstractmethod
    def delete(self, order_id: UUID) -> bool:
        """Hard delete an order. Administrative override only."""
