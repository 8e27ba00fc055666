"""
Customers Domain - Repository Interfaces (Ports).

These are abstract interfaces that define how the domain interacts with persistence.
The actual implementations are in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from domain.shared.pagination import Page

from .aggregates import Customer, Vehicle


class CustomerRepository(ABC):
    """Repository interface for Customer aggregate."""

    @abstractmethod
    def add(self, customer: Customer) -> Customer:
        """Persist a new customer."""

    @abstractmethod
    def get_by_id(self, customer_id: UUID) -> Optional[Customer]:
        """Get customer by ID."""

    @abstractmethod
    def get_by_document(self, document: str) -> Optional[Customer]:
        """Get customer by sanitized tax document."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Customer]:
        """Get customer by normalized email."""

    @abstractmethod
    def list(
        self,
        active: Optional[bool] = None,
        page: int = 1,
        limit: int = 10
    ) -> Page[Customer]:
        """List customers, newest first."""

    @abstractmethod
    def save(self, customer: Customer) -> Customer:
        """Persist changes to an existing customer."""

    @abstractmethod
    def delete(self, customer_id: UUID) -> bool:
        """Hard delete a customer (use with caution)."""


class VehicleRepository(ABC):
    """Repository interface for Vehicle aggregate."""

    @abstractmethod
    def add(self, vehicle: Vehicle) -> Vehicle:
        """Persist a new vehicle."""

    @abstractmethod
    def get_by_id(self, vehicle_id: UUID) -> Optional[Vehicle]:
        """Get vehicle by ID."""

    @abstractmethod
    def get_by_license_plate(self, license_plate: str) -> Optional[Vehicle]:
        """Get vehicle by normalized license plate."""

    @abstractmethod
    def list_by_customer(self, customer_id: UUID) -> List[Vehicle]:
        """Get all vehicles owned by a customer."""

    @abstractmethod
    def list(
        self,
        active: Optional[bool] = None,
        page: int = 1,
        limit: int = 10
    ) -> Page[Vehicle]:
        """List vehicles, newest first."""

    @abstractmethod
    def save(self, vehicle: Vehicle) -> Vehicle:
        """Persist changes to an existing vehicle."""

    @abstractmethod
    def delete(self, vehicle_id: UUID) -> bool:
        """Hard delete a vehicle."""
