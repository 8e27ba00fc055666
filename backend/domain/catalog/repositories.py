"""
Catalog Domain - Repository Interfaces (Ports).

These are abstract interfaces that define how the domain interacts with persistence.
The actual implementations are in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from domain.shared.pagination import Page
from domain.shared.value_objects import ServiceCategory

from .aggregates import Part, Service


class ServiceRepository(ABC):
    """Repository interface for catalog services."""

    @abstractmethod
    def add(self, service: Service) -> Service:
        """Persist a new service."""

    @abstractmethod
    def get_by_id(self, service_id: UUID) -> Optional[Service]:
        """Get service by ID."""

    @abstractmethod
    def list_by_category(self, category: ServiceCategory) -> List[Service]:
        """Get all active services in a category."""

    @abstractmethod
    def list(
        self,
        active: Optional[bool] = None,
        page: int = 1,
        limit: int = 10
    ) -> Page[Service]:
        """List services, newest first."""

    @abstractmethod
    def save(self, service: Service) -> Service:
        """Persist changes to an existing service."""

    @abstractmethod
    def delete(self, service_id: UUID) -> bool:
        """Hard delete a service."""


class PartRepository(ABC):
    """Repository interface for inventory parts."""

    @abstractmethod
    def add(self, part: Part) -> Part:
        """Persist a new part."""

    @abstractmethod
    def get_by_id(self, part_id: UUID) -> Optional[Part]:
        """Get part by ID."""

    @abstractmethod
    def get_by_part_number(self, part_number: str) -> Optional[Part]:
        """Get part by its unique part number."""

    @abstractmethod
    def list_low_stock(self) -> List[Part]:
        """Get active parts at or below their minimum stock level."""

    @abstractmethod
    def list(
        self,
        active: Optional[bool] = None,
        page: int = 1,
        limit: int = 10
    ) -> Page[Part]:
        """List parts, newest first."""

    @abstractmethod
    def save(self, part: Part) -> Part:
        """Persist changes to an existing part."""

    @abstractmethod
    def delete(self, part_id: UUID) -> bool:
        """Hard delete a part."""
