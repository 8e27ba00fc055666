"""
Domain Events.

Domain events are records of significant business occurrences.
They are collected by aggregates and dispatched after persistence.
"""

from __future__ import annotations
from dataclasses import asdict, dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from .base_entity import utcnow


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """
    Base class for all domain events.

    Domain events are immutable records of something that happened in the domain.
    They are used for:
    - Decoupling the core from side effects (logging, notifications)
    - Audit trail
    """

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=utcnow)

    @property
    def event_type(self) -> str:
        """Get the event type name."""
        return self.__class__.__name__

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["event_type"] = self.event_type
        return {
            key: str(value) if isinstance(value, (UUID, Decimal, datetime)) else value
            for key, value in data.items()
        }


# =============================================================================
# CUSTOMER EVENTS
# =============================================================================

@dataclass(frozen=True)
class CustomerRegistered(DomainEvent):
    """Event raised when a new customer is registered."""

    customer_id: UUID
    document: str


@dataclass(frozen=True)
class VehicleRegistered(DomainEvent):
    """Event raised when a vehicle is registered for a customer."""

    vehicle_id: UUID
    customer_id: UUID
    license_plate: str


# =============================================================================
# CATALOG EVENTS
# =============================================================================

@dataclass(frozen=True)
class PartStockChanged(DomainEvent):
    """Event raised when the stock of a part changes."""

    part_id: UUID
    old_quantity: int
    new_quantity: int
    low_stock: bool = False


# =============================================================================
# SERVICE ORDER EVENTS
# =============================================================================

@dataclass(frozen=True)
class ServiceOrderCreated(DomainEvent):
    """Event raised when a service order is opened."""

    order_id: UUID
    customer_id: UUID
    vehicle_id: UUID
    total_amount: Decimal
    created_by: Optional[str] = None


@dataclass(frozen=True)
class ServiceOrderStatusChanged(DomainEvent):
    """Event raised when a service order moves through its lifecycle."""

    order_id: UUID
    old_status: str
    new_status: str
    changed_by: Optional[str] = None
    reason: Optional[str] = None


@dataclass(frozen=True)
class ServiceOrderApproved(DomainEvent):
    """Event raised when the customer approves a service order budget."""

    order_id: UUID
    approved_by: str
    approved_amount: Decimal
