"""
Service Orders Domain - Entities.

Line items and status history records owned by the ServiceOrder aggregate.
All of them are immutable: a change produces a new record.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from domain.shared.base_entity import isoformat, utcnow
from domain.shared.exceptions import ValidationException
from domain.shared.guards import require_non_negative
from domain.shared.value_objects import (
    LineItemStatus,
    ServiceOrderStatus,
    parse_enum,
    to_money,
)


def _check_quantity(quantity: int) -> None:
    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
        raise ValidationException("Quantity must be at least 1", "quantity", quantity)


@dataclass(frozen=True)
class LineItem:
    """
    A priced quantity of a catalog record attached to an order.

    ``total_price`` is always ``unit_price * quantity``; any value passed in
    is replaced.
    """

    quantity: int = 1
    unit_price: Decimal = Decimal("0.00")
    total_price: Decimal = Decimal("0.00")
    status: LineItemStatus = LineItemStatus.PENDING
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self):
        _check_quantity(self.quantity)
        unit_price = to_money(self.unit_price, "unit_price")
        require_non_negative(unit_price, "unit_price", "Unit price")
        object.__setattr__(self, "unit_price", unit_price)
        object.__setattr__(self, "total_price", to_money(unit_price * self.quantity, "total_price"))
        object.__setattr__(self, "status", parse_enum(LineItemStatus, self.status, "status"))

    def _base_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "quantity": self.quantity,
            "unit_price": str(self.unit_price),
            "total_price": str(self.total_price),
            "status": self.status.value,
        }


@dataclass(frozen=True, kw_only=True)
class ServiceLineItem(LineItem):
    """Service line of an order."""

    service_id: UUID

    def to_dict(self) -> Dict[str, Any]:
        return {"service_id": str(self.service_id), **self._base_dict()}


@dataclass(frozen=True, kw_only=True)
class PartLineItem(LineItem):
    """Part line of an order."""

    part_id: UUID

    def to_dict(self) -> Dict[str, Any]:
        return {"part_id": str(self.part_id), **self._base_dict()}


@dataclass(frozen=True)
class StatusChange:
    """
    One entry of an order's status history.

    ``previous_status`` is None only for the entry recorded when the order
    was opened.
    """

    new_status: ServiceOrderStatus
    previous_status: Optional[ServiceOrderStatus] = None
    changed_by: Optional[str] = None
    reason: Optional[str] = None
    changed_at: datetime = field(default_factory=utcnow)
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self):
        object.__setattr__(
            self, "new_status", parse_enum(ServiceOrderStatus, self.new_status, "new_status")
        )
        if self.previous_status is not None:
            object.__setattr__(
                self,
                "previous_status",
                parse_enum(ServiceOrderStatus, self.previous_status, "previous_status"),
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "previous_status": self.previous_status.value if self.previous_status else None,
            "new_status": self.new_status.value,
            "changed_by": self.changed_by,
            "reason": self.reason,
            "changed_at": isoformat(self.changed_at),
        }
