"""
Service Orders Domain - Aggregates.

ServiceOrder is the aggregate root of a repair job. It owns its priced line
items and the append-only status history, and enforces the status lifecycle
and the approval gate.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple, Union
from uuid import UUID

from domain.shared.base_aggregate import AggregateRoot
from domain.shared.base_entity import isoformat, utcnow
from domain.shared.events import (
    ServiceOrderApproved,
    ServiceOrderCreated,
    ServiceOrderStatusChanged,
)
from domain.shared.exceptions import (
    IllegalApprovalException,
    StatusTransitionException,
    ValidationException,
)
from domain.shared.guards import require_min_length, require_non_negative
from domain.shared.value_objects import (
    Priority,
    ServiceOrderStatus,
    parse_enum,
    to_money,
)

from .entities import PartLineItem, ServiceLineItem, StatusChange


S = ServiceOrderStatus

# Valid status transitions
VALID_STATUS_TRANSITIONS: Dict[ServiceOrderStatus, FrozenSet[ServiceOrderStatus]] = {
    S.RECEIVED: frozenset({S.IN_DIAGNOSIS, S.CANCELLED}),
    S.IN_DIAGNOSIS: frozenset({S.AWAITING_APPROVAL, S.IN_PROGRESS, S.CANCELLED}),
    S.AWAITING_APPROVAL: frozenset({S.APPROVED, S.IN_DIAGNOSIS, S.CANCELLED}),
    S.APPROVED: frozenset({S.IN_PROGRESS, S.AWAITING_PARTS, S.CANCELLED}),
    S.IN_PROGRESS: frozenset({S.AWAITING_PARTS, S.COMPLETED, S.CANCELLED}),
    S.AWAITING_PARTS: frozenset({S.IN_PROGRESS, S.CANCELLED}),
    S.COMPLETED: frozenset({S.DELIVERED, S.IN_PROGRESS}),
    S.DELIVERED: frozenset(),  # No transitions from delivered
    S.CANCELLED: frozenset(),  # No transitions from cancelled
}


def allowed_transitions(status: Union[ServiceOrderStatus, str]) -> FrozenSet[ServiceOrderStatus]:
    """Statuses reachable in one step from ``status``."""
    return VALID_STATUS_TRANSITIONS[parse_enum(ServiceOrderStatus, status, "status")]


def can_transition(
    current: Union[ServiceOrderStatus, str],
    target: Union[ServiceOrderStatus, str],
) -> bool:
    return parse_enum(ServiceOrderStatus, target, "status") in allowed_transitions(current)


@dataclass(eq=False)
class ServiceOrder(AggregateRoot):
    """
    Service order - the aggregate root for a repair job.

    An order moves from RECEIVED to DELIVERED (or CANCELLED) along
    VALID_STATUS_TRANSITIONS. Every transition is recorded in
    ``status_history``, a tuple that is replaced on each change and never
    edited in place.

    The order number is assigned by the repository when the order is first
    persisted. Approval fields are only written by ``approve``.
    """

    order_number: Optional[str] = None
    customer_id: Optional[UUID] = None
    vehicle_id: Optional[UUID] = None

    status: ServiceOrderStatus = ServiceOrderStatus.RECEIVED
    priority: Priority = Priority.NORMAL

    description: str = ""
    diagnosis: Optional[str] = None
    observations: Optional[str] = None

    # Dates
    estimated_completion: Optional[datetime] = None
    actual_completion: Optional[datetime] = None

    # Financials
    total_amount: Decimal = Decimal("0.00")
    approved_amount: Optional[Decimal] = None
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None

    assigned_to: Optional[str] = None

    service_items: Tuple[ServiceLineItem, ...] = field(default_factory=tuple)
    part_items: Tuple[PartLineItem, ...] = field(default_factory=tuple)
    status_history: Tuple[StatusChange, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.customer_id is None:
            raise ValidationException("Customer is required", "customer_id")
        if self.vehicle_id is None:
            raise ValidationException("Vehicle is required", "vehicle_id")
        require_min_length(self.description, 5, "description", "Description")

        self.status = parse_enum(ServiceOrderStatus, self.status, "status")
        self.priority = parse_enum(Priority, self.priority, "priority")
        self.total_amount = to_money(self.total_amount, "total_amount")
        require_non_negative(self.total_amount, "total_amount", "Total amount")
        if self.approved_amount is not None:
            self.approved_amount = to_money(self.approved_amount, "approved_amount")

        self.service_items = tuple(self.service_items)
        self.part_items = tuple(self.part_items)
        self.status_history = tuple(self.status_history)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def is_approved(self) -> bool:
        """True once the approval protocol ran, whatever the current status."""
        return self.approved_at is not None and self.approved_by is not None

    @property
    def is_completed(self) -> bool:
        return self.status in (ServiceOrderStatus.COMPLETED, ServiceOrderStatus.DELIVERED)

    @property
    def is_cancelled(self) -> bool:
        return self.status is ServiceOrderStatus.CANCELLED

    @property
    def allowed_next_statuses(self) -> List[ServiceOrderStatus]:
        return sorted(allowed_transitions(self.status), key=lambda s: s.value)

    @property
    def items_total(self) -> Decimal:
        """Sum of all line totals."""
        lines = list(self.service_items) + list(self.part_items)
        return sum((line.total_price for line in lines), Decimal("0.00"))

    # =========================================================================
    # STATUS LIFECYCLE
    # =========================================================================

    def update_status(
        self,
        new_status: Union[ServiceOrderStatus, str],
        changed_by: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> StatusChange:
        """
        Move the order to ``new_status``.

        Raises StatusTransitionException, leaving the order untouched, when
        the transition is not in VALID_STATUS_TRANSITIONS. Entering COMPLETED
        stamps ``actual_completion`` only if it is not set yet.
        """
        target = parse_enum(ServiceOrderStatus, new_status, "status")
        valid_transitions = allowed_transitions(self.status)
        if target not in valid_transitions:
            raise StatusTransitionException(
                "ServiceOrder",
                self.status.value,
                target.value,
                [s.value for s in valid_transitions]
            )

        old_status = self.status
        change = StatusChange(
            previous_status=old_status,
            new_status=target,
            changed_by=changed_by,
            reason=reason,
        )
        self.status = target
        if target is ServiceOrderStatus.COMPLETED and self.actual_completion is None:
            self.actual_completion = change.changed_at
        self.status_history = self.status_history + (change,)
        self.mark_updated(changed_by)

        self.add_domain_event(ServiceOrderStatusChanged(
            order_id=self.id,
            old_status=old_status.value,
            new_status=target.value,
            changed_by=changed_by,
            reason=reason,
        ))
        return change

    def approve(
        self,
        approved_by: str,
        amount: Optional[Union[Decimal, int, str]] = None,
    ) -> StatusChange:
        """
        Record the customer's approval and move the order to APPROVED.

        The approved amount defaults to the current ``total_amount``.
        """
        if self.status is not ServiceOrderStatus.AWAITING_APPROVAL:
            raise IllegalApprovalException(self.id, self.status.value)
        if not approved_by or not str(approved_by).strip():
            raise ValidationException("Approver is required", "approved_by", approved_by)

        approved_amount = self.total_amount if amount is None else to_money(amount, "approved_amount")
        require_non_negative(approved_amount, "approved_amount", "Approved amount")

        self.approved_by = approved_by
        self.approved_at = utcnow()
        self.approved_amount = approved_amount
        change = self.update_status(ServiceOrderStatus.APPROVED, changed_by=approved_by)

        self.add_domain_event(ServiceOrderApproved(
            order_id=self.id,
            approved_by=approved_by,
            approved_amount=approved_amount,
        ))
        return change

    def seed_history(self, changed_by: Optional[str] = None) -> StatusChange:
        """Record the opening entry of the history. Only valid on an empty history."""
        if self.status_history:
            raise ValidationException(
                "Status history already started", "status_history", len(self.status_history)
            )
        change = StatusChange(new_status=self.status, changed_by=changed_by or self.created_by)
        self.status_history = (change,)
        return change

    # =========================================================================
    # COMMANDS
    # =========================================================================

    def update_diagnosis(self, diagnosis: str, user_id: Optional[str] = None) -> None:
        require_min_length(diagnosis, 1, "diagnosis", "Diagnosis")
        self.diagnosis = diagnosis.strip()
        self.mark_updated(user_id)

    def update_total_amount(
        self,
        amount: Union[Decimal, int, str],
        user_id: Optional[str] = None,
    ) -> None:
        total = to_money(amount, "total_amount")
        require_non_negative(total, "total_amount", "Total amount")
        self.total_amount = total
        self.mark_updated(user_id)

    def assign_to(self, assignee: Optional[str], user_id: Optional[str] = None) -> None:
        """Assign the order to a mechanic. ``None`` clears the assignment."""
        self.assigned_to = assignee or None
        self.mark_updated(user_id)

    def update_priority(
        self,
        priority: Union[Priority, str],
        user_id: Optional[str] = None,
    ) -> None:
        self.priority = parse_enum(Priority, priority, "priority")
        self.mark_updated(user_id)

    def set_estimated_completion(
        self,
        estimated_completion: Optional[datetime],
        user_id: Optional[str] = None,
    ) -> None:
        self.estimated_completion = estimated_completion
        self.mark_updated(user_id)

    def add_observation(self, text: str, user_id: Optional[str] = None) -> None:
        """Append a line to the observation log."""
        require_min_length(text, 1, "observation", "Observation")
        entry = text.strip()
        self.observations = f"{self.observations}\n{entry}" if self.observations else entry
        self.mark_updated(user_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "order_number": self.order_number,
            "customer_id": str(self.customer_id),
            "vehicle_id": str(self.vehicle_id),
            "status": self.status.value,
            "priority": self.priority.value,
            "description": self.description,
            "diagnosis": self.diagnosis,
            "observations": self.observations,
            "estimated_completion": isoformat(self.estimated_completion),
            "actual_completion": isoformat(self.actual_completion),
            "total_amount": str(self.total_amount),
            "approved_amount": str(self.approved_amount) if self.approved_amount is not None else None,
            "approved_at": isoformat(self.approved_at),
            "approved_by": self.approved_by,
            "is_approved": self.is_approved,
            "is_completed": self.is_completed,
            "is_cancelled": self.is_cancelled,
            "created_by": self.created_by,
            "assigned_to": self.assigned_to,
            "service_items": [item.to_dict() for item in self.service_items],
            "part_items": [item.to_dict() for item in self.part_items],
            "status_history": [change.to_dict() for change in self.status_history],
            "allowed_next_statuses": [s.value for s in self.allowed_next_statuses],
            "version": self.version,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }

    @classmethod
    def open(
        cls,
        customer_id: UUID,
        vehicle_id: UUID,
        description: str,
        total_amount: Decimal,
        service_items: Iterable[ServiceLineItem] = (),
        part_items: Iterable[PartLineItem] = (),
        priority: Union[Priority, str] = Priority.NORMAL,
        estimated_completion: Optional[datetime] = None,
        created_by: Optional[str] = None,
    ) -> ServiceOrder:
        """Open a new order in RECEIVED status."""
        order = cls(
            customer_id=customer_id,
            vehicle_id=vehicle_id,
            description=description.strip() if description else description,
            total_amount=total_amount,
            service_items=tuple(service_items),
            part_items=tuple(part_items),
            priority=priority,
            estimated_completion=estimated_completion,
            created_by=created_by,
        )
        order.add_domain_event(ServiceOrderCreated(
            order_id=order.id,
            customer_id=customer_id,
            vehicle_id=vehicle_id,
            total_amount=order.total_amount,
            created_by=created_by,
        ))
        return order
