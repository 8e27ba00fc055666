"""
Domain Exceptions.

Custom exceptions for domain-level errors.
These exceptions represent business rule violations.
"""

from typing import Optional, Any, Dict, Iterable


class DomainException(Exception):
    """Base exception for all domain errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "DOMAIN_ERROR"
        self.details = details or {}


# =============================================================================
# VALIDATION
# =============================================================================

class ValidationException(DomainException):
    """Raised when an entity or value object invariant is violated."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(
            message=message,
            code=self.code,
            details={"field": field, "value": str(value) if value is not None else None}
        )
        self.field = field


class InvalidLengthException(ValidationException):
    """Raised when a document does not have the digit count of its type."""

    code = "INVALID_LENGTH"


class InvalidDocumentException(ValidationException):
    """Raised when a CPF/CNPJ fails the repeated-digit guard or its checksum."""

    code = "INVALID_DOCUMENT"


class InvalidEmailException(ValidationException):
    """Raised when an email address is malformed."""

    code = "INVALID_EMAIL"


class InvalidLicensePlateException(ValidationException):
    """Raised when a license plate matches neither supported shape."""

    code = "INVALID_FORMAT"


# =============================================================================
# LOOKUP / UNIQUENESS
# =============================================================================

class EntityNotFoundException(DomainException):
    """Raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any):
        super().__init__(
            message=f"{entity_type} with id '{entity_id}' not found",
            code="ENTITY_NOT_FOUND",
            details={"entity_type": entity_type, "entity_id": str(entity_id)}
        )
        self.entity_type = entity_type


class EntityAlreadyExistsException(DomainException):
    """Raised when trying to create an entity that already exists."""

    def __init__(self, entity_type: str, field: str, identifier: Any):
        super().__init__(
            message=f"{entity_type} with {field} '{identifier}' already exists",
            code="ENTITY_ALREADY_EXISTS",
            details={"entity_type": entity_type, "field": field, "identifier": str(identifier)}
        )
        self.entity_type = entity_type


class ConcurrencyException(DomainException):
    """Raised when optimistic locking fails due to concurrent modification."""

    def __init__(self, entity_type: str, entity_id: Any, expected_version: int):
        super().__init__(
            message=f"{entity_type} '{entity_id}' was modified by another user",
            code="CONCURRENCY_ERROR",
            details={
                "entity_type": entity_type,
                "entity_id": str(entity_id),
                "expected_version": expected_version
            }
        )


# =============================================================================
# BUSINESS RULES
# =============================================================================

class BusinessRuleViolationException(DomainException):
    """Raised when a business rule is violated."""

    def __init__(self, rule: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            code="BUSINESS_RULE_VIOLATION",
            details={"rule": rule, **(details or {})}
        )
        self.rule = rule


class InactiveEntityException(BusinessRuleViolationException):
    """Raised when an inactive catalog record is referenced by a new order."""

    def __init__(self, entity_type: str, entity_id: Any, name: str):
        super().__init__(
            "ENTITY_INACTIVE",
            f"{entity_type} '{name}' is not active",
            {"entity_type": entity_type, "entity_id": str(entity_id)}
        )
        self.code = "ENTITY_INACTIVE"


class VehicleOwnershipException(BusinessRuleViolationException):
    """Raised when a vehicle is used with a customer that does not own it."""

    def __init__(self, vehicle_id: Any, customer_id: Any, owner_id: Any):
        super().__init__(
            "VEHICLE_CUSTOMER_MISMATCH",
            f"Vehicle '{vehicle_id}' does not belong to customer '{customer_id}'",
            {
                "vehicle_id": str(vehicle_id),
                "customer_id": str(customer_id),
                "owner_id": str(owner_id),
            }
        )
        self.code = "VEHICLE_CUSTOMER_MISMATCH"


class InsufficientStockException(DomainException):
    """Raised when there is not enough stock for an operation."""

    def __init__(
        self,
        item_id: Any,
        requested_quantity: int,
        available_quantity: int,
        item_name: Optional[str] = None,
    ):
        label = item_name or item_id
        super().__init__(
            message=f"Insufficient stock for part '{label}'. "
                    f"Requested: {requested_quantity}, Available: {available_quantity}",
            code="INSUFFICIENT_STOCK",
            details={
                "item_id": str(item_id),
                "requested_quantity": requested_quantity,
                "available_quantity": available_quantity
            }
        )
        self.requested_quantity = requested_quantity
        self.available_quantity = available_quantity


class StatusTransitionException(DomainException):
    """Raised when an invalid status transition is attempted."""

    def __init__(
        self,
        entity_type: str,
        current_status: str,
        target_status: str,
        allowed_transitions: Optional[Iterable[str]] = None
    ):
        allowed = sorted(allowed_transitions or [])
        super().__init__(
            message=f"Invalid status transition for {entity_type} "
                    f"from {current_status} to {target_status}",
            code="INVALID_STATUS_TRANSITION",
            details={
                "entity_type": entity_type,
                "current_status": current_status,
                "target_status": target_status,
                "allowed_transitions": allowed
            }
        )
        self.current_status = current_status
        self.target_status = target_status


class IllegalApprovalException(DomainException):
    """Raised when an approval is attempted outside AWAITING_APPROVAL."""

    def __init__(self, order_id: Any, current_status: str):
        super().__init__(
            message=f"Service order must be in AWAITING_APPROVAL status to be approved "
                    f"(current status: {current_status})",
            code="ILLEGAL_APPROVAL",
            details={"order_id": str(order_id), "current_state": current_status}
        )
        self.current_status = current_status
