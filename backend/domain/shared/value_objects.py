"""
Shared Value Objects used across multiple domains.

Value Objects are immutable objects that describe characteristics of a thing.
Two value objects are equal if all their properties are equal.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from typing import Type, TypeVar, Union
import re

from .exceptions import (
    ValidationException,
    InvalidLengthException,
    InvalidDocumentException,
    InvalidEmailException,
    InvalidLicensePlateException,
)


# =============================================================================
# ENUMERATIONS
# =============================================================================

class DocumentType(str, Enum):
    """Brazilian tax identifier kinds."""

    CPF = "CPF"      # Individual (11 digits)
    CNPJ = "CNPJ"    # Company (14 digits)

    @property
    def length(self) -> int:
        return 11 if self is DocumentType.CPF else 14


class ServiceOrderStatus(str, Enum):
    """Lifecycle status of a service order."""

    RECEIVED = "RECEIVED"
    IN_DIAGNOSIS = "IN_DIAGNOSIS"
    AWAITING_APPROVAL = "AWAITING_APPROVAL"
    APPROVED = "APPROVED"
    IN_PROGRESS = "IN_PROGRESS"
    AWAITING_PARTS = "AWAITING_PARTS"
    COMPLETED = "COMPLETED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        """Check if this is a terminal (final) status."""
        return self in (ServiceOrderStatus.DELIVERED, ServiceOrderStatus.CANCELLED)


class Priority(str, Enum):
    """Priority of a service order."""

    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"
    URGENT = "URGENT"


class ServiceCategory(str, Enum):
    """Category of catalog services offered by the shop."""

    MAINTENANCE = "MAINTENANCE"
    REPAIR = "REPAIR"
    INSPECTION = "INSPECTION"
    DIAGNOSTICS = "DIAGNOSTICS"
    ALIGNMENT = "ALIGNMENT"
    BALANCING = "BALANCING"
    ELECTRICAL = "ELECTRICAL"
    BODYWORK = "BODYWORK"
    PAINTING = "PAINTING"
    OTHER = "OTHER"


class LineItemStatus(str, Enum):
    """Fulfillment status of a single order line."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


E = TypeVar("E", bound=Enum)


def parse_enum(enum_cls: Type[E], value: Union[E, str], field: str) -> E:
    """Coerce ``value`` to a member of ``enum_cls``."""
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationException(f"{field} must be one of: {allowed}", field, value)


# =============================================================================
# MONEY
# =============================================================================

CENTS = Decimal("0.01")


def to_money(value: Union[Decimal, int, float, str], field: str = "amount") -> Decimal:
    """Coerce ``value`` to a Decimal rounded to cents."""
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationException(f"{field} must be a number", field, value)
    if not amount.is_finite():
        raise ValidationException(f"{field} must be a finite number", field, value)
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


# =============================================================================
# VALUE OBJECTS
# =============================================================================

def _cpf_check_digit(digits: str) -> int:
    # Weights run from len+1 down to 2.
    weight = len(digits) + 1
    total = sum(int(digit) * (weight - index) for index, digit in enumerate(digits))
    remainder = total * 10 % 11
    return 0 if remainder >= 10 else remainder


def _cnpj_check_digit(digits: str) -> int:
    # Weights cycle 2..9 from the rightmost digit.
    total = 0
    weight = 2
    for digit in reversed(digits):
        total += int(digit) * weight
        weight = 2 if weight == 9 else weight + 1
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


@dataclass(frozen=True)
class Document:
    """
    Brazilian tax document (CPF or CNPJ).

    The raw input is sanitized to digits only and validated against the
    length of its type, the repeated-digit guard and the mod-11 checksum.

    Example:
        Document("123.456.789-09", DocumentType.CPF).value == "12345678909"
    """

    value: str
    document_type: DocumentType

    def __post_init__(self):
        document_type = parse_enum(DocumentType, self.document_type, "document_type")
        object.__setattr__(self, "document_type", document_type)
        object.__setattr__(self, "value", re.sub(r"\D", "", str(self.value or "")))
        self._validate()

    def _validate(self) -> None:
        kind = self.document_type.value
        if len(self.value) != self.document_type.length:
            raise InvalidLengthException(
                f"{kind} must have {self.document_type.length} digits", "document", self.value
            )
        if len(set(self.value)) == 1:
            raise InvalidDocumentException(f"Invalid {kind}", "document", self.value)

        base_length = self.document_type.length - 2
        check_digit = _cpf_check_digit if self.document_type is DocumentType.CPF else _cnpj_check_digit
        first = check_digit(self.value[:base_length])
        second = check_digit(self.value[:base_length + 1])
        if first != int(self.value[base_length]) or second != int(self.value[base_length + 1]):
            raise InvalidDocumentException(f"Invalid {kind}", "document", self.value)

    @property
    def formatted(self) -> str:
        """Display form: 123.456.789-09 or 11.222.333/0001-81."""
        v = self.value
        if self.document_type is DocumentType.CPF:
            return f"{v[:3]}.{v[3:6]}.{v[6:9]}-{v[9:]}"
        return f"{v[:2]}.{v[2:5]}.{v[5:8]}/{v[8:12]}-{v[12:]}"

    def __str__(self) -> str:
        return self.value


EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


@dataclass(frozen=True)
class Email:
    """Email address, normalized to lower case."""

    value: str

    def __post_init__(self):
        normalized = (self.value or "").strip().lower()
        if not EMAIL_PATTERN.fullmatch(normalized):
            raise InvalidEmailException("Invalid email format", "email", self.value)
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value


LEGACY_PLATE = re.compile(r"[A-Z]{3}[0-9]{4}")
MERCOSUL_PLATE = re.compile(r"[A-Z]{3}[0-9][A-Z][0-9]{2}")


@dataclass(frozen=True)
class LicensePlate:
    """
    Brazilian license plate.

    Accepts the legacy shape (ABC1234) and the Mercosul shape (ABC1D23),
    ignoring case and separators.
    """

    value: str

    def __post_init__(self):
        normalized = re.sub(r"[^A-Z0-9]", "", (self.value or "").upper())
        if not (LEGACY_PLATE.fullmatch(normalized) or MERCOSUL_PLATE.fullmatch(normalized)):
            raise InvalidLicensePlateException(
                "Invalid license plate format. Must be ABC1234 or ABC1D23",
                "license_plate",
                self.value,
            )
        object.__setattr__(self, "value", normalized)

    @property
    def is_mercosul(self) -> bool:
        return MERCOSUL_PLATE.fullmatch(self.value) is not None

    @property
    def formatted(self) -> str:
        return f"{self.value[:3]}-{self.value[3:]}"

    def __str__(self) -> str:
        return self.value
