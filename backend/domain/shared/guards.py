"""
Guard clauses shared by entity validation.
"""

from decimal import Decimal
from typing import Optional, Union

from .exceptions import ValidationException


def require_min_length(value: Optional[str], minimum: int, field: str, label: str) -> None:
    """Reject ``value`` when its trimmed length is below ``minimum``."""
    if not value or len(value.strip()) < minimum:
        raise ValidationException(
            f"{label} must have at least {minimum} characters", field, value
        )


def require_non_negative(value: Union[int, Decimal], field: str, label: str) -> None:
    if value < 0:
        raise ValidationException(f"{label} cannot be negative", field, value)


def require_positive(value: Union[int, Decimal], field: str, label: str) -> None:
    if value <= 0:
        raise ValidationException(f"{label} must be greater than 0", field, value)
