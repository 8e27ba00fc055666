"""
Customers Domain - Aggregates.

Customer and Vehicle are independent aggregate roots: a vehicle references
its owner by id only.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional
from uuid import UUID

from domain.shared.base_aggregate import AggregateRoot
from domain.shared.base_entity import isoformat, utcnow
from domain.shared.events import CustomerRegistered, VehicleRegistered
from domain.shared.exceptions import ValidationException
from domain.shared.guards import require_min_length
from domain.shared.value_objects import (
    Document,
    DocumentType,
    Email,
    LicensePlate,
)


MIN_VEHICLE_YEAR = 1900


@dataclass(eq=False)
class Customer(AggregateRoot):
    """
    A shop customer, either an individual (CPF) or a company (CNPJ).

    The tax document is the customer's natural key and never changes after
    registration. Customers are deactivated, not deleted.
    """

    name: str = ""
    document: Optional[Document] = None
    email: Optional[Email] = None
    phone: str = ""

    # Address
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None

    is_active: bool = True

    def __post_init__(self):
        if self.document is None:
            raise ValidationException("Customer document is required", "document")
        if self.email is None:
            raise ValidationException("Customer email is required", "email")
        self._check(self.name, self.phone)

    @staticmethod
    def _check(name: str, phone: str) -> None:
        require_min_length(name, 3, "name", "Customer name")
        if not phone or len(phone) < 10:
            raise ValidationException("Invalid phone number", "phone", phone)

    # =========================================================================
    # COMMANDS
    # =========================================================================

    def update_info(
        self,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
        city: Optional[str] = None,
        state: Optional[str] = None,
        zip_code: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> None:
        """
        Update contact information.

        Everything is validated before any field is assigned, so a rejected
        update leaves the customer untouched.
        """
        new_name = self.name if name is None else name
        new_phone = self.phone if phone is None else phone
        new_email = self.email if email is None else Email(email)
        self._check(new_name, new_phone)

        self.name = new_name
        self.phone = new_phone
        self.email = new_email
        if address is not None:
            self.address = address
        if city is not None:
            self.city = city
        if state is not None:
            self.state = state
        if zip_code is not None:
            self.zip_code = zip_code
        self.mark_updated(user_id)

    def activate(self, user_id: Optional[str] = None) -> None:
        self.is_active = True
        self.mark_updated(user_id)

    def deactivate(self, user_id: Optional[str] = None) -> None:
        """Soft-delete the customer."""
        self.is_active = False
        self.mark_updated(user_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "document_type": self.document.document_type.value,
            "document": self.document.value,
            "document_formatted": self.document.formatted,
            "email": self.email.value,
            "phone": self.phone,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code,
            "is_active": self.is_active,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }

    # =========================================================================
    # FACTORY METHODS
    # =========================================================================

    @classmethod
    def create(
        cls,
        name: str,
        document_type: DocumentType,
        document: str,
        email: str,
        phone: str,
        address: Optional[str] = None,
        city: Optional[str] = None,
        state: Optional[str] = None,
        zip_code: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Customer:
        """Factory method to register a new customer."""
        customer = cls(
            name=name,
            document=Document(document, document_type),
            email=Email(email),
            phone=phone,
            address=address,
            city=city,
            state=state,
            zip_code=zip_code,
            created_by=user_id,
        )
        customer.add_domain_event(CustomerRegistered(
            customer_id=customer.id,
            document=customer.document.value,
        ))
        return customer


@dataclass(eq=False)
class Vehicle(AggregateRoot):
    """A customer's vehicle, identified by its license plate."""

    license_plate: Optional[LicensePlate] = None
    brand: str = ""
    model: str = ""
    year: int = 0
    color: Optional[str] = None
    chassis_number: Optional[str] = None
    customer_id: Optional[UUID] = None
    is_active: bool = True

    def __post_init__(self):
        if self.license_plate is None:
            raise ValidationException("License plate is required", "license_plate")
        if not self.customer_id:
            raise ValidationException("Customer ID is required", "customer_id")
        self._check(self.brand, self.model, self.year)

    @staticmethod
    def _check(brand: str, model: str, year: int) -> None:
        require_min_length(brand, 2, "brand", "Vehicle brand")
        require_min_length(model, 2, "model", "Vehicle model")
        max_year = utcnow().year + 1
        if not isinstance(year, int) or year < MIN_VEHICLE_YEAR or year > max_year:
            raise ValidationException(
                f"Vehicle year must be between {MIN_VEHICLE_YEAR} and {max_year}", "year", year
            )

    def belongs_to(self, customer_id: UUID) -> bool:
        return str(self.customer_id) == str(customer_id)

    def update_info(
        self,
        brand: Optional[str] = None,
        model: Optional[str] = None,
        year: Optional[int] = None,
        color: Optional[str] = None,
        chassis_number: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> None:
        """Update descriptive data. Plate and owner are immutable."""
        new_brand = self.brand if brand is None else brand
        new_model = self.model if model is None else model
        new_year = self.year if year is None else year
        self._check(new_brand, new_model, new_year)

        self.brand = new_brand
        self.model = new_model
        self.year = new_year
        if color is not None:
            self.color = color
        if chassis_number is not None:
            self.chassis_number = chassis_number
        self.mark_updated(user_id)

    def activate(self, user_id: Optional[str] = None) -> None:
        self.is_active = True
        self.mark_updated(user_id)

    def deactivate(self, user_id: Optional[str] = None) -> None:
        self.is_active = False
        self.mark_updated(user_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "license_plate": self.license_plate.value,
            "license_plate_formatted": self.license_plate.formatted,
            "brand": self.brand,
            "model": self.model,
            "year": self.year,
            "color": self.color,
            "chassis_number": self.chassis_number,
            "customer_id": str(self.customer_id),
            "is_active": self.is_active,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }

    @classmethod
    def create(
        cls,
        license_plate: str,
        brand: str,
        model: str,
        year: int,
        customer_id: UUID,
        color: Optional[str] = None,
        chassis_number: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Vehicle:
        """Factory method to register a new vehicle."""
        vehicle = cls(
            license_plate=LicensePlate(license_plate),
            brand=brand,
            model=model,
            year=year,
            color=color,
            chassis_number=chassis_number,
            customer_id=customer_id,
            created_by=user_id,
        )
        vehicle.add_domain_event(VehicleRegistered(
            vehicle_id=vehicle.id,
            customer_id=customer_id,
            license_plate=vehicle.license_plate.value,
        ))
        return vehicle
