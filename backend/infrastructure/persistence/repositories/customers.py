"""
Django adapters for the customer and vehicle repositories.
"""

from typing import List, Optional
from uuid import UUID

from django.db import IntegrityError, transaction

from domain.customers.aggregates import Customer, Vehicle
from domain.customers.repositories import CustomerRepository, VehicleRepository
from domain.shared.exceptions import EntityAlreadyExistsException
from domain.shared.pagination import Page
from domain.shared.value_objects import Document, Email, LicensePlate
from infrastructure.persistence.models import CustomerModel, VehicleModel

from .base import compare_and_swap, paginate


def customer_to_domain(obj: CustomerModel) -> Customer:
    return Customer(
        id=obj.id,
        created_at=obj.created_at,
        updated_at=obj.updated_at,
        version=obj.version,
        created_by=obj.created_by,
        updated_by=obj.updated_by,
        name=obj.name,
        document=Document(obj.document, obj.document_type),
        email=Email(obj.email),
        phone=obj.phone,
        address=obj.address,
        city=obj.city,
        state=obj.state,
        zip_code=obj.zip_code,
        is_active=obj.is_active,
    )


def vehicle_to_domain(obj: VehicleModel) -> Vehicle:
    return Vehicle(
        id=obj.id,
        created_at=obj.created_at,
        updated_at=obj.updated_at,
        version=obj.version,
        created_by=obj.created_by,
        updated_by=obj.updated_by,
        license_plate=LicensePlate(obj.license_plate),
        brand=obj.brand,
        model=obj.model,
        year=obj.year,
        color=obj.color,
        chassis_number=obj.chassis_number,
        customer_id=obj.customer_id,
        is_active=obj.is_active,
    )


class DjangoCustomerRepository(CustomerRepository):

    def add(self, customer: Customer) -> Customer:
        try:
            with transaction.atomic():
                obj = CustomerModel.objects.create(
                    id=customer.id,
                    version=customer.version,
                    created_by=customer.created_by,
                    updated_by=customer.updated_by,
                    name=customer.name,
                    document_type=customer.document.document_type.value,
                    document=customer.document.value,
                    email=customer.email.value,
                    phone=customer.phone,
                    address=customer.address,
                    city=customer.city,
                    state=customer.state,
                    zip_code=customer.zip_code,
                    is_active=customer.is_active,
                )
        except IntegrityError:
            if CustomerModel.objects.filter(document=customer.document.value).exists():
                raise EntityAlreadyExistsException("Customer", "document", customer.document.value)
            raise EntityAlreadyExistsException("Customer", "email", customer.email.value)
        return customer_to_domain(obj)

    def get_by_id(self, customer_id: UUID) -> Optional[Customer]:
        obj = CustomerModel.objects.filter(pk=customer_id).first()
        return customer_to_domain(obj) if obj else None

    def get_by_document(self, document: str) -> Optional[Customer]:
        obj = CustomerModel.objects.filter(document=document).first()
        return customer_to_domain(obj) if obj else None

    def get_by_email(self, email: str) -> Optional[Customer]:
        obj = CustomerModel.objects.filter(email=email.strip().lower()).first()
        return customer_to_domain(obj) if obj else None

    def list(self, active: Optional[bool] = None, page: int = 1, limit: int = 10) -> Page[Customer]:
        queryset = CustomerModel.objects.all()
        if active is not None:
            queryset = queryset.filter(is_active=active)
        return paginate(queryset, page, limit, customer_to_domain)

    def save(self, customer: Customer) -> Customer:
        try:
            with transaction.atomic():
                compare_and_swap(
                    CustomerModel, customer, "Customer",
                    updated_by=customer.updated_by,
                    name=customer.name,
                    email=customer.email.value,
                    phone=customer.phone,
                    address=customer.address,
                    city=customer.city,
                    state=customer.state,
                    zip_code=customer.zip_code,
                    is_active=customer.is_active,
                )
        except IntegrityError:
            raise EntityAlreadyExistsException("Customer", "email", customer.email.value)
        return customer

    def delete(self, customer_id: UUID) -> bool:
        deleted, _ = CustomerModel.objects.filter(pk=customer_id).delete()
        return deleted > 0


class DjangoVehicleRepository(VehicleRepository):

    def add(self, vehicle: Vehicle) -> Vehicle:
        try:
            with transaction.atomic():
                obj = VehicleModel.objects.create(
                    id=vehicle.id,
                    version=vehicle.version,
                    created_by=vehicle.created_by,
                    updated_by=vehicle.updated_by,
                    license_plate=vehicle.license_plate.value,
                    brand=vehicle.brand,
                    model=vehicle.model,
                    year=vehicle.year,
                    color=vehicle.color,
                    chassis_number=vehicle.chassis_number,
                    customer_id=vehicle.customer_id,
                    is_active=vehicle.is_active,
                )
        except IntegrityError:
            raise EntityAlreadyExistsException("Vehicle", "license_plate", vehicle.license_plate.value)
        return vehicle_to_domain(obj)

    def get_by_id(self, vehicle_id: UUID) -> Optional[Vehicle]:
        obj = VehicleModel.objects.filter(pk=vehicle_id).first()
        return vehicle_to_domain(obj) if obj else None

    def get_by_license_plate(self, license_plate: str) -> Optional[Vehicle]:
        obj = VehicleModel.objects.filter(license_plate=LicensePlate(license_plate).value).first()
        return vehicle_to_domain(obj) if obj else None

    def list_by_customer(self, customer_id: UUID) -> List[Vehicle]:
        return [vehicle_to_domain(obj) for obj in VehicleModel.objects.filter(customer_id=customer_id)]

    def list(self, active: Optional[bool] = None, page: int = 1, limit: int = 10) -> Page[Vehicle]:
        queryset = VehicleModel.objects.all()
        if active is not None:
            queryset = queryset.filter(is_active=active)
        return paginate(queryset, page, limit, vehicle_to_domain)

    def save(self, vehicle: Vehicle) -> Vehicle:
        with transaction.atomic():
            compare_and_swap(
                VehicleModel, vehicle, "Vehicle",
                updated_by=vehicle.updated_by,
                brand=vehicle.brand,
                model=vehicle.model,
                year=vehicle.year,
                color=vehicle.color,
                chassis_number=vehicle.chassis_number,
                is_active=vehicle.is_active,
            )
        return vehicle

    def delete(self, vehicle_id: UUID) -> bool:
        deleted, _ = VehicleModel.objects.filter(pk=vehicle_id).delete()
        return deleted > 0
