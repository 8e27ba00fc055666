"""
Use Cases: Vehicles

Registration and lookup of customer vehicles.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional
from uuid import UUID

from application.events import dispatch_events
from application.use_cases.customers import load_customer
from domain.customers.aggregates import Vehicle
from domain.customers.repositories import CustomerRepository, VehicleRepository
from domain.shared.exceptions import EntityAlreadyExistsException, EntityNotFoundException
from domain.shared.pagination import Page
from domain.shared.value_objects import LicensePlate

logger = logging.getLogger(__name__)


@dataclass
class CreateVehicleInput:
    customer_id: UUID
    license_plate: str
    brand: str
    model: str
    year: int
    color: Optional[str] = None
    chassis_number: Optional[str] = None
    user_id: Optional[str] = None


class CreateVehicleUseCase:
    """Register a vehicle for an existing customer. Plates are unique."""

    def __init__(self, customers: CustomerRepository, vehicles: VehicleRepository):
        self.customers = customers
        self.vehicles = vehicles

    def execute(self, data: CreateVehicleInput) -> Vehicle:
        customer = load_customer(self.customers, data.customer_id)

        plate = LicensePlate(data.license_plate)
        if self.vehicles.get_by_license_plate(plate.value) is not None:
            raise EntityAlreadyExistsException("Vehicle", "license_plate", plate.value)

        vehicle = Vehicle.create(
            license_plate=plate.value,
            brand=data.brand,
            model=data.model,
            year=data.year,
            customer_id=customer.id,
            color=data.color,
            chassis_number=data.chassis_number,
            user_id=data.user_id,
        )
        saved = self.vehicles.add(vehicle)
        dispatch_events(vehicle)
        logger.info("Vehicle %s registered for customer %s", plate.formatted, customer.id)
        return saved


class GetVehicleUseCase:

    def __init__(self, vehicles: VehicleRepository):
        self.vehicles = vehicles

    def execute(self, vehicle_id: UUID) -> Vehicle:
        vehicle = self.vehicles.get_by_id(vehicle_id)
        if vehicle is None:
            raise EntityNotFoundException("Vehicle", vehicle_id)
        return vehicle


class ListCustomerVehiclesUseCase:

    def __init__(self, customers: CustomerRepository, vehicles: VehicleRepository):
        self.customers = customers
        self.vehicles = vehicles

    def execute(self, customer_id: UUID) -> List[Vehicle]:
        customer = load_customer(self.customers, customer_id)
        return self.vehicles.list_by_customer(customer.id)


class ListVehiclesUseCase:

    def __init__(self, vehicles: VehicleRepository):
        self.vehicles = vehicles

    def execute(self, active: Optional[bool] = None, page: int = 1, limit: int = 10) -> Page[Vehicle]:
        page, limit, _ = Page.bounds(page, limit)
        return self.vehicles.list(active=active, page=page, limit=limit)
