"""Shared fixtures: in-memory repositories and a registered customer with a vehicle."""

import pytest

from application.use_cases.service_orders import (
    CreateServiceOrderUseCase,
    ServiceOrderAssembler,
)

from .factories import make_customer, make_vehicle
from .fakes import (
    InMemoryCustomerRepository,
    InMemoryPartRepository,
    InMemoryServiceOrderRepository,
    InMemoryServiceRepository,
    InMemoryVehicleRepository,
)


@pytest.fixture
def customers():
    return InMemoryCustomerRepository()


@pytest.fixture
def vehicles():
    return InMemoryVehicleRepository()


@pytest.fixture
def services():
    return InMemoryServiceRepository()


@pytest.fixture
def parts():
    return InMemoryPartRepository()


@pytest.fixture
def orders(parts):
    return InMemoryServiceOrderRepository(parts)


@pytest.fixture
def customer(customers):
    return customers.add(make_customer())


@pytest.fixture
def vehicle(vehicles, customer):
    return vehicles.add(make_vehicle(customer.id))


@pytest.fixture
def assembler(customers, vehicles, services, parts):
    return ServiceOrderAssembler(customers, vehicles, services, parts)


@pytest.fixture
def create_order(assembler, orders):
    return CreateServiceOrderUseCase(assembler, orders)
