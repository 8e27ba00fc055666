"""
Use case wiring for the API views.

Repositories are created per call; nothing here holds state between requests.
"""

from django.conf import settings

from application.use_cases.service_orders import CreateServiceOrderUseCase, ServiceOrderAssembler
from infrastructure.persistence.repositories import (
    DjangoCustomerRepository,
    DjangoPartRepository,
    DjangoServiceOrderRepository,
    DjangoServiceRepository,
    DjangoVehicleRepository,
)


def customer_repository():
    return DjangoCustomerRepository()


def vehicle_repository():
    return DjangoVehicleRepository()


def service_repository():
    return DjangoServiceRepository()


def part_repository():
    return DjangoPartRepository()


def service_order_repository():
    return DjangoServiceOrderRepository(order_number_prefix=settings.AUTOSHOP['ORDER_NUMBER_PREFIX'])


def create_service_order_use_case() -> CreateServiceOrderUseCase:
    assembler = ServiceOrderAssembler(
        customers=customer_repository(),
        vehicles=vehicle_repository(),
        services=service_repository(),
        parts=part_repository(),
    )
    return CreateServiceOrderUseCase(
        assembler,
        service_order_repository(),
        reserve_stock=settings.AUTOSHOP['RESERVE_STOCK_ON_CREATE'],
    )
