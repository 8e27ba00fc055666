"""Builders for valid domain objects with overridable fields."""

from decimal import Decimal
from uuid import uuid4

from application.use_cases.service_orders import CreateServiceOrderRequest, OrderLineRequest
from domain.catalog.aggregates import Part, Service
from domain.customers.aggregates import Customer, Vehicle
from domain.service_orders.aggregates import ServiceOrder
from domain.shared.value_objects import DocumentType, ServiceCategory

VALID_CPF = "12345678909"
OTHER_CPF = "52998224725"
VALID_CNPJ = "11222333000181"


def make_customer(document=VALID_CPF, email="maria@example.com", **kwargs) -> Customer:
    fields = {
        "name": "Maria Souza",
        "document_type": DocumentType.CPF if len(document) == 11 else DocumentType.CNPJ,
        "document": document,
        "email": email,
        "phone": "11987654321",
    }
    fields.update(kwargs)
    return Customer.create(**fields)


def make_vehicle(customer_id, license_plate="ABC1234", **kwargs) -> Vehicle:
    fields = {"brand": "Volkswagen", "model": "Gol", "year": 2018}
    fields.update(kwargs)
    return Vehicle.create(license_plate=license_plate, customer_id=customer_id, **fields)


def make_service(name="Troca de oleo", price="150.00", **kwargs) -> Service:
    fields = {"estimated_duration": 60, "category": ServiceCategory.MAINTENANCE}
    fields.update(kwargs)
    return Service.create(name=name, price=Decimal(price), **fields)


def make_part(part_number="FLT-001", price="45.00", stock_quantity=10, **kwargs) -> Part:
    fields = {"name": "Filtro de oleo"}
    fields.update(kwargs)
    return Part.create(
        part_number=part_number, price=Decimal(price), stock_quantity=stock_quantity, **fields
    )


def make_order(**kwargs) -> ServiceOrder:
    fields = {
        "customer_id": uuid4(),
        "vehicle_id": uuid4(),
        "description": "Barulho na suspensao dianteira",
        "total_amount": Decimal("500.00"),
    }
    fields.update(kwargs)
    return ServiceOrder.open(**fields)


def request_for(customer, vehicle, services=(), parts=(), **kwargs) -> CreateServiceOrderRequest:
    """Creation request. ``customer``/``vehicle`` may be aggregates or bare ids."""
    return CreateServiceOrderRequest(
        customer_id=getattr(customer, "id", customer),
        vehicle_id=getattr(vehicle, "id", vehicle),
        description="Revisao dos 40 mil km",
        services=[OrderLineRequest(item_id=item_id, quantity=qty) for item_id, qty in services],
        parts=[OrderLineRequest(item_id=item_id, quantity=qty) for item_id, qty in parts],
        **kwargs,
    )
