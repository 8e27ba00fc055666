"""Tests for order assembly and the create-order use case."""

from decimal import Decimal
from uuid import uuid4

import pytest

from application.use_cases.service_orders import CreateServiceOrderUseCase
from domain.shared.exceptions import (
    EntityNotFoundException,
    InactiveEntityException,
    InsufficientStockException,
    VehicleOwnershipException,
)
from domain.shared.value_objects import ServiceOrderStatus

from tests.factories import (
    OTHER_CPF,
    make_customer,
    make_part,
    make_service,
    make_vehicle,
    request_for,
)


class TestAssemblyTotals:

    def test_total_of_services_and_parts(self, assembler, services, parts, customer, vehicle):
        oil = services.add(make_service(price="150"))
        alignment = services.add(make_service(name="Alinhamento", price="80"))
        filter_part = parts.add(make_part(price="45", stock_quantity=10))

        assembly = assembler.assemble(request_for(
            customer, vehicle,
            services=[(oil.id, 1), (alignment.id, 2)],
            parts=[(filter_part.id, 3)],
        ))

        assert assembly.order.total_amount == Decimal("445.00")
        assert [i.total_price for i in assembly.service_items] == [Decimal("150.00"), Decimal("160.00")]
        assert assembly.part_items[0].total_price == Decimal("135.00")
        assert assembly.part_items[0].unit_price == Decimal("45.00")

    def test_order_without_lines(self, assembler, customer, vehicle):
        assembly = assembler.assemble(request_for(customer, vehicle))
        assert assembly.order.total_amount == Decimal("0.00")
        assert assembly.order.status is ServiceOrderStatus.RECEIVED

    def test_stock_is_checked_not_decremented(self, assembler, parts, customer, vehicle):
        part = parts.add(make_part(stock_quantity=3))
        assembler.assemble(request_for(customer, vehicle, parts=[(part.id, 3)]))
        assert parts.get_by_id(part.id).stock_quantity == 3


class TestAssemblyValidationOrder:

    def test_unknown_customer(self, assembler, vehicle):
        with pytest.raises(EntityNotFoundException) as exc:
            assembler.assemble(request_for(uuid4(), vehicle))
        assert exc.value.entity_type == "Customer"

    def test_vehicle_error_before_service_error(self, assembler, customer):
        with pytest.raises(EntityNotFoundException) as exc:
            assembler.assemble(request_for(customer, uuid4(), services=[(uuid4(), 1)]))
        assert exc.value.entity_type == "Vehicle"

    def test_vehicle_of_another_customer(self, assembler, customers, vehicles, customer):
        other = customers.add(make_customer(document=OTHER_CPF, email="jose@example.com"))
        foreign = vehicles.add(make_vehicle(other.id, license_plate="XYZ9876"))
        with pytest.raises(VehicleOwnershipException):
            assembler.assemble(request_for(customer, foreign))

    def test_inactive_customer(self, assembler, customers, customer, vehicle):
        customer.deactivate()
        customers.save(customer)
        with pytest.raises(InactiveEntityException):
            assembler.assemble(request_for(customer, vehicle))

    def test_unknown_service(self, assembler, customer, vehicle):
        with pytest.raises(EntityNotFoundException) as exc:
            assembler.assemble(request_for(customer, vehicle, services=[(uuid4(), 1)]))
        assert exc.value.entity_type == "Service"

    def test_inactive_service(self, assembler, services, customer, vehicle):
        service = make_service()
        service.deactivate()
        services.add(service)
        with pytest.raises(InactiveEntityException) as exc:
            assembler.assemble(request_for(customer, vehicle, services=[(service.id, 1)]))
        assert exc.value.code == "ENTITY_INACTIVE"

    def test_service_errors_before_part_errors(self, assembler, customer, vehicle):
        with pytest.raises(EntityNotFoundException) as exc:
            assembler.assemble(request_for(
                customer, vehicle, services=[(uuid4(), 1)], parts=[(uuid4(), 1)]
            ))
        assert exc.value.entity_type == "Service"

    def test_inactive_part(self, assembler, parts, customer, vehicle):
        part = make_part()
        part.deactivate()
        parts.add(part)
        with pytest.raises(InactiveEntityException):
            assembler.assemble(request_for(customer, vehicle, parts=[(part.id, 1)]))

    def test_insufficient_stock(self, assembler, parts, customer, vehicle):
        part = parts.add(make_part(stock_quantity=2))
        with pytest.raises(InsufficientStockException) as exc:
            assembler.assemble(request_for(customer, vehicle, parts=[(part.id, 3)]))
        assert exc.value.available_quantity == 2
        assert "Available: 2" in exc.value.message

    def test_repeated_part_lines_share_stock(self, assembler, parts, customer, vehicle):
        part = parts.add(make_part(stock_quantity=4))
        with pytest.raises(InsufficientStockException) as exc:
            assembler.assemble(request_for(customer, vehicle, parts=[(part.id, 2), (part.id, 3)]))
        assert exc.value.requested_quantity == 5


class TestCreateServiceOrder:

    def test_creates_numbered_order_with_history(self, create_order, services, customer, vehicle):
        service = services.add(make_service())
        order = create_order.execute(request_for(
            customer, vehicle, services=[(service.id, 1)], created_by="clerk"
        ))
        assert order.order_number == "OS000001"
        assert order.status is ServiceOrderStatus.RECEIVED
        assert len(order.status_history) == 1
        assert order.status_history[0].previous_status is None
        assert order.status_history[0].changed_by == "clerk"
        assert len(order.service_items) == 1

    def test_numbers_are_sequential(self, create_order, customer, vehicle):
        first = create_order.execute(request_for(customer, vehicle))
        second = create_order.execute(request_for(customer, vehicle))
        assert (first.order_number, second.order_number) == ("OS000001", "OS000002")

    def test_insufficient_stock_creates_nothing(self, create_order, orders, parts, customer, vehicle):
        part = parts.add(make_part(stock_quantity=1))
        with pytest.raises(InsufficientStockException):
            create_order.execute(request_for(customer, vehicle, parts=[(part.id, 2)]))
        assert orders.rows == {}

    def test_reserve_stock_decrements_parts(self, assembler, orders, parts, customer, vehicle):
        part = parts.add(make_part(stock_quantity=5))
        use_case = CreateServiceOrderUseCase(assembler, orders, reserve_stock=True)
        use_case.execute(request_for(customer, vehicle, parts=[(part.id, 2)]))
        assert parts.get_by_id(part.id).stock_quantity == 3

    def test_events_are_dispatched(self, create_order, customer, vehicle, caplog):
        with caplog.at_level("INFO", logger="application.events"):
            create_order.execute(request_for(customer, vehicle))
        assert "ServiceOrderCreated" in caplog.text
