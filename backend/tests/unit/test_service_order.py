"""Tests for the ServiceOrder aggregate: lifecycle, approval and line items."""

from decimal import Decimal
from uuid import uuid4

import pytest

from domain.service_orders.aggregates import (
    VALID_STATUS_TRANSITIONS,
    allowed_transitions,
    can_transition,
)
from domain.service_orders.entities import PartLineItem, ServiceLineItem, StatusChange
from domain.shared.events import ServiceOrderApproved, ServiceOrderCreated, ServiceOrderStatusChanged
from domain.shared.exceptions import (
    IllegalApprovalException,
    StatusTransitionException,
    ValidationException,
)
from domain.shared.value_objects import Priority, ServiceOrderStatus as S

from tests.factories import make_order


EXPECTED_TRANSITIONS = {
    S.RECEIVED: {S.IN_DIAGNOSIS, S.CANCELLED},
    S.IN_DIAGNOSIS: {S.AWAITING_APPROVAL, S.IN_PROGRESS, S.CANCELLED},
    S.AWAITING_APPROVAL: {S.APPROVED, S.IN_DIAGNOSIS, S.CANCELLED},
    S.APPROVED: {S.IN_PROGRESS, S.AWAITING_PARTS, S.CANCELLED},
    S.IN_PROGRESS: {S.AWAITING_PARTS, S.COMPLETED, S.CANCELLED},
    S.AWAITING_PARTS: {S.IN_PROGRESS, S.CANCELLED},
    S.COMPLETED: {S.DELIVERED, S.IN_PROGRESS},
    S.DELIVERED: set(),
    S.CANCELLED: set(),
}


def order_in(*path):
    """An order walked from RECEIVED through ``path``."""
    order = make_order()
    for status in path:
        order.update_status(status)
    return order


class TestTransitionTable:

    def test_table_is_exhaustive(self):
        assert set(VALID_STATUS_TRANSITIONS) == set(S)

    def test_table_matches_lifecycle(self):
        for status, targets in EXPECTED_TRANSITIONS.items():
            assert set(allowed_transitions(status)) == targets, status

    def test_terminal_states(self):
        assert S.DELIVERED.is_terminal
        assert S.CANCELLED.is_terminal
        assert not S.COMPLETED.is_terminal

    def test_can_transition_accepts_strings(self):
        assert can_transition("RECEIVED", "IN_DIAGNOSIS")
        assert not can_transition("RECEIVED", "COMPLETED")


class TestUpdateStatus:

    def test_received_to_completed_fails(self):
        order = make_order()
        with pytest.raises(StatusTransitionException) as exc:
            order.update_status(S.COMPLETED)
        assert "RECEIVED" in exc.value.message
        assert "COMPLETED" in exc.value.message
        assert exc.value.details["allowed_transitions"] == ["CANCELLED", "IN_DIAGNOSIS"]

    def test_failed_transition_leaves_order_untouched(self):
        order = make_order()
        updated_at = order.updated_at
        with pytest.raises(StatusTransitionException):
            order.update_status(S.DELIVERED)
        assert order.status is S.RECEIVED
        assert order.status_history == ()
        assert order.updated_at == updated_at

    def test_received_to_in_diagnosis(self):
        order = make_order()
        change = order.update_status(S.IN_DIAGNOSIS, changed_by="mechanic", reason="start")
        assert order.status is S.IN_DIAGNOSIS
        assert change.previous_status is S.RECEIVED
        assert change.new_status is S.IN_DIAGNOSIS
        assert order.status_history == (change,)
        assert order.updated_by == "mechanic"

    def test_every_transition_emits_event(self):
        order = make_order()
        order.clear_domain_events()
        order.update_status("IN_DIAGNOSIS")
        (event,) = order.domain_events
        assert isinstance(event, ServiceOrderStatusChanged)
        assert (event.old_status, event.new_status) == ("RECEIVED", "IN_DIAGNOSIS")

    def test_self_transition_rejected(self):
        order = order_in(S.IN_DIAGNOSIS)
        with pytest.raises(StatusTransitionException):
            order.update_status(S.IN_DIAGNOSIS)

    def test_no_way_out_of_terminal_states(self):
        cancelled = order_in(S.CANCELLED)
        for status in S:
            with pytest.raises(StatusTransitionException):
                cancelled.update_status(status)

    def test_completed_cannot_be_cancelled(self):
        order = order_in(S.IN_DIAGNOSIS, S.IN_PROGRESS, S.COMPLETED)
        with pytest.raises(StatusTransitionException):
            order.update_status(S.CANCELLED)

    def test_completion_stamped_once(self):
        order = order_in(S.IN_DIAGNOSIS, S.IN_PROGRESS, S.COMPLETED)
        first_completion = order.actual_completion
        assert first_completion is not None

        order.update_status(S.IN_PROGRESS)
        assert order.actual_completion == first_completion
        order.update_status(S.COMPLETED)
        assert order.actual_completion == first_completion

    def test_history_appends_in_order(self):
        order = order_in(S.IN_DIAGNOSIS, S.AWAITING_APPROVAL, S.IN_DIAGNOSIS)
        assert [c.new_status for c in order.status_history] == [
            S.IN_DIAGNOSIS, S.AWAITING_APPROVAL, S.IN_DIAGNOSIS
        ]
        assert isinstance(order.status_history, tuple)

    def test_unknown_status_is_a_validation_error(self):
        with pytest.raises(ValidationException):
            make_order().update_status("FINISHED")


class TestApproval:

    def test_approve_outside_awaiting_approval(self):
        order = make_order()
        with pytest.raises(IllegalApprovalException) as exc:
            order.approve("customer")
        assert exc.value.current_status == "RECEIVED"
        assert order.approved_at is None

    def test_approve_defaults_to_total(self):
        order = order_in(S.IN_DIAGNOSIS, S.AWAITING_APPROVAL)
        order.approve("Maria Souza")
        assert order.approved_amount == Decimal("500.00")
        assert order.status is S.APPROVED
        assert order.is_approved
        assert order.approved_by == "Maria Souza"
        assert order.status_history[-1].new_status is S.APPROVED
        assert order.status_history[-1].changed_by == "Maria Souza"
        assert isinstance(order.domain_events[-1], ServiceOrderApproved)

    def test_approve_explicit_amount(self):
        order = order_in(S.IN_DIAGNOSIS, S.AWAITING_APPROVAL)
        order.approve("Maria Souza", "420.5")
        assert order.approved_amount == Decimal("420.50")

    def test_negative_amount_rejected(self):
        order = order_in(S.IN_DIAGNOSIS, S.AWAITING_APPROVAL)
        with pytest.raises(ValidationException):
            order.approve("Maria Souza", "-1")
        assert order.status is S.AWAITING_APPROVAL

    def test_approver_required(self):
        order = order_in(S.IN_DIAGNOSIS, S.AWAITING_APPROVAL)
        with pytest.raises(ValidationException):
            order.approve("  ")

    def test_approval_survives_status_rollback(self):
        order = order_in(S.IN_DIAGNOSIS, S.AWAITING_APPROVAL)
        order.approve("Maria Souza")
        order.update_status(S.IN_PROGRESS)
        order.update_status(S.COMPLETED)
        order.update_status(S.IN_PROGRESS)
        assert order.is_approved


class TestServiceOrder:

    def test_open_starts_received(self):
        order = make_order(priority="HIGH")
        assert order.status is S.RECEIVED
        assert order.priority is Priority.HIGH
        assert order.order_number is None
        assert isinstance(order.domain_events[0], ServiceOrderCreated)

    def test_short_description_rejected(self):
        with pytest.raises(ValidationException):
            make_order(description="oil")

    def test_negative_total_rejected(self):
        with pytest.raises(ValidationException):
            make_order(total_amount=Decimal("-10"))

    def test_seed_history_once(self):
        order = make_order(created_by="clerk")
        seed = order.seed_history()
        assert seed.previous_status is None
        assert seed.new_status is S.RECEIVED
        assert seed.changed_by == "clerk"
        with pytest.raises(ValidationException):
            order.seed_history()

    def test_observations_append(self):
        order = make_order()
        order.add_observation("Cliente aguarda na loja")
        order.add_observation("Pneu traseiro gasto")
        assert order.observations == "Cliente aguarda na loja\nPneu traseiro gasto"

    def test_assignment_and_priority(self):
        order = make_order()
        order.assign_to("joao")
        order.update_priority("URGENT")
        assert order.assigned_to == "joao"
        assert order.priority is Priority.URGENT
        order.assign_to("")
        assert order.assigned_to is None

    def test_snapshot(self):
        order = order_in(S.IN_DIAGNOSIS)
        data = order.to_dict()
        assert data["status"] == "IN_DIAGNOSIS"
        assert data["total_amount"] == "500.00"
        assert data["approved_amount"] is None
        assert data["allowed_next_statuses"] == ["AWAITING_APPROVAL", "CANCELLED", "IN_PROGRESS"]
        assert data["status_history"][0]["previous_status"] == "RECEIVED"

    def test_update_total_amount(self):
        order = make_order()
        order.update_total_amount("612.5", user_id="clerk")
        assert order.total_amount == Decimal("612.50")
        assert order.updated_by == "clerk"

    def test_negative_total_update_keeps_prior_total(self):
        order = make_order()
        before = order.total_amount
        with pytest.raises(ValidationException):
            order.update_total_amount(Decimal("-1"))
        assert order.total_amount == before

    def test_cancelled_and_completed_flags(self):
        cancelled = order_in(S.CANCELLED)
        assert cancelled.is_cancelled
        assert not cancelled.is_completed
        assert cancelled.to_dict()["is_cancelled"] is True

        delivered = order_in(S.IN_DIAGNOSIS, S.IN_PROGRESS, S.COMPLETED, S.DELIVERED)
        assert delivered.is_completed
        assert not delivered.is_cancelled
        assert not make_order().is_cancelled

    def test_items_total(self):
        order = make_order(
            service_items=[ServiceLineItem(service_id=uuid4(), unit_price=Decimal("80"), quantity=2)],
            part_items=[PartLineItem(part_id=uuid4(), unit_price=Decimal("45"), quantity=3)],
        )
        assert order.items_total == Decimal("295.00")


class TestLineItems:

    def test_total_is_recomputed(self):
        item = ServiceLineItem(
            service_id=uuid4(), quantity=2, unit_price=Decimal("80"), total_price=Decimal("1")
        )
        assert item.total_price == Decimal("160.00")

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, True])
    def test_quantity_must_be_positive_int(self, quantity):
        with pytest.raises(ValidationException):
            PartLineItem(part_id=uuid4(), quantity=quantity, unit_price=Decimal("1"))

    def test_negative_unit_price_rejected(self):
        with pytest.raises(ValidationException):
            PartLineItem(part_id=uuid4(), quantity=1, unit_price=Decimal("-0.01"))

    def test_status_change_snapshot(self):
        change = StatusChange(new_status="APPROVED", previous_status="AWAITING_APPROVAL")
        data = change.to_dict()
        assert data["new_status"] == "APPROVED"
        assert data["previous_status"] == "AWAITING_APPROVAL"
        assert data["changed_by"] is None
