# -*- coding: utf-8 -*-
"""
Tests for StepExecutor.

Tests cover:
- Successful step operations update the state
- Error taxonomy (precondition, transition, input, gateway)
- No partial mutation on failure, lastError set/cleared
- Idempotent resubmission
- Single flight and discarding responses after a reset
- Compensating rollback, deferred behind a call in flight
"""

import copy
import logging
from decimal import Decimal

import pytest

from app.api_config import WizardSettings
from models import (
    Event, EventCreateInput, CategoryCreateInput, PriceTierSpec, ShowtimeCreateInput,
    SeatSectionCreateInput, ShowUpdateInput,
)
from services.exceptions import GatewayFailure
from services.mock_resource_gateway import MockResourceGateway
from services.wizard import StepExecutor, WizardStep, ErrorKind, ChildKind


@pytest.fixture
def executor(state, gateway, settings):
    return StepExecutor(state, gateway, settings)


@pytest.fixture
def created(executor, show_input):
    """Executor whose session already has a show."""
    assert executor.create_show(show_input).success
    return executor


def tier_spec(state, category_id, price="250.00"):
    return PriceTierSpec(
        show_id=state.show_id,
        category_id=category_id,
        price=Decimal(price),
        currency="INR",
        description="Stalls",
        capacity=100,
    )


class TestSuccessfulOperations:
    """Test that each step records what the gateway returned."""

    def test_create_show(self, executor, state, gateway, show_input):
        result = executor.create_show(show_input)

        assert result.success is True
        assert result.step == WizardStep.SHOW_DETAILS
        assert state.show_id == result.resource.id
        assert state.show_id in gateway.shows

    def test_update_show_refreshes_snapshot(self, created, state):
        result = created.update_show(ShowUpdateInput(subtitle="The tragedy"))

        assert result.success is True
        assert state.show.subtitle == "The tragedy"

    def test_children_are_tracked(self, created, state, gateway, event_date):
        event = created.create_event(EventCreateInput(state.show_id, event_date)).resource
        showtime = created.create_showtime(ShowtimeCreateInput(
            event.id, "2030-05-01T19:00:00", "2030-05-01T22:00:00"
        )).resource
        category = created.create_category(CategoryCreateInput(state.show_id, "Stalls", "seated")).resource
        tier = created.create_price_tier(tier_spec(state, category.id)).resource

        assert state.event_ids == (event.id,)
        assert state.showtime_ids == (showtime.id,)
        assert state.category_ids == (category.id,)
        assert state.price_tier_ids == (tier.id,)
        assert gateway.price_tiers[tier.id].price == Decimal("250.00")

    def test_seat_sections_are_not_tracked(self, created, state, gateway, event_date):
        event = created.create_event(EventCreateInput(state.show_id, event_date)).resource
        showtime = created.create_showtime(ShowtimeCreateInput(
            event.id, "2030-05-01T19:00:00", "2030-05-01T22:00:00"
        )).resource
        category = created.create_category(CategoryCreateInput(state.show_id, "Stalls", "seated")).resource
        tier = created.create_price_tier(tier_spec(state, category.id)).resource
        before = copy.deepcopy(state.snapshot())

        result = created.create_seat_section(SeatSectionCreateInput(showtime.id, tier.id, "Row A", 40))

        assert result.success is True
        assert len(gateway.seat_sections) == 1
        assert state.snapshot() == before

    def test_publish(self, created, state, gateway):
        state.move_to(WizardStep.PUBLISH)

        result = created.publish()

        assert result.success is True
        assert state.completed is True
        assert gateway.shows[state.show_id].is_active is True
        assert gateway.calls[-1][1].to_api_dict() == {"isActive": True}


class TestErrorTaxonomy:
    """Test each failure kind and that the state is left as it was."""

    def test_event_without_show(self, executor, state, gateway, event_date):
        before = copy.deepcopy(state.snapshot())

        result = executor.create_event(EventCreateInput("", event_date))

        assert result.success is False
        assert result.error.kind == ErrorKind.PRECONDITION_NOT_MET
        assert gateway.calls == []
        assert state.last_error == result.error
        before.pop("last_error")
        after = state.snapshot()
        after.pop("last_error")
        assert after == before

    def test_second_show_is_invalid_transition(self, created, gateway, show_input):
        result = created.create_show(show_input)

        assert result.error.kind == ErrorKind.INVALID_TRANSITION
        assert gateway.call_count("create_show") == 1

    def test_publish_twice(self, created, state, gateway):
        state.move_to(WizardStep.PUBLISH)
        assert created.publish().success

        result = created.publish()

        assert result.error.kind == ErrorKind.INVALID_TRANSITION
        assert gateway.call_count("publish_show") == 1

    def test_publish_before_publish_step(self, created, gateway):
        result = created.publish()

        assert result.error.kind == ErrorKind.INVALID_TRANSITION
        assert gateway.call_count("publish_show") == 0

    def test_invalid_input_never_reaches_gateway(self, created, state, gateway):
        result = created.create_category(CategoryCreateInput(state.show_id, "", "seated"))

        assert result.error.kind == ErrorKind.INVALID_INPUT
        assert "Category name is required" in result.error.details
        assert gateway.call_count("create_category") == 0

    def test_child_of_another_show(self, created, gateway, event_date):
        result = created.create_event(EventCreateInput("someone-elses-show", event_date))

        assert result.error.kind == ErrorKind.INVALID_INPUT
        assert gateway.call_count("create_event") == 0

    def test_strict_price_tier_needs_category(self, created, state, gateway):
        result = created.create_price_tier(tier_spec(state, "cat-unknown"))

        assert result.error.kind == ErrorKind.PRECONDITION_NOT_MET
        assert gateway.call_count("create_price_tier") == 0

    def test_gateway_failure_carries_server_message(self, created, state, gateway, event_date):
        gateway.fail_next("create_event", message="Date is outside the show run", status_code=422)
        before = copy.deepcopy(state.snapshot())

        result = created.create_event(EventCreateInput(state.show_id, event_date))

        assert result.success is False
        assert result.error.kind == ErrorKind.GATEWAY_FAILURE
        assert result.error.message == "Date is outside the show run"
        assert result.error.status_code == 422
        assert result.error.category == GatewayFailure.VALIDATION
        assert state.event_ids == before["event_ids"]

    def test_network_failure(self, created, state, gateway, event_date):
        gateway.fail_next("create_event", message="Connection refused", network=True)

        result = created.create_event(EventCreateInput(state.show_id, event_date))

        assert result.error.category == GatewayFailure.NETWORK
        assert result.error.message == "Connection refused"

    def test_server_failure_without_message_uses_fallback(self, created, state, gateway, event_date):
        gateway.fail_next("create_event", message="", status_code=500)

        result = created.create_event(EventCreateInput(state.show_id, event_date))

        assert result.error.message == "Failed to create event"
        assert result.error.category == GatewayFailure.SERVER

    def test_success_clears_last_error(self, created, state, gateway, event_date):
        gateway.fail_next("create_event", message="Try again")
        assert created.create_event(EventCreateInput(state.show_id, event_date)).success is False
        assert state.last_error is not None

        assert created.create_event(EventCreateInput(state.show_id, event_date)).success is True
        assert state.last_error is None

    def test_programming_error_propagates(self, state, settings, show_input, event_date):
        executor = StepExecutor(state, BrokenGateway(), settings)
        executor.create_show(show_input)

        with pytest.raises(AttributeError):
            executor.create_event(EventCreateInput(state.show_id, event_date))

        assert executor.is_busy is False
        assert state.event_ids == ()
        assert state.last_error is None

    def test_retry_issues_new_call(self, created, state, gateway, event_date):
        """Without a key, every submission is a new gateway call."""
        created.create_event(EventCreateInput(state.show_id, event_date))
        created.create_event(EventCreateInput(state.show_id, event_date))

        assert gateway.call_count("create_event") == 2
        assert len(state.event_ids) == 2


class TestIdempotency:
    """Test resubmission with an idempotency key."""

    def test_same_key_replays(self, created, state, gateway, event_date):
        first = created.create_event(EventCreateInput(state.show_id, event_date), idempotency_key="evt-1")
        second = created.create_event(EventCreateInput(state.show_id, event_date), idempotency_key="evt-1")

        assert second.success is True
        assert second.replayed is True
        assert second.resource is first.resource
        assert gateway.call_count("create_event") == 1
        assert state.event_ids == (first.resource.id,)

    def test_different_keys_create_twice(self, created, state, gateway, event_date):
        created.create_event(EventCreateInput(state.show_id, event_date), idempotency_key="evt-1")
        created.create_event(EventCreateInput(state.show_id, event_date), idempotency_key="evt-2")

        assert len(state.event_ids) == 2

    def test_failed_submission_is_not_remembered(self, created, state, gateway, event_date):
        gateway.fail_next("create_event")
        created.create_event(EventCreateInput(state.show_id, event_date), idempotency_key="evt-1")

        result = created.create_event(EventCreateInput(state.show_id, event_date), idempotency_key="evt-1")

        assert result.success is True
        assert result.replayed is False
        assert gateway.call_count("create_event") == 2

    def test_show_replay(self, executor, state, gateway, show_input):
        first = executor.create_show(show_input, idempotency_key="show")
        second = executor.create_show(show_input, idempotency_key="show")

        assert second.replayed is True
        assert second.resource.id == first.resource.id
        assert gateway.call_count("create_show") == 1


class BrokenGateway(MockResourceGateway):
    """Gateway with a bug in create_event."""

    def create_event(self, data):
        raise AttributeError("'NoneType' object has no attribute 'items'")


class ReentrantGateway(MockResourceGateway):
    """Gateway that runs a callback while create_event is in flight."""

    def __init__(self):
        super().__init__()
        self.during_call = None

    def create_event(self, data):
        if self.during_call is not None:
            callback, self.during_call = self.during_call, None
            callback()
        return super().create_event(data)


class TestConcurrency:
    """Test single flight and discarding stale responses."""

    @pytest.fixture
    def reentrant(self, state, settings, show_input):
        gateway = ReentrantGateway()
        executor = StepExecutor(state, gateway, settings)
        executor.create_show(show_input)
        return executor, gateway

    def test_second_submission_while_busy(self, reentrant, state, event_date):
        executor, gateway = reentrant
        nested = []
        gateway.during_call = lambda: nested.append(
            (executor.is_busy, executor.create_event(EventCreateInput(state.show_id, event_date)))
        )

        result = executor.create_event(EventCreateInput(state.show_id, event_date))

        busy, refused = nested[0]
        assert busy is True
        assert refused.success is False
        assert refused.error.kind == ErrorKind.INVALID_TRANSITION
        assert result.success is True
        assert len(state.event_ids) == 1
        assert executor.is_busy is False

    def test_response_after_reset_is_discarded(self, reentrant, state, event_date):
        executor, gateway = reentrant
        show_id = state.show_id
        gateway.during_call = state.reset

        result = executor.create_event(EventCreateInput(show_id, event_date))

        assert result.success is False
        assert result.discarded is True
        assert isinstance(result.resource, Event)
        assert state.event_ids == ()
        assert state.show_id is None
        assert state.last_error is None

    def test_failure_after_reset_is_discarded(self, reentrant, state, event_date):
        executor, gateway = reentrant
        show_id = state.show_id

        def reset_then_fail():
            state.reset()
            gateway.fail_next("create_event", message="late failure")

        gateway.during_call = reset_then_fail
        result = executor.create_event(EventCreateInput(show_id, event_date))

        assert result.discarded is True
        assert state.last_error is None

    def test_resource_after_reset_logged_as_orphan(self, reentrant, state, event_date, caplog):
        executor, gateway = reentrant
        gateway.during_call = state.reset

        with caplog.at_level(logging.WARNING, logger="show_wizard"):
            result = executor.create_event(EventCreateInput(state.show_id, event_date))

        assert f"Orphaned event {result.resource.id} left on server" in caplog.text
        assert result.resource.id in gateway.events

    def test_rollback_waits_for_call_in_flight(self, reentrant, state, event_date):
        executor, gateway = reentrant
        show_id = state.show_id
        reports = []

        def abandon():
            child_ids = {kind: state.ids_for(kind) for kind in ChildKind}
            state.reset()
            report = executor.rollback(show_id, child_ids)
            reports.append((report.pending, report))

        gateway.during_call = abandon
        result = executor.create_event(EventCreateInput(show_id, event_date))

        pending_during_call, report = reports[0]
        assert pending_during_call is True
        assert result.discarded is True
        assert report.pending is False
        assert report.is_complete
        assert report.deleted == {"event": [result.resource.id], "show": [show_id]}
        assert gateway.events == {}
        assert gateway.shows == {}
        assert [name for name, _ in gateway.calls] == [
            "create_show", "create_event", "delete_event", "delete_show",
        ]
        assert executor.is_busy is False


class TestCompensate:
    """Test compensating deletes."""

    def test_deletes_children_first(self, created, state, gateway, event_date):
        event = created.create_event(EventCreateInput(state.show_id, event_date)).resource
        category = created.create_category(CategoryCreateInput(state.show_id, "Stalls", "seated")).resource
        created.create_price_tier(tier_spec(state, category.id))

        report = created.compensate(state.show_id, {kind: state.ids_for(kind) for kind in ChildKind})

        deletes = [name for name, _ in gateway.calls if name.startswith("delete_")]
        assert deletes == ["delete_price_tier", "delete_category", "delete_event", "delete_show"]
        assert report.is_complete
        assert report.deleted["event"] == [event.id]
        assert gateway.shows == {}
        assert gateway.events == {}

    def test_failed_delete_does_not_stop_rollback(self, created, state, gateway, event_date):
        created.create_event(EventCreateInput(state.show_id, event_date))
        gateway.fail_next("delete_event", message="locked")

        report = created.compensate(state.show_id, {kind: state.ids_for(kind) for kind in ChildKind})

        assert report.is_complete is False
        assert report.failed["event"] == list(state.event_ids)
        assert report.deleted["show"] == [state.show_id]

    def test_rollback_when_idle_runs_at_once(self, created, state, gateway, event_date):
        created.create_event(EventCreateInput(state.show_id, event_date))

        report = created.rollback(state.show_id, {kind: state.ids_for(kind) for kind in ChildKind})

        assert report.pending is False
        assert report.is_complete
        assert gateway.shows == {}


class TestAdvisoryMode:
    """Test behaviour with advisory preconditions."""

    def test_price_tier_without_category_reaches_gateway(self, state, gateway, show_input):
        executor = StepExecutor(state, gateway, WizardSettings(strict_preconditions=False))
        executor.create_show(show_input)

        result = executor.create_price_tier(tier_spec(state, "cat-404"))

        assert result.error.kind == ErrorKind.GATEWAY_FAILURE
        assert result.error.message == "Category with id cat-404 not found"
        assert result.error.status_code == 404
