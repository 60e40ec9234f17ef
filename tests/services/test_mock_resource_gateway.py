# -*- coding: utf-8 -*-
"""
Tests for MockResourceGateway.

Tests cover:
- Server-style identifiers
- Referential integrity
- Failure injection and call log
"""

from decimal import Decimal

import pytest

from models import (
    ShowCreateInput, ShowUpdateInput, PublishShowInput, EventCreateInput, ShowtimeCreateInput,
    CategoryCreateInput, PriceTierSpec, SeatSectionCreateInput,
)
from services.exceptions import ApiException, NetworkException
from services.resource_gateway import GatewayType


@pytest.fixture
def show(gateway):
    return gateway.create_show(ShowCreateInput(title="Hamlet", duration=180, venue_id="venue-1"))


class TestShows:
    """Test show lifecycle in memory."""

    def test_gateway_type(self, gateway):
        assert gateway.gateway_type == GatewayType.MOCK

    def test_create_assigns_id(self, gateway, show):
        assert show.id
        assert gateway.get_show(show.id) == show
        assert show.is_active is False

    def test_empty_title_rejected(self, gateway):
        with pytest.raises(ApiException) as exc_info:
            gateway.create_show(ShowCreateInput(title="", duration=10, venue_id="v"))
        assert exc_info.value.status_code == 400

    def test_update_only_given_fields(self, gateway, show):
        updated = gateway.update_show(show.id, ShowUpdateInput(language="Hindi"))

        assert updated.language == "Hindi"
        assert updated.title == "Hamlet"

    def test_publish(self, gateway, show):
        assert gateway.publish_show(show.id, PublishShowInput()).is_active is True

    def test_unknown_show(self, gateway):
        with pytest.raises(ApiException) as exc_info:
            gateway.delete_show("nope")
        assert exc_info.value.status_code == 404
        assert exc_info.value.response_data["message"] == "Show with id nope not found"


class TestIntegrity:
    """Test parent references are checked."""

    def test_event_needs_show(self, gateway):
        with pytest.raises(ApiException):
            gateway.create_event(EventCreateInput(show_id="nope", date="2030-05-01"))

    def test_showtime_needs_event(self, gateway, show):
        with pytest.raises(ApiException) as exc_info:
            gateway.create_showtime(ShowtimeCreateInput("nope", "2030-05-01T19:00", "2030-05-01T21:00"))
        assert "Event with id nope not found" == exc_info.value.response_data["message"]

    def test_price_tier_needs_category(self, gateway, show):
        with pytest.raises(ApiException) as exc_info:
            gateway.create_price_tier(PriceTierSpec(show.id, "cat-x", Decimal("10"), "INR"))
        assert exc_info.value.response_data["message"] == "Category with id cat-x not found"

    def test_seat_section_removed_with_showtime(self, gateway, show):
        event = gateway.create_event(EventCreateInput(show.id, "2030-05-01"))
        showtime = gateway.create_showtime(ShowtimeCreateInput(event.id, "2030-05-01T19:00", "2030-05-01T21:00"))
        category = gateway.create_category(CategoryCreateInput(show.id, "Stalls", "seated"))
        tier = gateway.create_price_tier(PriceTierSpec(show.id, category.id, Decimal("10"), "INR"))
        gateway.create_seat_section(SeatSectionCreateInput(showtime.id, tier.id, "Row A", 10))

        gateway.delete_showtime(showtime.id)

        assert gateway.seat_sections == {}


class TestFailureInjection:
    """Test fail_next and the call log."""

    def test_fail_next_once(self, gateway, show):
        gateway.fail_next("create_category", message="Category limit reached", status_code=409)

        with pytest.raises(ApiException) as exc_info:
            gateway.create_category(CategoryCreateInput(show.id, "Stalls", "seated"))
        assert exc_info.value.status_code == 409
        assert exc_info.value.response_data["message"] == "Category limit reached"

        assert gateway.create_category(CategoryCreateInput(show.id, "Stalls", "seated")).id

    def test_network_failure(self, gateway):
        gateway.fail_next("create_show", message="Connection reset", network=True)

        with pytest.raises(NetworkException):
            gateway.create_show(ShowCreateInput(title="Hamlet", duration=180, venue_id="venue-1"))

    def test_call_log(self, gateway, show):
        gateway.create_event(EventCreateInput(show.id, "2030-05-01"))

        assert gateway.call_count("create_show") == 1
        assert gateway.call_count("create_event") == 1
        assert [name for name, _ in gateway.calls] == ["create_show", "create_event"]
