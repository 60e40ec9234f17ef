# -*- coding: utf-8 -*-
"""
Tests for the error message mapper.
"""

import pytest

from services.error_mapper import gateway_message, map_exception, to_gateway_failure
from services.exceptions import ApiException, NetworkException, ValidationException, GatewayFailure
from services.wizard import WizardStep


class TestGatewayMessage:
    """Test extraction of the server's own message."""

    def test_message_field(self):
        error = ApiException("404", status_code=404, response_data={"message": "Show with id x not found"})
        assert gateway_message(error, "Failed to create event") == "Show with id x not found"

    def test_message_list_joined(self):
        error = ApiException("400", status_code=400, response_data={
            "message": ["price must not be negative", "currency must be ISO 4217"],
        })
        assert gateway_message(error, "fallback") == "price must not be negative; currency must be ISO 4217"

    def test_errors_map(self):
        error = ApiException("400", status_code=400, response_data={"errors": {"Title": ["Required"]}})
        assert gateway_message(error, "fallback") == "• Title: Required"

    def test_title(self):
        error = ApiException("400", status_code=400, response_data={"title": "One or more validation errors"})
        assert gateway_message(error, "fallback") == "One or more validation errors"

    def test_fallback(self):
        error = ApiException("500", status_code=500)
        assert gateway_message(error, "Failed to create show") == "Failed to create show"

    def test_network_error(self):
        error = NetworkException("wrapped", original_error=ConnectionError("Connection refused"))
        assert gateway_message(error, "fallback") == "Connection refused"

    def test_validation_exception(self):
        assert map_exception(ValidationException("Venue is required"), "fallback") == "Venue is required"


class TestGatewayFailure:
    """Test categorisation of gateway failures."""

    @pytest.mark.parametrize("error, category", [
        (ApiException("422", status_code=422, response_data={"message": "bad"}), GatewayFailure.VALIDATION),
        (ApiException("503", status_code=503), GatewayFailure.SERVER),
        (NetworkException("down"), GatewayFailure.NETWORK),
        (RuntimeError("unexpected"), GatewayFailure.SERVER),
    ])
    def test_category(self, error, category):
        failure = to_gateway_failure(error, WizardStep.EVENTS, "Failed to create event")

        assert failure.category == category
        assert failure.step == WizardStep.EVENTS
        assert failure.original_error is error

    def test_context_recorded_on_api_error(self):
        error = ApiException("404", status_code=404)
        to_gateway_failure(error, WizardStep.PRICE_TIERS, "fallback")
        assert error.context == "price-tiers"
