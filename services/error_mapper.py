# -*- coding: utf-8 -*-
"""Centralized error message mapper.

Turns gateway exceptions into the message shown to the user. Unlike generic
API screens, the wizard surfaces the server's own message verbatim so the
user can correct the form that was rejected.
"""

from services.exceptions import (
    ApiException, ValidationException, NetworkException, GatewayFailure
)
from utils.logger import get_logger

logger = get_logger(__name__)


def map_api_error(error: ApiException, fallback: str) -> str:
    """Map an API exception to the server's message, or the fallback."""
    status = error.status_code

    if status == 400:
        details = _extract_validation_details(error.response_data)
        if details:
            logger.warning(f"API validation error (400): {details}")
    elif status:
        logger.warning(f"API error ({status}): {error}")

    message = _extract_message(error.response_data)
    return message or fallback


def map_network_error(error: NetworkException, fallback: str) -> str:
    """Map a network exception to its message."""
    msg = str(error.original_error) if error.original_error else error.message
    return msg or fallback


def map_exception(error: Exception, fallback: str, context: str = None) -> str:
    """Map any gateway-side exception to a user-facing message."""
    if isinstance(error, ApiException):
        if not error.context and context:
            error.context = context
        return map_api_error(error, fallback)

    if isinstance(error, NetworkException):
        return map_network_error(error, fallback)

    if isinstance(error, ValidationException):
        if error.errors:
            logger.warning(f"Validation error: {error.errors}")
        return error.message or fallback

    logger.warning(f"Unexpected error: {error}")
    return str(error) or fallback


def gateway_message(error: Exception, fallback: str) -> str:
    """Verbatim server message for a gateway exception, or the fallback."""
    return map_exception(error, fallback)


def to_gateway_failure(error: Exception, step, fallback: str) -> GatewayFailure:
    """Wrap a gateway exception into a GatewayFailure with its category."""
    message = map_exception(error, fallback, context=getattr(step, "value", None))

    status_code = None
    category = GatewayFailure.SERVER
    if isinstance(error, ApiException):
        status_code = error.status_code
        if status_code and 400 <= status_code < 500:
            category = GatewayFailure.VALIDATION
    elif isinstance(error, NetworkException):
        category = GatewayFailure.NETWORK
    elif isinstance(error, ValidationException):
        category = GatewayFailure.VALIDATION

    return GatewayFailure(
        message,
        step=step,
        status_code=status_code,
        category=category,
        original_error=error
    )


def _extract_message(response_data: dict) -> str:
    """Extract the server message from an error body."""
    if not response_data:
        return ""

    message = response_data.get("message")
    if isinstance(message, list):
        return "; ".join(str(m) for m in message)
    if message:
        return str(message)

    details = _extract_validation_details(response_data)
    if details:
        return details

    error = response_data.get("error")
    if isinstance(error, str):
        return error

    return ""


def _extract_validation_details(response_data: dict) -> str:
    """Extract validation error details from API response."""
    if not response_data:
        return ""

    errors = response_data.get("errors")
    if isinstance(errors, dict) and errors:
        lines = []
        for field, messages in errors.items():
            if isinstance(messages, list):
                for msg in messages:
                    lines.append(f"• {field}: {msg}")
            else:
                lines.append(f"• {field}: {messages}")
        return "\n".join(lines)

    if isinstance(errors, list) and errors:
        return "\n".join(f"• {e}" for e in errors)

    title = response_data.get("title", "")
    if title:
        return title

    return ""
