# -*- coding: utf-8 -*-
"""Custom exceptions for the application."""


# ============================================================================
# Gateway / transport errors
# ============================================================================

class ApiException(Exception):
    """Exception raised when the resource API answers with an error status."""

    def __init__(self, message: str, status_code: int = None,
                 response_data: dict = None, context: str = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_data = response_data or {}
        self.context = context

    def __str__(self):
        if self.status_code:
            return f"[{self.status_code}] {self.message}"
        return self.message


class ValidationException(Exception):
    """Exception raised for local input validation errors."""

    def __init__(self, message: str, field: str = None,
                 errors: list = None, context: str = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.errors = errors or []
        self.context = context


class NetworkException(Exception):
    """Exception raised for network/connection errors."""

    def __init__(self, message: str, original_error: Exception = None,
                 context: str = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error
        self.context = context


# ============================================================================
# Workflow errors
# ============================================================================

class WizardError(Exception):
    """Base class for show wizard workflow errors."""

    def __init__(self, message: str, step=None):
        super().__init__(message)
        self.message = message
        self.step = step


class PreconditionNotMet(WizardError):
    """A step was attempted before the state it depends on exists."""


class InvalidTransition(WizardError):
    """A once-only operation was repeated, or the wizard is not in a state that allows it."""


class GatewayFailure(WizardError):
    """The remote call itself failed; carries the server message verbatim."""

    VALIDATION = "validation"
    SERVER = "server"
    NETWORK = "network"

    def __init__(self, message: str, step=None, status_code: int = None,
                 category: str = SERVER, original_error: Exception = None):
        super().__init__(message, step)
        self.status_code = status_code
        self.category = category
        self.original_error = original_error
