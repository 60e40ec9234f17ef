# -*- coding: utf-8 -*-
"""
Outcome types for wizard step operations.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from services.exceptions import (
    WizardError, PreconditionNotMet, InvalidTransition, GatewayFailure,
    ValidationException
)
from .wizard_step import WizardStep


class ErrorKind(Enum):
    """What went wrong in a step operation."""
    PRECONDITION_NOT_MET = "precondition_not_met"
    INVALID_TRANSITION = "invalid_transition"
    GATEWAY_FAILURE = "gateway_failure"
    INVALID_INPUT = "invalid_input"


@dataclass(frozen=True)
class ErrorDescriptor:
    """The failure recorded as the wizard's last error."""

    kind: ErrorKind
    message: str
    step: Optional[WizardStep] = None
    status_code: Optional[int] = None
    category: Optional[str] = None
    details: List[str] = field(default_factory=list)

    @classmethod
    def from_exception(cls, error: Exception, step: Optional[WizardStep] = None) -> "ErrorDescriptor":
        """Build a descriptor from a workflow or validation exception."""
        if isinstance(error, GatewayFailure):
            return cls(
                kind=ErrorKind.GATEWAY_FAILURE,
                message=error.message,
                step=error.step or step,
                status_code=error.status_code,
                category=error.category,
            )
        if isinstance(error, PreconditionNotMet):
            return cls(ErrorKind.PRECONDITION_NOT_MET, error.message, error.step or step)
        if isinstance(error, InvalidTransition):
            return cls(ErrorKind.INVALID_TRANSITION, error.message, error.step or step)
        if isinstance(error, ValidationException):
            return cls(
                kind=ErrorKind.INVALID_INPUT,
                message=error.message,
                step=step,
                details=list(error.errors),
            )
        if isinstance(error, WizardError):
            return cls(ErrorKind.INVALID_TRANSITION, error.message, error.step or step)
        raise TypeError(f"Unsupported error type: {type(error).__name__}")

    def __str__(self):
        return self.message


@dataclass
class StepResult:
    """Standardized step operation result."""

    success: bool
    step: Optional[WizardStep] = None
    resource: Optional[Any] = None
    error: Optional[ErrorDescriptor] = None
    # Answered from an earlier submission with the same idempotency key
    replayed: bool = False
    # Gateway answered after the session was reset; nothing was applied
    discarded: bool = False
    timestamp: datetime = field(default_factory=datetime.now)

    @classmethod
    def ok(cls, step: WizardStep, resource: Any = None, replayed: bool = False) -> "StepResult":
        """Create a successful result."""
        return cls(success=True, step=step, resource=resource, replayed=replayed)

    @classmethod
    def fail(cls, step: WizardStep, error: ErrorDescriptor) -> "StepResult":
        """Create a failed result."""
        return cls(success=False, step=step, error=error)

    @classmethod
    def discard(cls, step: WizardStep, resource: Any = None) -> "StepResult":
        return cls(success=False, step=step, resource=resource, discarded=True)

    def __bool__(self):
        return self.success


@dataclass
class RollbackReport:
    """What a compensating rollback managed to delete."""

    deleted: Dict[str, List[str]] = field(default_factory=dict)
    failed: Dict[str, List[str]] = field(default_factory=dict)
    pending: bool = False

    def add_deleted(self, kind: str, resource_id: str):
        self.deleted.setdefault(kind, []).append(resource_id)

    def add_failed(self, kind: str, resource_id: str):
        self.failed.setdefault(kind, []).append(resource_id)

    @property
    def is_complete(self) -> bool:
        return not self.pending and not self.failed
