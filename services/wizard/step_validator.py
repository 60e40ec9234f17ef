# -*- coding: utf-8 -*-
"""
Step validation service for the Show Wizard.

Validates step input and step completion against the workflow state,
without any UI coupling.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import List

from models import (
    ShowCreateInput, ShowUpdateInput, EventCreateInput, ShowtimeCreateInput,
    CategoryCreateInput, PriceTierSpec, SeatSectionCreateInput,
)
from models.base import is_blank
from services.exceptions import PreconditionNotMet, InvalidTransition, ValidationException
from .wizard_step import WizardStep

_CURRENCY_RE = re.compile(r"^[A-Z]{3}$")


@dataclass
class StepValidationResult:
    """Result of step validation."""
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str):
        """Add an error message."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str):
        """Add a warning message."""
        self.warnings.append(message)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def raise_if_invalid(self, context: str = None):
        """Raise ValidationException carrying every error message."""
        if not self.is_valid:
            raise ValidationException(
                self.errors[0] if len(self.errors) == 1 else " | ".join(self.errors),
                errors=list(self.errors),
                context=context
            )


class StepValidator:
    """Validates wizard step input and completion based on workflow state."""

    def __init__(self, strict_preconditions: bool = True):
        self.strict_preconditions = strict_preconditions

    # =========================================================================
    # Preconditions
    # =========================================================================

    def check_precondition(self, step: WizardStep, state):
        """
        Check that the state allows a call for `step`.

        Raises:
            PreconditionNotMet: a required predecessor does not exist
            InvalidTransition: a once-only step is already satisfied
        """
        if step == WizardStep.SHOW_DETAILS:
            if state.has_show:
                raise InvalidTransition(
                    "A show has already been created in this session",
                    step=step
                )
            return

        if not state.has_show:
            raise PreconditionNotMet(
                "Show ID is required. Please complete the show details step first.",
                step=step
            )

        if step == WizardStep.SHOWTIMES and self.strict_preconditions and not state.event_ids:
            raise PreconditionNotMet(
                "No events found. Please create events first in the events step.",
                step=step
            )

        if step == WizardStep.PRICE_TIERS and self.strict_preconditions and not state.category_ids:
            raise PreconditionNotMet(
                "No categories found. Please create categories first in the categories step.",
                step=step
            )

        if step == WizardStep.PUBLISH:
            if state.completed:
                raise InvalidTransition("The show has already been published", step=step)
            if state.current_step != WizardStep.PUBLISH:
                raise InvalidTransition(
                    f"Publishing is only allowed on the {WizardStep.PUBLISH.title} step",
                    step=step
                )

    def check_update_precondition(self, state):
        if not state.has_show:
            raise PreconditionNotMet("No show found to update", step=WizardStep.SHOW_DETAILS)
        if state.completed:
            raise InvalidTransition("The show has already been published", step=WizardStep.SHOW_DETAILS)

    # =========================================================================
    # Step completion (used before advancing)
    # =========================================================================

    @staticmethod
    def validate_step(step: WizardStep, state) -> StepValidationResult:
        """
        Check whether the wizard may leave `step`.

        Args:
            step: Current step
            state: WorkflowState object
        """
        result = StepValidationResult()

        if step == WizardStep.SHOW_DETAILS:
            if not state.has_show:
                result.add_error("Create the show before continuing")

        elif step == WizardStep.EVENTS:
            if not state.event_ids:
                result.add_error("Add at least one event to continue")

        elif step == WizardStep.SHOWTIMES:
            # Showtimes are optional
            if not state.showtime_ids:
                result.add_warning("No showtimes added")

        elif step == WizardStep.CATEGORIES:
            if not state.category_ids:
                result.add_error("Add at least one seating category to continue")

        elif step == WizardStep.PRICE_TIERS:
            if not state.price_tier_ids:
                result.add_error("Add at least one price tier to continue")

        # Seat sections are optional; Publish is the last step

        return result

    # =========================================================================
    # Input validation
    # =========================================================================

    @staticmethod
    def validate_show(data: ShowCreateInput) -> StepValidationResult:
        result = StepValidationResult()
        if is_blank(data.title):
            result.add_error("Show name is required")
        if is_blank(data.venue_id):
            result.add_error("Venue is required")
        if data.duration is None:
            result.add_error("Duration is required")
        elif data.duration < 1:
            result.add_error("Duration must be at least 1 minute")
        if data.age_limit is not None and data.age_limit < 0:
            result.add_error("Age limit cannot be negative")
        return result

    @staticmethod
    def validate_show_update(data: ShowUpdateInput) -> StepValidationResult:
        result = StepValidationResult()
        if data.is_empty():
            result.add_error("Nothing to update")
            return result
        if data.title is not None and is_blank(data.title):
            result.add_error("Show name cannot be empty")
        if data.venue_id is not None and is_blank(data.venue_id):
            result.add_error("Venue cannot be empty")
        if data.duration is not None and data.duration < 1:
            result.add_error("Duration must be at least 1 minute")
        if data.age_limit is not None and data.age_limit < 0:
            result.add_error("Age limit cannot be negative")
        return result

    @staticmethod
    def validate_event(data: EventCreateInput) -> StepValidationResult:
        result = StepValidationResult()
        if is_blank(data.show_id):
            result.add_error("Show ID is required")
        if data.date is None or (isinstance(data.date, str) and is_blank(data.date)):
            result.add_error("Please select a valid date")
        elif isinstance(data.date, date):
            event_day = data.date.date() if isinstance(data.date, datetime) else data.date
            if event_day < date.today():
                result.add_error("Cannot add events in the past")
        return result

    @staticmethod
    def validate_showtime(data: ShowtimeCreateInput) -> StepValidationResult:
        result = StepValidationResult()
        if is_blank(data.event_id):
            result.add_error("Please select an event")
        if data.start_time is None or (isinstance(data.start_time, str) and is_blank(data.start_time)):
            result.add_error("Please enter a start time")
        if data.end_time is None or (isinstance(data.end_time, str) and is_blank(data.end_time)):
            result.add_error("Please enter an end time")
        if isinstance(data.start_time, datetime) and isinstance(data.end_time, datetime):
            if data.end_time <= data.start_time:
                result.add_error("End time must be after start time")
        return result

    @staticmethod
    def validate_category(data: CategoryCreateInput) -> StepValidationResult:
        result = StepValidationResult()
        if is_blank(data.show_id):
            result.add_error("Show ID is required")
        if is_blank(data.name):
            result.add_error("Category name is required")
        if is_blank(data.type):
            result.add_error("Please select a category type")
        if data.capacity is not None and data.capacity < 0:
            result.add_error("Capacity cannot be negative")
        return result

    @staticmethod
    def validate_price_tier(data: PriceTierSpec) -> StepValidationResult:
        result = StepValidationResult()
        if is_blank(data.show_id):
            result.add_error("Show ID is required")
        if is_blank(data.category_id):
            result.add_error("Please select a category")
        if data.price is None or not isinstance(data.price, Decimal) or not data.price.is_finite():
            result.add_error("Price must be a number")
        elif data.price < 0:
            result.add_error("Price cannot be negative")
        if is_blank(data.currency):
            result.add_error("Please select a currency")
        elif not _CURRENCY_RE.match(data.currency):
            result.add_error(f"Invalid currency code: {data.currency}")
        if not isinstance(data.capacity, int) or isinstance(data.capacity, bool):
            result.add_error("Capacity must be a whole number")
        elif data.capacity < 0:
            result.add_error("Capacity cannot be negative")
        return result

    @staticmethod
    def validate_seat_section(data: SeatSectionCreateInput) -> StepValidationResult:
        result = StepValidationResult()
        if is_blank(data.showtime_id):
            result.add_error("Please select a showtime")
        if is_blank(data.price_tier_id):
            result.add_error("Please select a price tier")
        if is_blank(data.name):
            result.add_error("Please enter a section name")
        if data.available_seats is None or data.available_seats < 0:
            result.add_error("Available seats cannot be negative")
        if data.total_seats is not None:
            if data.total_seats <= 0:
                result.add_error("Total seats must be greater than 0")
            elif data.available_seats is not None and data.available_seats > data.total_seats:
                result.add_error("Available seats cannot exceed total seats")
        return result
