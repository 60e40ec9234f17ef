# -*- coding: utf-8 -*-
"""
Show Wizard - one show creation session.

Owns the workflow state, the step navigator and the step executor, and is
the only object the presentation layer needs to talk to.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional, Union

from PyQt5.QtCore import QObject, pyqtSignal

from app.api_config import WizardSettings, get_wizard_settings
from models import (
    ShowCreateInput, ShowUpdateInput, EventCreateInput, ShowtimeCreateInput,
    CategoryCreateInput, PriceTierSpec, SeatSectionCreateInput,
)
from services.resource_gateway import ResourceGateway
from utils.logger import get_logger
from .step_executor import StepExecutor
from .step_navigator import StepNavigator
from .step_result import ErrorDescriptor, StepResult, RollbackReport
from .step_validator import StepValidator
from .wizard_step import WizardStep
from .workflow_state import WorkflowState, ChildKind

logger = get_logger(__name__)


class ShowWizard(QObject):
    """
    Facade over one wizard session.

    Signals:
        operation_failed(ErrorDescriptor): a step operation failed
        wizard_completed(dict): publish succeeded; carries get_summary()
        wizard_reset(): the session was reset to its first step
    """

    operation_failed = pyqtSignal(object)
    wizard_completed = pyqtSignal(dict)
    wizard_reset = pyqtSignal()

    def __init__(self, gateway: Optional[ResourceGateway] = None,
                 settings: Optional[WizardSettings] = None):
        super().__init__()
        if gateway is None:
            from services.gateway_factory import get_gateway
            gateway = get_gateway()

        self.settings = settings or get_wizard_settings()
        self.gateway = gateway
        self.state = WorkflowState(reference_prefix=self.settings.reference_prefix)

        validator = StepValidator(strict_preconditions=self.settings.strict_preconditions)
        self.navigator = StepNavigator(self.state, validator, gate_advance=self.settings.gate_advance)
        self.executor = StepExecutor(self.state, gateway, self.settings, validator)

        logger.info(
            f"Show wizard created ({gateway.gateway_type.value} gateway, "
            f"strict={self.settings.strict_preconditions}, gate={self.settings.gate_advance})"
        )

    # =========================================================================
    # Session lifecycle
    # =========================================================================

    def enter(self):
        """Start a clean session, whatever an earlier session left behind."""
        logger.info("Entering show wizard")
        self.reset_wizard()

    def reset_wizard(self):
        """Reset the state and return to the first step. Remote resources are kept."""
        self.state.reset()
        self.navigator.go_to(WizardStep.first())
        self.wizard_reset.emit()

    def abandon(self, rollback: Optional[bool] = None) -> Optional[RollbackReport]:
        """
        Leave the session.

        Args:
            rollback: Delete what this session created. Defaults to the
                rollback_on_abandon setting.

        Returns:
            RollbackReport when a rollback ran or was deferred behind the
            call in flight, otherwise None
        """
        if rollback is None:
            rollback = self.settings.rollback_on_abandon

        show_id = self.state.show_id
        child_ids = {kind: self.state.ids_for(kind) for kind in ChildKind}
        was_completed = self.state.completed
        in_flight = self.executor.is_busy

        # Reset first so a call still in flight is dropped when it returns
        self.reset_wizard()

        if not show_id and not (rollback and in_flight):
            return None

        if not rollback or was_completed:
            if not was_completed:
                orphaned = {kind.value: list(ids) for kind, ids in child_ids.items() if ids}
                logger.warning(f"Wizard abandoned; show {show_id} left on server with {orphaned}")
            return None

        logger.info(f"Wizard abandoned; rolling back show {show_id}")
        return self.executor.rollback(show_id, child_ids)

    # =========================================================================
    # Step operations
    # =========================================================================

    def create_show(self, data: ShowCreateInput, idempotency_key: Optional[str] = None) -> StepResult:
        return self._handle(self.executor.create_show(data, idempotency_key))

    def update_show(self, data: ShowUpdateInput, idempotency_key: Optional[str] = None) -> StepResult:
        return self._handle(self.executor.update_show(data, idempotency_key))

    def create_event(self, data: EventCreateInput, idempotency_key: Optional[str] = None) -> StepResult:
        return self._handle(self.executor.create_event(data, idempotency_key))

    def add_event(self, event_date: Union[date, str], idempotency_key: Optional[str] = None) -> StepResult:
        """Create an event for the session's show."""
        return self.create_event(EventCreateInput(show_id=self.state.show_id or "", date=event_date),
                                 idempotency_key)

    def create_showtime(self, data: ShowtimeCreateInput, idempotency_key: Optional[str] = None) -> StepResult:
        return self._handle(self.executor.create_showtime(data, idempotency_key))

    def add_showtime(self, event_id: str, start_time: Union[datetime, str], end_time: Union[datetime, str],
                     idempotency_key: Optional[str] = None) -> StepResult:
        return self.create_showtime(ShowtimeCreateInput(event_id, start_time, end_time), idempotency_key)

    def create_category(self, data: CategoryCreateInput, idempotency_key: Optional[str] = None) -> StepResult:
        return self._handle(self.executor.create_category(data, idempotency_key))

    def add_category(self, name: str, type: str, description: Optional[str] = None,
                     capacity: Optional[int] = None, idempotency_key: Optional[str] = None) -> StepResult:
        """Create a seating category for the session's show."""
        data = CategoryCreateInput(
            show_id=self.state.show_id or "",
            name=name,
            type=type,
            description=description,
            capacity=capacity,
        )
        return self.create_category(data, idempotency_key)

    def create_price_tier(self, spec: PriceTierSpec, idempotency_key: Optional[str] = None) -> StepResult:
        return self._handle(self.executor.create_price_tier(spec, idempotency_key))

    def add_price_tier(self, category_id: str, price: Union[Decimal, int, str], currency: Optional[str] = None,
                       description: str = "", capacity: int = 0,
                       idempotency_key: Optional[str] = None) -> StepResult:
        """Create a price tier; currency defaults to the configured one."""
        spec = PriceTierSpec(
            show_id=self.state.show_id or "",
            category_id=category_id,
            price=price,
            currency=currency or self.settings.default_currency,
            description=description,
            capacity=capacity,
        )
        return self.create_price_tier(spec, idempotency_key)

    def create_seat_section(self, data: SeatSectionCreateInput,
                            idempotency_key: Optional[str] = None) -> StepResult:
        return self._handle(self.executor.create_seat_section(data, idempotency_key))

    def publish(self) -> StepResult:
        result = self._handle(self.executor.publish())
        if result.success:
            logger.info(f"Show {self.state.show_id} published ({self.state.reference_number})")
            self.wizard_completed.emit(self.get_summary())
        return result

    def _handle(self, result: StepResult) -> StepResult:
        if not result.success and result.error is not None:
            self.operation_failed.emit(result.error)
        return result

    # =========================================================================
    # Navigation
    # =========================================================================

    def advance(self, skip_validation: bool = False) -> bool:
        return self.navigator.advance(skip_validation=skip_validation)

    def retreat(self) -> bool:
        return self.navigator.retreat()

    def is_first(self) -> bool:
        return self.navigator.is_first()

    def is_last(self) -> bool:
        return self.navigator.is_last()

    def get_progress_percentage(self) -> float:
        return self.navigator.get_progress_percentage()

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def current_step(self) -> WizardStep:
        return self.state.current_step

    @property
    def last_error(self) -> Optional[ErrorDescriptor]:
        return self.state.last_error

    @property
    def completed(self) -> bool:
        return self.state.completed

    @property
    def is_busy(self) -> bool:
        return self.executor.is_busy

    def clear_error(self):
        """Dismiss the displayed error."""
        self.state.clear_error()

    def get_summary(self) -> Dict[str, Any]:
        """Summary of the session for the review step."""
        summary = self.state.to_dict()
        summary.update({
            "step_title": self.state.current_step.title,
            "progress": self.get_progress_percentage(),
            "counts": {
                "events": len(self.state.event_ids),
                "showtimes": len(self.state.showtime_ids),
                "categories": len(self.state.category_ids),
                "price_tiers": len(self.state.price_tier_ids),
            },
        })
        return summary
