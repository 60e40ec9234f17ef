# -*- coding: utf-8 -*-
"""
Step Navigator - Manages navigation between wizard steps.

Handles:
- Step progression (advance/retreat, one step at a time)
- Step validation before advancing
- Progress tracking
- Terminal state rules (nothing moves after publish except a reset)
"""

from PyQt5.QtCore import QObject, pyqtSignal

from utils.logger import get_logger
from .step_validator import StepValidator, StepValidationResult
from .wizard_step import WizardStep
from .workflow_state import WorkflowState

logger = get_logger(__name__)


class StepNavigator(QObject):
    """
    Moves the current step pointer of a WorkflowState.

    Responsibilities:
    - Enforce the fixed step order
    - Validate the current step before advancing (unless disabled)
    - Emit signals for UI updates
    """

    # Signals
    step_changed = pyqtSignal(object, object)  # old_step, new_step
    can_go_next_changed = pyqtSignal(bool)
    can_go_previous_changed = pyqtSignal(bool)
    validation_failed = pyqtSignal(StepValidationResult)

    def __init__(self, state: WorkflowState, validator: StepValidator = None, gate_advance: bool = True):
        """
        Initialize the navigator.

        Args:
            state: Workflow state whose current step is navigated
            validator: Used to check a step before leaving it
            gate_advance: Refuse to advance past an unsatisfied step
        """
        super().__init__()
        self.state = state
        self.validator = validator or StepValidator()
        self.gate_advance = gate_advance

    @property
    def current_step(self) -> WizardStep:
        return self.state.current_step

    def get_step_count(self) -> int:
        """Get total number of steps."""
        return len(WizardStep.ordered())

    def is_first(self) -> bool:
        return self.state.current_step == WizardStep.first()

    def is_last(self) -> bool:
        return self.state.current_step == WizardStep.last()

    def can_go_next(self) -> bool:
        """Check if we can navigate to the next step."""
        return not self.is_last()

    def can_go_previous(self) -> bool:
        """Check if we can navigate to the previous step."""
        return not self.is_first() and not self.state.completed

    def advance(self, skip_validation: bool = False) -> bool:
        """
        Navigate to the next step.

        Args:
            skip_validation: If True, skip the current step's completion check

        Returns:
            True if navigation was successful
        """
        if not self.can_go_next():
            logger.debug(f"Cannot go next: already at last step ({self.current_step.value})")
            return False

        current = self.current_step
        target = current.next()
        logger.info(f"Navigating: {current.value} → {target.value}")

        if self.gate_advance and not skip_validation:
            validation_result = self.validator.validate_step(current, self.state)
            if not validation_result.is_valid:
                logger.warning(f"Step {current.value} validation failed: {validation_result.errors}")
                self.validation_failed.emit(validation_result)
                return False
            logger.debug(f"Step {current.value} validated successfully")

        return self._navigate_to(target)

    def retreat(self) -> bool:
        """Navigate to the previous step. Created resources are kept."""
        if not self.can_go_previous():
            logger.debug(f"Cannot go previous from {self.current_step.value}")
            return False

        target = self.current_step.previous()
        logger.info(f"Navigating back: {self.current_step.value} → {target.value}")
        return self._navigate_to(target)

    def go_to(self, step: WizardStep) -> bool:
        """
        Jump to a step without validation.

        Used to re-enter the wizard at its first step after a reset. A
        completed session stays on Publish: reset the state first, as
        ShowWizard.reset_wizard() does.

        Raises:
            InvalidTransition: the session is completed and step is not Publish
        """
        return self._navigate_to(step)

    def _navigate_to(self, step: WizardStep) -> bool:
        old_step = self.state.current_step
        self.state.move_to(step)

        self.step_changed.emit(old_step, step)
        self.can_go_next_changed.emit(self.can_go_next())
        self.can_go_previous_changed.emit(self.can_go_previous())

        logger.info(f"Navigation complete: Step {step.index} ({step.title}) is now active")
        return True

    def get_progress_percentage(self) -> float:
        """
        Get current progress as percentage.

        Returns:
            Progress percentage (0.0 to 100.0)
        """
        return (self.current_step.index / (self.get_step_count() - 1)) * 100.0
