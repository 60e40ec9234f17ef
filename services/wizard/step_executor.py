# -*- coding: utf-8 -*-
"""
Step Executor - turns one step's input into a gateway call.

Every operation follows the same contract:
    precondition checked -> input validated -> gateway called ->
    on success the workflow state is updated and lastError cleared;
    on failure lastError is set and the state is left as it was.

Only one operation runs at a time per executor. A second submission while
one is in flight is refused instead of queued.
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from app.api_config import WizardSettings, get_wizard_settings
from models import (
    ShowCreateInput, ShowUpdateInput, PublishShowInput, EventCreateInput,
    ShowtimeCreateInput, CategoryCreateInput, PriceTierSpec, SeatSectionCreateInput,
)
from services.error_mapper import to_gateway_failure
from services.exceptions import (
    ApiException, NetworkException, ValidationException,
    WizardError, InvalidTransition, GatewayFailure
)
from services.resource_gateway import ResourceGateway
from utils.logger import get_logger
from .step_result import ErrorDescriptor, StepResult, RollbackReport
from .step_validator import StepValidator, StepValidationResult
from .wizard_step import WizardStep
from .workflow_state import WorkflowState, ChildKind

logger = get_logger(__name__)

SHOW = "show"


@dataclass
class _PendingRollback:
    """Rollback requested while a gateway call was in flight."""

    show_id: Optional[str]
    child_ids: Dict[ChildKind, List[str]]
    report: RollbackReport = field(default_factory=RollbackReport)


class StepExecutor:
    """Runs wizard step operations against a resource gateway."""

    def __init__(
        self,
        state: WorkflowState,
        gateway: ResourceGateway,
        settings: Optional[WizardSettings] = None,
        validator: Optional[StepValidator] = None
    ):
        self.state = state
        self.gateway = gateway
        self.settings = settings or get_wizard_settings()
        self.validator = validator or StepValidator(self.settings.strict_preconditions)
        self._lock = threading.Lock()
        self._pending_rollback: Optional[_PendingRollback] = None

    @property
    def is_busy(self) -> bool:
        """True while a gateway call is in flight."""
        return self._lock.locked()

    # =========================================================================
    # Step operations
    # =========================================================================

    def create_show(self, data: ShowCreateInput, idempotency_key: Optional[str] = None) -> StepResult:
        """Create the show (Show Details step). Allowed once per session."""
        step = WizardStep.SHOW_DETAILS
        return self._run(
            step,
            check=lambda: self.validator.check_precondition(step, self.state),
            validate=lambda: self.validator.validate_show(data),
            call=lambda: self.gateway.create_show(data),
            apply=lambda show: self.state.record_show_created(show.id, show),
            fallback="Failed to create show",
            idempotency_key=idempotency_key,
            creates=SHOW,
        )

    def update_show(self, data: ShowUpdateInput, idempotency_key: Optional[str] = None) -> StepResult:
        """Update the already created show's details."""
        step = WizardStep.SHOW_DETAILS
        return self._run(
            step,
            check=lambda: self.validator.check_update_precondition(self.state),
            validate=lambda: self.validator.validate_show_update(data),
            call=lambda: self.gateway.update_show(self.state.show_id, data),
            apply=self.state.refresh_show,
            fallback="Failed to update show",
            idempotency_key=idempotency_key,
        )

    def create_event(self, data: EventCreateInput, idempotency_key: Optional[str] = None) -> StepResult:
        step = WizardStep.EVENTS
        return self._run(
            step,
            check=lambda: self.validator.check_precondition(step, self.state),
            validate=lambda: self._owned_by_show(self.validator.validate_event(data), data.show_id),
            call=lambda: self.gateway.create_event(data),
            apply=lambda event: self.state.record_child_created(ChildKind.EVENT, event.id),
            fallback="Failed to create event",
            idempotency_key=idempotency_key,
            creates=ChildKind.EVENT,
        )

    def create_showtime(self, data: ShowtimeCreateInput, idempotency_key: Optional[str] = None) -> StepResult:
        step = WizardStep.SHOWTIMES
        return self._run(
            step,
            check=lambda: self.validator.check_precondition(step, self.state),
            validate=lambda: self.validator.validate_showtime(data),
            call=lambda: self.gateway.create_showtime(data),
            apply=lambda showtime: self.state.record_child_created(ChildKind.SHOWTIME, showtime.id),
            fallback="Failed to create showtime",
            idempotency_key=idempotency_key,
            creates=ChildKind.SHOWTIME,
        )

    def create_category(self, data: CategoryCreateInput, idempotency_key: Optional[str] = None) -> StepResult:
        step = WizardStep.CATEGORIES
        return self._run(
            step,
            check=lambda: self.validator.check_precondition(step, self.state),
            validate=lambda: self._owned_by_show(self.validator.validate_category(data), data.show_id),
            call=lambda: self.gateway.create_category(data),
            apply=lambda category: self.state.record_child_created(ChildKind.CATEGORY, category.id),
            fallback="Failed to create category",
            idempotency_key=idempotency_key,
            creates=ChildKind.CATEGORY,
        )

    def create_price_tier(self, spec: PriceTierSpec, idempotency_key: Optional[str] = None) -> StepResult:
        step = WizardStep.PRICE_TIERS
        return self._run(
            step,
            check=lambda: self.validator.check_precondition(step, self.state),
            validate=lambda: self._owned_by_show(self.validator.validate_price_tier(spec), spec.show_id),
            call=lambda: self.gateway.create_price_tier(spec),
            apply=lambda tier: self.state.record_child_created(ChildKind.PRICE_TIER, tier.id),
            fallback="Failed to create price tier",
            idempotency_key=idempotency_key,
            creates=ChildKind.PRICE_TIER,
        )

    def create_seat_section(self, data: SeatSectionCreateInput,
                            idempotency_key: Optional[str] = None) -> StepResult:
        """Create a seat section. Seat sections are not tracked in the state."""
        step = WizardStep.SEAT_SECTIONS
        return self._run(
            step,
            check=lambda: self.validator.check_precondition(step, self.state),
            validate=lambda: self.validator.validate_seat_section(data),
            call=lambda: self.gateway.create_seat_section(data),
            apply=lambda section: None,
            fallback="Failed to create seat section",
            idempotency_key=idempotency_key,
            creates="seat_section",
        )

    def publish(self, data: Optional[PublishShowInput] = None) -> StepResult:
        """
        Activate the show. Only allowed on the Publish step, and only once.

        A repeated publish is refused before any gateway call is made.
        """
        step = WizardStep.PUBLISH
        payload = data or PublishShowInput()

        def apply(show):
            self.state.mark_published()
            self.state.refresh_show(show)

        return self._run(
            step,
            check=lambda: self.validator.check_precondition(step, self.state),
            validate=StepValidationResult,
            call=lambda: self.gateway.publish_show(self.state.show_id, payload),
            apply=apply,
            fallback="Failed to publish show",
        )

    # =========================================================================
    # Rollback
    # =========================================================================

    def rollback(self, show_id: Optional[str], child_ids: Dict[ChildKind, Sequence[str]]) -> RollbackReport:
        """
        Run compensate() without overlapping a gateway call.

        When a call is in flight the rollback is deferred until it returns,
        and a resource that call creates is added to it. The returned report
        is pending until then.
        """
        if self._lock.acquire(blocking=False):
            try:
                return self.compensate(show_id, child_ids)
            finally:
                self._lock.release()

        logger.info("Rollback deferred until the call in flight returns")
        pending = _PendingRollback(show_id, {kind: list(ids) for kind, ids in child_ids.items()})
        pending.report.pending = True
        self._pending_rollback = pending
        return pending.report

    def compensate(
        self,
        show_id: Optional[str],
        child_ids: Dict[ChildKind, Sequence[str]],
        report: Optional[RollbackReport] = None
    ) -> RollbackReport:
        """
        Delete created resources, children first.

        Order: Price tiers -> Categories -> Showtimes -> Events -> Show.
        Seat sections are removed by the backend together with their showtime.
        A failed delete is logged and reported; the remaining deletes still run.
        """
        if report is None:
            report = RollbackReport()
        plan = [
            (ChildKind.PRICE_TIER, self.gateway.delete_price_tier),
            (ChildKind.CATEGORY, self.gateway.delete_category),
            (ChildKind.SHOWTIME, self.gateway.delete_showtime),
            (ChildKind.EVENT, self.gateway.delete_event),
        ]
        for kind, delete in plan:
            for resource_id in reversed(list(child_ids.get(kind, ()))):
                self._delete(report, kind.value, resource_id, delete)

        if show_id:
            self._delete(report, "show", show_id, self.gateway.delete_show)

        report.pending = False
        if report.is_complete:
            logger.info(f"Rollback complete: {report.deleted}")
        else:
            logger.error(f"Rollback incomplete, left behind: {report.failed}")
        return report

    @staticmethod
    def _delete(report: RollbackReport, kind: str, resource_id: str, delete: Callable[[str], None]):
        try:
            delete(resource_id)
            report.add_deleted(kind, resource_id)
        except (ApiException, NetworkException) as e:
            logger.warning(f"Failed to delete {kind} {resource_id}: {e}")
            report.add_failed(kind, resource_id)

    # =========================================================================
    # Internals
    # =========================================================================

    def _orphaned(self, step: WizardStep, creates: Optional[Union[ChildKind, str]], resource: Any):
        """Hand a resource created for a reset session to the pending rollback, or log it."""
        resource_id = getattr(resource, "id", None)
        if creates is None or not resource_id:
            return

        pending = self._pending_rollback
        if pending is not None and creates == SHOW:
            pending.show_id = resource_id
        elif pending is not None and isinstance(creates, ChildKind):
            pending.child_ids.setdefault(creates, []).append(resource_id)
        else:
            kind = creates.value if isinstance(creates, ChildKind) else creates
            logger.warning(f"[{step.value}] Orphaned {kind} {resource_id} left on server")
            return
        logger.info(f"[{step.value}] {resource_id} added to the pending rollback")

    def _owned_by_show(self, result: StepValidationResult, show_id: str) -> StepValidationResult:
        if show_id and self.state.show_id and show_id != self.state.show_id:
            result.add_error(f"Resource must belong to show {self.state.show_id}")
        return result

    def _run(
        self,
        step: WizardStep,
        check: Callable[[], None],
        validate: Callable[[], StepValidationResult],
        call: Callable[[], Any],
        apply: Callable[[Any], None],
        fallback: str,
        idempotency_key: Optional[str] = None,
        creates: Optional[Union[ChildKind, str]] = None
    ) -> StepResult:
        if not self._lock.acquire(blocking=False):
            logger.warning(f"[{step.value}] Refused: another operation is in progress")
            return StepResult.fail(step, ErrorDescriptor.from_exception(
                InvalidTransition("Another operation is in progress", step=step), step
            ))

        try:
            if idempotency_key:
                previous = self.state.find_submission(step, idempotency_key)
                if previous is not None:
                    logger.info(f"[{step.value}] Replaying submission {idempotency_key}")
                    self.state.clear_error()
                    return StepResult.ok(step, previous, replayed=True)

            try:
                check()
                validate().raise_if_invalid(context=step.value)
            except (WizardError, ValidationException) as e:
                return self._failed(step, e)

            token = self.state.session_token
            logger.info(f"[{step.value}] Calling gateway")
            try:
                resource = call()
            except (ApiException, NetworkException) as e:
                failure = to_gateway_failure(e, step, fallback)
                if self.state.session_token != token:
                    logger.info(f"[{step.value}] Session reset during call; failure dropped")
                    return StepResult.discard(step)
                return self._failed(step, failure)

            if self.state.session_token != token:
                logger.info(f"[{step.value}] Session reset during call; response dropped")
                self._orphaned(step, creates, resource)
                return StepResult.discard(step, resource)

            try:
                apply(resource)
            except WizardError as e:
                return self._failed(step, e)
            except ValueError as e:
                return self._failed(step, GatewayFailure(
                    f"Unexpected gateway response: {e}", step=step, category=GatewayFailure.SERVER
                ))

            if idempotency_key:
                self.state.remember_submission(step, idempotency_key, resource)
            self.state.clear_error()
            logger.info(f"[{step.value}] Succeeded")
            return StepResult.ok(step, resource)
        finally:
            pending, self._pending_rollback = self._pending_rollback, None
            try:
                if pending is not None:
                    self.compensate(pending.show_id, pending.child_ids, pending.report)
            finally:
                self._lock.release()

    def _failed(self, step: WizardStep, error: Exception) -> StepResult:
        descriptor = ErrorDescriptor.from_exception(error, step)
        logger.warning(f"[{step.value}] {descriptor.kind.value}: {descriptor.message}")
        self.state.set_error(descriptor)
        return StepResult.fail(step, descriptor)
