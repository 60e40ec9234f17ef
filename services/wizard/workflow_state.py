# -*- coding: utf-8 -*-
"""
Workflow State - the record of one show wizard session.

Holds:
- The current step
- The show created in the first step (id + last snapshot)
- Identifiers of every event, showtime, category and price tier created
- The last error and the completion flag

Fields are read through properties; changes go through the record_* /
mark_* / reset operations so that every identifier kept here came back
from a successful gateway call.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from models import Show
from services.exceptions import PreconditionNotMet, InvalidTransition
from utils.logger import get_logger
from .step_result import ErrorDescriptor
from .wizard_step import WizardStep

logger = get_logger(__name__)


class ChildKind(Enum):
    """Resource kinds tracked under the show."""
    EVENT = "event"
    SHOWTIME = "showtime"
    CATEGORY = "category"
    PRICE_TIER = "price_tier"


class WorkflowState:
    """State of one wizard session. Never shared between sessions."""

    def __init__(self, reference_prefix: str = "SHW"):
        self._reference_prefix = reference_prefix
        self._initialize()

    def _initialize(self):
        # Renewed on every reset; responses for an older token are dropped
        self.session_token: str = str(uuid.uuid4())
        self.created_at: datetime = datetime.now()
        self.updated_at: datetime = self.created_at
        self.reference_number: str = self._generate_reference_number()

        self._current_step: WizardStep = WizardStep.first()
        self._show_id: Optional[str] = None
        self._show: Optional[Show] = None
        self._child_ids: Dict[ChildKind, list] = {kind: [] for kind in ChildKind}
        self._last_error: Optional[ErrorDescriptor] = None
        self._completed: bool = False
        self._submissions: Dict[Tuple[WizardStep, str], Any] = {}

    def _generate_reference_number(self) -> str:
        """
        Generate a reference number for the session.

        Format: {PREFIX}-{YYYYMMDDHHMMSS}-{SHORT_ID}
        Example: SHW-20260118153045-A3F2
        """
        timestamp = self.created_at.strftime("%Y%m%d%H%M%S")
        short_id = self.session_token[:4].upper()
        return f"{self._reference_prefix}-{timestamp}-{short_id}"

    def _touch(self):
        self.updated_at = datetime.now()

    # =========================================================================
    # Read accessors
    # =========================================================================

    @property
    def current_step(self) -> WizardStep:
        return self._current_step

    @property
    def show_id(self) -> Optional[str]:
        return self._show_id

    @property
    def show(self) -> Optional[Show]:
        """Last show snapshot returned by the gateway."""
        return self._show

    @property
    def has_show(self) -> bool:
        return self._show_id is not None

    @property
    def event_ids(self) -> Tuple[str, ...]:
        return tuple(self._child_ids[ChildKind.EVENT])

    @property
    def showtime_ids(self) -> Tuple[str, ...]:
        return tuple(self._child_ids[ChildKind.SHOWTIME])

    @property
    def category_ids(self) -> Tuple[str, ...]:
        return tuple(self._child_ids[ChildKind.CATEGORY])

    @property
    def price_tier_ids(self) -> Tuple[str, ...]:
        return tuple(self._child_ids[ChildKind.PRICE_TIER])

    def ids_for(self, kind: ChildKind) -> Tuple[str, ...]:
        return tuple(self._child_ids[kind])

    @property
    def last_error(self) -> Optional[ErrorDescriptor]:
        return self._last_error

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def status(self) -> str:
        """draft (no show yet), in_progress or completed."""
        if self._completed:
            return "completed"
        if self._show_id:
            return "in_progress"
        return "draft"

    # =========================================================================
    # Operations
    # =========================================================================

    def record_show_created(self, show_id: str, show: Optional[Show] = None):
        """
        Record the show created by the Show Details step.

        Raises:
            InvalidTransition: a show was already created in this session
        """
        if self._show_id is not None:
            raise InvalidTransition(
                f"Show already created for this session ({self._show_id})",
                step=WizardStep.SHOW_DETAILS
            )
        if not show_id:
            raise ValueError("show_id must be a non-empty identifier")

        self._show_id = show_id
        self._show = show
        self._touch()
        logger.debug(f"Show recorded: {show_id}")

    def refresh_show(self, show: Show):
        """Replace the cached show snapshot; identifiers stay as they are."""
        if self._show_id is None:
            raise PreconditionNotMet("No show found to update", step=WizardStep.SHOW_DETAILS)
        self._show = show
        self._touch()

    def record_child_created(self, kind: ChildKind, resource_id: str):
        """
        Append a created child identifier.

        Appends on every call; deduplication is not done here.

        Raises:
            PreconditionNotMet: no show has been created yet
        """
        if self._show_id is None:
            raise PreconditionNotMet(
                f"Cannot record {kind.value}: create the show first",
                step=self._current_step
            )
        if not resource_id:
            raise ValueError(f"{kind.value} id must be a non-empty identifier")

        self._child_ids[kind].append(resource_id)
        self._touch()
        logger.debug(f"{kind.value} recorded: {resource_id} (total {len(self._child_ids[kind])})")

    def mark_published(self):
        """
        Mark the session complete after a successful publish.

        Raises:
            PreconditionNotMet: no show has been created yet
            InvalidTransition: the wizard is not on the Publish step
        """
        if self._show_id is None:
            raise PreconditionNotMet("No show found to publish", step=WizardStep.PUBLISH)
        if self._current_step != WizardStep.PUBLISH:
            raise InvalidTransition(
                f"Publishing is only allowed on the {WizardStep.PUBLISH.title} step",
                step=self._current_step
            )
        self._completed = True
        self._touch()

    def move_to(self, step: WizardStep):
        """
        Set the current step. Called by the step navigator only.

        Raises:
            InvalidTransition: the session is completed and step is not Publish
        """
        if self._completed and step != WizardStep.PUBLISH:
            raise InvalidTransition("Wizard is completed; reset to start over", step=self._current_step)
        self._current_step = step
        self._touch()

    def set_error(self, error: Optional[ErrorDescriptor]):
        self._last_error = error
        self._touch()

    def clear_error(self):
        self.set_error(None)

    # -- Idempotent submissions -------------------------------------------------

    def remember_submission(self, step: WizardStep, key: str, resource: Any):
        self._submissions[(step, key)] = resource

    def find_submission(self, step: WizardStep, key: str) -> Optional[Any]:
        return self._submissions.get((step, key))

    def reset(self):
        """Restore every field to its initial value. Cannot fail."""
        logger.info(f"Resetting wizard state {self.reference_number}")
        self._initialize()

    # =========================================================================
    # Serialization
    # =========================================================================

    def snapshot(self) -> Dict[str, Any]:
        """Structural view of the state (no timestamps or session token)."""
        return {
            "current_step": self._current_step,
            "show_id": self._show_id,
            "show": self._show,
            "event_ids": self.event_ids,
            "showtime_ids": self.showtime_ids,
            "category_ids": self.category_ids,
            "price_tier_ids": self.price_tier_ids,
            "last_error": self._last_error,
            "completed": self._completed,
            "submissions": dict(self._submissions),
        }

    def __eq__(self, other):
        if not isinstance(other, WorkflowState):
            return NotImplemented
        return self.snapshot() == other.snapshot()

    __hash__ = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the session to a dictionary (review screen, logs)."""
        return {
            "reference_number": self.reference_number,
            "status": self.status,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "current_step": self._current_step.value,
            "current_step_index": self._current_step.index,
            "show_id": self._show_id,
            "show_title": self._show.title if self._show else None,
            "event_ids": list(self.event_ids),
            "showtime_ids": list(self.showtime_ids),
            "category_ids": list(self.category_ids),
            "price_tier_ids": list(self.price_tier_ids),
            "last_error": self._last_error.message if self._last_error else None,
            "completed": self._completed,
        }
