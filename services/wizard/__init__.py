# -*- coding: utf-8 -*-
"""
Show wizard workflow core.

Components:
- WizardStep: fixed step order
- WorkflowState: one session's created identifiers and progress
- StepValidator / StepExecutor: validated gateway calls per step
- StepNavigator: advance/retreat over the step order
- ShowWizard: facade owning one session
"""

from .wizard_step import WizardStep
from .step_result import ErrorKind, ErrorDescriptor, StepResult, RollbackReport
from .workflow_state import WorkflowState, ChildKind
from .step_validator import StepValidator, StepValidationResult
from .step_executor import StepExecutor
from .step_navigator import StepNavigator
from .show_wizard import ShowWizard

__all__ = [
    "WizardStep",
    "ErrorKind",
    "ErrorDescriptor",
    "StepResult",
    "RollbackReport",
    "WorkflowState",
    "ChildKind",
    "StepValidator",
    "StepValidationResult",
    "StepExecutor",
    "StepNavigator",
    "ShowWizard",
]
