# -*- coding: utf-8 -*-
"""
Shared fixtures for the show wizard tests.
"""

import os
import tempfile
from datetime import date, timedelta

# Headless Qt and a throwaway log directory, set before any app import
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("LOGS_DIR", os.path.join(tempfile.gettempdir(), "show_wizard_test_logs"))

import pytest

from app.api_config import WizardSettings
from models import ShowCreateInput
from services.mock_resource_gateway import MockResourceGateway
from services.wizard import ShowWizard, WorkflowState


@pytest.fixture
def gateway():
    """In-memory gateway with integrity checks and failure injection."""
    return MockResourceGateway()


@pytest.fixture
def settings():
    """Default wizard settings (strict preconditions, gated advance)."""
    return WizardSettings()


@pytest.fixture
def advisory_settings():
    """Settings that leave the event/category preconditions advisory."""
    return WizardSettings(strict_preconditions=False)


@pytest.fixture
def state():
    return WorkflowState()


@pytest.fixture
def wizard(gateway, settings):
    """Wizard entered on a fresh session."""
    wizard = ShowWizard(gateway=gateway, settings=settings)
    wizard.enter()
    return wizard


@pytest.fixture
def show_input():
    return ShowCreateInput(
        title="Hamlet",
        duration=180,
        venue_id="venue-1",
        description="Prince of Denmark",
        language="English",
        age_limit=12,
    )


@pytest.fixture
def event_date():
    """A date safely in the future."""
    return date.today() + timedelta(days=30)
