# -*- coding: utf-8 -*-


from pathlib import Path
from dataclasses import dataclass
import os

# ============================================================================
# Load .env file for local environment configuration
# ============================================================================
try:
    from dotenv import load_dotenv
    load_dotenv()  # Load from .env file in project root
except ImportError:
    pass  # dotenv not installed - will use defaults


# API and wizard settings are read in app/api_config.py
_LOGS_DIR = os.getenv("LOGS_DIR", None)


@dataclass
class Config:
    """Application configuration."""

    # Application Info
    APP_NAME: str = "Show Wizard"
    VERSION: str = "1.0.0"

    # Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    LOGS_DIR: Path = Path(_LOGS_DIR) if _LOGS_DIR else PROJECT_ROOT / "logs"

    # Logging
    LOG_FILE: str = "show_wizard.log"
    LOG_PATH: Path = LOGS_DIR / LOG_FILE
    LOG_MAX_BYTES: int = 5 * 1024 * 1024  # 5MB
    LOG_BACKUP_COUNT: int = 3
