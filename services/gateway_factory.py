# -*- coding: utf-8 -*-
"""
Resource Gateway Factory.

Centralizes creation of the gateway the wizard talks to.
Supports switching between the HTTP backend and the in-memory mock.
"""

from typing import Optional

from app.api_config import ApiSettings, get_api_settings
from .api_client import ApiConfig, ShowApiClient
from .mock_resource_gateway import MockResourceGateway
from .resource_gateway import ResourceGateway, GatewayType
from utils.logger import get_logger

logger = get_logger(__name__)


def create_gateway(settings: Optional[ApiSettings] = None) -> ResourceGateway:
    """
    Create a gateway for the configured mode.

    Args:
        settings: API settings. If None, loads from environment.

    Returns:
        ResourceGateway instance
    """
    if settings is None:
        settings = get_api_settings()

    try:
        gateway_type = GatewayType(settings.gateway_mode.lower())
    except ValueError:
        raise ValueError(f"Unknown gateway mode: {settings.gateway_mode}")

    logger.info(f"Creating resource gateway: {gateway_type.value}")

    if gateway_type == GatewayType.MOCK:
        return MockResourceGateway()

    return ShowApiClient(ApiConfig(
        base_url=settings.base_url,
        access_token=settings.access_token,
        timeout=settings.timeout,
    ))


# ==================== Singleton Instance ====================

_gateway_instance: Optional[ResourceGateway] = None


def get_gateway(settings: Optional[ApiSettings] = None) -> ResourceGateway:
    """
    Get the shared gateway instance (Singleton).

    Args:
        settings: API settings (only used the first time)
    """
    global _gateway_instance

    if _gateway_instance is None:
        _gateway_instance = create_gateway(settings)

    return _gateway_instance


def reset_gateway():
    """Drop the shared gateway (for testing)."""
    global _gateway_instance
    _gateway_instance = None
