# -*- coding: utf-8 -*-
"""
Show Wizard Service Layer
"""

# Lazy imports to avoid circular dependencies
__all__ = [
    "ShowApiClient",
    "MockResourceGateway",
    "create_gateway",
    "ShowWizard",
]


def __getattr__(name):
    """Lazy import to avoid circular dependencies."""
    if name == "ShowApiClient":
        from .api_client import ShowApiClient
        return ShowApiClient
    elif name == "MockResourceGateway":
        from .mock_resource_gateway import MockResourceGateway
        return MockResourceGateway
    elif name == "create_gateway":
        from .gateway_factory import create_gateway
        return create_gateway
    elif name == "ShowWizard":
        from .wizard.show_wizard import ShowWizard
        return ShowWizard
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
