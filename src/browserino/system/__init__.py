"""OS integration: default browser registration."""

from .default_browser import (
    HandlerRegistry,
    LaunchServicesRegistry,
    default_registry,
    is_default_browser,
)

__all__ = [
    "HandlerRegistry",
    "LaunchServicesRegistry",
    "default_registry",
    "is_default_browser",
]
