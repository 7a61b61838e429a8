"""
==============================================================================
Configuration Package
==============================================================================

Centralized configuration management using Pydantic Settings.

Usage:
------
    from storefront.config import get_settings

    settings = get_settings()
    print(settings.catalog_backend)

==============================================================================
"""

from .settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
