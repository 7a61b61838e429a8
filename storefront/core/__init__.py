"""
==============================================================================
Core Package
==============================================================================

Core infrastructure for the application.

Modules:
--------
- exceptions: AppException, CatalogFetchError and error factory functions

Usage:
------
    from storefront.core import exceptions
    raise exceptions.product_not_found("42")

==============================================================================
"""

from .exceptions import (
    AppException,
    CatalogFetchError,
    register_exception_handlers,
)

__all__ = [
    "AppException",
    "CatalogFetchError",
    "register_exception_handlers",
]
