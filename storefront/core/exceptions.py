"""
Application Exception Handling

Single AppException class for storefront errors with FastAPI integration,
plus the catalog failure raised by every catalog source.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class AppException(Exception):
    """
    Unified application exception for all error scenarios.

    Usage:
        raise AppException("Product not found", "PRODUCT_NOT_FOUND", 404)
        raise AppException("Out of stock", "OUT_OF_STOCK", 409, {"product_id": "1"})

    Error Codes:
        Catalog:
            - CATALOG_FETCH_FAILED (500)
            - CATALOG_NOT_LOADED (503)
            - PRODUCT_NOT_FOUND (404)

        Cart / Selection:
            - OUT_OF_STOCK (409)
            - NOTHING_SELECTED (409)
            - INVALID_QUANTITY (400)

        General:
            - INVALID_ACTION (400)
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "PRODUCT_NOT_FOUND")
            status_code: HTTP status code (default: 400)
            details: Additional error context (optional)
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        error_dict = {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "timestamp": self.timestamp
            }
        }

        if self.details:
            error_dict["error"]["details"] = self.details

        return error_dict


class CatalogFetchError(AppException):
    """Raised by catalog sources when the product list cannot be fetched."""

    def __init__(self, reason: str):
        super().__init__(
            "Failed to fetch products",
            "CATALOG_FETCH_FAILED",
            500,
            {"reason": reason}
        )
        self.reason = reason


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Convert AppException to consistent JSON error response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def catalog_fetch_failed(reason: str) -> CatalogFetchError:
    """Create catalog fetch failure exception."""
    return CatalogFetchError(reason)


def catalog_not_loaded() -> AppException:
    """Create catalog not loaded exception."""
    return AppException("Product catalog not loaded", "CATALOG_NOT_LOADED", 503)


def product_not_found(product_id: Optional[str] = None) -> AppException:
    """Create product not found exception."""
    details = {"product_id": product_id} if product_id else {}
    return AppException("Product not found", "PRODUCT_NOT_FOUND", 404, details)


def out_of_stock(product_id: str) -> AppException:
    """Create out of stock exception."""
    return AppException(
        "Product is out of stock",
        "OUT_OF_STOCK",
        409,
        {"product_id": product_id}
    )


def nothing_selected() -> AppException:
    """Create exception for overlay actions with no product selected."""
    return AppException("No product selected", "NOTHING_SELECTED", 409)


def invalid_quantity(value: Any) -> AppException:
    """Create invalid quantity exception."""
    return AppException(
        f"Invalid quantity: {value!r}",
        "INVALID_QUANTITY",
        400,
        {"quantity": value}
    )


def invalid_action(action: Any) -> AppException:
    """Create unknown action exception."""
    return AppException(
        f"Unknown action: {action!r}",
        "INVALID_ACTION",
        400,
        {"action": action}
    )

