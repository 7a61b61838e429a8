"""
==============================================================================
Health Check Endpoints
==============================================================================

System health status endpoints for monitoring and orchestration.

==============================================================================
"""

from fastapi import APIRouter, Depends, Query

from storefront.catalog.sources import CatalogSource, get_catalog_source
from storefront.core import CatalogFetchError


router = APIRouter(prefix="/health", tags=["Health"])


class HealthController:
    """Controller for health check operations."""

    def __init__(self, source: CatalogSource):
        self._source = source

    async def check_catalog(self) -> dict:
        """Fetch the catalog once and report the outcome."""
        try:
            products = await self._source.fetch_products()
        except CatalogFetchError as e:
            return {"status": "unhealthy", "products": 0, "reason": e.reason}
        return {"status": "healthy", "products": len(products)}

    async def get_health(self, deep: bool) -> dict:
        """Get full health status."""
        components = {"api": "healthy", "catalog_source": self._source.name}
        details = {}

        overall = "healthy"
        if deep:
            catalog_info = await self.check_catalog()
            components["catalog"] = catalog_info["status"]
            details["products_available"] = catalog_info["products"]
            if catalog_info["status"] != "healthy":
                overall = "degraded"
                details["catalog_error"] = catalog_info["reason"]

        return {"status": overall, "components": components, "details": details}


@router.get("")
async def health_check(
    deep: bool = Query(False, description="Also query the catalog source"),
    source: CatalogSource = Depends(get_catalog_source),
):
    """
    Health check endpoint.

    With ``deep=true`` the catalog source is queried as well.
    """
    controller = HealthController(source)
    return await controller.get_health(deep)


@router.get("/ready")
async def readiness_check():
    """Readiness probe for container orchestration."""
    return {"ready": True}


@router.get("/live")
async def liveness_check():
    """Liveness probe for container orchestration."""
    return {"alive": True}
