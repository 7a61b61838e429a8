"""
==============================================================================
Product Catalog Endpoints
==============================================================================

Read-only proxy of the catalog query to the configured catalog source.

    GET /api/products  -> 200 [Product, ...]
                       -> 500 {"error": "Failed to fetch products"}
    other methods      -> 405, Allow: GET

==============================================================================
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from storefront.catalog.sources import CatalogSource, get_catalog_source
from storefront.core import CatalogFetchError


# Module logger
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["Products"])


class ProductController:
    """Controller for product catalog operations."""

    def __init__(self, source: CatalogSource):
        self._source = source

    async def list_products(self) -> List[dict]:
        """Fetch all products as JSON-ready dicts."""
        products = await self._source.fetch_products()
        return [p.model_dump(mode="json") for p in products]


@router.get("")
async def list_products(source: CatalogSource = Depends(get_catalog_source)):
    """List every product in the catalog."""
    controller = ProductController(source)
    try:
        products = await controller.list_products()
    except CatalogFetchError as e:
        logger.error(f"Error fetching products: {e.reason}")
        return JSONResponse(status_code=500, content={"error": e.message})

    return JSONResponse(status_code=200, content=products)


@router.api_route(
    "",
    methods=["POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def method_not_allowed(request: Request):
    """Reject anything but GET."""
    return PlainTextResponse(
        f"Method {request.method} Not Allowed",
        status_code=405,
        headers={"Allow": "GET"},
    )
