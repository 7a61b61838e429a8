"""
==============================================================================
Storefront WebSocket Module
==============================================================================

Live page state for one storefront visitor.

Each connection owns one StorefrontSession; cart and selection live for
the lifetime of the connection and are discarded on disconnect.

Protocol:
---------
1. Client connects; server fetches the catalog and sends a "state" message
2. Client sends actions:
       {"type": "add", "product_id": "1"}
       {"type": "update", "product_id": "1", "quantity": 3}
       {"type": "view", "product_id": "1"}
       {"type": "close"}
       {"type": "add_from_details"}
       {"type": "refresh"}
       {"type": "stop"}
3. Server answers every action with a "state" message, or an "error"
   message ({"type": "error", "code": ..., "message": ...}) leaving the
   state unchanged

If the catalog cannot be fetched the session stays in the loading state
and the client may retry with "refresh".

==============================================================================
"""

import json
import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from storefront.catalog.sources import CatalogSource, get_catalog_source
from storefront.config import get_settings
from storefront.core import AppException, CatalogFetchError
from storefront.core import exceptions
from storefront.presentation.adapter import ProductPresenter
from storefront.store.session import StorefrontSession


# Module logger
logger = logging.getLogger(__name__)

router = APIRouter()


class StorefrontWebSocketHandler:
    """
    Handler for storefront WebSocket connections.

    Manages the lifecycle of a visitor session:
    - Catalog load and refresh
    - Cart and selection actions
    - State reporting
    """

    def __init__(self, websocket: WebSocket, source: CatalogSource):
        self._websocket = websocket
        self._source = source
        self._session = StorefrontSession(
            ProductPresenter(currency_symbol=get_settings().currency_symbol)
        )

    async def send_error(self, message: str, code: str = "ERROR") -> None:
        """Send error message to client."""
        await self._websocket.send_json({
            "type": "error",
            "code": code,
            "message": message
        })

    async def send_state(self) -> None:
        """Send the full page state to the client."""
        await self._websocket.send_json({"type": "state", **self._session.snapshot()})

    async def load_catalog(self) -> bool:
        """Fetch the catalog into the session."""
        try:
            products = await self._source.fetch_products()
        except CatalogFetchError as e:
            logger.error(f"❌ Catalog load failed: {e.reason}")
            await self.send_error(e.message, e.code)
            return False

        self._session.load(products)
        logger.info(f"✅ Loaded {len(products)} products into session")
        return True

    def apply(self, data: dict) -> None:
        """
        Apply a client action to the session.

        Raises:
            AppException: If the action is unknown or rejected
        """
        action = data.get("type")
        product_id = data.get("product_id")

        if action == "add":
            self._session.add_to_cart(product_id)
        elif action == "update":
            self._session.update_quantity(product_id, data.get("quantity"))
        elif action == "view":
            self._session.view(product_id)
        elif action == "close":
            self._session.close_details()
        elif action == "add_from_details":
            self._session.add_from_details()
        else:
            raise exceptions.invalid_action(action)

    async def handle_message(self, data: dict) -> None:
        """Handle one client message."""
        if data.get("type") == "refresh":
            if await self.load_catalog():
                await self.send_state()
            return

        if self._session.loading:
            error = exceptions.catalog_not_loaded()
            await self.send_error(error.message, error.code)
            return

        try:
            self.apply(data)
        except AppException as e:
            logger.debug(f"Rejected action {data.get('type')!r}: {e.code}")
            await self.send_error(e.message, e.code)
            return

        await self.send_state()

    async def run(self) -> None:
        """Main handler loop."""
        await self._websocket.accept()
        logger.info("🛒 Storefront WebSocket connected")

        try:
            if await self.load_catalog():
                await self.send_state()

            while True:
                text = await self._websocket.receive_text()

                try:
                    data = json.loads(text)
                except json.JSONDecodeError:
                    await self.send_error("Invalid JSON", "INVALID_ACTION")
                    continue

                if not isinstance(data, dict):
                    await self.send_error("Expected a JSON object", "INVALID_ACTION")
                    continue

                if data.get("type") == "stop":
                    logger.info("🛑 Client requested stop")
                    await self._websocket.close()
                    break

                await self.handle_message(data)

        except WebSocketDisconnect:
            logger.info("🛒 Client disconnected")
        finally:
            logger.info("✅ Storefront WebSocket closed")


@router.websocket("/ws/storefront")
async def websocket_storefront(
    websocket: WebSocket,
    source: CatalogSource = Depends(get_catalog_source),
):
    """Storefront page state via WebSocket."""
    handler = StorefrontWebSocketHandler(websocket, source)
    await handler.run()
