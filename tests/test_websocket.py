"""
==============================================================================
Storefront WebSocket Tests
==============================================================================

Tests for the per-connection storefront session protocol.

==============================================================================
"""

from fastapi.testclient import TestClient


class TestStorefrontWebSocket:
    """Tests for /ws/storefront."""

    def test_initial_state(self, client: TestClient):
        """Test the catalog is loaded and sent on connect."""
        with client.websocket_connect("/ws/storefront") as ws:
            state = ws.receive_json()

        assert state["type"] == "state"
        assert state["loading"] is False
        assert [p["id"] for p in state["products"]] == ["1", "2", "3"]
        assert state["products"][2]["stock_badge"] == "Out of Stock"
        assert state["selection"] is None
        assert state["cart"]["is_empty"] is True

    def test_add_and_update(self, client: TestClient):
        """Test cart actions update the reported total."""
        with client.websocket_connect("/ws/storefront") as ws:
            ws.receive_json()

            ws.send_json({"type": "add", "product_id": "1"})
            state = ws.receive_json()
            assert state["cart"]["lines"][0]["quantity"] == 1

            ws.send_json({"type": "add", "product_id": "1"})
            state = ws.receive_json()
            assert state["cart"]["total"] == "$199.98"

            ws.send_json({"type": "update", "product_id": "1", "quantity": 0})
            state = ws.receive_json()
            assert state["cart"]["is_empty"] is True

    def test_view_close_and_add_from_details(self, client: TestClient):
        """Test the details overlay transitions."""
        with client.websocket_connect("/ws/storefront") as ws:
            ws.receive_json()

            ws.send_json({"type": "view", "product_id": "1"})
            ws.receive_json()
            ws.send_json({"type": "view", "product_id": "2"})
            state = ws.receive_json()
            assert state["selection"]["id"] == "2"

            ws.send_json({"type": "close"})
            assert ws.receive_json()["selection"] is None

            ws.send_json({"type": "view", "product_id": "2"})
            ws.receive_json()
            ws.send_json({"type": "add_from_details"})
            state = ws.receive_json()
            assert state["selection"] is None
            assert state["cart"]["lines"][0]["product_id"] == "2"

    def test_out_of_stock_rejected(self, client: TestClient):
        """Test adding an out-of-stock product yields an error frame."""
        with client.websocket_connect("/ws/storefront") as ws:
            ws.receive_json()

            ws.send_json({"type": "add", "product_id": "3"})
            error = ws.receive_json()
            assert error["type"] == "error"
            assert error["code"] == "OUT_OF_STOCK"

            ws.send_json({"type": "add", "product_id": "1"})
            assert ws.receive_json()["type"] == "state"

    def test_update_clamped_to_stock(self, client: TestClient):
        """Test the stock ceiling applies to direct quantity updates."""
        with client.websocket_connect("/ws/storefront") as ws:
            ws.receive_json()
            ws.send_json({"type": "update", "product_id": "2", "quantity": 50})
            state = ws.receive_json()
            assert state["cart"]["lines"][0]["quantity"] == 2
            assert state["cart"]["lines"][0]["can_increment"] is False

    def test_unknown_action(self, client: TestClient):
        with client.websocket_connect("/ws/storefront") as ws:
            ws.receive_json()
            ws.send_json({"type": "checkout"})
            assert ws.receive_json()["code"] == "INVALID_ACTION"

    def test_invalid_json_keeps_session_open(self, client: TestClient):
        """Test malformed text yields an error frame, not a dropped connection."""
        with client.websocket_connect("/ws/storefront") as ws:
            ws.receive_json()

            ws.send_text("{not json")
            error = ws.receive_json()
            assert error["type"] == "error"
            assert error["code"] == "INVALID_ACTION"

            ws.send_json({"type": "add", "product_id": "1"})
            state = ws.receive_json()
            assert state["type"] == "state"
            assert state["cart"]["lines"][0]["quantity"] == 1

    def test_non_object_message_rejected(self, client: TestClient):
        with client.websocket_connect("/ws/storefront") as ws:
            ws.receive_json()
            ws.send_text("[1, 2]")
            assert ws.receive_json()["code"] == "INVALID_ACTION"

    def test_catalog_failure_then_refresh(self, client: TestClient, catalog_source):
        """Test a failed load reports an error and can be retried."""
        catalog_source.fail = True
        with client.websocket_connect("/ws/storefront") as ws:
            error = ws.receive_json()
            assert error["code"] == "CATALOG_FETCH_FAILED"

            ws.send_json({"type": "add", "product_id": "1"})
            assert ws.receive_json()["code"] == "CATALOG_NOT_LOADED"

            catalog_source.fail = False
            ws.send_json({"type": "refresh"})
            state = ws.receive_json()
            assert state["loading"] is False
            assert len(state["products"]) == 3

    def test_sessions_are_isolated(self, client: TestClient):
        """Test each connection owns its own cart."""
        with client.websocket_connect("/ws/storefront") as first:
            first.receive_json()
            first.send_json({"type": "add", "product_id": "1"})
            first.receive_json()

        with client.websocket_connect("/ws/storefront") as second:
            assert second.receive_json()["cart"]["is_empty"] is True

