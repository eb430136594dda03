"""
Order Service API Tests
"""
import pytest

pytestmark = pytest.mark.api


def _order_payload(**overrides):
    payload = {
        "customer_email": "jane@example.com",
        "customer_name": "Jane Doe",
        "items": [
            {"product_id": 1, "product_name": "A", "quantity": 2, "price": "9.99"},
            {"product_id": 2, "product_name": "B", "quantity": 1, "price": "5.00"},
        ],
        "shipping_address": "1 Main St",
        "payment_method": "CREDIT_CARD",
    }
    payload.update(overrides)
    return payload


class TestOrderApi:

    def test_health(self, order_api):
        client, _ = order_api
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["service"] == "order_service"

    def test_detailed_health_reports_publish_failures(self, order_api):
        client, service = order_api
        service.event_bus.publish_failures = 2

        body = client.get("/health/detailed").json()

        assert body["database_connected"] is True
        assert body["publish_failures"] == 2

    def test_create_order(self, order_api):
        client, service = order_api

        response = client.post("/api/v1/orders", json=_order_payload())

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "CONFIRMED"
        assert body["total_amount"] == "24.98"
        assert service.event_bus.get_published_types() == ["order.created", "order.confirmed"]

    def test_create_order_without_items(self, order_api):
        client, _ = order_api
        response = client.post("/api/v1/orders", json=_order_payload(items=[]))
        assert response.status_code == 400

    def test_create_order_with_unknown_method(self, order_api):
        client, _ = order_api
        response = client.post("/api/v1/orders", json=_order_payload(payment_method="BITCOIN"))
        assert response.status_code == 400

    def test_create_order_with_bad_email(self, order_api):
        client, _ = order_api
        response = client.post("/api/v1/orders", json=_order_payload(customer_email="nope"))
        assert response.status_code == 422

    def test_get_and_list(self, order_api):
        client, _ = order_api
        order_id = client.post("/api/v1/orders", json=_order_payload()).json()["id"]

        assert client.get(f"/api/v1/orders/{order_id}").json()["id"] == order_id
        assert client.get("/api/v1/orders").json()["count"] == 1
        assert len(client.get("/api/v1/orders/customer/jane@example.com").json()) == 1

    def test_get_missing_order(self, order_api):
        client, _ = order_api
        assert client.get("/api/v1/orders/999").status_code == 404

    def test_update_status(self, order_api):
        client, service = order_api
        order_id = client.post("/api/v1/orders", json=_order_payload()).json()["id"]

        response = client.put(f"/api/v1/orders/{order_id}/status", json={"status": "SHIPPED"})

        assert response.status_code == 200
        assert response.json()["status"] == "SHIPPED"
        assert service.event_bus.get_published_types()[-1] == "order.shipped"

    def test_update_status_rejects_unknown_status(self, order_api):
        client, _ = order_api
        order_id = client.post("/api/v1/orders", json=_order_payload()).json()["id"]

        response = client.put(f"/api/v1/orders/{order_id}/status", json={"status": "LOST"})

        assert response.status_code == 422

    def test_record_payment(self, order_api):
        client, _ = order_api
        order_id = client.post("/api/v1/orders", json=_order_payload()).json()["id"]

        body = client.put(f"/api/v1/orders/{order_id}/payment", json={"payment_id": 5}).json()

        assert body["status"] == "PAID"
        assert body["payment_id"] == 5

    def test_conflict_maps_to_409(self, order_api):
        from microservices.order_service.protocols import OrderConcurrencyError

        client, service = order_api
        order_id = client.post("/api/v1/orders", json=_order_payload()).json()["id"]
        service.repository.set_error(OrderConcurrencyError("modified concurrently"))

        response = client.put(f"/api/v1/orders/{order_id}/status", json={"status": "SHIPPED"})

        assert response.status_code == 409
