# tests/test_orders.py
from datetime import datetime

from conftest import PRODUCTS, read_collection, write_collection

def test_list_orders_empty(client):
    assert client.get("/api/orders").json() == {"success": True, "data": [], "count": 0}

def test_create_order_with_two_items(client, data_dir):
    r = client.post("/api/orders", json={"userId": 1, "products": [
        {"productId": 1, "quantity": 3},
        {"productId": 7, "quantity": 1},
    ]})
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "Order created successfully"
    order = body["data"]
    assert order["id"] == 1
    assert order["userId"] == 1
    assert order["status"] == "pending"
    # 19.99 * 3 + 35.25
    assert order["total"] == 95.22
    assert order["products"] == [
        {"productId": 1, "name": "Classic Widget", "price": 19.99, "quantity": 3},
        {"productId": 7, "name": "Desk Lamp", "price": 35.25, "quantity": 1},
    ]
    datetime.fromisoformat(order["createdAt"].replace("Z", "+00:00"))
    assert read_collection(data_dir, "orders") == [order]

def test_total_is_rounded_to_cents(client, data_dir):
    write_collection(data_dir, "products", [
        {"id": 1, "name": "Penny thing", "price": 0.1, "category": "", "description": "", "stock": 10},
        {"id": 2, "name": "Other thing", "price": 0.2, "category": "", "description": "", "stock": 10},
    ])
    r = client.post("/api/orders", json={"userId": 2, "products": [
        {"productId": 1, "quantity": 1},
        {"productId": 2, "quantity": 1},
    ]})
    assert r.json()["data"]["total"] == 0.3

def test_order_ids_increment(client, data_dir):
    write_collection(data_dir, "orders", [{"id": 4, "userId": 1, "products": [], "total": 0,
                                           "status": "pending", "createdAt": "2024-01-01T00:00:00.000Z"}])
    r = client.post("/api/orders", json={"userId": 1, "products": [{"productId": 2, "quantity": 1}]})
    assert r.json()["data"]["id"] == 5
    assert [o["id"] for o in read_collection(data_dir, "orders")] == [4, 5]

def test_order_out_of_stock_is_rejected(client, data_dir):
    before = (data_dir / "orders.json").read_bytes()
    r = client.post("/api/orders", json={"userId": 1, "products": [{"productId": 3, "quantity": 1}]})
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "Not enough stock for Trail Backpack"}
    assert (data_dir / "orders.json").read_bytes() == before

def test_order_unknown_product_is_rejected(client, data_dir):
    before = (data_dir / "orders.json").read_bytes()
    r = client.post("/api/orders", json={"userId": 1, "products": [
        {"productId": 1, "quantity": 1},
        {"productId": 55, "quantity": 1},
    ]})
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "Product with ID 55 not found"}
    assert (data_dir / "orders.json").read_bytes() == before

def test_order_does_not_decrement_stock(client, data_dir):
    client.post("/api/orders", json={"userId": 1, "products": [{"productId": 2, "quantity": 8}]})
    assert read_collection(data_dir, "products") == PRODUCTS

def test_order_snapshot_survives_price_change(client):
    client.post("/api/orders", json={"userId": 1, "products": [{"productId": 2, "quantity": 1}]})
    client.put("/api/product/2", json={"price": 10})
    order = client.get("/api/orders").json()["data"][0]
    assert order["products"][0]["price"] == 89.5

def test_order_requires_items(client):
    r = client.post("/api/orders", json={"userId": 1, "products": []})
    assert r.status_code == 400
    assert r.json()["success"] is False

def test_order_rejects_zero_quantity(client):
    r = client.post("/api/orders", json={"userId": 1, "products": [{"productId": 1, "quantity": 0}]})
    assert r.status_code == 400

def test_order_write_failure(client, app):
    app.state.store.save = lambda name, records: False
    r = client.post("/api/orders", json={"userId": 1, "products": [{"productId": 1, "quantity": 1}]})
    assert r.status_code == 500
    assert r.json() == {"success": False, "message": "Failed to create order"}
