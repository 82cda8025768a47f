# tests/test_products.py
from conftest import PRODUCTS, read_collection, write_collection

def test_list_products(client):
    r = client.get("/api/products")
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["count"] == len(PRODUCTS)
    assert body["data"] == PRODUCTS

def test_list_products_without_file(client, data_dir):
    (data_dir / "products.json").unlink()
    body = client.get("/api/products").json()
    assert body == {"success": True, "data": [], "count": 0}

def test_search_matches_name_description_and_category(client):
    body = client.get("/api/products/search", params={"q": "WIDGET"}).json()
    assert body["success"] is True
    # name of 1, description of 3
    assert [p["id"] for p in body["data"]] == [1, 3]
    assert body["count"] == 2

def test_search_by_category(client):
    body = client.get("/api/products/search", params={"q": "kitch"}).json()
    assert [p["id"] for p in body["data"]] == [2]

def test_search_without_query_returns_everything(client):
    body = client.get("/api/products/search").json()
    assert body["data"] == PRODUCTS
    assert body["count"] == len(PRODUCTS)

def test_search_no_match(client):
    body = client.get("/api/products/search", params={"q": "submarine"}).json()
    assert body == {"success": True, "data": [], "count": 0}

def test_get_product(client):
    r = client.get("/api/product/2")
    assert r.status_code == 200
    assert r.json() == {"success": True, "data": PRODUCTS[1]}

def test_get_missing_product(client):
    r = client.get("/api/product/99")
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "Product not found"}

def test_create_product_assigns_max_plus_one(client, data_dir):
    r = client.post("/api/products", json={
        "name": "Kettle", "price": "24.90", "category": "Kitchen",
        "description": "1.7L", "stock": "12"
    })
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "Product created successfully"
    created = body["data"]
    assert created == {"id": 8, "name": "Kettle", "price": 24.9, "category": "Kitchen",
                       "description": "1.7L", "stock": 12}
    assert read_collection(data_dir, "products")[-1] == created

def test_create_first_product_gets_id_one(client, data_dir):
    write_collection(data_dir, "products", [])
    r = client.post("/api/products", json={"name": "First", "price": 1})
    assert r.status_code == 201
    assert r.json()["data"]["id"] == 1

def test_created_ids_are_unique(client, data_dir):
    for name in ("a", "b", "c"):
        client.post("/api/products", json={"name": name, "price": 1})
    ids = [p["id"] for p in read_collection(data_dir, "products")]
    assert len(ids) == len(set(ids))

def test_create_product_rejects_negative_stock(client, data_dir):
    r = client.post("/api/products", json={"name": "Bad", "price": 1, "stock": -1})
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert "stock" in body["message"]
    assert read_collection(data_dir, "products") == PRODUCTS

def test_create_product_write_failure(client, app):
    app.state.store.save = lambda name, records: False
    r = client.post("/api/products", json={"name": "Kettle", "price": 5})
    assert r.status_code == 500
    assert r.json() == {"success": False, "message": "Failed to create product"}

def test_update_product_overlays_fields(client, data_dir):
    r = client.put("/api/product/2", json={"price": 79.0, "color": "red"})
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Product updated successfully"
    assert body["data"] == {**PRODUCTS[1], "price": 79.0, "color": "red"}
    assert read_collection(data_dir, "products")[1] == body["data"]

def test_update_never_changes_id(client, data_dir):
    r = client.put("/api/product/1", json={"id": 42, "name": "Renamed"})
    assert r.status_code == 200
    assert r.json()["data"]["id"] == 1
    ids = [p["id"] for p in read_collection(data_dir, "products")]
    assert ids == [1, 2, 3, 7]

def test_update_missing_product(client, data_dir):
    r = client.put("/api/product/99", json={"name": "Ghost"})
    assert r.status_code == 404
    assert r.json()["success"] is False
    assert read_collection(data_dir, "products") == PRODUCTS

def test_update_write_failure(client, app):
    app.state.store.save = lambda name, records: False
    r = client.put("/api/product/1", json={"name": "x"})
    assert r.status_code == 500
    assert r.json()["message"] == "Failed to update product"

def test_delete_product(client, data_dir):
    r = client.delete("/api/product/3")
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Product deleted successfully"
    assert body["data"] == PRODUCTS[2]
    assert [p["id"] for p in read_collection(data_dir, "products")] == [1, 2, 7]

def test_delete_missing_product_leaves_file_unchanged(client, data_dir):
    before = (data_dir / "products.json").read_bytes()
    r = client.delete("/api/product/99")
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "Product not found"}
    assert (data_dir / "products.json").read_bytes() == before

def test_delete_write_failure(client, app):
    app.state.store.save = lambda name, records: False
    r = client.delete("/api/product/1")
    assert r.status_code == 500
    assert r.json()["message"] == "Failed to delete product"

def test_non_numeric_product_id_is_rejected(client):
    r = client.get("/api/product/abc")
    assert r.status_code == 400
    assert r.json()["success"] is False

def test_create_product_rejects_infinite_price(client, data_dir):
    before = (data_dir / "products.json").read_bytes()
    r = client.post("/api/products", content=b'{"name": "Huge", "price": 1e999}',
                    headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert "price" in r.json()["message"]
    assert (data_dir / "products.json").read_bytes() == before
    assert client.get("/api/products").status_code == 200
    assert client.get("/api/products/search", params={"q": "huge"}).status_code == 200

def test_update_product_rejects_infinite_price(client, data_dir):
    before = (data_dir / "products.json").read_bytes()
    r = client.put("/api/product/1", content=b'{"price": 1e999}',
                   headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert (data_dir / "products.json").read_bytes() == before

def test_malformed_json_body(client):
    r = client.post("/api/products", content=b'{"name": "Broken",',
                    headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "JSON decode error"}
