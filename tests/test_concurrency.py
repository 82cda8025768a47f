# tests/test_concurrency.py
import asyncio
import httpx

from conftest import read_collection

async def _place_orders(app, count):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        return await asyncio.gather(*[
            ac.post("/api/orders", json={"userId": uid, "products": [{"productId": 1, "quantity": 1}]})
            for uid in range(1, count + 1)
        ])

async def _create_products(app, count):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        return await asyncio.gather(*[
            ac.post("/api/products", json={"name": f"item {n}", "price": n})
            for n in range(count)
        ])

def test_concurrent_orders_are_not_lost(app, data_dir):
    results = asyncio.run(_place_orders(app, 10))
    assert [r.status_code for r in results] == [201] * 10

    ids = sorted(r.json()["data"]["id"] for r in results)
    assert ids == list(range(1, 11))
    assert sorted(o["id"] for o in read_collection(data_dir, "orders")) == ids

def test_concurrent_product_creation_gets_distinct_ids(app, data_dir):
    results = asyncio.run(_create_products(app, 8))
    new_ids = sorted(r.json()["data"]["id"] for r in results)
    assert new_ids == list(range(8, 16))
    stored = [p["id"] for p in read_collection(data_dir, "products")]
    assert len(stored) == len(set(stored)) == 12

def test_concurrent_cart_adds_accumulate(app):
    async def run():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            await asyncio.gather(*[
                ac.post("/api/cart/u1/add", json={"productId": 5, "quantity": 1}) for _ in range(20)
            ])
            return (await ac.get("/api/cart/u1")).json()

    assert asyncio.run(run())["data"] == [{"productId": 5, "quantity": 20}]
