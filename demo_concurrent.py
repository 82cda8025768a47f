import asyncio
from rich import print
from sdk.storefront_client import StorefrontClient

async def place(client, user_id, product_id, qty):
    resp = await client.create_order_async(user_id, [{"productId": product_id, "quantity": qty}])
    if resp.get("success"):
        order = resp["data"]
        print(f"✅ user {user_id} placed order {order['id']} (total {order['total']:.2f})")
    else:
        print(f"❌ user {user_id} order failed: {resp.get('message')}")
    return resp

async def main():
    c = StorefrontClient(base_url="http://127.0.0.1:3000")

    product = c.create_product("Gaming Laptop", 2499.0, 5, "electronics", "demo item")
    print(f"\n🖥️  Created product: {product}")
    before = len(c.list_orders())

    # ids must come back distinct
    print("\n⚡ Placing orders concurrently...")
    results = await asyncio.gather(*[place(c, uid, product["id"], 1) for uid in range(1, 6)])

    ids = [r["data"]["id"] for r in results if r.get("success")]
    after = len(c.list_orders())
    print(f"\n🧾 Order ids: {sorted(ids)}")
    print(f"📦 Orders on file: {before} -> {after}")

    c.delete_product(product["id"])

if __name__ == "__main__":
    asyncio.run(main())
