# sdk/storefront_client.py
import requests
import httpx
from typing import Optional, Dict, Any, List
from rich import print

class StorefrontClient:
    def __init__(self, base_url: str = "http://localhost:3000", timeout: int = 10, session=None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _data(self, r):
        r.raise_for_status()
        return r.json().get("data")

    # Products
    def list_products(self) -> List[Dict[str, Any]]:
        r = self.session.get(f"{self.base_url}/api/products", timeout=self.timeout)
        return self._data(r)

    def search_products(self, q: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"q": q} if q else {}
        r = self.session.get(f"{self.base_url}/api/products/search", params=params, timeout=self.timeout)
        return self._data(r)

    def get_product(self, product_id: int):
        r = self.session.get(f"{self.base_url}/api/product/{product_id}", timeout=self.timeout)
        return self._data(r)

    def create_product(self, name: str, price: float, stock: int = 0, category: str = "", description: str = ""):
        r = self.session.post(f"{self.base_url}/api/products", json={
            "name": name, "price": price, "stock": stock, "category": category, "description": description
        }, timeout=self.timeout)
        return self._data(r)

    def update_product(self, product_id: int, **fields):
        r = self.session.put(f"{self.base_url}/api/product/{product_id}", json=fields, timeout=self.timeout)
        return self._data(r)

    def delete_product(self, product_id: int):
        r = self.session.delete(f"{self.base_url}/api/product/{product_id}", timeout=self.timeout)
        return self._data(r)

    # Users
    def list_users(self) -> List[Dict[str, Any]]:
        r = self.session.get(f"{self.base_url}/api/users", timeout=self.timeout)
        return self._data(r)

    def get_user(self, user_id: int):
        r = self.session.get(f"{self.base_url}/api/user/{user_id}", timeout=self.timeout)
        return self._data(r)

    # Orders
    def list_orders(self) -> List[Dict[str, Any]]:
        r = self.session.get(f"{self.base_url}/api/orders", timeout=self.timeout)
        return self._data(r)

    def create_order(self, user_id: int, items: List[Dict[str, int]]) -> Dict[str, Any]:
        # do not raise_for_status: callers inspect 400s (unknown product, low stock)
        r = self.session.post(f"{self.base_url}/api/orders", json={"userId": user_id, "products": items}, timeout=self.timeout)
        return r.json()

    async def create_order_async(self, user_id: int, items: List[Dict[str, int]]) -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            r = await client.post(f"{self.base_url}/api/orders", json={"userId": user_id, "products": items})
            return r.json()

    # Cart
    def add_to_cart(self, user_id: str, product_id: int, quantity: int = 1):
        r = self.session.post(f"{self.base_url}/api/cart/{user_id}/add", json={
            "productId": product_id, "quantity": quantity
        }, timeout=self.timeout)
        return self._data(r)

    def view_cart(self, user_id: str):
        r = self.session.get(f"{self.base_url}/api/cart/{user_id}", timeout=self.timeout)
        return self._data(r)


def _parse_item(raw: str) -> Dict[str, int]:
    # "5:2" -> {"productId": 5, "quantity": 2}; quantity defaults to 1
    pid, _, qty = raw.partition(":")
    return {"productId": int(pid), "quantity": int(qty or 1)}


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Storefront CLI")
    parser.add_argument("--url", default="http://127.0.0.1:3000", help="Base URL of the store")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---------------------------
    # Product commands
    # ---------------------------
    subparsers.add_parser("list-products", help="List all products")

    sp = subparsers.add_parser("search", help="Search name, description and category")
    sp.add_argument("--q", help="Search text")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", type=int, required=True)

    cp = subparsers.add_parser("create-product", help="Create a new product")
    cp.add_argument("--name", required=True)
    cp.add_argument("--price", type=float, required=True)
    cp.add_argument("--stock", type=int, default=0)
    cp.add_argument("--category", default="")
    cp.add_argument("--description", default="")

    up = subparsers.add_parser("update-product", help="Change fields of a product")
    up.add_argument("--product-id", type=int, required=True)
    up.add_argument("--name")
    up.add_argument("--price", type=float)
    up.add_argument("--stock", type=int)

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", type=int, required=True)

    # ---------------------------
    # Users and orders
    # ---------------------------
    subparsers.add_parser("list-users")
    gu = subparsers.add_parser("get-user")
    gu.add_argument("--user-id", type=int, required=True)

    subparsers.add_parser("list-orders")
    po = subparsers.add_parser("place-order", help="Place an order")
    po.add_argument("--user-id", type=int, required=True)
    po.add_argument("--item", action="append", required=True, help="productId[:quantity], repeatable")

    # ---------------------------
    # Cart commands
    # ---------------------------
    add = subparsers.add_parser("add-to-cart", help="Add product to cart")
    add.add_argument("--user-id", required=True)
    add.add_argument("--product-id", type=int, required=True)
    add.add_argument("--qty", type=int, default=1)

    vc = subparsers.add_parser("view-cart", help="View cart contents")
    vc.add_argument("--user-id", required=True)

    args = parser.parse_args()
    c = StorefrontClient(base_url=args.url)

    if args.command == "list-products":
        print(c.list_products())
    elif args.command == "search":
        print(c.search_products(args.q))
    elif args.command == "get-product":
        print(c.get_product(args.product_id))
    elif args.command == "create-product":
        print(c.create_product(args.name, args.price, args.stock, args.category, args.description))
    elif args.command == "update-product":
        fields = {k: v for k, v in (("name", args.name), ("price", args.price), ("stock", args.stock)) if v is not None}
        print(c.update_product(args.product_id, **fields))
    elif args.command == "delete-product":
        print(c.delete_product(args.product_id))
    elif args.command == "list-users":
        print(c.list_users())
    elif args.command == "get-user":
        print(c.get_user(args.user_id))
    elif args.command == "list-orders":
        print(c.list_orders())
    elif args.command == "place-order":
        print(c.create_order(args.user_id, [_parse_item(i) for i in args.item]))
    elif args.command == "add-to-cart":
        print(c.add_to_cart(args.user_id, args.product_id, args.qty))
    elif args.command == "view-cart":
        print(c.view_cart(args.user_id))
