import logging
from decimal import Decimal
from typing import Optional, Dict, Any
from fastapi import HTTPException

# Import from other modules
from .core import (
    ProductIn, ProductUpdate, OrderIn, AddToCartIn,
    envelope, next_id, find_index, matches_query,
    _make_product_dict, _make_order_dict
)
from .database import (
    JsonStore, CartStore, PRODUCTS, USERS, ORDERS
)

logger = logging.getLogger(__name__)

# This file contains the core logic for all API endpoints.

# Product endpoints
async def list_products_logic(store: JsonStore) -> Dict[str, Any]:
    products = await store.load_async(PRODUCTS)
    return envelope(data=products, count=len(products))

async def search_products_logic(store: JsonStore, q: Optional[str] = None) -> Dict[str, Any]:
    products = await store.load_async(PRODUCTS)
    if not q:
        return envelope(data=products, count=len(products))
    results = [p for p in products if matches_query(p, q)]
    return envelope(data=results, count=len(results))

async def get_product_logic(store: JsonStore, product_id: int) -> Dict[str, Any]:
    products = await store.load_async(PRODUCTS)
    i = find_index(products, product_id)
    if i == -1:
        raise HTTPException(status_code=404, detail="Product not found")
    return envelope(data=products[i])

async def create_product_logic(store: JsonStore, payload: ProductIn) -> Dict[str, Any]:
    async with store.locked(PRODUCTS):
        products = await store.load_async(PRODUCTS)
        product = _make_product_dict(next_id(products), payload)
        products.append(product)
        if not await store.save_async(PRODUCTS, products):
            raise HTTPException(status_code=500, detail="Failed to create product")
    logger.info("Created product %s (%s)", product["id"], product["name"])
    return envelope(data=product, message="Product created successfully")

async def update_product_logic(store: JsonStore, product_id: int, payload: ProductUpdate) -> Dict[str, Any]:
    changes = payload.model_dump(exclude_unset=True)
    changes.pop("id", None)
    async with store.locked(PRODUCTS):
        products = await store.load_async(PRODUCTS)
        i = find_index(products, product_id)
        if i == -1:
            raise HTTPException(status_code=404, detail="Product not found")
        products[i] = {**products[i], **changes, "id": product_id}
        if not await store.save_async(PRODUCTS, products):
            raise HTTPException(status_code=500, detail="Failed to update product")
    logger.info("Updated product %s: %s", product_id, sorted(changes))
    return envelope(data=products[i], message="Product updated successfully")

async def delete_product_logic(store: JsonStore, product_id: int) -> Dict[str, Any]:
    async with store.locked(PRODUCTS):
        products = await store.load_async(PRODUCTS)
        i = find_index(products, product_id)
        if i == -1:
            raise HTTPException(status_code=404, detail="Product not found")
        deleted = products.pop(i)
        if not await store.save_async(PRODUCTS, products):
            raise HTTPException(status_code=500, detail="Failed to delete product")
    logger.info("Deleted product %s", product_id)
    return envelope(data=deleted, message="Product deleted successfully")

# User endpoints
async def list_users_logic(store: JsonStore) -> Dict[str, Any]:
    users = await store.load_async(USERS)
    return envelope(data=users, count=len(users))

async def get_user_logic(store: JsonStore, user_id: int) -> Dict[str, Any]:
    users = await store.load_async(USERS)
    i = find_index(users, user_id)
    if i == -1:
        raise HTTPException(status_code=404, detail="User not found")
    return envelope(data=users[i])

# Orders
async def list_orders_logic(store: JsonStore) -> Dict[str, Any]:
    orders = await store.load_async(ORDERS)
    return envelope(data=orders, count=len(orders))

async def create_order_logic(store: JsonStore, payload: OrderIn) -> Dict[str, Any]:
    async with store.locked(ORDERS, PRODUCTS):
        orders = await store.load_async(ORDERS)
        all_products = await store.load_async(PRODUCTS)

        total = Decimal("0")
        items = []
        for item in payload.products:
            i = find_index(all_products, item.productId)
            if i == -1:
                logger.info("Rejected order for user %s: unknown product %s", payload.userId, item.productId)
                raise HTTPException(status_code=400, detail=f"Product with ID {item.productId} not found")
            product = all_products[i]
            # stock is checked but not decremented
            if (product.get("stock") or 0) < item.quantity:
                logger.info("Rejected order for user %s: not enough stock for product %s", payload.userId, product["id"])
                raise HTTPException(status_code=400, detail=f"Not enough stock for {product.get('name')}")

            total += Decimal(str(product.get("price") or 0)) * item.quantity
            items.append({
                "productId": product["id"],
                "name": product.get("name", ""),
                "price": product.get("price") or 0,
                "quantity": item.quantity
            })

        order = _make_order_dict(next_id(orders), payload.userId, items, total)
        orders.append(order)
        if not await store.save_async(ORDERS, orders):
            raise HTTPException(status_code=500, detail="Failed to create order")
    logger.info("Created order %s for user %s, total %.2f", order["id"], order["userId"], order["total"])
    return envelope(data=order, message="Order created successfully")

# Cart endpoints
async def cart_add_logic(carts: CartStore, user_id: str, payload: AddToCartIn) -> Dict[str, Any]:
    cart = await carts.add(user_id, payload.productId, payload.quantity)
    return envelope(data=cart, count=len(cart), message="Product added to cart")

async def view_cart_logic(carts: CartStore, user_id: str) -> Dict[str, Any]:
    cart = carts.get(user_id)
    return envelope(data=cart, count=len(cart))
