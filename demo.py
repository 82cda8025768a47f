#!/usr/bin/env python
from rich import print
from sdk.storefront_client import StorefrontClient

def main():
    c = StorefrontClient(base_url="http://127.0.0.1:3000")

    # -----------------------------
    # Create products
    # -----------------------------
    print("\nCreating products...")
    laptop = c.create_product("Laptop", 1499.99, 3, "electronics", "15 inch, 16GB RAM")
    mouse = c.create_product("Wireless Mouse", 24.5, 10, "electronics", "Bluetooth mouse")
    print(laptop)
    print(mouse)

    # -----------------------------
    # List and search
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())

    print("\nSearching for 'mouse'...")
    print(c.search_products("mouse"))

    # -----------------------------
    # Update stock
    # -----------------------------
    print("\nRestocking the laptop...")
    print(c.update_product(laptop["id"], stock=5))

    # -----------------------------
    # Cart
    # -----------------------------
    user_id = "1"
    print(f"\nAdding products to cart for user {user_id}...")
    print(c.add_to_cart(user_id, laptop["id"], 1))
    print(c.add_to_cart(user_id, mouse["id"], 2))
    print(c.view_cart(user_id))

    # -----------------------------
    # Orders
    # -----------------------------
    print("\nPlacing an order...")
    print(c.create_order(1, [{"productId": laptop["id"], "quantity": 1},
                             {"productId": mouse["id"], "quantity": 2}]))

    print("\nOrdering more mice than are in stock...")
    print(c.create_order(1, [{"productId": mouse["id"], "quantity": 99}]))

    print("\nListing all orders...")
    print(c.list_orders())

    # -----------------------------
    # Clean up
    # -----------------------------
    print("\nDeleting demo products...")
    print(c.delete_product(laptop["id"]))
    print(c.delete_product(mouse["id"]))

if __name__ == "__main__":
    main()
