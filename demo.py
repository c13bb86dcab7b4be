#!/usr/bin/env python
from sdk.client import StoreClient
from storefront.config import get_settings

def main():
    c = StoreClient(base_url=get_settings().api_url)

    # -----------------------------
    # Reset everything for demo
    # -----------------------------
    print("Resetting store...")
    c.reset()

    # -----------------------------
    # Create a product (prepended to the catalog)
    # -----------------------------
    print("\nCreating product...")
    created = c.create_product("Top-Up 5,000 Coins", 249000, "Top Up", 4.9, badge="Limited")
    print(created)

    # -----------------------------
    # Browse catalog
    # -----------------------------
    print("\nGift cards, cheapest first...")
    for p in c.view_catalog(category="Gift Card", sort="priceAsc"):
        print(f"  {p['name']:<24} {p['price_display']}")

    print("\nSearching for 'coins'...")
    for p in c.view_catalog(query="coins"):
        print(f"  {p['id']:<12} {p['name']}")

    # -----------------------------
    # Cart
    # -----------------------------
    print("\nFilling the cart...")
    c.add_to_cart(created["product_id"])
    c.add_to_cart("r3")
    c.increment("r3")
    cart = c.view_cart()
    print(f"{cart['item_count']} items, total {cart['total_display']}")

    # a deleted product stays in the cart but stops counting
    print("\nDeleting the new product...")
    c.delete_product(created["product_id"])
    cart = c.view_cart()
    print(f"{cart['item_count']} items, total {cart['total_display']}")

    c.decrement("r3")
    c.remove_from_cart(created["product_id"])
    print("\nCart after decrement/remove:", c.view_cart())

    # -----------------------------
    # Import rejects non-lists
    # -----------------------------
    print("\nImporting an object instead of a list...")
    print(c.import_products({"not": "a list"}))

    # -----------------------------
    # Brand
    # -----------------------------
    print("\nSaving brand with an empty name...")
    print(c.save_brand(site_name="", logo_url="https://example.com/logo.png"))

if __name__ == "__main__":
    main()
