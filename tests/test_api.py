# tests/test_api.py
from fastapi.testclient import TestClient

from storefront.context import StorefrontContext
from storefront.database import MemoryStore
from storefront.ids import CounterIdGenerator
from storefront.main import create_app

ctx = StorefrontContext(MemoryStore(), CounterIdGenerator())
client = TestClient(create_app(ctx))

def reset():
    client.post("/reset")

def test_catalog_listing_and_filters():
    reset()
    r = client.get("/products")
    assert r.status_code == 200
    assert [p["id"] for p in r.json()] == ["r1", "r2", "r3", "r4", "r5", "r6", "r7", "r8"]
    assert r.json()[0]["price_display"] == "49.000 ₫"

    r = client.get("/products", params={"category": "Gift Card", "sort": "priceDesc"})
    assert [p["id"] for p in r.json()] == ["r4", "r3"]

    r = client.get("/products", params={"q": "  saver ", "sort": "rating"})
    assert [p["id"] for p in r.json()] == ["r8", "r7"]

    assert client.get("/products", params={"sort": "name"}).status_code == 422

def test_get_product():
    reset()
    assert client.get("/products/r5").json()["name"] == "Game Pass – Builder Kit"
    assert client.get("/products/nope").status_code == 404

def test_admin_create_update_delete():
    reset()
    r = client.post("/admin/products", json={"name": "Top-Up 5K", "price": 250000, "category": "Top Up"})
    assert r.status_code == 201
    pid = r.json()["product_id"]
    assert client.get("/products").json()[0]["id"] == pid

    r = client.put(f"/admin/products/{pid}", json={"price": 240000, "badge": "Sale"})
    assert r.status_code == 200
    assert r.json()["id"] == pid
    assert r.json()["price"] == 240000
    assert r.json()["badge"] == "Sale"
    assert client.put("/admin/products/nope", json={"price": 1}).status_code == 404

    assert client.delete(f"/admin/products/{pid}").status_code == 200
    assert client.delete(f"/admin/products/{pid}").status_code == 404

def test_admin_create_rejects_all_category():
    reset()
    r = client.post("/admin/products", json={"name": "Bad", "category": "All"})
    assert r.status_code == 422

def test_cart_flow_and_stale_lines():
    reset()
    client.post("/admin/products/import", json=[
        {"id": "a", "name": "A", "category": "Top Up", "price": 1000, "rating": 4, "image": ""},
        {"id": "b", "name": "B", "category": "Bundle", "price": 300, "rating": 5, "image": ""},
    ])
    r = client.post("/cart/add", json={"product_id": "a"})
    assert r.json()["total"] == 1000
    r = client.post("/cart/increment", json={"product_id": "a"})
    assert r.json()["items"][0]["qty"] == 2
    assert r.json()["total"] == 2000
    client.post("/cart/add", json={"product_id": "b"})

    client.delete("/admin/products/b")
    cart = client.get("/cart").json()
    assert cart["item_count"] == 3
    assert cart["total"] == 2000
    assert cart["total_display"] == "2.000 ₫"
    assert cart["items"][1]["available"] is False

    client.post("/cart/remove", json={"product_id": "b"})
    client.post("/cart/decrement", json={"product_id": "a"})
    r = client.post("/cart/decrement", json={"product_id": "a"})
    assert r.json()["items"] == []
    assert r.json()["total"] == 0

    # absent lines are no-ops, unknown actions are not
    assert client.post("/cart/increment", json={"product_id": "zzz"}).json()["item_count"] == 0
    assert client.post("/cart/explode", json={"product_id": "a"}).status_code == 404

def test_import_rejects_object_and_keeps_inventory():
    reset()
    before = client.get("/admin/products/export").json()
    r = client.post("/admin/products/import", json={"id": "x"})
    assert r.status_code == 400
    assert r.json()["detail"].startswith("invalid product payload")
    assert client.get("/admin/products/export").json() == before

def test_export_import_round_trip():
    reset()
    exported = client.get("/admin/products/export").json()
    client.post("/admin/products/import", json=exported[:2])
    assert [p["id"] for p in client.get("/products").json()] == ["r1", "r2"]
    r = client.post("/admin/products/import", json=exported)
    assert r.json() == {"imported": 8}

def test_brand_settings():
    reset()
    assert client.get("/brand").json() == {"siteName": "Shop Code", "logoUrl": "", "heroUrl": ""}
    r = client.put("/admin/brand", json={"site_name": "", "hero_url": "https://x/hero.png"})
    assert r.json() == {"siteName": "Shop Code", "logoUrl": "", "heroUrl": "https://x/hero.png"}
    client.put("/admin/brand", json={"site_name": "Robux Corner"})
    assert client.get("/brand").json()["siteName"] == "Robux Corner"
    assert client.post("/admin/brand/reset").json()["siteName"] == "Shop Code"

def test_reset_empties_cart():
    reset()
    client.post("/cart/add", json={"product_id": "r1"})
    reset()
    assert client.get("/cart").json()["item_count"] == 0

def test_brand_get_put_round_trip_keeps_values():
    reset()
    brand = client.get("/brand").json()
    brand["siteName"] = "Robux Corner"
    brand["logoUrl"] = "https://x/logo.png"
    r = client.put("/admin/brand", json=brand)
    assert r.json() == {"siteName": "Robux Corner", "logoUrl": "https://x/logo.png", "heroUrl": ""}
    assert client.get("/brand").json() == r.json()

def test_importing_main_builds_no_app():
    import storefront.main as main_module
    assert not hasattr(main_module, "app")
    assert callable(main_module.serve)

def test_create_app_from_settings_uses_its_own_context():
    reset()
    from storefront.config import Settings
    other = TestClient(create_app(settings=Settings(storage="memory")))
    other.post("/cart/add", json={"product_id": "r1"})
    assert other.get("/cart").json()["item_count"] == 1
    assert client.get("/cart").json()["item_count"] == 0
