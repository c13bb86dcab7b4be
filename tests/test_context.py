# tests/test_context.py
from storefront.config import Settings
from storefront.context import StorefrontContext
from storefront.database import JsonFileStore, MemoryStore
from storefront.ids import CounterIdGenerator, UuidIdGenerator
from storefront.core import ProductIn
from storefront.money import format_vnd


def test_contexts_are_independent():
    one = StorefrontContext(MemoryStore())
    two = StorefrontContext(MemoryStore())
    one.add_to_cart("r1")
    one.inventory.delete("r2")
    assert two.cart == []
    assert two.inventory.get("r2") is not None


def test_cart_summary_uses_formatter():
    ctx = StorefrontContext(MemoryStore(), format_money=lambda x: f"${x / 100:.2f}")
    ctx.add_to_cart("r3")
    ctx.increment("r3")
    summary = ctx.cart_summary()
    assert summary["item_count"] == 2
    assert summary["total"] == 20000
    assert summary["total_display"] == "$200.00"


def test_catalog_sees_new_products_first():
    ctx = StorefrontContext(MemoryStore(), CounterIdGenerator())
    p = ctx.inventory.create(ProductIn(name="Top-Up Mini", price=1000))
    assert ctx.catalog("top-up")[0] == p
    assert ctx.catalog("top-up", sort_key="priceAsc")[0] == p


def test_cart_is_not_persisted():
    kv = MemoryStore()
    ctx = StorefrontContext(kv)
    ctx.add_to_cart("r1")
    assert StorefrontContext(kv).cart == []


def test_from_settings(tmp_path):
    s = Settings(storage="file", data_dir=tmp_path, id_strategy="counter")
    ctx = StorefrontContext.from_settings(s)
    assert isinstance(ctx.kv, JsonFileStore)
    ctx.inventory.replace_all([{"id": "p_41", "name": "X", "category": "Bundle",
                                "price": 1, "rating": 1, "image": ""}])
    again = StorefrontContext.from_settings(s)
    assert again.inventory.create(ProductIn(name="Y")).id == "p_42"

    mem = StorefrontContext.from_settings(Settings(storage="memory"))
    assert isinstance(mem.kv, MemoryStore)
    assert isinstance(mem.inventory.new_id, UuidIdGenerator)


def test_counter_ids_not_reused_after_restart(tmp_path):
    s = Settings(storage="file", data_dir=tmp_path, id_strategy="counter")
    first = StorefrontContext.from_settings(s)
    assert first.inventory.create(ProductIn(name="A")).id == "p_1"
    assert first.inventory.create(ProductIn(name="B")).id == "p_2"
    first.inventory.delete("p_2")

    second = StorefrontContext.from_settings(s)
    assert second.inventory.create(ProductIn(name="C")).id == "p_3"


def test_format_vnd():
    assert format_vnd(0) == "0 ₫"
    assert format_vnd(49000) == "49.000 ₫"
    assert format_vnd(1234567) == "1.234.567 ₫"
    assert format_vnd(-1500) == "-1.500 ₫"
