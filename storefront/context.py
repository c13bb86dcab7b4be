# storefront/context.py
"""The one object that owns a storefront's state.

A context bundles the inventory store, the brand store, the session cart and
the collaborators they need. Nothing here is process-wide: two contexts over
two key-value stores are two independent storefronts.
"""
import logging
from typing import Any, Dict, List, Optional, Union

from . import cart as cart_ops
from .catalog import view
from .config import Settings
from .database import JsonFileStore, KeyValueStore, MemoryStore
from .ids import CounterIdGenerator, IdGenerator
from .models import CartLine, Category, Product, SortKey
from .money import MoneyFormatter, format_vnd
from .stores import BrandStore, InventoryStore

logger = logging.getLogger(__name__)


class StorefrontContext:
    def __init__(
        self,
        kv: Optional[KeyValueStore] = None,
        id_generator: Optional[IdGenerator] = None,
        format_money: MoneyFormatter = format_vnd,
    ):
        self.kv = kv if kv is not None else MemoryStore()
        self.inventory = InventoryStore(self.kv, id_generator)
        self.brand = BrandStore(self.kv)
        self.format_money = format_money
        self.cart: List[CartLine] = []

    @classmethod
    def from_settings(cls, settings: Settings) -> "StorefrontContext":
        kv = JsonFileStore(settings.data_dir) if settings.storage == "file" else MemoryStore()
        ctx = cls(kv)
        if settings.id_strategy == "counter":
            ctx.inventory.new_id = CounterIdGenerator.after(ctx.inventory.issued_ids)
        logger.info("storefront ready: %s storage, %d products",
                    settings.storage, len(ctx.inventory.products))
        return ctx

    # ---------------------------
    # Cart
    # ---------------------------
    def add_to_cart(self, product_id: str) -> List[CartLine]:
        self.cart = cart_ops.add(self.cart, product_id)
        return self.cart

    def increment(self, product_id: str) -> List[CartLine]:
        self.cart = cart_ops.increment(self.cart, product_id)
        return self.cart

    def decrement(self, product_id: str) -> List[CartLine]:
        self.cart = cart_ops.decrement(self.cart, product_id)
        return self.cart

    def remove_from_cart(self, product_id: str) -> List[CartLine]:
        self.cart = cart_ops.remove(self.cart, product_id)
        return self.cart

    def clear_cart(self) -> None:
        self.cart = []

    # ---------------------------
    # Derived views
    # ---------------------------
    def item_count(self) -> int:
        return cart_ops.cart_item_count(self.cart)

    def total(self) -> int:
        return cart_ops.cart_total(self.cart, self.inventory.products)

    def cart_summary(self) -> Dict[str, Any]:
        total = self.total()
        return {
            "items": cart_ops.cart_lines(self.cart, self.inventory.products),
            "item_count": self.item_count(),
            "total": total,
            "total_display": self.format_money(total),
        }

    def catalog(
        self,
        query: str = "",
        category: Union[Category, str] = Category.ALL,
        sort_key: Union[SortKey, str] = SortKey.RELEVANCE,
    ) -> List[Product]:
        return view(self.inventory.products, query, category, sort_key)

    def reset(self) -> None:
        self.cart = []
        self.inventory.reset()
        self.brand.reset()
