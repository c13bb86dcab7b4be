# storefront/stores.py
"""Snapshot-backed stores for the inventory and the brand settings.

Both stores keep their state in memory and re-persist a full JSON snapshot
through a ``KeyValueStore`` after every mutation. Persistence is best-effort:
a failed read falls back to the built-in defaults and a failed write is
logged and otherwise ignored, so the in-memory state always wins.
"""
import json
import logging
from typing import Any, FrozenSet, List, Optional, Set

from pydantic import TypeAdapter, ValidationError

from .core import ProductIn, ProductPatch, _apply_patch, _make_product
from .database import BRAND_KEY, INVENTORY_KEY, ISSUED_IDS_KEY, KeyValueStore
from .errors import InvalidImportError
from .ids import IdGenerator, UuidIdGenerator
from .models import BrandConfig, Category, Product

logger = logging.getLogger(__name__)

_IMAGE = "https://images.unsplash.com/photo-1550745165-9bc0b252726f?q=80&w=1200&auto=format&fit=crop"

DEFAULT_PRODUCTS: List[Product] = [
    Product(id="r1", name="Top-Up 800 Coins", category=Category.TOP_UP, price=49000, rating=4.8, image=_IMAGE, badge="Hot"),
    Product(id="r2", name="Top-Up 1,700 Coins", category=Category.TOP_UP, price=99000, rating=4.9, image=_IMAGE, badge="Best seller"),
    Product(id="r3", name="Gift Card 10K", category=Category.GIFT_CARD, price=10000, rating=4.7, image=_IMAGE, badge="New"),
    Product(id="r4", name="Gift Card 25K", category=Category.GIFT_CARD, price=25000, rating=4.6, image=_IMAGE),
    Product(id="r5", name="Game Pass – Builder Kit", category=Category.GAME_PASS, price=35000, rating=4.5, image=_IMAGE),
    Product(id="r6", name="Game Pass – VIP", category=Category.GAME_PASS, price=69900, rating=4.4, image=_IMAGE),
    Product(id="r7", name="Bundle Saver A", category=Category.BUNDLE, price=149000, rating=4.8, image=_IMAGE),
    Product(id="r8", name="Bundle Saver B", category=Category.BUNDLE, price=199000, rating=4.9, image=_IMAGE),
]

DEFAULT_BRAND = BrandConfig()

_product_list = TypeAdapter(List[Product])


def parse_products(payload: Any) -> List[Product]:
    """Validate decoded JSON as a list of products with unique ids."""
    if not isinstance(payload, (list, tuple)):
        raise InvalidImportError(f"expected a list, got {type(payload).__name__}")
    try:
        products = _product_list.validate_python(list(payload))
    except ValidationError as e:
        raise InvalidImportError(f"{e.error_count()} invalid field(s)") from e
    seen = set()
    for p in products:
        if p.id in seen:
            raise InvalidImportError(f"duplicate id {p.id!r}")
        seen.add(p.id)
    return products


def dump_products(products: List[Product], indent: Optional[int] = None) -> str:
    return json.dumps(
        [p.model_dump(mode="json", exclude_none=True) for p in products],
        indent=indent,
        ensure_ascii=False,
    )


def _read(kv: KeyValueStore, key: str) -> Optional[str]:
    try:
        return kv.get(key)
    except Exception:
        logger.warning("reading %r from storage failed", key, exc_info=True)
        return None


def _write(kv: KeyValueStore, key: str, value: str) -> bool:
    try:
        ok = kv.set(key, value)
    except Exception:
        logger.warning("writing %r to storage failed", key, exc_info=True)
        return False
    if not ok:
        logger.warning("storage rejected snapshot %r", key)
    return bool(ok)


class InventoryStore:
    def __init__(self, kv: KeyValueStore, id_generator: Optional[IdGenerator] = None,
                 key: str = INVENTORY_KEY, issued_key: str = ISSUED_IDS_KEY):
        self.kv = kv
        self.key = key
        self.issued_key = issued_key
        self.new_id = id_generator or UuidIdGenerator()
        self._products: List[Product] = self.load_snapshot()
        # every id this store has ever held, across sessions, so generated ids
        # are never reused
        self._issued = self._load_issued() | {p.id for p in self._products}

    @property
    def products(self) -> List[Product]:
        return list(self._products)

    @property
    def issued_ids(self) -> FrozenSet[str]:
        return frozenset(self._issued)

    def get(self, product_id: str) -> Optional[Product]:
        return next((p for p in self._products if p.id == product_id), None)

    # ---------------------------
    # Snapshot
    # ---------------------------
    def load_snapshot(self) -> List[Product]:
        raw = _read(self.kv, self.key)
        if raw is None:
            return list(DEFAULT_PRODUCTS)
        try:
            return parse_products(json.loads(raw))
        except (ValueError, InvalidImportError) as e:
            logger.warning("inventory snapshot unusable, using defaults: %s", e)
            return list(DEFAULT_PRODUCTS)

    def _load_issued(self) -> Set[str]:
        raw = _read(self.kv, self.issued_key)
        if raw is None:
            return set()
        try:
            ids = json.loads(raw)
        except ValueError as e:
            logger.warning("issued id record unusable, ignoring: %s", e)
            return set()
        if not isinstance(ids, list) or not all(isinstance(i, str) for i in ids):
            logger.warning("issued id record is not a list of ids, ignoring")
            return set()
        return set(ids)

    def save_snapshot(self, products: List[Product]) -> bool:
        return _write(self.kv, self.key, dump_products(products))

    def _commit(self, products: List[Product]) -> None:
        self._products = products
        new_ids = {p.id for p in products} - self._issued
        self._issued.update(new_ids)
        self.save_snapshot(products)
        if new_ids:
            _write(self.kv, self.issued_key, json.dumps(sorted(self._issued)))

    # ---------------------------
    # Mutations
    # ---------------------------
    def _fresh_id(self) -> str:
        while True:
            candidate = self.new_id()
            if candidate not in self._issued:
                return candidate
            logger.debug("generated id %s already used, retrying", candidate)

    def create(self, payload: ProductIn) -> Product:
        product = _make_product(self._fresh_id(), payload)
        self._commit([product, *self._products])
        logger.info("created product %s (%s)", product.id, product.name)
        return product

    def update(self, product_id: str, patch: ProductPatch) -> Optional[Product]:
        current = self.get(product_id)
        if current is None:
            return None
        updated = _apply_patch(current, patch)
        self._commit([updated if p.id == product_id else p for p in self._products])
        logger.info("updated product %s", product_id)
        return updated

    def delete(self, product_id: str) -> bool:
        remaining = [p for p in self._products if p.id != product_id]
        if len(remaining) == len(self._products):
            return False
        self._commit(remaining)
        logger.info("deleted product %s", product_id)
        return True

    def replace_all(self, payload: Any) -> List[Product]:
        products = parse_products(payload)
        self._commit(products)
        logger.info("inventory replaced with %d products", len(products))
        return self.products

    def reset(self) -> List[Product]:
        self._commit(list(DEFAULT_PRODUCTS))
        return self.products

    # ---------------------------
    # Bulk import / export
    # ---------------------------
    def export_json(self) -> str:
        return dump_products(self._products, indent=2)

    def import_json(self, text: str) -> List[Product]:
        try:
            payload = json.loads(text)
        except ValueError as e:
            raise InvalidImportError("not valid JSON") from e
        return self.replace_all(payload)


class BrandStore:
    def __init__(self, kv: KeyValueStore, key: str = BRAND_KEY):
        self.kv = kv
        self.key = key
        self.config: BrandConfig = self.load_snapshot()

    def load_snapshot(self) -> BrandConfig:
        raw = _read(self.kv, self.key)
        if raw is None:
            return DEFAULT_BRAND
        try:
            obj = json.loads(raw)
            if not isinstance(obj, dict):
                raise ValueError(f"expected an object, got {type(obj).__name__}")
            return BrandConfig.model_validate(obj)
        except ValueError as e:
            logger.warning("brand snapshot unusable, using defaults: %s", e)
            return DEFAULT_BRAND

    def save(self, config: BrandConfig) -> BrandConfig:
        # re-validate so an empty name always becomes the default one
        self.config = BrandConfig.model_validate(config.model_dump())
        _write(self.kv, self.key, self.config.model_dump_json(by_alias=True))
        return self.config

    def reset(self) -> BrandConfig:
        return self.save(DEFAULT_BRAND)
