from typing import Any, Dict, List

from fastapi import HTTPException

from .context import StorefrontContext
from .core import BrandIn, CartActionIn, ProductIn, ProductPatch
from .errors import InvalidImportError
from .models import BrandConfig, Category, SortKey

# This file contains the logic behind every API endpoint. Each function runs
# one mutation or query against the context to completion.

def _product_out(ctx: StorefrontContext, p) -> Dict[str, Any]:
    out = p.model_dump(mode="json", exclude_none=True)
    out["price_display"] = ctx.format_money(p.price)
    return out

def _cart_out(ctx: StorefrontContext) -> Dict[str, Any]:
    summary = ctx.cart_summary()
    items = []
    for it in summary["items"]:
        item = dict(it)
        if it["product"] is not None:
            item["product"] = _product_out(ctx, it["product"])
        items.append(item)
    summary["items"] = items
    return summary

# Catalog endpoints
async def list_products_logic(ctx: StorefrontContext, q: str = "",
                              category: Category = Category.ALL,
                              sort: SortKey = SortKey.RELEVANCE) -> List[Dict[str, Any]]:
    return [_product_out(ctx, p) for p in ctx.catalog(q, category, sort)]

async def get_product_logic(ctx: StorefrontContext, product_id: str):
    p = ctx.inventory.get(product_id)
    if not p:
        raise HTTPException(status_code=404, detail="product not found")
    return _product_out(ctx, p)

# Admin: inventory
async def create_product_logic(ctx: StorefrontContext, payload: ProductIn):
    p = ctx.inventory.create(payload)
    return {"product_id": p.id, "product": _product_out(ctx, p)}

async def update_product_logic(ctx: StorefrontContext, product_id: str, patch: ProductPatch):
    p = ctx.inventory.update(product_id, patch)
    if p is None:
        raise HTTPException(status_code=404, detail="product not found")
    return _product_out(ctx, p)

async def delete_product_logic(ctx: StorefrontContext, product_id: str):
    if not ctx.inventory.delete(product_id):
        raise HTTPException(status_code=404, detail="product not found")
    return {"deleted": product_id}

async def export_products_logic(ctx: StorefrontContext):
    return [p.model_dump(mode="json", exclude_none=True) for p in ctx.inventory.products]

async def import_products_logic(ctx: StorefrontContext, payload: Any):
    try:
        products = ctx.inventory.replace_all(payload)
    except InvalidImportError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"imported": len(products)}

# Brand
async def get_brand_logic(ctx: StorefrontContext):
    return ctx.brand.config.model_dump(by_alias=True)

async def save_brand_logic(ctx: StorefrontContext, payload: BrandIn):
    cfg = ctx.brand.save(BrandConfig(
        site_name=payload.site_name, logo_url=payload.logo_url, hero_url=payload.hero_url,
    ))
    return cfg.model_dump(by_alias=True)

async def reset_brand_logic(ctx: StorefrontContext):
    return ctx.brand.reset().model_dump(by_alias=True)

# Cart endpoints
async def view_cart_logic(ctx: StorefrontContext):
    return _cart_out(ctx)

async def cart_action_logic(ctx: StorefrontContext, action: str, payload: CartActionIn):
    ops = {
        "add": ctx.add_to_cart,
        "increment": ctx.increment,
        "decrement": ctx.decrement,
        "remove": ctx.remove_from_cart,
    }
    op = ops.get(action)
    if op is None:
        raise HTTPException(status_code=404, detail=f"unknown cart action: {action}")
    op(payload.product_id)
    return _cart_out(ctx)

# Utility: reset (for tests/demo)
async def reset_all_logic(ctx: StorefrontContext):
    ctx.reset()
    return {"status": "reset"}
