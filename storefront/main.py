# storefront/main.py
from typing import Any, Optional

from fastapi import Body, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .context import StorefrontContext
from .core import BrandIn, CartActionIn, ProductIn, ProductPatch
from .log import configure_logging
from .models import Category, SortKey
from . import logic


def get_ctx(request: Request) -> StorefrontContext:
    return request.app.state.storefront


def create_app(context: Optional[StorefrontContext] = None,
               settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="storefront (catalog + cart)")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.storefront = context or StorefrontContext.from_settings(settings)

    # ---------------------------
    # Catalog endpoints
    # ---------------------------
    @app.get("/products")
    async def list_products(q: str = "", category: Category = Category.ALL,
                            sort: SortKey = SortKey.RELEVANCE,
                            ctx: StorefrontContext = Depends(get_ctx)):
        return await logic.list_products_logic(ctx, q, category, sort)

    @app.get("/products/{product_id}")
    async def get_product(product_id: str, ctx: StorefrontContext = Depends(get_ctx)):
        return await logic.get_product_logic(ctx, product_id)

    # ---------------------------
    # Admin: inventory
    # ---------------------------
    @app.post("/admin/products", status_code=201)
    async def create_product(payload: ProductIn, ctx: StorefrontContext = Depends(get_ctx)):
        return await logic.create_product_logic(ctx, payload)

    @app.put("/admin/products/{product_id}")
    async def update_product(product_id: str, patch: ProductPatch,
                             ctx: StorefrontContext = Depends(get_ctx)):
        return await logic.update_product_logic(ctx, product_id, patch)

    @app.delete("/admin/products/{product_id}")
    async def delete_product(product_id: str, ctx: StorefrontContext = Depends(get_ctx)):
        return await logic.delete_product_logic(ctx, product_id)

    @app.get("/admin/products/export")
    async def export_products(ctx: StorefrontContext = Depends(get_ctx)):
        return await logic.export_products_logic(ctx)

    @app.post("/admin/products/import")
    async def import_products(payload: Any = Body(...), ctx: StorefrontContext = Depends(get_ctx)):
        return await logic.import_products_logic(ctx, payload)

    # ---------------------------
    # Brand settings
    # ---------------------------
    @app.get("/brand")
    async def get_brand(ctx: StorefrontContext = Depends(get_ctx)):
        return await logic.get_brand_logic(ctx)

    @app.put("/admin/brand")
    async def save_brand(payload: BrandIn, ctx: StorefrontContext = Depends(get_ctx)):
        return await logic.save_brand_logic(ctx, payload)

    @app.post("/admin/brand/reset")
    async def reset_brand(ctx: StorefrontContext = Depends(get_ctx)):
        return await logic.reset_brand_logic(ctx)

    # ---------------------------
    # Cart endpoints
    # ---------------------------
    @app.get("/cart")
    async def view_cart(ctx: StorefrontContext = Depends(get_ctx)):
        return await logic.view_cart_logic(ctx)

    @app.post("/cart/{action}")
    async def cart_action(action: str, payload: CartActionIn,
                          ctx: StorefrontContext = Depends(get_ctx)):
        return await logic.cart_action_logic(ctx, action, payload)

    # ---------------------------
    # Utility: reset (for tests/demo)
    # ---------------------------
    @app.post("/reset")
    async def reset_all(ctx: StorefrontContext = Depends(get_ctx)):
        return await logic.reset_all_logic(ctx)

    return app


def serve() -> None:
    import uvicorn

    s = get_settings()
    uvicorn.run("storefront.main:create_app", factory=True,
                host=s.host, port=s.port, log_level=s.log_level.lower())


if __name__ == "__main__":
    serve()
