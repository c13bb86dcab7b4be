from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

from .models import Category, Product, real_category

# Request schemas and the helpers that turn them into domain records.

class ProductIn(BaseModel):
    name: str = Field(min_length=1)
    category: Category = Category.TOP_UP
    price: int = Field(default=49000, ge=0)
    rating: float = 4.8
    image: str = ""
    badge: Optional[str] = None

    @field_validator("category")
    @classmethod
    def check_category(cls, value: Category) -> Category:
        return real_category(value)

    @field_validator("badge", mode="before")
    @classmethod
    def blank_badge(cls, value):
        return value or None

class ProductPatch(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[Category] = None
    price: Optional[int] = Field(default=None, ge=0)
    rating: Optional[float] = None
    image: Optional[str] = None
    badge: Optional[str] = None

    @field_validator("category")
    @classmethod
    def check_category(cls, value: Optional[Category]) -> Optional[Category]:
        return real_category(value) if value is not None else None

class CartActionIn(BaseModel):
    product_id: str

class BrandIn(BaseModel):
    # accepts the camelCase shape GET /brand returns as well as snake_case
    model_config = ConfigDict(populate_by_name=True)

    site_name: str = Field(default="", alias="siteName")
    logo_url: str = Field(default="", alias="logoUrl")
    hero_url: str = Field(default="", alias="heroUrl")

def _make_product(product_id: str, p: ProductIn) -> Product:
    return Product(
        id=product_id,
        name=p.name,
        category=p.category,
        price=p.price,
        rating=p.rating,
        image=p.image,
        badge=p.badge,
    )

def _apply_patch(product: Product, patch: ProductPatch) -> Product:
    changes = {
        k: v for k, v in patch.model_dump(exclude_unset=True).items()
        if v is not None or k == "badge"
    }
    if "badge" in changes:
        # an explicit empty badge clears it
        changes["badge"] = changes["badge"] or None
    data = product.model_dump()
    data.update(changes)
    data["id"] = product.id
    return Product.model_validate(data)
