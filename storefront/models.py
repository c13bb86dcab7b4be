# storefront/models.py
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_SITE_NAME = "Shop Code"


class Category(str, Enum):
    ALL = "All"
    TOP_UP = "Top Up"
    GIFT_CARD = "Gift Card"
    GAME_PASS = "Game Pass"
    BUNDLE = "Bundle"


class SortKey(str, Enum):
    RELEVANCE = "relevance"
    PRICE_ASC = "priceAsc"
    PRICE_DESC = "priceDesc"
    RATING = "rating"


def real_category(value: Category) -> Category:
    if value == Category.ALL:
        raise ValueError("'All' is a filter, not a product category")
    return value


class Product(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str
    category: Category
    price: int = Field(ge=0)
    rating: float
    image: str = ""
    badge: Optional[str] = None

    @field_validator("category")
    @classmethod
    def check_category(cls, value: Category) -> Category:
        return real_category(value)


class CartLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    qty: int = Field(gt=0)


class BrandConfig(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    site_name: str = Field(default=DEFAULT_SITE_NAME, alias="siteName")
    logo_url: str = Field(default="", alias="logoUrl")
    hero_url: str = Field(default="", alias="heroUrl")

    @field_validator("site_name", mode="before")
    @classmethod
    def default_name(cls, value):
        return value or DEFAULT_SITE_NAME

    @field_validator("logo_url", "hero_url", mode="before")
    @classmethod
    def blank_url(cls, value):
        return value or ""
