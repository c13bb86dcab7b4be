# tests/test_catalog.py
import pytest

from storefront.catalog import view
from storefront.models import Category, Product, SortKey


def make(pid, name, category, price, rating=4.0):
    return Product(id=pid, name=name, category=category, price=price, rating=rating)


ALPHA = make("1", "Alpha", Category.TOP_UP, 200)
BETA = make("2", "Beta", Category.GIFT_CARD, 100)


def test_query_all_categories_price_ascending():
    assert view([ALPHA, BETA], "a", Category.ALL, SortKey.PRICE_ASC) == [BETA, ALPHA]


def test_relevance_keeps_inventory_order():
    assert view([ALPHA, BETA]) == [ALPHA, BETA]
    assert view([BETA, ALPHA], sort_key="relevance") == [BETA, ALPHA]


def test_category_filter():
    assert view([ALPHA, BETA], category="Gift Card") == [BETA]
    assert view([ALPHA, BETA], category=Category.BUNDLE) == []


def test_query_is_trimmed_and_case_insensitive():
    assert view([ALPHA, BETA], "  ALP  ") == [ALPHA]
    assert view([ALPHA, BETA], "   ") == [ALPHA, BETA]
    assert view([ALPHA, BETA], "zzz") == []


@pytest.mark.parametrize("sort_key", ["priceAsc", "priceDesc", "rating"])
def test_sorts_are_stable(sort_key):
    items = [make(str(i), f"Item {i}", Category.BUNDLE, 100, 4.5) for i in range(6)]
    assert view(items, sort_key=sort_key) == items


def test_price_descending_and_rating():
    low = make("a", "Low", Category.BUNDLE, 10, rating=4.9)
    mid = make("b", "Mid", Category.BUNDLE, 20, rating=3.0)
    high = make("c", "High", Category.BUNDLE, 30, rating=4.0)
    assert view([low, mid, high], sort_key=SortKey.PRICE_DESC) == [high, mid, low]
    assert view([low, mid, high], sort_key=SortKey.RATING) == [low, high, mid]


def test_view_does_not_mutate_inventory():
    inventory = [ALPHA, BETA]
    view(inventory, sort_key=SortKey.PRICE_ASC)
    assert inventory == [ALPHA, BETA]


def test_unknown_sort_key_rejected():
    with pytest.raises(ValueError):
        view([ALPHA], sort_key="name")
