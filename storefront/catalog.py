# storefront/catalog.py
from typing import Callable, Dict, Iterable, List, Union

from .models import Category, Product, SortKey

# key function and direction per sort; relevance keeps inventory order
_SORTS: Dict[SortKey, tuple] = {
    SortKey.PRICE_ASC: (lambda p: p.price, False),
    SortKey.PRICE_DESC: (lambda p: p.price, True),
    SortKey.RATING: (lambda p: p.rating, True),
}


def _matches(query: str, category: Category) -> Callable[[Product], bool]:
    term = query.strip().lower()

    def keep(p: Product) -> bool:
        if category != Category.ALL and p.category != category:
            return False
        return term in p.name.lower()

    return keep


def view(
    inventory: Iterable[Product],
    query: str = "",
    category: Union[Category, str] = Category.ALL,
    sort_key: Union[SortKey, str] = SortKey.RELEVANCE,
) -> List[Product]:
    """Filter by category and name substring, then sort.

    ``sorted`` is stable (also with ``reverse=True``), so products with equal
    keys keep their inventory order.
    """
    category = Category(category)
    sort_key = SortKey(sort_key)
    keep = _matches(query or "", category)
    out = [p for p in inventory if keep(p)]
    if sort_key in _SORTS:
        key, reverse = _SORTS[sort_key]
        out = sorted(out, key=key, reverse=reverse)
    return out
