# sdk/client.py
import requests
import httpx
from typing import Any, Dict, List, Optional


class StoreClient:
    def __init__(self, base_url: str = "http://localhost:8085", timeout: int = 10,
                 session: Optional[Any] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _get(self, path: str, **params):
        r = self.session.get(f"{self.base_url}{path}", params=params or None, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def _send(self, method: str, path: str, payload: Optional[Any] = None):
        r = self.session.request(method, f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def reset(self):
        return self._send("POST", "/reset")

    # Catalog
    def view_catalog(self, query: str = "", category: str = "All", sort: str = "relevance") -> List[Dict[str, Any]]:
        return self._get("/products", q=query, category=category, sort=sort)

    def get_product(self, product_id: str):
        return self._get(f"/products/{product_id}")

    # Admin: inventory
    def create_product(self, name: str, price: int, category: str = "Top Up",
                       rating: float = 4.8, image: str = "", badge: Optional[str] = None):
        return self._send("POST", "/admin/products", {
            "name": name, "price": price, "category": category,
            "rating": rating, "image": image, "badge": badge,
        })

    def update_product(self, product_id: str, **changes):
        return self._send("PUT", f"/admin/products/{product_id}", changes)

    def delete_product(self, product_id: str):
        return self._send("DELETE", f"/admin/products/{product_id}")

    def export_products(self) -> List[Dict[str, Any]]:
        return self._get("/admin/products/export")

    def import_products(self, products: Any):
        # invalid payloads come back as 400; let the caller inspect the detail
        r = self.session.post(f"{self.base_url}/admin/products/import", json=products, timeout=self.timeout)
        if r.status_code == 400:
            return r.json()
        r.raise_for_status()
        return r.json()

    # Brand
    def get_brand(self):
        return self._get("/brand")

    def save_brand(self, site_name: str = "", logo_url: str = "", hero_url: str = ""):
        return self._send("PUT", "/admin/brand", {
            "site_name": site_name, "logo_url": logo_url, "hero_url": hero_url,
        })

    def reset_brand(self):
        return self._send("POST", "/admin/brand/reset")

    # Cart
    def view_cart(self):
        return self._get("/cart")

    def add_to_cart(self, product_id: str):
        return self._send("POST", "/cart/add", {"product_id": product_id})

    def increment(self, product_id: str):
        return self._send("POST", "/cart/increment", {"product_id": product_id})

    def decrement(self, product_id: str):
        return self._send("POST", "/cart/decrement", {"product_id": product_id})

    def remove_from_cart(self, product_id: str):
        return self._send("POST", "/cart/remove", {"product_id": product_id})

    # Async catalog (example)
    async def view_catalog_async(self, query: str = "", category: str = "All", sort: str = "relevance",
                                 transport: Optional[httpx.AsyncBaseTransport] = None):
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=transport) as client:
            r = await client.get("/products", params={"q": query, "category": category, "sort": sort})
            r.raise_for_status()
            return r.json()
