import logging
import requests
from typing import Dict, Any, List, Optional

from pydantic import ValidationError

from showroom.models import Product, Inquiry

# Client for the hosted backend (Supabase PostgREST). Tables used:
# products, inquiries and settings (key/value rows).

logger = logging.getLogger("showroom.database")


class DataFetchError(Exception):
    """A call to the hosted store failed or returned something unusable."""


class HostedStore:
    def __init__(self, base_url: str, api_key: str, access_token: Optional[str] = None, timeout: float = 30):
        self.base_url = f"{base_url.rstrip('/')}/rest/v1"
        self.api_key = api_key
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "apikey": api_key,
            "Authorization": f"Bearer {access_token or api_key}",
            "Content-Type": "application/json",
        })

    def _request(self, method: str, table: str, params: Optional[Dict[str, str]] = None,
                 json: Any = None, prefer: Optional[str] = None) -> Any:
        headers = {"Prefer": prefer} if prefer else None
        try:
            r = self.session.request(
                method, f"{self.base_url}/{table}",
                params=params, json=json, headers=headers, timeout=self.timeout,
            )
            r.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise DataFetchError(f"{method} {table} failed: {e}") from e
        if not r.content:
            return None
        try:
            return r.json()
        except ValueError as e:
            raise DataFetchError(f"{method} {table} returned invalid JSON") from e

    # ---------------------------
    # Products
    # ---------------------------
    def fetch_products(self) -> List[Product]:
        rows = self._request("GET", "products", params={"select": "*", "order": "created_at.desc"}) or []
        if not isinstance(rows, list):
            raise DataFetchError(f"products returned {type(rows).__name__}, expected a list")
        products = []
        for row in rows:
            if not isinstance(row, dict):
                logger.warning("Skipping non-object product row: %r", row)
                continue
            try:
                products.append(Product.model_validate(row))
            except ValidationError as e:
                logger.warning("Skipping malformed product row %s: %s", row.get("id"), e)
        return products

    def insert_product(self, row: Dict[str, Any]) -> Optional[Product]:
        rows = self._request("POST", "products", json=row, prefer="return=representation")
        return Product.model_validate(rows[0]) if rows else None

    def update_product(self, product_id: int, row: Dict[str, Any]) -> Optional[Product]:
        rows = self._request(
            "PATCH", "products", params={"id": f"eq.{product_id}"}, json=row, prefer="return=representation",
        )
        return Product.model_validate(rows[0]) if rows else None

    def delete_product(self, product_id: int) -> None:
        self._request("DELETE", "products", params={"id": f"eq.{product_id}"})

    # ---------------------------
    # Settings
    # ---------------------------
    def fetch_setting(self, key: str) -> Optional[str]:
        rows = self._request("GET", "settings", params={"select": "value", "key": f"eq.{key}"}) or []
        if not rows:
            return None
        if not isinstance(rows, list) or not isinstance(rows[0], dict):
            raise DataFetchError(f"settings returned an unexpected body for {key}")
        return rows[0].get("value")

    def upsert_setting(self, key: str, value: str) -> None:
        self._request(
            "POST", "settings", params={"on_conflict": "key"}, json={"key": key, "value": value},
            prefer="resolution=merge-duplicates,return=minimal",
        )

    # ---------------------------
    # Inquiries
    # ---------------------------
    def insert_inquiry(self, row: Dict[str, Any]) -> None:
        self._request("POST", "inquiries", json=row, prefer="return=minimal")

    def fetch_inquiries(self) -> List[Inquiry]:
        rows = self._request("GET", "inquiries", params={"select": "*", "order": "created_at.desc"}) or []
        try:
            return [Inquiry.model_validate(row) for row in rows]
        except ValidationError as e:
            raise DataFetchError(f"inquiries returned malformed rows: {e}") from e
