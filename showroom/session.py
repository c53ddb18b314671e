"""Per-session catalog state: preferences, exchange rate and loaded products.

A ``SessionState`` stands in for one open page of the catalog. It is the only
writer of its own preferences and rate; rendering goes through the resolver
and price formatter on every call so toggles take effect immediately.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from showroom.core import PRIMARY_LANGUAGE, SECONDARY_LANGUAGE
from showroom.database import DataFetchError
from showroom.localization import (
    resolve, resolve_category, category_key, format_price, labels_for, t as lookup_label,
)
from showroom.models import Product, ProductCard
from showroom.rates import ExchangeRateState

logger = logging.getLogger("showroom.session")

DEFAULTS: Dict[str, Any] = {
    "lang": PRIMARY_LANGUAGE,
    "theme": "dark",
    "currency": "EGP",
}
ALLOWED: Dict[str, tuple] = {
    "lang": (PRIMARY_LANGUAGE, SECONDARY_LANGUAGE),
    "theme": ("light", "dark"),
    "currency": ("USD", "EGP"),
}


class PreferenceStore:
    """Key/value preferences kept in a JSON file.

    With no ``path`` the values live in memory only (one HTTP request).
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else None
        self._data: Dict[str, Any] = self._read()

    def _read(self) -> Dict[str, Any]:
        if self.path is None or not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable preferences file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        if self.path is None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self._data, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error("Failed to persist preference %s to %s: %s", key, self.path, e)


class SessionState:
    def __init__(self, store=None, prefs: Optional[PreferenceStore] = None,
                 rate: Optional[ExchangeRateState] = None,
                 translations: Optional[Dict[str, Dict[str, str]]] = None):
        self.store = store
        self.prefs = prefs if prefs is not None else PreferenceStore()
        self.rate = rate if rate is not None else ExchangeRateState()
        self.translations = translations
        self.language: str = self._restore("lang")
        self.theme: str = self._restore("theme")
        self.currency: str = self._restore("currency")
        self.favorites: List[int] = self._restore_favorites()
        self.products: List[Product] = []

    def _restore(self, key: str) -> str:
        value = self.prefs.get(key)
        return value if value in ALLOWED[key] else DEFAULTS[key]

    def _restore_favorites(self) -> List[int]:
        raw = self.prefs.get("favorites", [])
        if not isinstance(raw, list):
            return []
        return [i for i in raw if isinstance(i, int) and not isinstance(i, bool)]

    # ---------------------------
    # Loading
    # ---------------------------
    def load(self) -> None:
        self.refresh_rate()
        self.load_products()

    def refresh_rate(self) -> float:
        if self.store is None:
            logger.warning("No hosted store configured, using exchange rate %s", self.rate.rate)
            return self.rate.rate
        return self.rate.refresh(self.store)

    def load_products(self) -> List[Product]:
        if self.store is None:
            logger.warning("No hosted store configured, product list is empty")
            self.products = []
            return self.products
        try:
            self.products = self.store.fetch_products()
        except DataFetchError as e:
            logger.error("Failed to load products: %s", e)
            self.products = []
        return self.products

    # ---------------------------
    # Preferences
    # ---------------------------
    def _set(self, key: str, value: str) -> None:
        if value not in ALLOWED[key]:
            raise ValueError(f"{key} must be one of {', '.join(ALLOWED[key])}")
        self.prefs.set(key, value)

    def set_language(self, language: str) -> None:
        self._set("lang", language)
        self.language = language

    def toggle_language(self) -> str:
        self.set_language(SECONDARY_LANGUAGE if self.language == PRIMARY_LANGUAGE else PRIMARY_LANGUAGE)
        return self.language

    def set_theme(self, theme: str) -> None:
        self._set("theme", theme)
        self.theme = theme

    def toggle_theme(self) -> str:
        self.set_theme("light" if self.theme == "dark" else "dark")
        return self.theme

    def set_currency(self, currency: str) -> None:
        self._set("currency", currency)
        self.currency = currency

    def toggle_currency(self) -> str:
        self.set_currency("EGP" if self.currency == "USD" else "USD")
        return self.currency

    @property
    def direction(self) -> str:
        return "rtl" if self.language == SECONDARY_LANGUAGE else "ltr"

    @property
    def labels(self) -> Dict[str, str]:
        return labels_for(self.language, self.translations)

    def t(self, key: str) -> str:
        return lookup_label(key, self.language, self.translations)

    def currency_label(self) -> str:
        return self.t("price_usd" if self.currency == "USD" else "price_egp")

    # ---------------------------
    # Favorites
    # ---------------------------
    def toggle_favorite(self, product_id: int) -> bool:
        """Add or remove ``product_id``; returns whether it is now a favorite."""
        if product_id in self.favorites:
            self.favorites.remove(product_id)
            added = False
        else:
            self.favorites.append(product_id)
            added = True
        self.prefs.set("favorites", list(self.favorites))
        return added

    def is_favorite(self, product_id: int) -> bool:
        return product_id in self.favorites

    def favorite_products(self) -> List[Product]:
        return [p for p in self.products if p.id in self.favorites]

    # ---------------------------
    # Catalog views
    # ---------------------------
    def featured(self, limit: int = 3) -> List[Product]:
        return [p for p in self.products if p.featured][:limit]

    def filter_inventory(self, term: str = "", category: str = "") -> List[Product]:
        term = (term or "").lower()
        return [
            p for p in self.products
            if term in p.name.lower() and (not category or p.category == category)
        ]

    def categories(self) -> List[str]:
        seen = []
        for p in self.products:
            if p.category and p.category not in seen:
                seen.append(p.category)
        return seen

    def find_product(self, product_id: int) -> Optional[Product]:
        if not self.products:
            logger.warning("Products list empty, re-fetching before looking up %s", product_id)
            self.load_products()
        product = next((p for p in self.products if p.id == product_id), None)
        if product is None:
            logger.error("Product ID %s not found", product_id)
        return product

    def format_price(self, amount_usd: float) -> str:
        return format_price(amount_usd, self.currency, self.rate.rate, self.language, self.labels)

    def render(self, product: Product) -> ProductCard:
        content = resolve(product, self.language)
        return ProductCard(
            id=product.id,
            name=content.name,
            description=content.description,
            details=content.details,
            category=resolve_category(product, self.language),
            category_key=category_key(product.category),
            price_usd=product.price_usd,
            price=self.format_price(product.price_usd),
            featured=product.featured,
            favorite=self.is_favorite(product.id),
            image_url=product.image_url,
            gallery=list(product.gallery),
        )

    def render_all(self, products: List[Product]) -> List[ProductCard]:
        return [self.render(p) for p in products]
