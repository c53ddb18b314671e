"""Bilingual content resolution and price formatting.

English is the primary language and is assumed to be populated; Arabic
overrides are optional and fall back to English field by field.
"""
import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

from showroom.core import PRIMARY_LANGUAGE, SECONDARY_LANGUAGE
from showroom.models import Product, ProductDetails, DisplayContent, DisplayDetails

logger = logging.getLogger("showroom.localization")

TRANSLATIONS_PATH = Path(__file__).resolve().parent / "data" / "translations.json"

USD_FALLBACK_LABEL = "USD"
EGP_FALLBACK_LABEL = "L.E"


def load_translations(path: Path = TRANSLATIONS_PATH) -> Dict[str, Dict[str, str]]:
    """Read the UI label table; an unreadable table yields ``{}``."""
    try:
        with path.open(encoding="utf-8") as fh:
            return json.load(fh)
    except (OSError, ValueError) as e:
        logger.error("Failed to load translations from %s: %s", path, e)
        return {}


@lru_cache(maxsize=1)
def _bundled_translations() -> Dict[str, Dict[str, str]]:
    return load_translations()


def labels_for(language: str, translations: Optional[Dict[str, Dict[str, str]]] = None) -> Dict[str, str]:
    table = _bundled_translations() if translations is None else translations
    return table.get(language, {})


def t(key: str, language: str, translations: Optional[Dict[str, Dict[str, str]]] = None) -> str:
    return labels_for(language, translations).get(key) or key


def _pick(secondary: Optional[str], primary: Optional[str]) -> str:
    if secondary:
        return secondary
    return primary or ""


def resolve(product: Product, language: str) -> DisplayContent:
    """Display content for ``product`` in ``language``.

    Each field (and each detail sub-field) falls back to English on its own,
    so a product with only a translated name still shows its English
    description.
    """
    primary = product.details
    if language != SECONDARY_LANGUAGE:
        return DisplayContent(
            name=product.name,
            description=product.description or "",
            details=DisplayDetails(
                mileage=primary.mileage or "",
                transmission=primary.transmission or "",
                fuel=primary.fuel or "",
            ),
        )

    secondary = product.details_ar or ProductDetails()
    return DisplayContent(
        name=_pick(product.name_ar, product.name),
        description=_pick(product.description_ar, product.description),
        details=DisplayDetails(
            mileage=_pick(secondary.mileage, primary.mileage),
            transmission=_pick(secondary.transmission, primary.transmission),
            fuel=_pick(secondary.fuel, primary.fuel),
        ),
    )


def resolve_category(product: Product, language: str) -> Optional[str]:
    if language == SECONDARY_LANGUAGE and product.category_ar:
        return product.category_ar
    return product.category


def category_key(category: Optional[str]) -> Optional[str]:
    # "Sports Car" -> "sports_car"; only the first space is replaced
    if not category:
        return None
    return category.lower().replace(" ", "_", 1)


def group_thousands(value: float) -> str:
    # No rounding: non-integral results keep their float digits as-is
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value:,}"


def format_price(amount_usd: float, currency: str, rate: float, language: str,
                 labels: Optional[Dict[str, str]] = None) -> str:
    """Format a USD amount for display.

    >>> format_price(1000, "USD", 50, "en", {"price_usd": "USD"})
    '$1,000'
    >>> format_price(1000, "EGP", 50, "en", {"price_egp": "L.E"})
    '50,000 L.E'
    """
    if labels is None:
        labels = labels_for(language)

    if currency == "USD":
        symbol = labels.get("price_usd") or USD_FALLBACK_LABEL
        if language == PRIMARY_LANGUAGE and symbol == USD_FALLBACK_LABEL:
            return f"${group_thousands(amount_usd)}"
        return f"{group_thousands(amount_usd)} {symbol}"

    symbol = labels.get("price_egp") or EGP_FALLBACK_LABEL
    return f"{group_thousands(amount_usd * rate)} {symbol}"
