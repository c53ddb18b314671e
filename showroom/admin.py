"""Admin operations: vehicle CRUD with automatic Arabic copy, inquiries and
the exchange-rate setting."""
import logging
import math
from typing import Dict, Any, List, Optional

import httpx
from fastapi import HTTPException
from starlette.concurrency import run_in_threadpool

from showroom.config import Config
from showroom.core import ProductIn, TranslateTextIn, EXCHANGE_RATE_KEY, _make_product_row
from showroom.database import DataFetchError
from showroom.models import Inquiry
from showroom.rates import FALLBACK_RATE, parse_rate
from showroom.translation import ProxyError, translate_text_logic

logger = logging.getLogger("showroom.admin")


def _source_texts(p: ProductIn) -> List[str]:
    # Order matters: results are mapped back by position
    return [
        p.name or "",
        p.description or "",
        p.category or "",
        p.details.mileage or "",
        p.details.transmission or "",
        p.details.fuel or "",
    ]


async def auto_translate(config: Config, client: httpx.AsyncClient, p: ProductIn) -> Dict[str, Any]:
    """Arabic overrides for ``p``, or ``{}`` if translation is unavailable."""
    texts = _source_texts(p)
    if not any(texts):
        return {}
    try:
        translated = await translate_text_logic(TranslateTextIn(text=texts, target_lang="ar"), config, client)
    except ProxyError as e:
        logger.error("Translation API Error: %s", e.message)
        return {}

    name_ar, description_ar, category_ar, mileage_ar, transmission_ar, fuel_ar = translated
    return {
        "name_ar": name_ar,
        "description_ar": description_ar,
        "category_ar": category_ar,
        "details_ar": {"mileage": mileage_ar, "transmission": transmission_ar, "fuel": fuel_ar},
    }


async def save_product_logic(store, config: Config, client: httpx.AsyncClient, payload: ProductIn,
                             product_id: Optional[int] = None) -> Dict[str, Any]:
    is_new = product_id is None
    row = _make_product_row(payload, is_new)
    overrides = await auto_translate(config, client, payload)
    row.update(overrides)

    try:
        if is_new:
            saved = await run_in_threadpool(store.insert_product, row)
        else:
            saved = await run_in_threadpool(store.update_product, product_id, row)
    except DataFetchError as e:
        logger.error("Failed to save vehicle %s: %s", product_id or payload.name, e)
        raise HTTPException(status_code=502, detail="Failed to save vehicle")

    if not is_new and saved is None:
        raise HTTPException(status_code=404, detail="Vehicle not found")

    logger.info("Saved vehicle %s (translated=%s)", saved.id if saved else payload.name, bool(overrides))
    return {"product": saved, "translated": bool(overrides)}


def delete_product_logic(store, product_id: int) -> Dict[str, Any]:
    try:
        store.delete_product(product_id)
    except DataFetchError as e:
        logger.error("Failed to delete vehicle %s: %s", product_id, e)
        raise HTTPException(status_code=502, detail="Failed to delete vehicle")
    return {"status": "deleted", "id": product_id}


def list_inquiries_logic(store) -> List[Inquiry]:
    try:
        return store.fetch_inquiries()
    except DataFetchError as e:
        logger.error("Failed to load inquiries: %s", e)
        raise HTTPException(status_code=502, detail="Failed to load inquiries")


def get_exchange_rate_logic(store) -> Dict[str, Any]:
    try:
        value = parse_rate(store.fetch_setting(EXCHANGE_RATE_KEY))
    except DataFetchError as e:
        logger.error("Failed to load exchange rate: %s", e)
        value = None
    if value is None:
        return {"key": EXCHANGE_RATE_KEY, "value": FALLBACK_RATE, "source": "fallback"}
    return {"key": EXCHANGE_RATE_KEY, "value": value, "source": "settings"}


def _rate_text(value: float) -> str:
    return str(int(value)) if value.is_integer() else repr(value)


def save_exchange_rate_logic(store, value: float) -> Dict[str, Any]:
    if not math.isfinite(value) or value <= 0:
        raise HTTPException(status_code=400, detail="Exchange rate must be a positive number")
    text = _rate_text(value)
    try:
        store.upsert_setting(EXCHANGE_RATE_KEY, text)
    except DataFetchError as e:
        logger.error("Failed to save exchange rate: %s", e)
        raise HTTPException(status_code=502, detail="Failed to save exchange rate")
    logger.info("Exchange rate set to %s", text)
    return {"key": EXCHANGE_RATE_KEY, "value": text}
