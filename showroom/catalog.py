import logging
from typing import Dict, Any, List, Optional

from fastapi import HTTPException

from showroom.core import InquiryIn
from showroom.database import DataFetchError
from showroom.models import ProductCard
from showroom.session import SessionState

# Logic behind the public catalog endpoints. Every request is one page
# load: a fresh session, one rate refresh, one product fetch.

logger = logging.getLogger("showroom.catalog")


def open_session(store, language: str, currency: str) -> SessionState:
    session = SessionState(store=store)
    session.set_language(language)
    session.set_currency(currency)
    session.load()
    return session


def list_catalog_logic(store, language: str, currency: str, q: str = "",
                       category: Optional[str] = None) -> List[ProductCard]:
    session = open_session(store, language, currency)
    return session.render_all(session.filter_inventory(q, category or ""))


def featured_logic(store, language: str, currency: str, limit: int = 3) -> List[ProductCard]:
    session = open_session(store, language, currency)
    return session.render_all(session.featured(limit))


def vehicle_logic(store, product_id: int, language: str, currency: str) -> ProductCard:
    session = open_session(store, language, currency)
    product = session.find_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return session.render(product)


def submit_inquiry_logic(store, payload: InquiryIn) -> Dict[str, Any]:
    row = payload.model_dump()
    try:
        store.insert_inquiry(row)
    except DataFetchError as e:
        logger.error("Failed to store inquiry from %s: %s", payload.email, e)
        raise HTTPException(status_code=502, detail="Failed to send inquiry")
    logger.info("Inquiry received from %s", payload.email)
    return {"status": "received"}
