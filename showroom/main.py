# showroom/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional, List

import httpx
from fastapi import FastAPI, Depends, Header, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from showroom.admin import (
    save_product_logic, delete_product_logic, list_inquiries_logic,
    get_exchange_rate_logic, save_exchange_rate_logic,
)
from showroom.catalog import list_catalog_logic, featured_logic, vehicle_logic, submit_inquiry_logic
from showroom.config import Config, get_config
from showroom.core import (
    Language, Currency, TranslateProductIn, TranslateTextIn, ProductTranslation,
    TranslatedTextOut, ErrorOut, ProductIn, ExchangeRateIn, InquiryIn,
)
from showroom.database import HostedStore
from showroom.logging_config import setup_logging
from showroom.models import ProductCard, Inquiry
from showroom.translation import ProxyError, MissingInputError, translate_product_logic, translate_text_logic

logger = logging.getLogger("showroom.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    yield


app = FastAPI(title="agance showroom", lifespan=lifespan)

# Same headers on every response, including errors; preflights get a bare "ok"
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


@app.middleware("http")
async def cors_headers(request: Request, call_next):
    if request.method == "OPTIONS":
        return PlainTextResponse("ok", headers=CORS_HEADERS)
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        response = _error("Internal server error", 500)
    response.headers.update(CORS_HEADERS)
    return response


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@app.exception_handler(RequestValidationError)
async def invalid_request(request: Request, exc: RequestValidationError):
    return _error("Invalid request", 400)


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return _error(str(exc.detail), exc.status_code)

# ---------------------------
# Dependencies
# ---------------------------
async def get_http_client(config: Config = Depends(get_config)):
    async with httpx.AsyncClient(timeout=config.HTTP_TIMEOUT) as client:
        yield client


def _bearer(authorization: Optional[str]) -> Optional[str]:
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:].strip() or None
    return None


def get_store(config: Config = Depends(get_config), authorization: Optional[str] = Header(None)):
    if not config.store_configured:
        raise HTTPException(status_code=503, detail="Hosted store is not configured")
    return HostedStore(
        config.SUPABASE_URL, config.SUPABASE_ANON_KEY,
        access_token=_bearer(authorization), timeout=config.HTTP_TIMEOUT,
    )

# ---------------------------
# Translation endpoints
# ---------------------------
@app.post("/translate-product", response_model=ProductTranslation, responses={400: {"model": ErrorOut}})
async def translate_product(payload: TranslateProductIn, config: Config = Depends(get_config),
                            client: httpx.AsyncClient = Depends(get_http_client)):
    try:
        return await translate_product_logic(payload, config, client)
    except ProxyError as e:
        return _error(e.message, 400)


@app.post("/translate-text", response_model=TranslatedTextOut,
          responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}})
async def translate_text(payload: TranslateTextIn, config: Config = Depends(get_config),
                         client: httpx.AsyncClient = Depends(get_http_client)):
    try:
        translated = await translate_text_logic(payload, config, client)
    except MissingInputError as e:
        return _error(e.message, 400)
    except ProxyError as e:
        return _error(e.message, 500)
    return {"translatedText": translated}

# ---------------------------
# Catalog endpoints
# ---------------------------
@app.get("/catalog", response_model=List[ProductCard])
def list_catalog(lang: Language = "en", currency: Currency = "EGP", q: str = "",
                 category: Optional[str] = None, store=Depends(get_store)):
    return list_catalog_logic(store, lang, currency, q, category)


@app.get("/catalog/featured", response_model=List[ProductCard])
def featured(lang: Language = "en", currency: Currency = "EGP", limit: int = Query(3, ge=1, le=50),
             store=Depends(get_store)):
    return featured_logic(store, lang, currency, limit)


@app.get("/catalog/{product_id}", response_model=ProductCard, responses={404: {"model": ErrorOut}})
def get_vehicle(product_id: int, lang: Language = "en", currency: Currency = "EGP",
                store=Depends(get_store)):
    return vehicle_logic(store, product_id, lang, currency)


@app.post("/inquiries", status_code=201)
def submit_inquiry(payload: InquiryIn, store=Depends(get_store)):
    return submit_inquiry_logic(store, payload)

# ---------------------------
# Admin endpoints
# ---------------------------
@app.post("/admin/products", status_code=201)
async def create_product(payload: ProductIn, store=Depends(get_store), config: Config = Depends(get_config),
                         client: httpx.AsyncClient = Depends(get_http_client)):
    return await save_product_logic(store, config, client, payload)


@app.put("/admin/products/{product_id}")
async def update_product(product_id: int, payload: ProductIn, store=Depends(get_store),
                         config: Config = Depends(get_config),
                         client: httpx.AsyncClient = Depends(get_http_client)):
    return await save_product_logic(store, config, client, payload, product_id)


@app.delete("/admin/products/{product_id}")
def delete_product(product_id: int, store=Depends(get_store)):
    return delete_product_logic(store, product_id)


@app.get("/admin/inquiries", response_model=List[Inquiry])
def list_inquiries(store=Depends(get_store)):
    return list_inquiries_logic(store)


@app.get("/admin/settings/exchange-rate")
def get_exchange_rate(store=Depends(get_store)):
    return get_exchange_rate_logic(store)


@app.put("/admin/settings/exchange-rate")
def save_exchange_rate(payload: ExchangeRateIn, store=Depends(get_store)):
    return save_exchange_rate_logic(store, payload.value)
