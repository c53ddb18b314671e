# tests/conftest.py
import httpx
import pytest

from showroom.config import Config, get_config
from showroom.database import DataFetchError
from showroom.main import app, get_http_client, get_store
from showroom.models import Product, Inquiry


def make_config(**overrides) -> Config:
    cfg = Config()
    cfg.SUPABASE_URL = "https://store.test"
    cfg.SUPABASE_ANON_KEY = "anon-key"
    cfg.OPENAI_KEY = "sk-test"
    cfg.OPENAI_BASE = "https://openai.test/v1"
    cfg.OPENAI_MODEL = "gpt-3.5-turbo"
    cfg.GOOGLE_TRANSLATE_KEY = "g-test"
    cfg.GOOGLE_TRANSLATE_URL = "https://translate.test/v2"
    for key, value in overrides.items():
        setattr(cfg, key, value)
    return cfg


class Upstream:
    """Records every outgoing request and answers with ``handler``."""

    def __init__(self):
        self.calls = []
        self.handler = lambda request: httpx.Response(500, json={"error": {"message": "no handler"}})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        return self.handler(request)

    def respond(self, handler):
        self.handler = handler


class FakeStore:
    """In-memory stand-in for HostedStore."""

    def __init__(self, products=None, settings=None):
        self.products = [Product.model_validate(p) for p in (products or [])]
        self.settings = dict(settings or {})
        self.inquiries = []
        self.inserted = []
        self.updated = []
        self.deleted = []
        self.fail = False
        self.product_fetches = 0
        self.setting_fetches = 0

    def _check(self):
        if self.fail:
            raise DataFetchError("store unavailable")

    def fetch_products(self):
        self.product_fetches += 1
        self._check()
        return list(self.products)

    def fetch_setting(self, key):
        self.setting_fetches += 1
        self._check()
        return self.settings.get(key)

    def upsert_setting(self, key, value):
        self._check()
        self.settings[key] = value

    def insert_product(self, row):
        self._check()
        self.inserted.append(row)
        return Product.model_validate({"id": len(self.products) + 100, **row})

    def update_product(self, product_id, row):
        self._check()
        self.updated.append((product_id, row))
        existing = next((p for p in self.products if p.id == product_id), None)
        if existing is None:
            return None
        return Product.model_validate({**existing.model_dump(), **row})

    def delete_product(self, product_id):
        self._check()
        self.deleted.append(product_id)

    def insert_inquiry(self, row):
        self._check()
        self.inquiries.append(row)

    def fetch_inquiries(self):
        self._check()
        return [Inquiry.model_validate(row) for row in self.inquiries]


@pytest.fixture
def config():
    cfg = make_config()
    app.dependency_overrides[get_config] = lambda: cfg
    yield cfg
    app.dependency_overrides.clear()


@pytest.fixture
def upstream(config):
    fake = Upstream()

    async def client_override():
        async with httpx.AsyncClient(transport=httpx.MockTransport(fake)) as client:
            yield client

    app.dependency_overrides[get_http_client] = client_override
    yield fake


@pytest.fixture
def store(config):
    fake = FakeStore()
    app.dependency_overrides[get_store] = lambda: fake
    yield fake


@pytest.fixture
def vehicles():
    return [
        {
            "id": 1,
            "name": "BMW X5 2022",
            "name_ar": "بي إم دبليو إكس 5 2022",
            "description": "Luxury SUV in excellent condition.",
            "description_ar": "",
            "details": {"mileage": "12,000 km", "transmission": "Automatic", "fuel": "Petrol"},
            "details_ar": {"transmission": "أوتوماتيك"},
            "price_usd": 65000,
            "category": "SUV",
            "featured": True,
            "image_url": "https://img.test/x5.jpg",
            "gallery": ["https://img.test/x5.jpg", "https://img.test/x5-side.jpg"],
        },
        {
            "id": 2,
            "name": "Mercedes C200",
            "description": "Compact executive sedan.",
            "details": {"mileage": "30,000 km", "transmission": "Automatic", "fuel": "Petrol"},
            "price_usd": 42000,
            "category": "Sedan",
            "featured": True,
        },
        {
            "id": 3,
            "name": "Porsche 911 Carrera",
            "description": "Iconic sports car.",
            "details": {"mileage": "5,000 km", "transmission": "Manual", "fuel": "Petrol"},
            "price_usd": 120000,
            "category": "Sports Car",
            "featured": False,
        },
        {
            "id": 4,
            "name": "Tesla Model 3",
            "description": "Long range electric sedan.",
            "details": {"mileage": "8,000 km", "transmission": "Automatic", "fuel": "Electric"},
            "price_usd": 39999.5,
            "category": "Sedan",
            "featured": True,
        },
        {
            "id": 5,
            "name": "BMW 330i",
            "description": "Sport sedan.",
            "details": {"mileage": "22,000 km", "transmission": "Automatic", "fuel": "Petrol"},
            "price_usd": 38000,
            "category": "Sedan",
            "featured": True,
        },
    ]
