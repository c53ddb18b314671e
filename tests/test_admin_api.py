# tests/test_admin_api.py
import json

import httpx
from fastapi.testclient import TestClient

from showroom.main import app
from showroom.models import Product

client = TestClient(app)

NEW_VEHICLE = {
    "name": "Audi Q7",
    "price_usd": 70000,
    "category": "SUV",
    "featured": True,
    "description": "Seven seat family SUV.",
    "details": {"mileage": "15,000 km", "transmission": "Automatic", "fuel": "Diesel"},
}

ARABIC = ["أودي كيو 7", "سيارة عائلية بسبعة مقاعد.", "دفع رباعي", "15,000 كم", "أوتوماتيك", "ديزل"]


def google_echo(request):
    texts = json.loads(request.content)["q"]
    return httpx.Response(200, json={"data": {"translations": [{"translatedText": a} for a in ARABIC[:len(texts)]]}})


def test_create_vehicle_with_translation(store, upstream):
    upstream.respond(google_echo)
    r = client.post("/admin/products", json=NEW_VEHICLE)
    assert r.status_code == 201
    body = r.json()
    assert body["translated"] is True
    assert body["product"]["name_ar"] == "أودي كيو 7"

    sent = json.loads(upstream.calls[0].content)
    assert sent["q"] == ["Audi Q7", "Seven seat family SUV.", "SUV", "15,000 km", "Automatic", "Diesel"]
    assert sent["target"] == "ar"

    row = store.inserted[0]
    assert row["category_ar"] == "دفع رباعي"
    assert row["details_ar"] == {"mileage": "15,000 كم", "transmission": "أوتوماتيك", "fuel": "ديزل"}
    assert row["image_url"] == "https://placehold.co/600x400?text=No+Image"
    assert row["gallery"] == []


def test_create_vehicle_with_image_starts_gallery(store, upstream):
    upstream.respond(google_echo)
    client.post("/admin/products", json={**NEW_VEHICLE, "image_url": "https://img.test/q7.jpg"})
    row = store.inserted[0]
    assert row["image_url"] == "https://img.test/q7.jpg"
    assert row["gallery"] == ["https://img.test/q7.jpg"]


def test_translation_failure_still_saves(store, upstream):
    upstream.respond(lambda request: httpx.Response(403, json={"error": {"message": "quota exceeded"}}))
    r = client.post("/admin/products", json=NEW_VEHICLE)
    assert r.status_code == 201
    assert r.json()["translated"] is False
    row = store.inserted[0]
    assert row["name"] == "Audi Q7"
    assert "name_ar" not in row


def test_missing_translation_key_still_saves(store, upstream, config):
    config.GOOGLE_TRANSLATE_KEY = ""
    r = client.post("/admin/products", json=NEW_VEHICLE)
    assert r.status_code == 201
    assert upstream.calls == []
    assert len(store.inserted) == 1


def test_create_vehicle_validation(store, upstream):
    r = client.post("/admin/products", json={"name": "Broken", "price_usd": -5})
    assert r.status_code == 400
    assert store.inserted == []
    assert upstream.calls == []


def test_update_vehicle_keeps_gallery(store, upstream, vehicles):
    store.products = [Product.model_validate(v) for v in vehicles]
    upstream.respond(google_echo)
    r = client.put("/admin/products/1", json={**NEW_VEHICLE, "name": "BMW X5 2023", "price_usd": 66000})
    assert r.status_code == 200
    product_id, row = store.updated[0]
    assert product_id == 1
    assert row["price_usd"] == 66000
    assert "gallery" not in row
    assert "image_url" not in row
    assert r.json()["product"]["gallery"] == vehicles[0]["gallery"]


def test_update_missing_vehicle(store, upstream):
    upstream.respond(google_echo)
    r = client.put("/admin/products/42", json=NEW_VEHICLE)
    assert r.status_code == 404
    assert r.json() == {"error": "Vehicle not found"}


def test_store_failure_on_save(store, upstream):
    upstream.respond(google_echo)
    store.fail = True
    r = client.post("/admin/products", json=NEW_VEHICLE)
    assert r.status_code == 502
    assert r.json() == {"error": "Failed to save vehicle"}


def test_delete_vehicle(store):
    r = client.delete("/admin/products/3")
    assert r.status_code == 200
    assert r.json() == {"status": "deleted", "id": 3}
    assert store.deleted == [3]


def test_list_inquiries(store):
    store.inquiries = [
        {"id": 1, "name": "Alice", "email": "alice@example.com", "message": "Hi", "created_at": "2026-10-01T10:00:00Z"},
    ]
    r = client.get("/admin/inquiries")
    assert r.status_code == 200
    assert r.json()[0]["name"] == "Alice"
    assert r.json()[0]["phone"] is None


def test_list_inquiries_failure(store):
    store.fail = True
    r = client.get("/admin/inquiries")
    assert r.status_code == 502


def test_get_exchange_rate(store):
    store.settings["USD_TO_EGP"] = "48.5"
    assert client.get("/admin/settings/exchange-rate").json() == {
        "key": "USD_TO_EGP", "value": 48.5, "source": "settings",
    }


def test_get_exchange_rate_fallback(store):
    assert client.get("/admin/settings/exchange-rate").json() == {
        "key": "USD_TO_EGP", "value": 50.0, "source": "fallback",
    }
    store.fail = True
    assert client.get("/admin/settings/exchange-rate").json()["source"] == "fallback"


def test_set_exchange_rate(store):
    r = client.put("/admin/settings/exchange-rate", json={"value": 60})
    assert r.status_code == 200
    assert r.json() == {"key": "USD_TO_EGP", "value": "60"}
    assert store.settings["USD_TO_EGP"] == "60"

    client.put("/admin/settings/exchange-rate", json={"value": 47.75})
    assert store.settings["USD_TO_EGP"] == "47.75"


def test_new_rate_shows_on_next_page_load(store, vehicles):
    store.products = [Product.model_validate(v) for v in vehicles]
    client.put("/admin/settings/exchange-rate", json={"value": 60})
    assert client.get("/catalog/2").json()["price"] == "2,520,000 L.E"


def test_set_exchange_rate_rejects_non_positive(store):
    for value in (0, -3):
        r = client.put("/admin/settings/exchange-rate", json={"value": value})
        assert r.status_code == 400
        assert r.json() == {"error": "Exchange rate must be a positive number"}
    assert store.settings == {}


def test_admin_token_is_forwarded(config, monkeypatch):
    seen = {}

    class RecordingStore:
        def __init__(self, base_url, api_key, access_token=None, timeout=30):
            seen["token"] = access_token

        def delete_product(self, product_id):
            pass

    monkeypatch.setattr("showroom.main.HostedStore", RecordingStore)
    client.delete("/admin/products/1", headers={"Authorization": "Bearer admin-jwt"})
    assert seen["token"] == "admin-jwt"
