# tests/test_translate_text.py
import json

import httpx
from fastapi.testclient import TestClient

from showroom.main import app

client = TestClient(app)


def google(*translations):
    body = {"data": {"translations": [{"translatedText": t} for t in translations]}}
    return lambda request: httpx.Response(200, json=body)


def test_scalar_in_scalar_out(upstream):
    upstream.respond(google("مرحبا"))
    r = client.post("/translate-text", json={"text": "hello"})
    assert r.status_code == 200
    assert r.json() == {"translatedText": "مرحبا"}
    assert len(upstream.calls) == 1


def test_sequence_in_sequence_out_in_order(upstream):
    upstream.respond(google("أ", "ب"))
    r = client.post("/translate-text", json={"text": ["a", "b"]})
    assert r.status_code == 200
    assert r.json() == {"translatedText": ["أ", "ب"]}


def test_single_item_list_stays_a_list(upstream):
    upstream.respond(google("أوتوماتيك"))
    r = client.post("/translate-text", json={"text": ["Automatic"]})
    assert r.json()["translatedText"] == ["أوتوماتيك"]


def test_request_sent_to_google(upstream):
    upstream.respond(google("بنزين"))
    client.post("/translate-text", json={"text": "Petrol"})
    sent = upstream.calls[0]
    assert sent.url.host == "translate.test"
    assert sent.url.params["key"] == "g-test"
    assert json.loads(sent.content) == {"q": "Petrol", "target": "ar", "format": "text"}


def test_explicit_target_language(upstream):
    upstream.respond(google("Bonjour"))
    client.post("/translate-text", json={"text": ["Hello"], "target_lang": "fr"})
    body = json.loads(upstream.calls[0].content)
    assert body == {"q": ["Hello"], "target": "fr", "format": "text"}


def test_missing_text(upstream):
    r = client.post("/translate-text", json={})
    assert r.status_code == 400
    assert r.json() == {"error": 'Missing or empty "text" parameter'}
    assert upstream.calls == []


def test_empty_text(upstream):
    for text in ("", []):
        r = client.post("/translate-text", json={"text": text})
        assert r.status_code == 400
        assert r.json()["error"] == 'Missing or empty "text" parameter'
    assert upstream.calls == []


def test_missing_credential_makes_no_upstream_call(upstream, config):
    config.GOOGLE_TRANSLATE_KEY = ""
    r = client.post("/translate-text", json={"text": "hello"})
    assert r.status_code == 500
    assert r.json() == {"error": "Server configuration error: Missing API Key"}
    assert len(upstream.calls) == 0


def test_upstream_error_message_is_passed_through(upstream):
    upstream.respond(lambda request: httpx.Response(
        400, json={"error": {"code": 400, "message": "API key not valid. Please pass a valid API key."}}
    ))
    r = client.post("/translate-text", json={"text": "hello"})
    assert r.status_code == 500
    assert r.json() == {"error": "API key not valid. Please pass a valid API key."}


def test_upstream_error_without_message(upstream):
    upstream.respond(lambda request: httpx.Response(502, text="Bad Gateway"))
    r = client.post("/translate-text", json={"text": "hello"})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to translate text"}


def test_translation_count_mismatch(upstream):
    upstream.respond(google("أ"))
    r = client.post("/translate-text", json={"text": ["a", "b"]})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to translate text"}


def test_malformed_success_body(upstream):
    upstream.respond(lambda request: httpx.Response(200, json={"data": {}}))
    r = client.post("/translate-text", json={"text": "hello"})
    assert r.status_code == 500
    assert r.json()["error"] == "Failed to translate text"


def test_cors_headers_on_success(upstream):
    upstream.respond(google("مرحبا"))
    r = client.post("/translate-text", json={"text": "hello"})
    assert r.headers["Access-Control-Allow-Origin"] == "*"


def test_preflight():
    r = client.options("/translate-text")
    assert r.status_code == 200
    assert r.text == "ok"
    assert r.headers["Access-Control-Allow-Headers"] == "authorization, x-client-info, apikey, content-type"


def test_null_translation_is_an_upstream_error(upstream):
    upstream.respond(lambda request: httpx.Response(
        200, json={"data": {"translations": [{"translatedText": None}]}}
    ))
    r = TestClient(app, raise_server_exceptions=False).post("/translate-text", json={"text": "hello"})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to translate text"}
    assert r.headers["Access-Control-Allow-Origin"] == "*"
