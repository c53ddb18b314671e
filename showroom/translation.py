"""Translation proxies: OpenAI for structured product copy, Google Translate
for plain strings.

Both functions run once per request and keep no state between calls. Errors
are raised as ``ProxyError`` subclasses carrying a client-safe message; the
HTTP layer decides the status code.
"""
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, List, Tuple, Union

import httpx
from pydantic import ValidationError

from showroom.config import Config
from showroom.core import TranslateProductIn, ProductTranslation, TranslateTextIn

logger = logging.getLogger("showroom.translation")

SYSTEM_INSTRUCTION = (
    "You are a professional automotive translator. Translate the provided JSON object "
    "(containing 'name', 'description', and 'details') into Arabic. Return ONLY the JSON "
    "object with keys: 'name_ar', 'description_ar', and 'details_ar' (which should contain "
    "translated mileage, transmission, fuel strings). maintain the original structure."
)

CONFIG_ERROR = "Server configuration error: Missing API Key"
PARSE_ERROR = "Failed to parse AI response as JSON."
MISSING_TEXT = 'Missing or empty "text" parameter'
TRANSLATE_FAILED = "Failed to translate text"

# First "{" through the last "}" (greedy), for replies wrapped in prose or fences
_JSON_SPAN = re.compile(r"\{[\s\S]*\}")


class ProxyError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingInputError(ProxyError):
    pass


class ConfigurationError(ProxyError):
    pass


class UpstreamError(ProxyError):
    pass


class ResponseParseError(ProxyError):
    pass


# ---------------------------
# Response helpers
# ---------------------------
def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _upstream_message(data: Any) -> str:
    if not isinstance(data, dict):
        return ""
    error = data.get("error")
    if isinstance(error, dict):
        return str(error.get("message") or "")
    if isinstance(error, str):
        return error
    return ""


def extract_json(content: str) -> dict:
    """Parse a model reply into a JSON object.

    Tries the whole reply first, then the first ``{...}`` span inside it.
    """
    if not isinstance(content, str):
        raise ResponseParseError(PARSE_ERROR)
    try:
        parsed = json.loads(content)
    except ValueError:
        match = _JSON_SPAN.search(content)
        if match is None:
            raise ResponseParseError(PARSE_ERROR)
        try:
            parsed = json.loads(match.group(0))
        except ValueError as e:
            raise ResponseParseError(PARSE_ERROR) from e
    if not isinstance(parsed, dict):
        raise ResponseParseError(PARSE_ERROR)
    return parsed


def normalize_product_translation(parsed: dict) -> ProductTranslation:
    try:
        return ProductTranslation.model_validate(parsed)
    except ValidationError as e:
        raise ResponseParseError(PARSE_ERROR) from e


# ---------------------------
# Structured product translation
# ---------------------------
async def translate_product_logic(payload: TranslateProductIn, config: Config,
                                  client: httpx.AsyncClient) -> ProductTranslation:
    if not payload.name and not payload.description:
        raise MissingInputError("No text provided to translate.")

    if not config.OPENAI_KEY:
        logger.error("OPENAI_API_KEY environment variable not set")
        raise ConfigurationError(CONFIG_ERROR)

    source = {
        "name": payload.name or "",
        "description": payload.description or "",
        "details": payload.details.model_dump() if payload.details else None,
    }
    body = {
        "model": config.OPENAI_MODEL,
        "messages": [
            {"role": "system", "content": SYSTEM_INSTRUCTION},
            {"role": "user", "content": json.dumps(source, ensure_ascii=False)},
        ],
        "temperature": config.OPENAI_TEMPERATURE,
    }
    headers = {
        "Authorization": f"Bearer {config.OPENAI_KEY}",
        "Content-Type": "application/json",
    }

    try:
        r = await client.post(f"{config.OPENAI_BASE}/chat/completions", headers=headers, json=body)
    except httpx.HTTPError as e:
        logger.error("OpenAI request failed: %s", e)
        raise UpstreamError("OpenAI Error: translation service unreachable") from e

    data = _json_body(r)
    message = _upstream_message(data)
    if message or r.is_error:
        logger.error("OpenAI returned an error (status %s): %s", r.status_code, message or "no message")
        raise UpstreamError(f"OpenAI Error: {message or f'HTTP {r.status_code}'}")

    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        logger.error("Unexpected OpenAI response shape: %s", type(data).__name__)
        raise UpstreamError("OpenAI Error: unexpected response") from e

    return normalize_product_translation(extract_json(content))


# ---------------------------
# Plain text translation
# ---------------------------
@dataclass(frozen=True)
class ScalarText:
    value: str


@dataclass(frozen=True)
class SequenceText:
    values: Tuple[str, ...]


TextInput = Union[ScalarText, SequenceText]


def to_text_input(text: Union[str, List[str], None]) -> TextInput:
    if isinstance(text, list):
        if not text:
            raise MissingInputError(MISSING_TEXT)
        return SequenceText(tuple(text))
    if not text:
        raise MissingInputError(MISSING_TEXT)
    return ScalarText(text)


def reshape(text_input: TextInput, translations: List[str]) -> Union[str, List[str]]:
    """Give the translations back in the shape the caller sent."""
    if isinstance(text_input, ScalarText):
        if not translations:
            raise UpstreamError(TRANSLATE_FAILED)
        return translations[0]
    if len(translations) != len(text_input.values):
        logger.error("Expected %d translations, got %d", len(text_input.values), len(translations))
        raise UpstreamError(TRANSLATE_FAILED)
    return list(translations)


async def translate_text_logic(payload: TranslateTextIn, config: Config,
                               client: httpx.AsyncClient) -> Union[str, List[str]]:
    text_input = to_text_input(payload.text)

    if not config.GOOGLE_TRANSLATE_KEY:
        logger.error("Missing GOOGLE_TRANSLATE_API_KEY")
        raise ConfigurationError(CONFIG_ERROR)

    q = text_input.value if isinstance(text_input, ScalarText) else list(text_input.values)
    body = {"q": q, "target": payload.target_lang, "format": "text"}

    try:
        r = await client.post(
            config.GOOGLE_TRANSLATE_URL,
            params={"key": config.GOOGLE_TRANSLATE_KEY},
            headers={"Content-Type": "application/json"},
            json=body,
        )
    except httpx.HTTPError as e:
        logger.error("Google Translate request failed: %s", e)
        raise UpstreamError(TRANSLATE_FAILED) from e

    data = _json_body(r)
    if r.is_error:
        message = _upstream_message(data)
        logger.error("Google API Error (status %s): %s", r.status_code, message or "no message")
        raise UpstreamError(message or TRANSLATE_FAILED)

    try:
        translations = [t["translatedText"] for t in data["data"]["translations"]]
    except (KeyError, TypeError) as e:
        logger.error("Unexpected Google Translate response shape")
        raise UpstreamError(TRANSLATE_FAILED) from e
    if not all(isinstance(t, str) for t in translations):
        logger.error("Google Translate returned non-text translations")
        raise UpstreamError(TRANSLATE_FAILED)

    return reshape(text_input, translations)
