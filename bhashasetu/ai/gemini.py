from __future__ import annotations

import os
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TTS_MODEL = "gemini-2.5-flash-preview-tts"
DEFAULT_VOICE = "Algenib"

API_KEY_ENV_VARS: tuple[str, ...] = ("GEMINI_API_KEY", "GOOGLE_API_KEY")

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class MissingAPIKeyError(RuntimeError):
    pass


def api_key_from_env() -> Optional[str]:
    for name in API_KEY_ENV_VARS:
        value = (os.getenv(name) or "").strip()
        if value:
            return value
    return None


def make_client(api_key: Optional[str] = None) -> Any:
    key = api_key or api_key_from_env()
    if not key:
        raise MissingAPIKeyError(
            "No Gemini API key found. Set GEMINI_API_KEY in the environment or a .env file."
        )
    from google import genai

    return genai.Client(api_key=key)


class LazyClient:
    """Create the genai client on first use so constructing providers never needs a key."""

    def __init__(self, client: Any = None, api_key: Optional[str] = None) -> None:
        self._client = client
        self._api_key = api_key

    def get(self) -> Any:
        if self._client is None:
            self._client = make_client(self._api_key)
        return self._client


def generate_structured(
    client: Any,
    *,
    model: str,
    contents: Any,
    schema: Type[SchemaT],
    system_instruction: Optional[str] = None,
) -> SchemaT:
    from google.genai import types

    response = client.models.generate_content(
        model=model,
        contents=contents,
        config=types.GenerateContentConfig(
            system_instruction=system_instruction,
            response_mime_type="application/json",
            response_schema=schema,
        ),
    )
    parsed = getattr(response, "parsed", None)
    if isinstance(parsed, schema):
        return parsed
    if isinstance(parsed, dict):
        return schema.model_validate(parsed)
    text = (getattr(response, "text", None) or "").strip()
    if not text:
        raise ValueError(f"{model} returned no structured output")
    return schema.model_validate_json(text)


def first_inline_audio(response: Any) -> Optional[bytes]:
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline = getattr(part, "inline_data", None)
            data = getattr(inline, "data", None)
            if data:
                return bytes(data)
    return None
