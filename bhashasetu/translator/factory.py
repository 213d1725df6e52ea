from __future__ import annotations
import os
from typing import Any, Optional
from .base import Translator
from .gemini import GeminiTranslator
from .stub import StubTranslator

def get_translator(provider: str | None = None, *, model: Optional[str] = None, client: Any = None) -> Translator:
    provider = (provider or os.getenv("BHASHASETU_TRANSLATOR", "gemini")).lower().strip()

    if provider == "stub":
        return StubTranslator()
    if provider == "gemini":
        return GeminiTranslator(model=model, client=client) if model else GeminiTranslator(client=client)

    raise ValueError(f"Unknown translator provider: {provider}")
