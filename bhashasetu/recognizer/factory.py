from __future__ import annotations
import os
from typing import Any, Iterable, Optional
from .base import Recognizer
from .gemini import GeminiRecognizer
from .stub import StubRecognizer

def get_recognizer(
    provider: str | None = None,
    *,
    model: Optional[str] = None,
    combined: bool = False,
    client: Any = None,
    script: Iterable[str] = (),
) -> Recognizer:
    provider = (provider or os.getenv("BHASHASETU_RECOGNIZER", "gemini")).lower().strip()

    if provider == "stub":
        return StubRecognizer(script, combined=combined)
    if provider == "gemini":
        if model:
            return GeminiRecognizer(model=model, combined=combined, client=client)
        return GeminiRecognizer(combined=combined, client=client)

    raise ValueError(f"Unknown recognizer provider: {provider}")
