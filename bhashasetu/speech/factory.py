from __future__ import annotations
import os
from typing import Any, Optional
from .base import SpeechSynthesizer
from .gemini import GeminiSpeechSynthesizer
from .stub import StubSpeechSynthesizer

def get_speech(
    provider: str | None = None,
    *,
    model: Optional[str] = None,
    voice: Optional[str] = None,
    client: Any = None,
) -> SpeechSynthesizer:
    provider = (provider or os.getenv("BHASHASETU_SPEECH", "gemini")).lower().strip()

    if provider == "stub":
        return StubSpeechSynthesizer()
    if provider == "gemini":
        kwargs: dict[str, Any] = {"client": client}
        if model:
            kwargs["model"] = model
        if voice:
            kwargs["voice"] = voice
        return GeminiSpeechSynthesizer(**kwargs)

    raise ValueError(f"Unknown speech provider: {provider}")
