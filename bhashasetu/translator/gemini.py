from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from bhashasetu.ai.gemini import DEFAULT_MODEL, LazyClient, generate_structured
from bhashasetu.contracts import TranslationRequest, TranslationResult

from .base import TranslationError, Translator

_SYSTEM_INSTRUCTION = (
    "You are an expert in Indian Sign Language interpretation and regional Indian languages. "
    "You receive a sequence of signed words, in the order they were signed. "
    "Turn them into one correct, natural-sounding sentence in the target language. "
    "Keep the meaning faithful to the signed words and do not add information. "
    "Reply with the sentence only, no explanation."
)


class _TranslationOutput(BaseModel):
    translated_text: str = Field(description="One natural sentence in the target language.")


def build_prompt(req: TranslationRequest) -> str:
    lines = [f"Signed words ({req.source_language}): {req.text}"]
    if req.previous_text.strip():
        lines.append(f"Sentence so far (extend it with the new words, keep its meaning): {req.previous_text}")
    if req.context.strip():
        lines.append(f"Contextual information: {req.context}")
    lines.append(f"Target language: {req.target_language}")
    return "\n".join(lines)


class GeminiTranslator(Translator):
    def __init__(
        self,
        *,
        model: str = DEFAULT_MODEL,
        client: Any = None,
        api_key: Optional[str] = None,
    ) -> None:
        self.model = model
        self._client = LazyClient(client, api_key)

    @property
    def name(self) -> str:
        return "gemini"

    def translate(self, req: TranslationRequest) -> TranslationResult:
        try:
            out = generate_structured(
                self._client.get(),
                model=self.model,
                contents=build_prompt(req),
                schema=_TranslationOutput,
                system_instruction=_SYSTEM_INSTRUCTION,
            )
        except Exception as e:
            raise TranslationError(f"translation via {self.model} failed: {e}") from e

        sentence = out.translated_text.strip().strip("\"'")
        if not sentence:
            raise TranslationError(f"{self.model} returned an empty translation")
        return TranslationResult(source_text=req.text, translated_text=sentence, provider=self.name)
