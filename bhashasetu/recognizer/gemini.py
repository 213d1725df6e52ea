from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from bhashasetu.ai.gemini import DEFAULT_MODEL, LazyClient, generate_structured
from bhashasetu.contracts import RecognitionRequest, RecognitionResult

from .base import RecognitionError, Recognizer

_RECOGNIZE_PROMPT = """You are an expert in Indian Sign Language (ISL). Interpret the single gesture in the image.

1. Look for a hand gesture. If no hand is visible or the gesture is unclear, return an empty string for 'recognized_sign'.
2. Identify the single word being signed. Use only the hand gesture (shape, orientation, location, movement) and ignore everything else in the picture.
3. Do not explain the gesture. 'recognized_sign' must be the single English word only."""

_COMBINED_PROMPT = """You are an expert in Indian Sign Language (ISL). Interpret the single gesture in the image and append it to an existing sequence of words.

1. Look for a hand gesture. If no hand is visible or the gesture is unclear, return an empty string for 'recognized_sign' and the previous context unchanged for 'translated_text'.
2. Identify the single word being signed. Use only the hand gesture (shape, orientation, location, movement) and ignore everything else in the picture.
3. Do not explain the gesture. 'recognized_sign' must be the single word only.
4. Append, do not rephrase. Add the word, in the target language, to the end of the previous context; the result is 'translated_text'. If the previous context is "home" and you recognize "peace", 'translated_text' is "home peace".

Previous context (already translated text): {previous}
Target language: {language}"""


class _SignOutput(BaseModel):
    recognized_sign: str = Field(
        description="The recognized word. Empty if no hand is detected."
    )


class _SignAndTextOutput(_SignOutput):
    translated_text: str = Field(
        default="",
        description="The previous context with the recognized word appended, in the target language.",
    )


class GeminiRecognizer(Recognizer):
    def __init__(
        self,
        *,
        model: str = DEFAULT_MODEL,
        combined: bool = False,
        client: Any = None,
        api_key: Optional[str] = None,
    ) -> None:
        self.model = model
        self.combined = combined
        self._client = LazyClient(client, api_key)

    @property
    def name(self) -> str:
        return "gemini"

    def _contents(self, req: RecognitionRequest) -> list[Any]:
        from google.genai import types

        image = types.Part.from_bytes(data=req.sample.data, mime_type=req.sample.mime_type)
        if self.combined:
            prompt = _COMBINED_PROMPT.format(
                previous=req.previous_context or "",
                language=req.target_language or "English",
            )
        else:
            prompt = _RECOGNIZE_PROMPT
        return [image, prompt]

    def recognize(self, req: RecognitionRequest) -> RecognitionResult:
        schema = _SignAndTextOutput if self.combined else _SignOutput
        try:
            out = generate_structured(
                self._client.get(),
                model=self.model,
                contents=self._contents(req),
                schema=schema,
            )
        except Exception as e:
            raise RecognitionError(f"recognition via {self.model} failed: {e}") from e

        token = out.recognized_sign.strip().strip(".\"'")
        combined_text = None
        if self.combined:
            combined_text = (getattr(out, "translated_text", "") or "").strip() or None
        return RecognitionResult(token=token, combined_text=combined_text, provider=self.name)
