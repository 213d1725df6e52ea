from __future__ import annotations
from .base import Translator
from bhashasetu.contracts import TranslationRequest, TranslationResult

class StubTranslator(Translator):
    @property
    def name(self) -> str:
        return "stub"

    def translate(self, req: TranslationRequest) -> TranslationResult:
        # Deterministic, test-friendly
        text = req.text if not req.previous_text else f"{req.previous_text} {req.text}"
        out = f"[{req.target_language}] {text}"
        return TranslationResult(source_text=req.text, translated_text=out, provider=self.name)
