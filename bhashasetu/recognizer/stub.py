from __future__ import annotations
from collections import deque
from typing import Iterable
from .base import Recognizer
from bhashasetu.contracts import RecognitionRequest, RecognitionResult

class StubRecognizer(Recognizer):
    """Replays a fixed token script, then reports "no gesture" forever."""

    def __init__(self, tokens: Iterable[str] = (), *, combined: bool = False) -> None:
        self._tokens = deque(tokens)
        self.combined = combined
        self.calls = 0

    @property
    def name(self) -> str:
        return "stub"

    def recognize(self, req: RecognitionRequest) -> RecognitionResult:
        self.calls += 1
        token = self._tokens.popleft() if self._tokens else ""
        combined_text = None
        if self.combined:
            prev = (req.previous_context or "").strip()
            combined_text = f"{prev} {token}".strip() if token else prev
        return RecognitionResult(token=token, combined_text=combined_text, provider=self.name)
