from __future__ import annotations
from abc import ABC, abstractmethod
from bhashasetu.contracts import SpeechRequest, SpeechResult


class SynthesisError(RuntimeError):
    """The speech service failed or returned no audio payload."""


class SpeechSynthesizer(ABC):
    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def synthesize(self, req: SpeechRequest) -> SpeechResult: ...
