from __future__ import annotations
from abc import ABC, abstractmethod
from bhashasetu.contracts import TranslationRequest, TranslationResult


class TranslationError(RuntimeError):
    """The translation service was unreachable or returned unusable output."""


class Translator(ABC):
    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def translate(self, req: TranslationRequest) -> TranslationResult: ...
