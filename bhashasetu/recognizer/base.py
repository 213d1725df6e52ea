from __future__ import annotations
from abc import ABC, abstractmethod
from bhashasetu.contracts import RecognitionRequest, RecognitionResult


class RecognitionError(RuntimeError):
    """The recognition service was unreachable or returned unusable output."""


class Recognizer(ABC):
    """
    Turn one camera sample into a sign token.
    "No gesture visible" is an empty token, never an exception.
    """

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def recognize(self, req: RecognitionRequest) -> RecognitionResult: ...
