from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional

from bhashasetu.media import encode_data_uri


@dataclass(frozen=True)
class Sample:
    """
    One encoded camera frame, ready to send to a recognizer.
    data: encoded image bytes (JPEG by default), already mirrored.
    """
    data: bytes
    mime_type: str = "image/jpeg"
    captured_at: float = field(default_factory=time.time)

    @property
    def data_uri(self) -> str:
        return encode_data_uri(self.data, self.mime_type)


@dataclass(frozen=True)
class RecognitionRequest:
    sample: Sample
    target_language: Optional[str] = None
    # Current utterance; the combined recognizer appends to it.
    previous_context: str = ""


@dataclass(frozen=True)
class RecognitionResult:
    token: str
    combined_text: Optional[str] = None
    provider: str = ""


@dataclass(frozen=True)
class TranslationRequest:
    text: str
    target_language: str
    context: str = ""
    previous_text: str = ""
    source_language: str = "English"


@dataclass(frozen=True)
class TranslationResult:
    source_text: str
    translated_text: str
    provider: str


@dataclass(frozen=True)
class SpeechRequest:
    text: str
    language_code: str = "en-US"


@dataclass(frozen=True)
class SpeechResult:
    audio: bytes
    mime_type: str
    sample_rate: int
    channels: int
    provider: str

    @property
    def data_uri(self) -> str:
        return encode_data_uri(self.audio, self.mime_type)
