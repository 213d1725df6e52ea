from __future__ import annotations

from typing import Any, Optional

from bhashasetu.ai.gemini import DEFAULT_TTS_MODEL, DEFAULT_VOICE, LazyClient, first_inline_audio
from bhashasetu.contracts import SpeechRequest, SpeechResult
from bhashasetu.media import pcm16_to_wav

from .base import SpeechSynthesizer, SynthesisError

# The TTS model streams back raw little-endian PCM16.
TTS_SAMPLE_RATE = 24000
TTS_CHANNELS = 1


class GeminiSpeechSynthesizer(SpeechSynthesizer):
    def __init__(
        self,
        *,
        model: str = DEFAULT_TTS_MODEL,
        voice: str = DEFAULT_VOICE,
        client: Any = None,
        api_key: Optional[str] = None,
    ) -> None:
        self.model = model
        self.voice = voice
        self._client = LazyClient(client, api_key)

    @property
    def name(self) -> str:
        return "gemini"

    def _config(self, language_code: str):
        from google.genai import types

        return types.GenerateContentConfig(
            response_modalities=["AUDIO"],
            speech_config=types.SpeechConfig(
                language_code=language_code,
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=self.voice),
                ),
            ),
        )

    def synthesize(self, req: SpeechRequest) -> SpeechResult:
        text = (req.text or "").strip()
        if not text:
            raise SynthesisError("nothing to synthesize")
        try:
            response = self._client.get().models.generate_content(
                model=self.model,
                contents=text,
                config=self._config(req.language_code),
            )
        except Exception as e:
            raise SynthesisError(f"speech via {self.model} failed: {e}") from e

        pcm16 = first_inline_audio(response)
        if not pcm16:
            raise SynthesisError(f"No media returned from {self.model}.")
        return SpeechResult(
            audio=pcm16_to_wav(pcm16, sample_rate=TTS_SAMPLE_RATE, channels=TTS_CHANNELS),
            mime_type="audio/wav",
            sample_rate=TTS_SAMPLE_RATE,
            channels=TTS_CHANNELS,
            provider=self.name,
        )
