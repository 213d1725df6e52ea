from __future__ import annotations
from .base import SpeechSynthesizer, SynthesisError
from bhashasetu.contracts import SpeechRequest, SpeechResult
from bhashasetu.media import pcm16_to_wav

class StubSpeechSynthesizer(SpeechSynthesizer):
    """Returns silence: 10 ms per character at 16 kHz mono."""

    sample_rate = 16000

    @property
    def name(self) -> str:
        return "stub"

    def synthesize(self, req: SpeechRequest) -> SpeechResult:
        text = (req.text or "").strip()
        if not text:
            raise SynthesisError("nothing to synthesize")
        frames = len(text) * self.sample_rate // 100
        audio = pcm16_to_wav(b"\x00\x00" * frames, sample_rate=self.sample_rate, channels=1)
        return SpeechResult(
            audio=audio,
            mime_type="audio/wav",
            sample_rate=self.sample_rate,
            channels=1,
            provider=self.name,
        )
