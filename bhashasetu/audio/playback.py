from __future__ import annotations

from typing import Optional

import numpy as np

from bhashasetu.contracts import SpeechResult
from bhashasetu.media import wav_to_pcm16


class PlaybackError(RuntimeError):
    pass


def wav_to_array(data: bytes) -> tuple[np.ndarray, int]:
    """Decode 16-bit WAV bytes to an int16 array shaped (frames, channels)."""
    try:
        pcm16, sample_rate, channels = wav_to_pcm16(data)
    except Exception as e:
        raise PlaybackError(f"unreadable audio payload: {e}") from e
    samples = np.frombuffer(pcm16, dtype="<i2")
    if channels > 1:
        samples = samples.reshape(-1, channels)
    else:
        samples = samples.reshape(-1, 1)
    return samples, sample_rate


class SoundDevicePlayer:
    """Play synthesized speech on an output device with `sounddevice` (PortAudio)."""

    def __init__(self, *, device: Optional[int] = None) -> None:
        self.device = device

    def play(self, result: SpeechResult, *, blocking: bool = True) -> float:
        """Start playback and return the clip duration in seconds."""
        if result.mime_type not in ("audio/wav", "audio/x-wav", "audio/wave"):
            raise PlaybackError(f"unsupported audio type: {result.mime_type}")
        samples, sample_rate = wav_to_array(result.audio)
        try:
            import sounddevice as sd
        except (ImportError, OSError) as e:
            raise PlaybackError(
                f"sounddevice is not installed or PortAudio is missing: {e}"
            ) from e

        try:
            sd.play(samples, samplerate=sample_rate, device=self.device)
            if blocking:
                sd.wait()
        except Exception as e:
            raise PlaybackError("Failed to play audio on the output device.") from e
        return len(samples) / float(sample_rate) if sample_rate > 0 else 0.0

    def stop(self) -> None:
        try:
            import sounddevice as sd
        except (ImportError, OSError):
            return
        sd.stop()
