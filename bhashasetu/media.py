from __future__ import annotations

import base64
import io
import re
import wave

_DATA_URI = re.compile(r"^data:(?P<mime>[^;,]+)(?:;[^;,]+)*?;base64,(?P<data>.*)$", re.DOTALL)


def encode_data_uri(data: bytes, mime_type: str) -> str:
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def decode_data_uri(uri: str) -> tuple[bytes, str]:
    """Return (payload bytes, mime type) for a base64 data URI."""
    m = _DATA_URI.match((uri or "").strip())
    if m is None:
        raise ValueError("expected 'data:<mimetype>;base64,<encoded_data>'")
    return base64.b64decode(m.group("data")), m.group("mime")


def pcm16_to_wav(pcm16: bytes, sample_rate: int = 24000, channels: int = 1) -> bytes:
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(2)
        wf.setframerate(sample_rate)
        wf.writeframes(pcm16)
    return buf.getvalue()


def wav_to_pcm16(data: bytes) -> tuple[bytes, int, int]:
    """Return (pcm16 frames, sample_rate, channels). Only 16-bit WAV is accepted."""
    with wave.open(io.BytesIO(data), "rb") as wf:
        if wf.getsampwidth() != 2:
            raise ValueError(f"expected 16-bit PCM, got sample width {wf.getsampwidth()}")
        return wf.readframes(wf.getnframes()), wf.getframerate(), wf.getnchannels()
