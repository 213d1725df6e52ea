from __future__ import annotations

from types import SimpleNamespace

import pytest

from bhashasetu.ai.gemini import MissingAPIKeyError, first_inline_audio
from bhashasetu.contracts import RecognitionRequest, Sample, SpeechRequest, TranslationRequest
from bhashasetu.media import wav_to_pcm16
from bhashasetu.recognizer.base import RecognitionError
from bhashasetu.recognizer.gemini import GeminiRecognizer
from bhashasetu.speech.base import SynthesisError
from bhashasetu.speech.gemini import GeminiSpeechSynthesizer
from bhashasetu.translator.base import TranslationError
from bhashasetu.translator.gemini import GeminiTranslator, build_prompt


class _FakeModels:
    def __init__(self, response=None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict] = []

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


class _FakeClient:
    def __init__(self, response=None, error: Exception | None = None) -> None:
        self.models = _FakeModels(response, error)


def _json_response(text: str):
    return SimpleNamespace(parsed=None, text=text)


def _audio_response(data: bytes | None):
    parts = [SimpleNamespace(inline_data=None, text="ok")]
    if data is not None:
        parts.append(SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type="audio/L16;rate=24000")))
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))])


# --- translation ---


def test_translator_parses_structured_reply() -> None:
    client = _FakeClient(_json_response('{"translated_text": "வீடு அமைதி"}'))
    tr = GeminiTranslator(model="gemini-test", client=client)

    res = tr.translate(TranslationRequest(text="home peace", target_language="Tamil", context="greeting"))

    assert res.translated_text == "வீடு அமைதி"
    assert res.source_text == "home peace"
    call = client.models.calls[0]
    assert call["model"] == "gemini-test"
    assert "home peace" in call["contents"]
    assert "Tamil" in call["contents"]
    assert "greeting" in call["contents"]
    assert call["config"].response_mime_type == "application/json"


def test_translator_uses_parsed_dict() -> None:
    client = _FakeClient(SimpleNamespace(parsed={"translated_text": "घर"}, text=None))
    res = GeminiTranslator(client=client).translate(TranslationRequest(text="home", target_language="Hindi"))
    assert res.translated_text == "घर"


def test_build_prompt_includes_previous_sentence() -> None:
    prompt = build_prompt(TranslationRequest(text="peace", target_language="Tamil", previous_text="வீடு"))
    assert "peace" in prompt
    assert "வீடு" in prompt
    assert "Contextual information" not in prompt


def test_translator_wraps_sdk_errors() -> None:
    client = _FakeClient(error=RuntimeError("503 UNAVAILABLE"))
    with pytest.raises(TranslationError) as exc:
        GeminiTranslator(client=client).translate(TranslationRequest(text="home", target_language="Hindi"))
    assert "503" in str(exc.value)
    assert isinstance(exc.value.__cause__, RuntimeError)


def test_translator_rejects_malformed_reply() -> None:
    client = _FakeClient(_json_response("not json"))
    with pytest.raises(TranslationError):
        GeminiTranslator(client=client).translate(TranslationRequest(text="home", target_language="Hindi"))


def test_translator_rejects_empty_sentence() -> None:
    client = _FakeClient(_json_response('{"translated_text": "  "}'))
    with pytest.raises(TranslationError):
        GeminiTranslator(client=client).translate(TranslationRequest(text="home", target_language="Hindi"))


def test_translator_without_api_key(monkeypatch) -> None:
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    with pytest.raises(TranslationError) as exc:
        GeminiTranslator().translate(TranslationRequest(text="home", target_language="Hindi"))
    assert isinstance(exc.value.__cause__, MissingAPIKeyError)


# --- recognition ---


def test_recognizer_sends_image_part_and_strips_token() -> None:
    client = _FakeClient(_json_response('{"recognized_sign": "Peace."}'))
    sample = Sample(data=b"\xff\xd8jpeg")

    res = GeminiRecognizer(client=client).recognize(RecognitionRequest(sample=sample))

    assert res.token == "Peace"
    assert res.combined_text is None
    image, prompt = client.models.calls[0]["contents"]
    assert image.inline_data.data == sample.data
    assert image.inline_data.mime_type == "image/jpeg"
    assert "Indian Sign Language" in prompt


def test_recognizer_no_gesture_is_empty_token() -> None:
    client = _FakeClient(_json_response('{"recognized_sign": ""}'))
    res = GeminiRecognizer(client=client).recognize(RecognitionRequest(sample=Sample(data=b"x")))
    assert res.token == ""


def test_combined_recognizer_returns_appended_text() -> None:
    client = _FakeClient(_json_response('{"recognized_sign": "peace", "translated_text": "home peace"}'))
    rec = GeminiRecognizer(client=client, combined=True)

    res = rec.recognize(
        RecognitionRequest(sample=Sample(data=b"x"), target_language="English", previous_context="home")
    )

    assert res.token == "peace"
    assert res.combined_text == "home peace"
    _image, prompt = client.models.calls[0]["contents"]
    assert "Previous context (already translated text): home" in prompt


def test_recognizer_wraps_errors() -> None:
    client = _FakeClient(error=RuntimeError("429 RESOURCE_EXHAUSTED"))
    with pytest.raises(RecognitionError):
        GeminiRecognizer(client=client).recognize(RecognitionRequest(sample=Sample(data=b"x")))


# --- speech ---


def test_speech_wraps_pcm_in_wav() -> None:
    pcm = b"\x01\x00\x02\x00" * 100
    client = _FakeClient(_audio_response(pcm))
    tts = GeminiSpeechSynthesizer(client=client, voice="Algenib")

    res = tts.synthesize(SpeechRequest(text="வீடு அமைதி", language_code="ta-IN"))

    assert res.mime_type == "audio/wav"
    assert res.data_uri.startswith("data:audio/wav;base64,")
    frames, sample_rate, channels = wav_to_pcm16(res.audio)
    assert (frames, sample_rate, channels) == (pcm, 24000, 1)
    config = client.models.calls[0]["config"]
    assert config.speech_config.language_code == "ta-IN"
    assert config.speech_config.voice_config.prebuilt_voice_config.voice_name == "Algenib"


def test_speech_without_audio_raises() -> None:
    client = _FakeClient(_audio_response(None))
    with pytest.raises(SynthesisError, match="No media returned"):
        GeminiSpeechSynthesizer(client=client).synthesize(SpeechRequest(text="hello"))


def test_speech_rejects_empty_text() -> None:
    client = _FakeClient(_audio_response(b"\x00\x00"))
    with pytest.raises(SynthesisError):
        GeminiSpeechSynthesizer(client=client).synthesize(SpeechRequest(text="  "))
    assert client.models.calls == []


def test_first_inline_audio_handles_empty_response() -> None:
    assert first_inline_audio(SimpleNamespace(candidates=None)) is None
