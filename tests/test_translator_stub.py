import pytest

from bhashasetu.contracts import TranslationRequest
from bhashasetu.translator.factory import get_translator
from bhashasetu.translator.gemini import GeminiTranslator
from bhashasetu.translator.stub import StubTranslator

def test_stub_translator_deterministic():
    tr = StubTranslator()
    out = tr.translate(TranslationRequest(text="home peace", target_language="Tamil"))
    assert out.provider == "stub"
    assert out.translated_text == "[Tamil] home peace"
    assert out.source_text == "home peace"

def test_stub_translator_extends_previous_text():
    out = StubTranslator().translate(
        TranslationRequest(text="peace", target_language="Hindi", previous_text="home")
    )
    assert out.translated_text == "[Hindi] home peace"

def test_factory_reads_env(monkeypatch):
    monkeypatch.setenv("BHASHASETU_TRANSLATOR", "stub")
    assert isinstance(get_translator(), StubTranslator)
    assert isinstance(get_translator("gemini", model="gemini-2.0-flash"), GeminiTranslator)

def test_factory_rejects_unknown():
    with pytest.raises(ValueError):
        get_translator("deepl")
