from __future__ import annotations

from bhashasetu.app.diagnostics import hint_for_exception, summarize_exception


def test_summarize_exception_picks_last_meaningful_line() -> None:
    detail = (
        "Traceback (most recent call last):\n"
        '  File "x.py", line 1, in <module>\n'
        "    boom()\n"
        "RuntimeError: failed to start worker"
    )
    assert summarize_exception(detail) == "RuntimeError: failed to start worker"


def test_summarize_exception_truncates_long_line() -> None:
    detail = "ValueError: " + ("x" * 500)
    out = summarize_exception(detail, max_len=60)
    assert out.startswith("ValueError: ")
    assert out.endswith("...")
    assert len(out) <= 60


def test_summarize_exception_empty() -> None:
    assert summarize_exception("") == "Unknown runtime error."


def test_hint_for_missing_api_key() -> None:
    hint = hint_for_exception("MissingAPIKeyError: No Gemini API key found.")
    assert "GEMINI_API_KEY" in hint


def test_hint_for_quota() -> None:
    hint = hint_for_exception("TranslationError: 429 RESOURCE_EXHAUSTED")
    assert "rate limit" in hint


def test_hint_for_camera() -> None:
    hint = hint_for_exception("CameraError: Camera failed to open (device 1).")
    assert "--list-cameras" in hint


def test_hint_for_exception_default() -> None:
    hint = hint_for_exception("RuntimeError: unknown")
    assert hint == "Check logs for full traceback."


def test_hint_for_camera_off() -> None:
    hint = hint_for_exception("CameraError: Camera 0 is off. Start the camera first.")
    assert hint.startswith("The camera is off.")


def test_hint_for_busy_recognition() -> None:
    hint = hint_for_exception("RecognitionBusyError: A recognition is already in progress. Please try again.")
    assert "Wait for the current recognition" in hint
