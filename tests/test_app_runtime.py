from __future__ import annotations

from argparse import Namespace

from bhashasetu.app.actions import ActionResult
from bhashasetu.app.runtime import build_session, format_snapshot, run_action_async
from bhashasetu.app.services import build_interpreter_services
from bhashasetu.live.engine import EngineSnapshot
from bhashasetu.ui.bridge import Notice, UpdateBus


def _args(**overrides) -> Namespace:
    base = dict(
        camera=0,
        jpeg_quality=90,
        mirror=True,
        interval_ms=50,
        target_language="english",
        context="",
        translation_mode="full",
        recognizer="stub",
        translator="stub",
        speech="stub",
        model="gemini-2.5-flash",
        tts_model="gemini-2.5-flash-preview-tts",
        voice="Algenib",
        print_console=False,
    )
    base.update(overrides)
    return Namespace(**base)


def test_format_snapshot() -> None:
    snap = EngineSnapshot(epoch=2, tokens=("home", "peace"), utterance="வீடு அமைதி", language="Tamil")
    assert format_snapshot(snap) == "[epoch 2 | Tamil] words: home peace | utterance: வீடு அமைதி"


def test_format_empty_snapshot() -> None:
    snap = EngineSnapshot(epoch=0, tokens=(), utterance="", language=None)
    assert format_snapshot(snap) == "[epoch 0 | -] words: - | utterance: -"


def test_build_session_pushes_updates_and_clamps_interval() -> None:
    args = _args()
    bus = UpdateBus(maxsize=10)
    session = build_session(args, build_interpreter_services(args), bus)

    assert session.timer.interval_ms == 200
    session.clear()

    item = bus.pop()
    assert isinstance(item, EngineSnapshot)
    assert item.epoch == 1


def test_build_session_prints_when_enabled(capsys) -> None:
    args = _args(print_console=True)
    session = build_session(args, build_interpreter_services(args), UpdateBus())
    session.clear()
    assert "[epoch 1 | English]" in capsys.readouterr().out


def test_run_action_async_reports_failure_as_notice() -> None:
    bus = UpdateBus()
    done = []
    t = run_action_async(
        lambda: ActionResult(success=False, error="Could not play audio.", hint="Try again."),
        bus,
        title="Play Audio",
        on_done=done.append,
    )
    t.join(timeout=5)

    item = bus.pop()
    assert isinstance(item, Notice)
    assert item.level == "warning"
    assert item.message == "Could not play audio.\nTry again."
    assert len(done) == 1 and not done[0].success


def test_run_action_async_quiet_on_success() -> None:
    bus = UpdateBus()
    t = run_action_async(lambda: ActionResult(success=True, data="ok"), bus, title="Recognize")
    t.join(timeout=5)
    assert bus.pop() is None


def test_run_action_async_catches_crash() -> None:
    bus = UpdateBus()

    def _crash() -> ActionResult:
        raise KeyError("boom")

    t = run_action_async(_crash, bus, title="Retranslate")
    t.join(timeout=5)
    item = bus.pop()
    assert isinstance(item, Notice)
    assert "unexpected" in item.message
