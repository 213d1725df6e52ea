from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from bhashasetu.app.actions import ActionResult
from bhashasetu.app.services import InterpreterServices
from bhashasetu.live.engine import EngineSnapshot
from bhashasetu.live.session import InterpreterSession
from bhashasetu.ui.bridge import Notice, UpdateBus

logger = logging.getLogger(__name__)


def _drain_update_bus(bus: UpdateBus, window: Any, max_items: int) -> int:
    drained = 0
    while drained < max_items:
        item = bus.pop()
        if item is None:
            break
        if isinstance(item, Notice):
            window.show_notice(item)
        else:
            window.show_snapshot(item)
        drained += 1
    return drained


def format_snapshot(snap: EngineSnapshot) -> str:
    lang = snap.language or "-"
    return f"[epoch {snap.epoch} | {lang}] words: {snap.joined_text or '-'} | utterance: {snap.utterance or '-'}"


def build_session(args: Any, services: InterpreterServices, bus: UpdateBus) -> InterpreterSession:
    def _on_update(snap: EngineSnapshot) -> None:
        if args.print_console:
            print(format_snapshot(snap))
        bus.push(snap)

    return InterpreterSession(
        camera=services.camera,
        recognizer=services.recognizer,
        engine=services.engine,
        speech=services.speech,
        interval_ms=max(200, int(args.interval_ms)),
        on_update=_on_update,
    )


def run_action_async(
    action: Callable[[], ActionResult],
    bus: UpdateBus,
    *,
    title: str,
    notify_success: bool = False,
    on_done: Callable[[ActionResult], None] | None = None,
) -> threading.Thread:
    """Run a user action off the UI thread; failures come back through the bus as notices."""

    def _entry() -> None:
        try:
            result = action()
        except Exception:
            logger.exception("action_crashed", extra={"title": title})
            result = ActionResult(success=False, error="An unexpected error occurred. Please try again.")
        if not result.success or notify_success:
            bus.push(result.notice(title))
        if on_done is not None:
            on_done(result)

    t = threading.Thread(target=_entry, name=f"bhashasetu-action-{title.lower().replace(' ', '-')}", daemon=True)
    t.start()
    return t
