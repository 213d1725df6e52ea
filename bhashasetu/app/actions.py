from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass
from typing import Any, Optional

from bhashasetu.app.diagnostics import hint_for_exception, summarize_exception
from bhashasetu.audio.playback import SoundDevicePlayer
from bhashasetu.live.session import InterpreterSession
from bhashasetu.ui.bridge import Notice

logger = logging.getLogger(__name__)

# Camera, recognition, translation, synthesis and playback errors all derive
# from RuntimeError; none of them touch accumulated state.
ACTION_ERRORS = (RuntimeError, ValueError)


@dataclass(frozen=True)
class ActionResult:
    success: bool
    data: Any = None
    error: Optional[str] = None
    hint: Optional[str] = None

    def notice(self, title: str) -> Notice:
        if self.success:
            return Notice(title=title, message=str(self.data or ""), level="info")
        message = self.error or "Unexpected error."
        if self.hint:
            message = f"{message}\n{self.hint}"
        return Notice(title=title, message=message, level="warning")


def _failure(event: str, user_message: str) -> ActionResult:
    detail = traceback.format_exc()
    logger.exception(event)
    summary = summarize_exception(detail)
    return ActionResult(success=False, error=f"{user_message} ({summary})", hint=hint_for_exception(summary))


def recognize_once(session: InterpreterSession) -> ActionResult:
    try:
        snap = session.recognize_once()
    except ACTION_ERRORS:
        return _failure("recognize_once_failed", "An error occurred during recognition. Please try again.")
    return ActionResult(success=True, data=snap)


def translate_current(session: InterpreterSession, context: Optional[str] = None) -> ActionResult:
    try:
        snap = session.retranslate(context)
    except ACTION_ERRORS:
        return _failure("translate_failed", "An error occurred while translating. Please try again later.")
    return ActionResult(success=True, data=snap)


def select_language(session: InterpreterSession, language: str) -> ActionResult:
    try:
        session.select_language(language)
    except ValueError:
        return _failure("select_language_failed", f"Unsupported language: {language}.")
    return ActionResult(success=True, data=session.snapshot())


def clear_conversation(session: InterpreterSession) -> ActionResult:
    session.clear()
    return ActionResult(success=True, data="The conversation has been reset.")


def speak_utterance(
    session: InterpreterSession,
    player: Optional[SoundDevicePlayer] = None,
) -> ActionResult:
    try:
        result = session.speak()
        if result is None:
            return ActionResult(success=False, error="Nothing to speak yet.")
        if player is not None:
            player.play(result, blocking=True)
    except ACTION_ERRORS:
        return _failure("speak_failed", "Could not play audio. Please try again.")
    logger.info("speech_played", extra={"bytes": len(result.audio), "provider": result.provider})
    return ActionResult(success=True, data=result)
