from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Protocol

from bhashasetu.camera.capture import CameraError
from bhashasetu.contracts import (
    RecognitionRequest,
    RecognitionResult,
    Sample,
    SpeechRequest,
    SpeechResult,
)
from bhashasetu.languages import speech_locale
from bhashasetu.live.capture_timer import CaptureTimer, Dispatch
from bhashasetu.live.engine import AccumulationEngine, EngineSnapshot
from bhashasetu.recognizer.base import RecognitionError, Recognizer
from bhashasetu.speech.base import SpeechSynthesizer
from bhashasetu.translator.base import TranslationError

logger = logging.getLogger(__name__)

# Failures of the periodic loop are logged and retried on the next tick.
_PERIODIC_ERRORS = (CameraError, RecognitionError, TranslationError)


class RecognitionBusyError(RuntimeError):
    """A recognition call is already in flight."""


class Camera(Protocol):
    def open(self) -> None:
        ...

    def capture(self) -> Sample:
        ...

    def close(self) -> None:
        ...


class InterpreterSession:
    """
    One interpreter session: camera ticks -> recognizer -> engine -> snapshot.

    The engine is the only writer of conversation state; this class only
    routes results into it and publishes snapshots through `on_update`.
    """

    def __init__(
        self,
        *,
        camera: Camera,
        recognizer: Recognizer,
        engine: AccumulationEngine,
        speech: Optional[SpeechSynthesizer] = None,
        interval_ms: int = 1500,
        dispatch: Optional[Dispatch] = None,
        on_update: Optional[Callable[[EngineSnapshot], None]] = None,
    ) -> None:
        self.camera = camera
        self.recognizer = recognizer
        self.engine = engine
        self.speech = speech
        self.on_update = on_update
        self.timer = CaptureTimer(self._on_tick, interval_ms=interval_ms, dispatch=dispatch)

    @property
    def capturing(self) -> bool:
        return self.timer.running

    def snapshot(self) -> EngineSnapshot:
        return self.engine.snapshot()

    def _publish(self) -> None:
        if self.on_update is not None:
            self.on_update(self.engine.snapshot())

    # --- capture loop ---

    def start_capture(self, interval_ms: Optional[int] = None) -> None:
        # Raises CameraError before the timer starts if the device is unavailable.
        self.camera.open()
        self.timer.start(interval_ms)

    def stop_capture(self) -> None:
        self.timer.stop()
        self.camera.close()

    def toggle_capture(self) -> bool:
        if self.capturing:
            self.stop_capture()
        else:
            self.start_capture()
        return self.capturing

    def _recognize(self) -> tuple[int, RecognitionResult]:
        epoch = self.engine.epoch
        lang = self.engine.language
        sample = self.camera.capture()
        t0 = time.perf_counter()
        res = self.recognizer.recognize(
            RecognitionRequest(
                sample=sample,
                target_language=None if lang is None else lang.name,
                previous_context=self.engine.utterance,
            )
        )
        logger.info(
            "recognition_done",
            extra={
                "epoch": epoch,
                "token": res.token,
                "bytes": len(sample.data),
                "ms": round((time.perf_counter() - t0) * 1000.0, 2),
            },
        )
        return epoch, res

    def _on_tick(self, generation: int) -> None:
        # Stopped between dispatch and run; don't reopen the camera.
        if not self.timer.is_current(generation):
            return
        try:
            epoch, res = self._recognize()
            if not self.timer.is_current(generation):
                logger.info("stale_result_dropped", extra={"stage": "capture", "generation": generation})
                return
            changed = self.engine.on_recognition_result(
                res.token,
                epoch=epoch,
                combined_text=res.combined_text,
                is_current=lambda: self.timer.is_current(generation),
            )
        except _PERIODIC_ERRORS as e:
            logger.warning("periodic_tick_failed", extra={"error": str(e), "kind": type(e).__name__})
            return
        if changed:
            self._publish()

    # --- user actions; errors propagate to the caller ---

    def recognize_once(self) -> EngineSnapshot:
        if not self.timer.try_acquire():
            raise RecognitionBusyError("A recognition is already in progress. Please try again.")
        try:
            epoch, res = self._recognize()
            self.engine.on_recognition_result(res.token, epoch=epoch, combined_text=res.combined_text)
        finally:
            self.timer.release()
        self._publish()
        return self.engine.snapshot()

    def select_language(self, language: str) -> None:
        self.engine.on_target_language_changed(language)
        self._publish()

    def set_context(self, context: str) -> None:
        self.engine.set_context(context)

    def retranslate(self, context: Optional[str] = None) -> EngineSnapshot:
        self.engine.retranslate(context)
        self._publish()
        return self.engine.snapshot()

    def clear(self) -> None:
        self.engine.reset()
        self._publish()

    def speak(self) -> Optional[SpeechResult]:
        """Synthesize the current utterance. Returns None when there is nothing to say."""
        text = self.engine.utterance.strip()
        if not text:
            return None
        if self.speech is None:
            raise RuntimeError("No speech synthesizer configured.")
        return self.speech.synthesize(
            SpeechRequest(text=text, language_code=speech_locale(self.engine.language))
        )
