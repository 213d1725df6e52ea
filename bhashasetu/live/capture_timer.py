from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)

Dispatch = Callable[[Callable[[], None]], None]


@dataclass
class RecognitionLoopState:
    running: bool = False
    in_flight: bool = False
    generation: int = 0
    ticks: int = 0
    skipped: int = 0


def dispatch_on_thread(job: Callable[[], None]) -> None:
    threading.Thread(target=job, name="bhashasetu-recognition", daemon=True).start()


class CaptureTimer:
    """
    Fire `on_tick(generation)` roughly every interval while running.

    A tick that arrives while the previous job is still in flight is skipped,
    never queued. start() and stop() bump the generation, so a job can ask
    is_current(generation) before applying its result.
    """

    def __init__(
        self,
        on_tick: Callable[[int], None],
        *,
        interval_ms: int = 1500,
        dispatch: Optional[Dispatch] = None,
    ) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be > 0")
        self.on_tick = on_tick
        self.interval_ms = int(interval_ms)
        self.dispatch = dispatch or dispatch_on_thread
        self.state = RecognitionLoopState()
        self._lock = threading.Lock()
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self.state.running

    @property
    def in_flight(self) -> bool:
        return self.state.in_flight

    def is_current(self, generation: int) -> bool:
        with self._lock:
            return self.state.running and generation == self.state.generation

    def start(self, interval_ms: Optional[int] = None) -> int:
        if interval_ms is not None:
            if interval_ms <= 0:
                raise ValueError("interval_ms must be > 0")
            self.interval_ms = int(interval_ms)
        self.stop()
        with self._lock:
            self.state.generation += 1
            self.state.running = True
            generation = self.state.generation
            stop_event = threading.Event()
            self._stop_event = stop_event
            self._thread = threading.Thread(
                target=lambda: self._loop(stop_event, self.interval_ms / 1000.0),
                name="bhashasetu-capture-timer",
                daemon=True,
            )
            self._thread.start()
        logger.info("capture_started", extra={"generation": generation, "interval_ms": self.interval_ms})
        return generation

    def stop(self) -> None:
        with self._lock:
            if not self.state.running:
                return
            self.state.running = False
            self.state.generation += 1
            if self._stop_event is not None:
                self._stop_event.set()
            self._stop_event = None
            self._thread = None
            generation = self.state.generation
            in_flight = self.state.in_flight
        logger.info("capture_stopped", extra={"generation": generation, "in_flight": in_flight})

    def _loop(self, stop_event: threading.Event, interval_sec: float) -> None:
        while not stop_event.wait(interval_sec):
            self.tick()

    def try_acquire(self) -> bool:
        """Claim the single recognition slot for a manual job. False when a job is already in flight."""
        with self._lock:
            if self.state.in_flight:
                self.state.skipped += 1
                return False
            self.state.in_flight = True
            return True

    def release(self) -> None:
        with self._lock:
            self.state.in_flight = False

    def tick(self) -> bool:
        """Dispatch one job unless stopped or a job is in flight. Returns True if dispatched."""
        with self._lock:
            if not self.state.running:
                return False
            if self.state.in_flight:
                self.state.skipped += 1
                skipped = True
            else:
                skipped = False
                self.state.in_flight = True
                self.state.ticks += 1
                generation = self.state.generation
        if skipped:
            logger.debug("tick_skipped_in_flight")
            return False

        try:
            self.dispatch(lambda: self._run(generation))
        except Exception:
            self.release()
            raise
        return True

    def _run(self, generation: int) -> None:
        try:
            self.on_tick(generation)
        except Exception:
            logger.exception("tick_failed", extra={"generation": generation})
        finally:
            self.release()
