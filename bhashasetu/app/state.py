from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RuntimeState(str, Enum):
    STOPPED = "stopped"
    STARTING = "starting"
    RUNNING = "running"
    ERROR = "error"


@dataclass
class RuntimeStateTracker:
    """Camera lifecycle as shown in the window; conversation state lives in the engine."""

    state: RuntimeState = RuntimeState.STOPPED
    last_error: str | None = None

    @property
    def active(self) -> bool:
        return self.state in (RuntimeState.STARTING, RuntimeState.RUNNING)

    def set_starting(self) -> None:
        self.state = RuntimeState.STARTING
        self.last_error = None

    def set_running(self) -> None:
        if self.state == RuntimeState.STARTING:
            self.state = RuntimeState.RUNNING

    def set_stopped(self) -> None:
        self.state = RuntimeState.STOPPED

    def set_error(self, detail: str) -> None:
        self.state = RuntimeState.ERROR
        self.last_error = detail
