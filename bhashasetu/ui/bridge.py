from __future__ import annotations

import queue
from dataclasses import dataclass
from typing import Optional, Union

from bhashasetu.live.engine import EngineSnapshot


@dataclass(frozen=True)
class Notice:
    """User-visible, non-fatal notification (the desktop equivalent of a toast)."""
    title: str
    message: str
    level: str = "info"  # info | warning


BusItem = Union[EngineSnapshot, Notice]


class UpdateBus:
    """
    Thread-safe handoff from worker threads -> UI thread.
    Workers push snapshots and notices. UI polls (non-blocking).
    """
    def __init__(self, maxsize: int = 100):
        self.q: "queue.Queue[BusItem]" = queue.Queue(maxsize=maxsize)

    def push(self, item: BusItem) -> None:
        try:
            self.q.put_nowait(item)
        except queue.Full:
            # drop oldest to keep UI responsive
            try:
                _ = self.q.get_nowait()
            except queue.Empty:
                return
            try:
                self.q.put_nowait(item)
            except queue.Full:
                return

    def pop(self) -> Optional[BusItem]:
        try:
            return self.q.get_nowait()
        except queue.Empty:
            return None
