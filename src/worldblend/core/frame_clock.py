from __future__ import annotations

import threading
from typing import Callable


FrameSource = Callable[[], int]


class FrameCounter:
    """Host frame counter.

    Frame values only ever get compared for equality; nothing does arithmetic on them.
    """

    def __init__(self, start: int = 0) -> None:
        self._lock = threading.RLock()
        self._frame = int(start)

    def current(self) -> int:
        with self._lock:
            return self._frame

    def advance(self, frames: int = 1) -> int:
        if int(frames) < 1:
            raise ValueError("frames must be a positive integer")
        with self._lock:
            self._frame += int(frames)
            return self._frame

    def __call__(self) -> int:
        return self.current()
