"""群組 ID 產生器。"""

from __future__ import annotations

import itertools
import threading


class GroupIdGenerator:
    """Monotonic cluster ids: ``similar-0001``, ``similar-0002``, ..."""

    def __init__(self, prefix: str, start: int = 1, width: int = 4) -> None:
        self.prefix = prefix
        self.width = width
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            value = next(self._counter)
        return f"{self.prefix}-{value:0{self.width}d}"
