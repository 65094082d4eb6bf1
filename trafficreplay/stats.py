"""Running latest/mean/max/count statistic with periodic reporting."""

from __future__ import annotations

import threading
from typing import Callable, Optional

__all__ = ["GorStat"]


def _div_trunc(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


class GorStat:
    """Tracks latest, mean, max and count of written values over a period."""

    def __init__(self, name: str, rate_ms: int, enabled: bool = True) -> None:
        self.name = name
        self.rate_ms = rate_ms
        self.enabled = enabled
        self.latest = 0
        self.mean = 0
        self.maximum = 0
        self.count = 0
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def write(self, latest: int) -> None:
        """Record a value; zero values count but do not move the mean."""
        if not self.enabled:
            return
        with self._lock:
            if latest > self.maximum:
                self.maximum = latest
            if latest != 0:
                self.mean = _div_trunc(self.mean * self.count + latest, self.count + 1)
            self.latest = latest
            self.count += 1

    def reset(self) -> None:
        """Clear all counters."""
        with self._lock:
            self.latest = 0
            self.maximum = 0
            self.mean = 0
            self.count = 0

    def __str__(self) -> str:
        with self._lock:
            per_second = _div_trunc(self.count, _div_trunc(self.rate_ms, 1000))
            values = (self.latest, self.mean, self.maximum, self.count, per_second,
                      threading.active_count())
        return f"{self.name}:" + ",".join(str(v) for v in values)

    def start_reporting(self, emit: Callable[[str], None]) -> None:
        """Emit a header, then the stat every ``rate_ms``, resetting after each."""
        if self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._report, args=(emit,), daemon=True)
        self._thread.start()

    def _report(self, emit: Callable[[str], None]) -> None:
        emit(f"{self.name}:latest,mean,max,count,count/second,gcount")
        while not self._stop.is_set():
            emit(str(self))
            self.reset()
            self._stop.wait(self.rate_ms / 1000)

    def stop(self) -> None:
        """Stop periodic reporting and wait for it to finish."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None