"""Rate limiting wrapper for input and output plugins."""

from __future__ import annotations

import random
import time
from typing import Any, Callable, Optional

__all__ = ["parse_limit_options", "Limiter"]

_SECOND_NS = 1_000_000_000


def _atoi(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def parse_limit_options(options: str) -> tuple[int, bool]:
    """Parse ``"N"`` (requests per second) or ``"N%"`` into ``(limit, is_percent)``."""
    pos = options.find("%")
    if pos > 0:
        return _atoi(options[:pos]), True
    return _atoi(options), False


class Limiter:
    """Drops messages passing through ``plugin`` beyond a rate or percentage.

    Plugins exposing a ``speed_factor`` attribute pace themselves: a percentage
    limit sets their speed instead of dropping messages.
    """

    def __init__(
        self,
        plugin: Any,
        options: str,
        clock: Callable[[], int] = time.monotonic_ns,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.plugin = plugin
        self.limit, self.is_percent = parse_limit_options(options)
        self._clock = clock
        self._rng = rng if rng is not None else random.Random()
        self._current_rps = 0
        self._current_time = clock()
        if self._self_paced():
            plugin.speed_factor = self.limit / 100

    def _self_paced(self) -> bool:
        return self.is_percent and hasattr(self.plugin, "speed_factor")

    def is_limited(self) -> bool:
        """Decide whether the next message is dropped, counting it if not."""
        if self._self_paced():
            return False
        if self.is_percent:
            return self.limit <= self._rng.randrange(100)

        now = self._clock()
        if now - self._current_time > _SECOND_NS:
            self._current_time = now
            self._current_rps = 0
        if self._current_rps >= self.limit:
            return True
        self._current_rps += 1
        return False

    def plugin_write(self, msg: Any) -> int:
        """Forward ``msg`` to the plugin unless limited; returns bytes written."""
        if self.is_limited():
            return 0
        write = getattr(self.plugin, "plugin_write", None)
        if write is None:
            raise BrokenPipeError(f"{self.plugin} does not accept writes")
        return write(msg)

    def plugin_read(self) -> Any:
        """Read from the plugin; returns None when the message is dropped."""
        read = getattr(self.plugin, "plugin_read", None)
        if read is None:
            raise BrokenPipeError(f"{self.plugin} does not support reads")
        msg = read()
        if self.is_limited():
            return None
        return msg

    def close(self) -> None:
        """Close the wrapped plugin if it can be closed."""
        close = getattr(self.plugin, "close", None)
        if close is not None:
            close()

    def __str__(self) -> str:
        return (
            f"Limiting {self.plugin} to: {self.limit} "
            f"(isPercent: {str(self.is_percent).lower()})"
        )