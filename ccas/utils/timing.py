"""
EPT (elapsed/perceived time) measurement.
"""
from typing import Callable, Optional
import time


class EptTimer:
    """Measures from construction to a designated success point."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self.started_at = clock()
        self.success_at: Optional[float] = None

    def mark(self) -> int:
        """Record the success point and return the EPT in ms."""
        self.success_at = self._clock()
        return self.elapsed_ms

    @property
    def elapsed_ms(self) -> int:
        end = self.success_at if self.success_at is not None else self._clock()
        return int(round((end - self.started_at) * 1000))
