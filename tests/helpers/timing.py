"""
Deterministic time control for tests.
Replaces the round scheduler and the monotonic clock so tests decide when
timers fire and how much time has passed.
"""

from typing import Any, Callable, List, Tuple


class FakeClock:
    """Callable clock whose time only moves when the test says so."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ManualScheduler:
    """Drop-in replacement for RoundScheduler that holds callbacks until fired."""

    def __init__(self):
        self.pending: List[Tuple[float, Callable[..., Any], tuple]] = []

    def schedule(self, delay_seconds: float, callback: Callable[..., Any], *args) -> None:
        self.pending.append((delay_seconds, callback, args))

    def stop(self) -> None:
        self.pending.clear()

    @property
    def pending_actions(self) -> List[str]:
        """Transition names of pending callbacks, in scheduling order."""
        return [args[-1].action for _, _, args in self.pending]

    def fire_next(self) -> None:
        """Fire the oldest pending callback."""
        _, callback, args = self.pending.pop(0)
        callback(*args)

    def fire_all(self) -> int:
        """Fire every callback pending right now; ones they schedule stay pending."""
        batch, self.pending = self.pending, []
        for _, callback, args in batch:
            callback(*args)
        return len(batch)
