"""
Round Scheduler - Runs delayed room transitions as Socket.IO background tasks.

Callbacks are never cancelled. Whatever they trigger must re-check the room
state when they fire, so a stale timer is harmless.
"""

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)


class RoundScheduler:
    """Schedules callbacks on the Socket.IO async backend."""

    def __init__(self, socketio):
        self.socketio = socketio
        self.running = True

    def schedule(self, delay_seconds: float, callback: Callable[..., Any], *args) -> None:
        """Call ``callback(*args)`` once, ``delay_seconds`` from now."""
        if not self.running:
            logger.debug(f"Scheduler stopped, dropping {callback.__name__}")
            return
        self.socketio.start_background_task(self._worker, delay_seconds, callback, *args)
        logger.debug(f"[timer-set] {callback.__name__}{args} in {delay_seconds}s")

    def _worker(self, delay_seconds: float, callback: Callable[..., Any], *args) -> None:
        self.socketio.sleep(delay_seconds)
        if not self.running:
            return
        logger.debug(f"[timer-fire] {callback.__name__}{args}")
        try:
            callback(*args)
        except Exception:
            logger.exception(f"Error in scheduled callback {callback.__name__}{args}")

    def stop(self) -> None:
        """Stop firing callbacks; pending sleeps finish as no-ops."""
        self.running = False
        logger.info("RoundScheduler stopped")
