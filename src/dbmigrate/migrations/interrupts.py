"""Cooperative handling of interrupt signals between migrations.

In graceful mode the first SIGINT lets the running migration finish and
stops before the next one; a second SIGINT aborts immediately. In
non-graceful mode Python's default handling applies and the first SIGINT
raises KeyboardInterrupt right away. Either way an interrupted migration
rolls back as a whole.

Example:
    with InterruptGuard(InterruptMode.GRACEFUL) as guard:
        for migration in plan:
            if guard.interrupted:
                break
            executor.apply(driver, migration)
"""

from __future__ import annotations

import signal
import threading
from types import FrameType
from typing import Any

from loguru import logger

from ..core.types import InterruptMode


class InterruptGuard:
    """Context manager tracking interrupt requests for one operation."""

    def __init__(self, mode: InterruptMode, signum: int = signal.SIGINT):
        """Initialize guard.

        Args:
            mode: Interrupt mode captured for this operation.
            signum: Signal to watch.
        """
        self.mode = mode
        self.signum = signum
        self._requested = False
        self._previous: Any = None
        self._installed = False

    @property
    def interrupted(self) -> bool:
        """Whether a stop was requested."""
        return self._requested

    def request_stop(self) -> None:
        """Register a stop request.

        Raises:
            KeyboardInterrupt: On the second request, or on the first in
                non-graceful mode.
        """
        if self._requested or self.mode is InterruptMode.NON_GRACEFUL:
            raise KeyboardInterrupt
        self._requested = True
        logger.warning(
            "Interrupt received, stopping after the current migration "
            "(interrupt again to abort immediately)"
        )

    def _handle(self, signum: int, frame: FrameType | None) -> None:
        self.request_stop()

    def __enter__(self) -> "InterruptGuard":
        # Signal handlers can only be installed from the main thread
        if (
            self.mode is InterruptMode.GRACEFUL
            and threading.current_thread() is threading.main_thread()
        ):
            self._previous = signal.signal(self.signum, self._handle)
            self._installed = True
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._installed:
            # None means the previous handler was not installed from Python
            previous = self._previous if self._previous is not None else signal.SIG_DFL
            signal.signal(self.signum, previous)
            self._installed = False
