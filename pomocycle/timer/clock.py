"""1 Hz tick delivery for the timer session.

A tick source hands out subscriptions.  Each subscription calls its
callback once per interval until ``cancel()`` is called; cancelling is
synchronous and safe to repeat.
"""

from __future__ import annotations

from typing import Callable, Protocol

from PyQt6.QtCore import QObject, QTimer


TICK_INTERVAL_MS = 1000


class TickSubscription(Protocol):
    def cancel(self) -> None: ...


class TickSource(Protocol):
    def subscribe(self, callback: Callable[[], None]) -> TickSubscription: ...


class QtTickSubscription:
    """One running ``QTimer`` feeding a single callback."""

    def __init__(self, timer: QTimer) -> None:
        self._timer: QTimer | None = timer

    @property
    def active(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.deleteLater()
        self._timer = None


class QtTickSource:
    """Tick source backed by Qt's event loop.

    ``QTimer`` fires on the thread that owns it, so ticks are serialized
    with every other call made from the GUI thread.
    """

    def __init__(
        self,
        interval_ms: int = TICK_INTERVAL_MS,
        parent: QObject | None = None,
    ) -> None:
        self._interval_ms = interval_ms
        self._parent = parent

    def subscribe(self, callback: Callable[[], None]) -> QtTickSubscription:
        timer = QTimer(self._parent)
        timer.setInterval(self._interval_ms)
        timer.timeout.connect(callback)
        timer.start()
        return QtTickSubscription(timer)
