"""Timer session state machine for Pomocycle.

Statuses
--------
STOPPED   Not counting; shows a full work interval.
RUNNING   Counting down the current interval, one tick per second.
PAUSED    Frozen mid-interval; ``start()`` picks up where it left off.

Transitions
-----------
STOPPED → RUNNING                 (start, loads a fresh interval)
PAUSED  → RUNNING                 (start, keeps the remaining time)
RUNNING → PAUSED                  (pause)
Any     → STOPPED                 (reset, back to WORK)
RUNNING → RUNNING, next interval  (countdown reaches 0)

There is no terminal state: WORK and breaks alternate until the user
pauses or resets.  Only completed WORK intervals count towards the
lifetime stats, which are written back to the key-value store after each
one.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Protocol

from PyQt6.QtCore import QObject, pyqtSignal

from .clock import QtTickSource, TickSource, TickSubscription
from .policy import (
    IntervalKind,
    duration_of,
    format_remaining,
    next_break_kind,
)


logger = logging.getLogger(__name__)


# ── enums / records ───────────────────────────────────────────────────────


class RunStatus(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"


@dataclass(frozen=True)
class Stats:
    """Lifetime counters.  Only ever grow."""

    completed_sessions: int = 0
    total_time_spent: float = 0.0  # seconds


class StatsStore(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...


# ── store keys ────────────────────────────────────────────────────────────

COMPLETED_SESSIONS_KEY = "completedSessions"
TOTAL_TIME_SPENT_KEY = "totalTimeSpent"


def _coerce_count(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        count = int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return count if count >= 0 else 0


def _coerce_seconds(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(seconds) or seconds < 0:
        return 0.0
    return seconds


# ── session ───────────────────────────────────────────────────────────────


class TimerSession(QObject):
    """Pomodoro countdown with automatic work/break cycling.

    Signals
    -------
    tick(remaining_seconds: int)
        Emitted whenever the countdown value changes.
    status_changed(status: RunStatus)
        Emitted on every status change.
    kind_changed(kind: IntervalKind)
        Emitted when the current interval kind changes.
    stats_changed(stats: Stats)
        Emitted after a completed work interval updates the stats.
    interval_completed(data: dict)
        Emitted after an interval runs out.  Keys: ``kind``,
        ``duration_seconds``, ``work_sessions_completed``, ``next_kind``.
    """

    tick = pyqtSignal(int)
    status_changed = pyqtSignal(object)
    kind_changed = pyqtSignal(object)
    stats_changed = pyqtSignal(object)
    interval_completed = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        store: StatsStore | None = None,
        tick_source: TickSource | None = None,
    ) -> None:
        super().__init__(parent)

        # ── collaborators ─────────────────────────────────────────────
        self._store = store
        self._tick_source: TickSource = (
            tick_source if tick_source is not None else QtTickSource(parent=self)
        )
        self._subscription: TickSubscription | None = None

        # ── interval state ────────────────────────────────────────────
        self._kind: IntervalKind = IntervalKind.WORK
        self._status: RunStatus = RunStatus.STOPPED
        self._remaining: int = duration_of(IntervalKind.WORK)
        self._work_sessions_completed: int = 0  # decides short vs long break

        # ── lifetime stats ────────────────────────────────────────────
        self._stats: Stats = self._load_stats()

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def current_kind(self) -> IntervalKind:
        return self._kind

    @property
    def status(self) -> RunStatus:
        return self._status

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @property
    def work_sessions_completed(self) -> int:
        """Work intervals finished in this process (not persisted)."""
        return self._work_sessions_completed

    @property
    def stats(self) -> Stats:
        return self._stats

    @property
    def is_running(self) -> bool:
        return self._status == RunStatus.RUNNING

    @property
    def timer_string(self) -> str:
        return self.format_remaining()

    def format_remaining(self) -> str:
        """Remaining time as ``MM:SS``."""
        return format_remaining(self._remaining)

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Run the current interval.  No-op while already running."""
        if self._status == RunStatus.RUNNING:
            return
        if self._status == RunStatus.STOPPED:
            self._remaining = duration_of(self._kind)
            self.tick.emit(self._remaining)

        self._cancel_subscription()
        self._set_status(RunStatus.RUNNING)
        self._subscription = self._tick_source.subscribe(self.on_tick)
        logger.debug("Started %s with %ss left", self._kind.value, self._remaining)

    def pause(self) -> None:
        """Freeze the countdown.  Safe to call when not running."""
        if self._status != RunStatus.RUNNING:
            return
        self._cancel_subscription()
        self._set_status(RunStatus.PAUSED)
        logger.debug("Paused %s with %ss left", self._kind.value, self._remaining)

    def reset(self) -> None:
        """Stop and go back to a full WORK interval.  Stats are kept."""
        self._cancel_subscription()
        self._set_kind(IntervalKind.WORK)
        self._remaining = duration_of(IntervalKind.WORK)
        self.tick.emit(self._remaining)
        self._set_status(RunStatus.STOPPED)
        logger.debug("Reset to %s", IntervalKind.WORK.value)

    def on_tick(self) -> None:
        """Consume one elapsed second.  Ignored unless running."""
        if self._status != RunStatus.RUNNING:
            return
        self._remaining -= 1
        if self._remaining <= 0:
            self._expire()
            return
        self.tick.emit(self._remaining)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: state machine
    # ══════════════════════════════════════════════════════════════════

    def _expire(self) -> None:
        completed = self._kind
        duration = duration_of(completed)

        if completed == IntervalKind.WORK:
            self._stats = replace(
                self._stats,
                completed_sessions=self._stats.completed_sessions + 1,
                total_time_spent=self._stats.total_time_spent + duration,
            )
            self._persist_stats()
            self.stats_changed.emit(self._stats)
            self._work_sessions_completed += 1
            next_kind = next_break_kind(self._work_sessions_completed)
        else:
            next_kind = IntervalKind.WORK

        logger.info(
            "Completed %s interval; next is %s",
            completed.value, next_kind.value,
        )

        # Roll straight into the next interval; status stays RUNNING.
        self._set_kind(next_kind)
        self._remaining = duration_of(next_kind)
        self.tick.emit(self._remaining)

        self.interval_completed.emit({
            "kind": completed,
            "duration_seconds": duration,
            "work_sessions_completed": self._work_sessions_completed,
            "next_kind": next_kind,
        })

    def _set_status(self, status: RunStatus) -> None:
        self._status = status
        self.status_changed.emit(status)

    def _set_kind(self, kind: IntervalKind) -> None:
        if kind == self._kind:
            return
        self._kind = kind
        self.kind_changed.emit(kind)

    def _cancel_subscription(self) -> None:
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: stats persistence
    # ══════════════════════════════════════════════════════════════════

    def _load_stats(self) -> Stats:
        if self._store is None:
            return Stats()
        try:
            completed = self._store.get(COMPLETED_SESSIONS_KEY, 0)
            total = self._store.get(TOTAL_TIME_SPENT_KEY, 0.0)
        except Exception:
            logger.warning("Could not read stats; starting from zero", exc_info=True)
            return Stats()

        stats = Stats(
            completed_sessions=_coerce_count(completed),
            total_time_spent=_coerce_seconds(total),
        )
        logger.debug(
            "Loaded stats: %d sessions, %.0fs",
            stats.completed_sessions, stats.total_time_spent,
        )
        return stats

    def _persist_stats(self) -> None:
        # The in-memory stats stay authoritative when the write fails.
        if self._store is None:
            return
        values = {
            COMPLETED_SESSIONS_KEY: self._stats.completed_sessions,
            TOTAL_TIME_SPENT_KEY: self._stats.total_time_spent,
        }
        try:
            set_many = getattr(self._store, "set_many", None)
            if set_many is not None:
                # Both counters commit together or not at all.
                set_many(values)
            else:
                for key, value in values.items():
                    self._store.set(key, value)
        except Exception:
            logger.warning("Could not save stats", exc_info=True)
