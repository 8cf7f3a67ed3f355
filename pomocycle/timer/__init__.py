"""Timer package."""

from .clock import QtTickSource, TickSource, TickSubscription, TICK_INTERVAL_MS
from .policy import (
    IntervalKind,
    DURATIONS,
    LONG_BREAK_EVERY,
    duration_of,
    next_break_kind,
    format_remaining,
)
from .session import (
    TimerSession,
    RunStatus,
    Stats,
    StatsStore,
    COMPLETED_SESSIONS_KEY,
    TOTAL_TIME_SPENT_KEY,
)

__all__ = [
    "QtTickSource",
    "TickSource",
    "TickSubscription",
    "TICK_INTERVAL_MS",
    "IntervalKind",
    "DURATIONS",
    "LONG_BREAK_EVERY",
    "duration_of",
    "next_break_kind",
    "format_remaining",
    "TimerSession",
    "RunStatus",
    "Stats",
    "StatsStore",
    "COMPLETED_SESSIONS_KEY",
    "TOTAL_TIME_SPENT_KEY",
]
