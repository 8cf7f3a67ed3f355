"""Interval rules for Pomocycle.

Every interval has a fixed length and none of them can be configured:

    WORK          25 min
    SHORT_BREAK    5 min
    LONG_BREAK    15 min

After a work interval the next break is chosen from the number of work
intervals completed so far: every fourth one earns a long break.
"""

from __future__ import annotations

from enum import Enum


class IntervalKind(Enum):
    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"


# ── constants ─────────────────────────────────────────────────────────────

DURATIONS: dict[IntervalKind, int] = {
    IntervalKind.WORK: 25 * 60,
    IntervalKind.SHORT_BREAK: 5 * 60,
    IntervalKind.LONG_BREAK: 15 * 60,
}

LONG_BREAK_EVERY = 4


def duration_of(kind: IntervalKind) -> int:
    """Length of *kind* in seconds."""
    return DURATIONS[kind]


def next_break_kind(work_sessions_completed: int) -> IntervalKind:
    """Break that follows the *work_sessions_completed*-th work interval.

    The count is 1-based from the caller's side (it is bumped before the
    lookup), so 4, 8, 12, … give a long break.
    """
    if work_sessions_completed % LONG_BREAK_EVERY == 0:
        return IntervalKind.LONG_BREAK
    return IntervalKind.SHORT_BREAK


def format_remaining(seconds: float) -> str:
    """Render *seconds* as zero-padded ``MM:SS``."""
    total = max(0, int(seconds))
    minutes, secs = divmod(total, 60)
    return f"{minutes:02d}:{secs:02d}"
