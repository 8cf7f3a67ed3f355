"""Main timer display widget.

Layout (top → bottom):
    - Interval label (FOCUS / SHORT BREAK / LONG BREAK)
    - Remaining time, MM:SS
    - Status line
    - Start/Pause + Reset buttons
    - Lifetime stats line
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QFrame, QMessageBox,
)

from ..timer.policy import IntervalKind
from ..timer.session import TimerSession, RunStatus, Stats


KIND_LABELS: dict[IntervalKind, str] = {
    IntervalKind.WORK:        "FOCUS",
    IntervalKind.SHORT_BREAK: "SHORT BREAK",
    IntervalKind.LONG_BREAK:  "LONG BREAK",
}

STATUS_LABELS: dict[RunStatus, str] = {
    RunStatus.RUNNING: "Running",
    RunStatus.PAUSED:  "Paused",
    RunStatus.STOPPED: "Stopped",
}


def _format_focus_time(total_seconds: float) -> str:
    """5400 → '1h 30m', 0 → '0m', 1500 → '25m'."""
    total_minutes = int(total_seconds) // 60
    if total_minutes <= 0:
        return "0m"
    hours, mins = divmod(total_minutes, 60)
    if hours == 0:
        return f"{mins}m"
    return f"{hours}h {mins}m"


def _format_stats(stats: Stats) -> str:
    noun = "session" if stats.completed_sessions == 1 else "sessions"
    return (
        f"{stats.completed_sessions} {noun} · "
        f"{_format_focus_time(stats.total_time_spent)} focused"
    )


class TimerWidget(QWidget):
    """The timer card: shows the session and drives its controls."""

    def __init__(
        self,
        session: TimerSession,
        parent: QWidget | None = None,
        *,
        confirm_reset: bool = True,
    ) -> None:
        super().__init__(parent)
        self._session = session
        self.confirm_reset = confirm_reset
        self._build_ui()
        self._connect_signals()
        self._on_kind_changed(session.current_kind)
        self._on_status_changed(session.status)
        self._on_stats_changed(session.stats)
        self._refresh_display()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 20, 24, 20)
        layout.setSpacing(8)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._kind_label = QLabel(card)
        self._kind_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._kind_label.setStyleSheet("font-size: 14px; letter-spacing: 2px;")
        layout.addWidget(self._kind_label)

        self._time_label = QLabel(card)
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._time_label.setStyleSheet("font-size: 56px; font-weight: 600;")
        layout.addWidget(self._time_label)

        self._status_label = QLabel(card)
        self._status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._status_label)

        # ── controls ─────────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")

        self._reset_btn = QPushButton("Reset", card)
        self._reset_btn.setObjectName("dangerButton")

        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._reset_btn)
        layout.addLayout(btn_row)

        self._stats_label = QLabel(card)
        self._stats_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._stats_label)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self._on_start_pause)
        self._reset_btn.clicked.connect(self._on_reset)

        self._session.tick.connect(self._refresh_display)
        self._session.status_changed.connect(self._on_status_changed)
        self._session.kind_changed.connect(self._on_kind_changed)
        self._session.stats_changed.connect(self._on_stats_changed)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_start_pause(self) -> None:
        if self._session.is_running:
            self._session.pause()
        else:
            self._session.start()

    def _on_reset(self) -> None:
        if self.confirm_reset and not self._ask_reset():
            return
        self._session.reset()

    def _ask_reset(self) -> bool:
        reply = QMessageBox.question(
            self,
            "Reset timer?",
            "This stops the timer and goes back to a fresh focus interval. "
            "Your stats are kept.",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        return reply == QMessageBox.StandardButton.Yes

    def _on_status_changed(self, status: RunStatus) -> None:
        if status == RunStatus.RUNNING:
            self._start_pause_btn.setText("Pause")
        elif status == RunStatus.PAUSED:
            self._start_pause_btn.setText("Resume")
        else:
            self._start_pause_btn.setText("Start")
        self._reset_btn.setEnabled(status != RunStatus.STOPPED)
        self._status_label.setText(STATUS_LABELS[status])

    def _on_kind_changed(self, kind: IntervalKind) -> None:
        self._kind_label.setText(KIND_LABELS[kind])

    def _on_stats_changed(self, stats: Stats) -> None:
        self._stats_label.setText(_format_stats(stats))

    def _refresh_display(self, *_args) -> None:
        self._time_label.setText(self._session.format_remaining())
