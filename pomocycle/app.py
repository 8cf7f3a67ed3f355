"""Main application window for Pomocycle."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import QMainWindow

from .database.store import KeyValueStore
from .settings import Settings, load_settings, save_settings
from .timer.session import TimerSession, RunStatus, StatsStore
from .ui.timer_widget import TimerWidget


logger = logging.getLogger(__name__)


class PomocycleApp(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        settings: Settings | None = None,
        store: StatsStore | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Pomocycle")
        self.setMinimumSize(300, 240)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings if settings is not None else load_settings()
        self.resize(self._settings.window_width, self._settings.window_height)
        if self._settings.window_x is not None and self._settings.window_y is not None:
            self.move(self._settings.window_x, self._settings.window_y)

        self._geometry_save_timer = QTimer(self)
        self._geometry_save_timer.setSingleShot(True)
        self._geometry_save_timer.setInterval(500)
        self._geometry_save_timer.timeout.connect(self._save_geometry)

        # ── session ───────────────────────────────────────────────────
        self._session = TimerSession(
            self, store=store if store is not None else KeyValueStore(),
        )
        self._session.interval_completed.connect(self._on_interval_completed)

        self._timer_widget = TimerWidget(
            self._session, self, confirm_reset=self._settings.confirm_reset,
        )
        self.setCentralWidget(self._timer_widget)

        self._build_menu()
        if self._settings.always_on_top:
            self._apply_always_on_top(True)

    @property
    def session(self) -> TimerSession:
        return self._session

    # ══════════════════════════════════════════════════════════════════
    #  MENU
    # ══════════════════════════════════════════════════════════════════

    def _build_menu(self) -> None:
        view_menu = self.menuBar().addMenu("View")
        self._aot_action = QAction("Always on Top", self)
        self._aot_action.setCheckable(True)
        self._aot_action.setChecked(self._settings.always_on_top)
        self._aot_action.triggered.connect(self._toggle_always_on_top)
        view_menu.addAction(self._aot_action)

    def _toggle_always_on_top(self) -> None:
        new_val = not self._settings.always_on_top
        self._settings.always_on_top = new_val
        save_settings(self._settings)
        self._aot_action.setChecked(new_val)
        self._apply_always_on_top(new_val)

    def _apply_always_on_top(self, on_top: bool) -> None:
        flags = self.windowFlags()
        if on_top:
            flags |= Qt.WindowType.WindowStaysOnTopHint
        else:
            flags &= ~Qt.WindowType.WindowStaysOnTopHint
        self.setWindowFlags(flags)
        self.show()  # setWindowFlags hides the window

    # ══════════════════════════════════════════════════════════════════
    #  SESSION EVENTS
    # ══════════════════════════════════════════════════════════════════

    def _on_interval_completed(self, data: dict) -> None:
        stats = self._session.stats
        self.statusBar().showMessage(
            f"{data['kind'].value.replace('_', ' ').title()} done "
            f"· {stats.completed_sessions} total",
            5000,
        )

    # ══════════════════════════════════════════════════════════════════
    #  KEYBOARD SHORTCUTS
    # ══════════════════════════════════════════════════════════════════

    def _on_space(self) -> None:
        """Start, pause, or resume the timer."""
        if self._session.is_running:
            self._session.pause()
        else:
            self._session.start()

    def _on_escape(self) -> None:
        """Reset the timer (no-op when stopped)."""
        if self._session.status != RunStatus.STOPPED:
            self._session.reset()

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def _save_geometry(self) -> None:
        """Persist current window geometry to settings."""
        if not self.isVisible():
            return
        pos = self.pos()
        size = self.size()
        self._settings.window_x = pos.x()
        self._settings.window_y = pos.y()
        self._settings.window_width = size.width()
        self._settings.window_height = size.height()
        try:
            save_settings(self._settings)
        except OSError:
            logger.warning("Could not save window geometry", exc_info=True)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._save_geometry()
        self._session.pause()
        event.accept()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._geometry_save_timer.start()

    def moveEvent(self, event) -> None:  # type: ignore[override]
        super().moveEvent(event)
        self._geometry_save_timer.start()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Handle Space (start/pause) and Escape (reset) globally."""
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            self._on_space()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._on_escape()
            event.accept()
            return
        super().keyPressEvent(event)
