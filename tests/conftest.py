"""Shared pytest fixtures for Pomocycle tests."""

import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from PyQt6.QtWidgets import QApplication

from pomocycle.database.db import configure_engine, init_db
from pomocycle.database.store import KeyValueStore
from pomocycle.timer.session import TimerSession

from helpers import DictStore, ManualTickSource


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def ticks():
    return ManualTickSource()


@pytest.fixture
def store():
    return DictStore()


@pytest.fixture
def session(qapp, ticks, store):
    """Fresh TimerSession driven by hand, stats in a dict."""
    return TimerSession(parent=None, store=store, tick_source=ticks)


@pytest.fixture
def session_db(qapp, ticks):
    """Fresh TimerSession persisting stats to the in-memory database."""
    return TimerSession(parent=None, store=KeyValueStore(), tick_source=ticks)
