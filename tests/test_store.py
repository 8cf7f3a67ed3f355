"""Tests for the SQLite-backed key-value store and stats persistence."""

import pytest
from sqlalchemy.exc import OperationalError

from pomocycle.database.db import (
    DB_PATH, DB_URL_ENV, configure_engine, database_url, get_session, init_db,
)
from pomocycle.database.models import KeyValue
from pomocycle.database.store import KeyValueStore
from pomocycle.timer.policy import IntervalKind
from pomocycle.timer.session import (
    TimerSession, Stats,
    COMPLETED_SESSIONS_KEY, TOTAL_TIME_SPENT_KEY,
)

from helpers import ManualTickSource, complete_interval


class TestKeyValueStore:

    def test_missing_key_returns_default(self):
        store = KeyValueStore()
        assert store.get("nope") is None
        assert store.get("nope", 0) == 0

    def test_set_then_get(self):
        store = KeyValueStore()
        store.set("completedSessions", 3)
        assert store.get("completedSessions", 0) == 3

    def test_float_stays_float(self):
        store = KeyValueStore()
        store.set("totalTimeSpent", 1500.0)
        value = store.get("totalTimeSpent", 0.0)
        assert value == 1500.0
        assert isinstance(value, float)

    def test_set_overwrites(self):
        store = KeyValueStore()
        store.set("k", 1)
        store.set("k", 2)
        assert store.get("k") == 2
        with get_session() as db:
            assert db.query(KeyValue).count() == 1

    def test_undecodable_row_returns_default(self):
        with get_session() as db:
            db.add(KeyValue(key="completedSessions", value="{not json"))
        store = KeyValueStore()
        assert store.get("completedSessions", 0) == 0

    def test_values_stored_as_json_text(self):
        KeyValueStore().set("k", {"a": [1, 2]})
        with get_session() as db:
            row = db.get(KeyValue, "k")
            assert row.value == '{"a": [1, 2]}'
            assert row.updated_at is not None


class TestStatsPersistence:

    def test_stats_survive_restart(self, session_db):
        session_db.start()
        complete_interval(session_db)
        complete_interval(session_db)
        complete_interval(session_db)

        restarted = TimerSession(
            store=KeyValueStore(), tick_source=ManualTickSource(),
        )
        assert restarted.stats == Stats(2, 3000.0)
        assert restarted.current_kind == IntervalKind.WORK
        assert restarted.work_sessions_completed == 0

    def test_fresh_database_gives_zero_stats(self, session_db):
        assert session_db.stats == Stats(0, 0.0)

    def test_corrupt_rows_fall_back_to_defaults(self, qapp):
        with get_session() as db:
            db.add(KeyValue(key=COMPLETED_SESSIONS_KEY, value='"many"'))
            db.add(KeyValue(key=TOTAL_TIME_SPENT_KEY, value="garbage"))
        s = TimerSession(store=KeyValueStore(), tick_source=ManualTickSource())
        assert s.stats == Stats(0, 0.0)

    def test_stats_written_through_after_each_work(self, session_db):
        session_db.start()
        complete_interval(session_db)
        store = KeyValueStore()
        assert store.get(COMPLETED_SESSIONS_KEY) == 1
        assert store.get(TOTAL_TIME_SPENT_KEY) == 1500.0


@pytest.fixture
def fail_second_upsert(monkeypatch):
    """Make the second row written in a ``set_many`` batch raise."""
    real_upsert = KeyValueStore._upsert
    calls = []

    def flaky_upsert(db, key, text):
        calls.append(key)
        if len(calls) == 2:
            raise OperationalError("UPDATE key_values", {}, Exception("disk full"))
        real_upsert(db, key, text)

    def arm():
        monkeypatch.setattr(KeyValueStore, "_upsert", staticmethod(flaky_upsert))

    return arm


class TestSetMany:

    def test_writes_every_pair(self):
        store = KeyValueStore()
        store.set_many({COMPLETED_SESSIONS_KEY: 4, TOTAL_TIME_SPENT_KEY: 6000.0})
        assert store.get(COMPLETED_SESSIONS_KEY) == 4
        assert store.get(TOTAL_TIME_SPENT_KEY) == 6000.0

    def test_failure_on_second_row_rolls_back_first(self, fail_second_upsert):
        store = KeyValueStore()
        store.set_many({COMPLETED_SESSIONS_KEY: 2, TOTAL_TIME_SPENT_KEY: 3000.0})

        fail_second_upsert()
        with pytest.raises(OperationalError):
            store.set_many({COMPLETED_SESSIONS_KEY: 3, TOTAL_TIME_SPENT_KEY: 4500.0})

        assert store.get(COMPLETED_SESSIONS_KEY) == 2
        assert store.get(TOTAL_TIME_SPENT_KEY) == 3000.0

    def test_restart_after_failed_write_sees_consistent_pair(
        self, session_db, fail_second_upsert,
    ):
        session_db.start()
        complete_interval(session_db)  # 1 session, 1500 s stored
        complete_interval(session_db)  # break

        fail_second_upsert()
        complete_interval(session_db)
        assert session_db.stats == Stats(2, 3000.0)

        restarted = TimerSession(
            store=KeyValueStore(), tick_source=ManualTickSource(),
        )
        assert restarted.stats == Stats(1, 1500.0)


class TestDatabaseUrl:

    def test_defaults_to_file_in_app_dir(self, monkeypatch):
        monkeypatch.delenv(DB_URL_ENV, raising=False)
        assert database_url() == f"sqlite:///{DB_PATH}"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv(DB_URL_ENV, "sqlite:///:memory:")
        assert database_url() == "sqlite:///:memory:"

    def test_configure_engine_creates_parent_dir(self, tmp_path):
        db_file = tmp_path / "nested" / "stats.db"
        configure_engine(f"sqlite:///{db_file}")
        init_db()
        KeyValueStore().set(COMPLETED_SESSIONS_KEY, 1)
        assert db_file.exists()
