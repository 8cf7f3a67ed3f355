"""Key-value store on top of the ``key_values`` table.

Values are stored as JSON text so ints stay ints and floats stay floats
across restarts.  A missing key, or a row whose text no longer decodes,
reads back as the caller's default.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from sqlalchemy.orm import Session as OrmSession

from .db import get_session
from .models import KeyValue


logger = logging.getLogger(__name__)


class KeyValueStore:
    """``get``/``set`` access to persisted values."""

    def get(self, key: str, default: Any = None) -> Any:
        with get_session() as db:
            row = db.get(KeyValue, key)
            raw = row.value if row is not None else None
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Ignoring undecodable value for %r: %r", key, raw)
            return default

    def set(self, key: str, value: Any) -> None:
        self.set_many({key: value})

    def set_many(self, values: Mapping[str, Any]) -> None:
        """Write every pair in one transaction: all rows land or none do."""
        encoded = {key: json.dumps(value) for key, value in values.items()}
        with get_session() as db:
            for key, text in encoded.items():
                self._upsert(db, key, text)

    @staticmethod
    def _upsert(db: OrmSession, key: str, text: str) -> None:
        row = db.get(KeyValue, key)
        if row is None:
            db.add(KeyValue(key=key, value=text))
        else:
            row.value = text
