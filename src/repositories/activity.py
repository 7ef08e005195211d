"""Activity feed fed by a RecordStore decorator."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.orm import Session

from repositories.store import Filters, RecordStore, SqlAlchemyRecordStore, table_name

logger = logging.getLogger(__name__)

DEFAULT_FEED_SIZE = 100


@dataclass(frozen=True)
class ActivityEntry:
    timestamp: datetime
    source: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)


class ActivityFeed:
    """Bounded, newest-first log of recent store and job activity."""

    def __init__(self, max_entries: int = DEFAULT_FEED_SIZE) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be greater than 0")
        self._entries: deque[ActivityEntry] = deque(maxlen=max_entries)

    def record(self, source: str, message: str, **details: Any) -> ActivityEntry:
        entry = ActivityEntry(
            timestamp=datetime.now(UTC).replace(tzinfo=None),
            source=source,
            message=message,
            details=details,
        )
        self._entries.append(entry)
        logger.debug("%s: %s", source, message)
        return entry

    def recent(self, limit: int | None = None) -> list[ActivityEntry]:
        entries = list(reversed(self._entries))
        return entries if limit is None else entries[:limit]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class ObservedRecordStore:
    """Records every call to the wrapped store in an ActivityFeed, then delegates."""

    source = "store"

    def __init__(self, inner: RecordStore, feed: ActivityFeed) -> None:
        self.inner = inner
        self.feed = feed

    @contextmanager
    def transaction(self) -> Iterator[ObservedRecordStore]:
        with self.inner.transaction():
            yield self

    def query(self, model: type[Any], filters: Filters | None = None) -> list[Any]:
        self._observe("SELECT from", model, filters=dict(filters or {}))
        return self.inner.query(model, filters)

    def get(self, model: type[Any], row_id: int) -> Any | None:
        self._observe("SELECT from", model, id=row_id)
        return self.inner.get(model, row_id)

    def count(self, model: type[Any], filters: Filters | None = None) -> int:
        self._observe("COUNT from", model, filters=dict(filters or {}))
        return self.inner.count(model, filters)

    def insert(self, model: type[Any], values: Mapping[str, Any]) -> Any:
        self._observe("INSERT into", model)
        return self.inner.insert(model, values)

    def update(self, model: type[Any], row_id: int, values: Mapping[str, Any]) -> Any | None:
        self._observe("UPDATE", model, id=row_id)
        return self.inner.update(model, row_id, values)

    def upsert(
        self,
        model: type[Any],
        values: Mapping[str, Any],
        conflict_key: Sequence[str],
    ) -> Any:
        self._observe("UPSERT into", model, key={column: values.get(column) for column in conflict_key})
        return self.inner.upsert(model, values, conflict_key)

    def delete(self, model: type[Any], row_id: int) -> bool:
        self._observe("DELETE from", model, id=row_id)
        return self.inner.delete(model, row_id)

    def _observe(self, operation: str, model: type[Any], **details: Any) -> None:
        self.feed.record(self.source, f"{operation} {table_name(model)}", **details)


def observed_store_factory(feed: ActivityFeed) -> Callable[[Session], RecordStore]:
    """Store factory whose stores report into ``feed``."""

    def factory(session: Session) -> RecordStore:
        return ObservedRecordStore(SqlAlchemyRecordStore(session), feed)

    return factory


__all__ = [
    "ActivityEntry",
    "ActivityFeed",
    "DEFAULT_FEED_SIZE",
    "ObservedRecordStore",
    "observed_store_factory",
]
