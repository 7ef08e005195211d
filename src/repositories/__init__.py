"""Database repository helpers."""

from repositories.activity import ActivityEntry, ActivityFeed, ObservedRecordStore, observed_store_factory
from repositories.store import RecordStore, SqlAlchemyRecordStore

__all__ = [
    "ActivityEntry",
    "ActivityFeed",
    "ObservedRecordStore",
    "RecordStore",
    "SqlAlchemyRecordStore",
    "observed_store_factory",
]
