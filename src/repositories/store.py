"""Keyed record access over SQLAlchemy ORM sessions."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from contextlib import AbstractContextManager, contextmanager
from typing import Any, Protocol, runtime_checkable

from sqlalchemy import func, inspect, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from domain.errors import RecordConflictError, StoreUnavailableError

Filters = Mapping[str, Any]


@runtime_checkable
class RecordStore(Protocol):
    """Contract consumed by the aggregator and the match ledger."""

    def transaction(self) -> AbstractContextManager[RecordStore]: ...

    def query(self, model: type[Any], filters: Filters | None = None) -> list[Any]: ...

    def get(self, model: type[Any], row_id: int) -> Any | None: ...

    def count(self, model: type[Any], filters: Filters | None = None) -> int: ...

    def insert(self, model: type[Any], values: Mapping[str, Any]) -> Any: ...

    def update(self, model: type[Any], row_id: int, values: Mapping[str, Any]) -> Any | None: ...

    def upsert(
        self,
        model: type[Any],
        values: Mapping[str, Any],
        conflict_key: Sequence[str],
    ) -> Any: ...

    def delete(self, model: type[Any], row_id: int) -> bool: ...


def table_name(model: type[Any]) -> str:
    return str(getattr(model, "__tablename__", model.__name__))


class SqlAlchemyRecordStore:
    """RecordStore bound to one session.

    Constraint violations surface as RecordConflictError, every other
    SQLAlchemy failure as StoreUnavailableError.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    @contextmanager
    def transaction(self) -> Iterator[SqlAlchemyRecordStore]:
        """Commit on success, roll back on any error."""
        try:
            with self.session.begin():
                yield self
        except IntegrityError as exc:
            raise RecordConflictError(f"commit violates a constraint: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"transaction failed: {exc}") from exc

    def query(self, model: type[Any], filters: Filters | None = None) -> list[Any]:
        """Equality-filtered select, in primary key order."""
        statement = (
            select(model)
            .where(*self._conditions(model, filters))
            .order_by(*inspect(model).primary_key)
        )
        with self._guard("query", model):
            return list(self.session.scalars(statement))

    def get(self, model: type[Any], row_id: int) -> Any | None:
        with self._guard("get", model):
            return self.session.get(model, row_id)

    def count(self, model: type[Any], filters: Filters | None = None) -> int:
        statement = select(func.count()).select_from(model).where(*self._conditions(model, filters))
        with self._guard("count", model):
            result = self.session.scalar(statement)
        return int(result or 0)

    def insert(self, model: type[Any], values: Mapping[str, Any]) -> Any:
        row = model(**values)
        with self._guard("insert", model):
            self.session.add(row)
            self.session.flush()
        return row

    def update(self, model: type[Any], row_id: int, values: Mapping[str, Any]) -> Any | None:
        with self._guard("update", model):
            row = self.session.get(model, row_id)
            if row is None:
                return None
            for column, value in values.items():
                setattr(row, column, value)
            self.session.flush()
        return row

    def upsert(
        self,
        model: type[Any],
        values: Mapping[str, Any],
        conflict_key: Sequence[str],
    ) -> Any:
        """Insert, or overwrite only the given columns of the row matching ``conflict_key``."""
        missing = [column for column in conflict_key if column not in values]
        if missing:
            raise ValueError(f"upsert into {table_name(model)} is missing key columns {missing}")

        key_filters = {column: values[column] for column in conflict_key}
        statement = select(model).where(*self._conditions(model, key_filters))
        with self._guard("upsert", model):
            row = self.session.execute(statement).scalar_one_or_none()
            if row is None:
                row = model(**values)
                self.session.add(row)
            else:
                for column, value in values.items():
                    setattr(row, column, value)
            self.session.flush()
        return row

    def delete(self, model: type[Any], row_id: int) -> bool:
        with self._guard("delete", model):
            row = self.session.get(model, row_id)
            if row is None:
                return False
            self.session.delete(row)
            self.session.flush()
        return True

    @staticmethod
    def _conditions(model: type[Any], filters: Filters | None) -> list[Any]:
        conditions = []
        for column, value in (filters or {}).items():
            attribute = getattr(model, column, None)
            if attribute is None:
                raise ValueError(f"{table_name(model)} has no column {column!r}")
            conditions.append(attribute == value)
        return conditions

    @contextmanager
    def _guard(self, operation: str, model: type[Any]) -> Iterator[None]:
        try:
            yield
        except IntegrityError as exc:
            raise RecordConflictError(
                f"{operation} on {table_name(model)} violates a constraint: {exc.orig}"
            ) from exc
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"{operation} on {table_name(model)} failed: {exc}") from exc


__all__ = ["Filters", "RecordStore", "SqlAlchemyRecordStore", "table_name"]
