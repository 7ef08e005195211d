"""Create, correct and delete match observations, keeping aggregates in step."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.orm import Session, sessionmaker

from domain.common import (
    MatchObservation,
    coerce_observation_fields,
    require_identifier,
    validate_observation,
)
from domain.errors import RecordNotFoundError, ScoutingError
from domain.statistics.aggregator import StatisticsAggregator
from repositories import match_repository
from repositories.store import RecordStore, SqlAlchemyRecordStore

logger = logging.getLogger(__name__)


class MatchLedger:
    """Match CRUD; every write triggers a recompute of the affected pairs.

    A recompute failure after a committed write is logged and the write
    stands; the next recompute of the pair repairs the aggregates.
    """

    def __init__(
        self,
        *,
        session_factory: sessionmaker[Session],
        aggregator: StatisticsAggregator,
        store_factory: Callable[[Session], RecordStore] = SqlAlchemyRecordStore,
    ) -> None:
        self.session_factory = session_factory
        self.aggregator = aggregator
        self.store_factory = store_factory

    def create_match(self, observation: MatchObservation) -> int:
        validate_observation(observation)
        with self.session_factory() as session:
            store = self.store_factory(session)
            with store.transaction():
                record = match_repository.insert_match(store, observation)
                match_id = int(record.id)

        logger.info(
            "match created id=%s team_id=%s regional_id=%s match_number=%s",
            match_id,
            observation.team_id,
            observation.regional_id,
            observation.match_number,
        )
        self._refresh(observation.team_id, observation.regional_id)
        return match_id

    def get_match(self, match_id: int) -> MatchObservation:
        match_id = require_identifier(match_id, "match_id")
        with self.session_factory() as session:
            store = self.store_factory(session)
            with store.transaction():
                record = match_repository.get_match(store, match_id)
                if record is None:
                    raise RecordNotFoundError(f"match id={match_id} not found")
                return match_repository.record_to_observation(record)

    def list_matches(self, team_id: int, regional_id: int) -> list[MatchObservation]:
        team_id = require_identifier(team_id, "team_id")
        regional_id = require_identifier(regional_id, "regional_id")
        with self.session_factory() as session:
            store = self.store_factory(session)
            with store.transaction():
                return match_repository.fetch_match_observations(
                    store,
                    team_id=team_id,
                    regional_id=regional_id,
                )

    def update_match(self, match_id: int, changes: Mapping[str, Any]) -> MatchObservation:
        """Apply a partial correction; recomputes both pairs if the record moved."""
        match_id = require_identifier(match_id, "match_id")
        coerced = coerce_observation_fields(dict(changes))

        with self.session_factory() as session:
            store = self.store_factory(session)
            with store.transaction():
                record = match_repository.get_match(store, match_id)
                if record is None:
                    raise RecordNotFoundError(f"match id={match_id} not found")
                previous = match_repository.record_to_observation(record)
                updated = replace(previous, **coerced)
                validate_observation(updated)
                match_repository.update_match(
                    store,
                    match_id,
                    updated,
                    updated_at=datetime.now(UTC).replace(tzinfo=None),
                )

        logger.info("match updated id=%s fields=%s", match_id, sorted(coerced))
        self._refresh(previous.team_id, previous.regional_id)
        if (updated.team_id, updated.regional_id) != (previous.team_id, previous.regional_id):
            self._refresh(updated.team_id, updated.regional_id)
        return updated

    def delete_match(self, match_id: int) -> MatchObservation:
        match_id = require_identifier(match_id, "match_id")
        with self.session_factory() as session:
            store = self.store_factory(session)
            with store.transaction():
                record = match_repository.get_match(store, match_id)
                if record is None:
                    raise RecordNotFoundError(f"match id={match_id} not found")
                removed = match_repository.record_to_observation(record)
                match_repository.delete_match(store, match_id)

        logger.info("match deleted id=%s", match_id)
        self._refresh(removed.team_id, removed.regional_id)
        return removed

    def _refresh(self, team_id: int, regional_id: int) -> None:
        try:
            self.aggregator.recompute(team_id, regional_id)
        except ScoutingError:
            logger.exception(
                "statistics recompute failed after match write team_id=%s regional_id=%s",
                team_id,
                regional_id,
            )


__all__ = ["MatchLedger"]
