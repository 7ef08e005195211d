#!/usr/bin/env python3
"""Recompute, inspect and rank per-team scouting statistics."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DEFAULT_DB_URL, create_db_engine, create_session_factory, ensure_schema
from domain.errors import ScoutingError
from domain.statistics.aggregator import StatisticsAggregator
from domain.statistics.config import load_scoring_config, load_scoring_configs
from models import Base
from repositories.activity import ActivityFeed, observed_store_factory
from repositories.roster_repository import (
    ensure_regional,
    ensure_season,
    ensure_team,
    register_team,
    team_numbers_by_id,
)
from repositories.statistics_repository import fetch_team_stats
from repositories.store import SqlAlchemyRecordStore

DEFAULT_SCORING_DIR = ROOT_DIR / "configs" / "scoring"
DEFAULT_SCORING_CONFIG = DEFAULT_SCORING_DIR / "crescendo_2024.toml"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Team statistics jobs.",
)

DbUrlOption = Annotated[
    str,
    typer.Option(
        "--db-url",
        envvar="DATABASE_URL",
        help="Database URL. Defaults to the local frcscouting postgres instance.",
    ),
]
ScoringConfigOption = Annotated[
    Path,
    typer.Option(
        "--scoring-config",
        help="Scoring TOML file with the point value of every counted action.",
    ),
]
ShowActivityOption = Annotated[
    bool,
    typer.Option("--show-activity", help="Print every store access made by the command."),
]


@app.callback()
def main(
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Python logging level (DEBUG, INFO, WARNING...)."),
    ] = "INFO",
) -> None:
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _build_aggregator(db_url: str, scoring_config: Path, feed: ActivityFeed) -> StatisticsAggregator:
    try:
        config = load_scoring_config(scoring_config)
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--scoring-config") from exc

    engine = create_db_engine(db_url)
    ensure_schema(engine)
    typer.echo(f"scoring_config={config.name} file={config.file_path.name}")
    return StatisticsAggregator(
        session_factory=create_session_factory(engine),
        weights=config.weights,
        store_factory=observed_store_factory(feed),
    )


def _echo_activity(feed: ActivityFeed, enabled: bool) -> None:
    if not enabled:
        return
    for entry in reversed(feed.recent()):
        typer.echo(f"  [{entry.source}] {entry.timestamp:%H:%M:%S} {entry.message}")


@app.command("scoring-configs")
def scoring_configs(
    scoring_dir: Annotated[
        Path,
        typer.Option("--scoring-dir", help="Directory of scoring TOML files to validate and list."),
    ] = DEFAULT_SCORING_DIR,
) -> None:
    """Validate every scoring config in a directory and print its weights."""
    try:
        configs = load_scoring_configs(scoring_dir)
    except (FileNotFoundError, NotADirectoryError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--scoring-dir") from exc

    for config in configs:
        typer.echo(f"name={config.name} file={config.file_path.name}")
        for key, value in config.as_config_json().items():
            typer.echo(f"  {key}={value}")
    typer.echo(f"loaded configs={len(configs)} dir={scoring_dir}")


@app.command("init-db")
def init_db(db_url: DbUrlOption = DEFAULT_DB_URL) -> None:
    """Create every missing scouting table."""
    engine = create_db_engine(db_url)
    ensure_schema(engine)
    typer.echo(f"schema ready tables={len(Base.metadata.tables)}")


@app.command("register-team")
def register(
    season_year: Annotated[int, typer.Option("--season-year", help="Season year, e.g. 2024.")],
    regional_name: Annotated[str, typer.Option("--regional-name", help="Regional event name.")],
    team_number: Annotated[int, typer.Option("--team-number", help="FRC team number.")],
    team_name: Annotated[str | None, typer.Option("--team-name", help="Display name for a new team.")] = None,
    regional_code: Annotated[str | None, typer.Option("--regional-code", help="Short event code.")] = None,
    db_url: DbUrlOption = DEFAULT_DB_URL,
) -> None:
    """Register a team for a regional, creating the season, regional and team as needed."""
    if season_year <= 0:
        raise typer.BadParameter("--season-year must be greater than 0")
    if team_number <= 0:
        raise typer.BadParameter("--team-number must be greater than 0")
    if not regional_name.strip():
        raise typer.BadParameter("--regional-name must not be empty")

    engine = create_db_engine(db_url)
    ensure_schema(engine)
    session_factory = create_session_factory(engine)
    try:
        with session_factory() as session:
            store = SqlAlchemyRecordStore(session)
            with store.transaction():
                season = ensure_season(store, season_year=season_year)
                regional = ensure_regional(
                    store,
                    season_id=season.id,
                    regional_name=regional_name.strip(),
                    regional_code=regional_code,
                )
                team = ensure_team(store, team_number=team_number, team_name=team_name)
                register_team(store, team_id=team.id, regional_id=regional.id)
                season_id, regional_id, team_id = season.id, regional.id, team.id
    except ScoutingError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(
        f"registered team_number={team_number} team_id={team_id} "
        f"regional_id={regional_id} season_id={season_id}"
    )


@app.command("recompute")
def recompute(
    team_id: Annotated[int, typer.Argument(help="teams.id of the team to recompute.")],
    regional_id: Annotated[int, typer.Argument(help="regionals.id the matches belong to.")],
    db_url: DbUrlOption = DEFAULT_DB_URL,
    scoring_config: ScoringConfigOption = DEFAULT_SCORING_CONFIG,
    show_activity: ShowActivityOption = False,
) -> None:
    """Recompute percentages, fractions and scores for one team."""
    feed = ActivityFeed()
    aggregator = _build_aggregator(db_url, scoring_config, feed)
    try:
        statistics = aggregator.recompute(team_id, regional_id)
    except ScoutingError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    scores = statistics.scores
    typer.echo(
        "completed "
        f"team_id={team_id} regional_id={regional_id} "
        f"matches_played={statistics.matches_played} "
        f"auto={scores.auto_score:.2f} teleop={scores.teleop_score:.2f} "
        f"endgame={scores.endgame_score:.2f} overall={scores.overall_score:.2f}"
    )
    _echo_activity(feed, show_activity)


@app.command("recompute-all")
def recompute_all(
    regional_id: Annotated[int, typer.Argument(help="regionals.id to recompute.")],
    db_url: DbUrlOption = DEFAULT_DB_URL,
    scoring_config: ScoringConfigOption = DEFAULT_SCORING_CONFIG,
    show_activity: ShowActivityOption = False,
) -> None:
    """Recompute every team registered for a regional and report failures."""
    feed = ActivityFeed(max_entries=1000)
    aggregator = _build_aggregator(db_url, scoring_config, feed)
    try:
        report = aggregator.recompute_all(regional_id)
    except ScoutingError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    for result in report.results:
        line = f"team_id={result.team_id} status={result.status}"
        if result.error:
            line += f" error={result.error}"
        typer.echo(line)
    typer.echo(
        f"completed regional_id={regional_id} "
        f"teams={len(report.results)} failed={len(report.failed)}"
    )
    _echo_activity(feed, show_activity)
    if report.failed:
        raise typer.Exit(code=2)


@app.command("rankings")
def rankings(
    regional_id: Annotated[int, typer.Argument(help="regionals.id to rank.")],
    top_n: Annotated[int, typer.Option("--top-n", help="Number of teams to print.")] = 20,
    persist: Annotated[
        bool,
        typer.Option("--persist", help="Also store overall and per-phase ranks in team_rankings."),
    ] = False,
    db_url: DbUrlOption = DEFAULT_DB_URL,
    scoring_config: ScoringConfigOption = DEFAULT_SCORING_CONFIG,
) -> None:
    """Print the regional leaderboard by overall score."""
    if top_n <= 0:
        raise typer.BadParameter("--top-n must be greater than 0")

    feed = ActivityFeed()
    aggregator = _build_aggregator(db_url, scoring_config, feed)
    try:
        ranked = aggregator.persist_rankings(regional_id) if persist else aggregator.rankings(regional_id)
    except ScoutingError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if not ranked:
        typer.echo(f"No team_rankings rows found for regional_id={regional_id}.")
        return

    with aggregator.session_factory() as session:
        team_numbers = team_numbers_by_id(SqlAlchemyRecordStore(session), [team.team_id for team in ranked])

    typer.echo(f"regional_id={regional_id} top_n={top_n} persisted={persist}")
    for team in ranked[:top_n]:
        team_number = team_numbers.get(team.team_id, team.team_id)
        typer.echo(
            f"{team.rank:2d}. team {team_number:<6} "
            f"overall={team.overall_score:8.2f} auto={team.auto_score:7.2f} "
            f"teleop={team.teleop_score:7.2f} endgame={team.endgame_score:7.2f} "
            f"matches={team.matches_played:3d}"
        )


@app.command("show")
def show(
    team_id: Annotated[int, typer.Argument(help="teams.id to show.")],
    regional_id: Annotated[int, typer.Argument(help="regionals.id to show.")],
    db_url: DbUrlOption = DEFAULT_DB_URL,
) -> None:
    """Print the stored percentage and fraction rows for one team."""
    engine = create_db_engine(db_url)
    session_factory = create_session_factory(engine)
    with session_factory() as session:
        percentage, fraction, ranking = fetch_team_stats(
            SqlAlchemyRecordStore(session),
            team_id=team_id,
            regional_id=regional_id,
        )

    if percentage is None or fraction is None or ranking is None:
        typer.echo(f"No statistics stored for team_id={team_id} regional_id={regional_id}.")
        raise typer.Exit(code=1)

    typer.echo(
        f"team_id={team_id} regional_id={regional_id} "
        f"matches={percentage.total_matches} last_calculated={percentage.last_calculated}"
    )
    for column in percentage.__table__.columns.keys():
        if column.endswith("_percent") or column.endswith("_avg"):
            fraction_column = column.replace("_percent", "_fraction")
            display = getattr(fraction, fraction_column, None)
            suffix = f" ({display})" if display is not None else ""
            typer.echo(f"  {column:<32} {getattr(percentage, column):7.2f}{suffix}")
    typer.echo(
        f"  scores overall={ranking.overall_score:.2f} auto={ranking.auto_score:.2f} "
        f"teleop={ranking.teleop_score:.2f} endgame={ranking.endgame_score:.2f}"
    )


if __name__ == "__main__":
    app()
