"""Tests for the team statistics operator CLI."""

from __future__ import annotations

import importlib.util
from pathlib import Path
from types import ModuleType

import pytest
from typer.testing import CliRunner

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "team_statistics.py"

runner = CliRunner()


@pytest.fixture(scope="module")
def cli() -> ModuleType:
    spec = importlib.util.spec_from_file_location("team_statistics", SCRIPT_PATH)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_scoring_configs_lists_every_file(cli: ModuleType, tmp_path: Path) -> None:
    (tmp_path / "a.toml").write_text('[system]\nname = "alpha"\nseason_year = 2024\n')
    (tmp_path / "b.toml").write_text('[system]\nname = "beta"\n\n[weights]\nteleop_speaker = 5.0\n')

    result = runner.invoke(cli.app, ["scoring-configs", "--scoring-dir", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "name=alpha file=a.toml" in result.output
    assert "name=beta file=b.toml" in result.output
    assert "season_year=2024" in result.output
    assert "teleop_speaker=5.0" in result.output
    assert "loaded configs=2" in result.output


def test_scoring_configs_default_directory(cli: ModuleType) -> None:
    result = runner.invoke(cli.app, ["scoring-configs"])

    assert result.exit_code == 0, result.output
    assert "name=crescendo_2024" in result.output


def test_scoring_configs_rejects_duplicate_names(cli: ModuleType, tmp_path: Path) -> None:
    (tmp_path / "a.toml").write_text('[system]\nname = "dup"\n')
    (tmp_path / "b.toml").write_text('[system]\nname = "dup"\n')

    result = runner.invoke(cli.app, ["scoring-configs", "--scoring-dir", str(tmp_path)])

    assert result.exit_code == 2


def test_register_and_recompute_against_sqlite(cli: ModuleType, tmp_path: Path) -> None:
    db_url = f"sqlite:///{tmp_path / 'cli.db'}"

    registered = runner.invoke(
        cli.app,
        [
            "register-team",
            "--season-year", "2024",
            "--regional-name", "Silicon Valley",
            "--team-number", "254",
            "--db-url", db_url,
        ],
    )
    assert registered.exit_code == 0, registered.output
    assert "registered team_number=254 team_id=1 regional_id=1" in registered.output

    recomputed = runner.invoke(cli.app, ["recompute-all", "1", "--db-url", db_url, "--show-activity"])
    assert recomputed.exit_code == 0, recomputed.output
    assert "team_id=1 status=success" in recomputed.output
    assert "UPSERT into team_rankings" in recomputed.output

    ranked = runner.invoke(cli.app, ["rankings", "1", "--persist", "--db-url", db_url])
    assert ranked.exit_code == 0, ranked.output
    assert "team 254" in ranked.output


def test_recompute_rejects_invalid_identifier(cli: ModuleType, tmp_path: Path) -> None:
    result = runner.invoke(
        cli.app,
        ["recompute", "0", "1", "--db-url", f"sqlite:///{tmp_path / 'cli.db'}"],
    )

    assert result.exit_code == 1
