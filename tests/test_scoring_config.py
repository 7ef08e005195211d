"""Tests for TOML-based scoring config loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from domain.statistics.config import load_scoring_config, load_scoring_configs
from domain.statistics.weights import ScoringWeights

REPO_CONFIG = Path(__file__).resolve().parents[1] / "configs" / "scoring" / "crescendo_2024.toml"


def test_load_scoring_config_from_file(tmp_path: Path) -> None:
    config_path = tmp_path / "custom.toml"
    config_path.write_text(
        """
[system]
name = "custom"
description = "Heavier speaker notes"
season_year = 2024

[weights]
teleop_speaker = 5.0
endgame_triple_climb = 25.0
""".strip()
    )

    config = load_scoring_config(config_path)

    assert config.name == "custom"
    assert config.description == "Heavier speaker notes"
    assert config.season_year == 2024
    assert config.weights.teleop_speaker == pytest.approx(5.0)
    assert config.weights.endgame_triple_climb == pytest.approx(25.0)
    # Omitted weights keep their defaults.
    assert config.weights.auto_s1 == pytest.approx(5.0)
    assert config.as_config_json()["teleop_speaker"] == pytest.approx(5.0)


def test_repository_config_matches_defaults() -> None:
    config = load_scoring_config(REPO_CONFIG)
    assert config.name == "crescendo_2024"
    assert config.weights == ScoringWeights()


def test_duplicate_names_raise_error(tmp_path: Path) -> None:
    template = """
[system]
name = "dup"

[weights]
teleop_amp = {value}
"""
    (tmp_path / "a.toml").write_text(template.format(value=1.0))
    (tmp_path / "b.toml").write_text(template.format(value=2.0))

    with pytest.raises(ValueError, match="Duplicate scoring system names"):
        load_scoring_configs(tmp_path)


def test_negative_weight_is_rejected(tmp_path: Path) -> None:
    config_path = tmp_path / "bad.toml"
    config_path.write_text('[system]\nname = "bad"\n\n[weights]\nauto_r = -1.0\n')

    with pytest.raises(ValueError, match=r"\[weights\]\.auto_r must be >= 0"):
        load_scoring_config(config_path)


def test_unknown_weight_is_rejected(tmp_path: Path) -> None:
    config_path = tmp_path / "typo.toml"
    config_path.write_text('[system]\nname = "typo"\n\n[weights]\nteleop_spaeker = 2.0\n')

    with pytest.raises(ValueError, match="unknown \\[weights\\] keys"):
        load_scoring_config(config_path)


def test_missing_name_is_rejected(tmp_path: Path) -> None:
    config_path = tmp_path / "anon.toml"
    config_path.write_text("[weights]\nteleop_amp = 1.0\n")

    with pytest.raises(ValueError, match=r"\[system\]\.name is required"):
        load_scoring_config(config_path)


def test_empty_directory_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="No .toml config files"):
        load_scoring_configs(tmp_path)


def test_missing_file_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_scoring_config(tmp_path / "missing.toml")
