"""Load scoring weight tables from TOML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from domain.config_base import BaseSystemConfig, load_system_config, load_system_configs
from domain.statistics.weights import WEIGHT_NAMES, ScoringWeights


@dataclass(frozen=True)
class ScoringConfig(BaseSystemConfig):
    """One named scoring rule set (usually one per game season)."""

    season_year: int | None
    weights: ScoringWeights

    def as_config_json(self) -> dict[str, Any]:
        return {
            "season_year": self.season_year,
            **self.weights.as_dict(),
        }


def load_scoring_config(file_path: Path) -> ScoringConfig:
    """Load and validate one scoring TOML file."""
    return load_system_config(file_path, _parse_scoring_config)


def load_scoring_configs(config_dir: Path) -> list[ScoringConfig]:
    """Load and validate all scoring TOML config files in a directory."""
    return load_system_configs(
        config_dir,
        _parse_scoring_config,
        duplicate_name_label="scoring",
    )


def _parse_scoring_config(raw: dict[str, Any], file_path: Path) -> ScoringConfig:
    system_raw = raw.get("system", {})
    weights_raw = raw.get("weights", {})

    name = str(system_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [system].name is required")

    description_value = system_raw.get("description")
    description = None if description_value is None else str(description_value)

    season_value = system_raw.get("season_year")
    season_year = None if season_value is None else int(season_value)
    if season_year is not None and season_year <= 0:
        raise ValueError(f"{file_path}: [system].season_year must be > 0")

    unknown = sorted(set(weights_raw) - set(WEIGHT_NAMES))
    if unknown:
        raise ValueError(f"{file_path}: unknown [weights] keys: {unknown}")

    defaults = ScoringWeights()
    weights = ScoringWeights(
        **{
            weight_name: float(weights_raw.get(weight_name, getattr(defaults, weight_name)))
            for weight_name in WEIGHT_NAMES
        }
    )
    _validate_weights(file_path=file_path, weights=weights)

    return ScoringConfig(
        name=name,
        description=description,
        file_path=file_path,
        season_year=season_year,
        weights=weights,
    )


def _validate_weights(*, file_path: Path, weights: ScoringWeights) -> None:
    for weight_name, value in weights.as_dict().items():
        if value < 0.0:
            raise ValueError(f"{file_path}: [weights].{weight_name} must be >= 0")


__all__ = ["ScoringConfig", "load_scoring_config", "load_scoring_configs"]
