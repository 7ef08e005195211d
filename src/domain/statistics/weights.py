"""Point values used to build the composite ranking score."""

from __future__ import annotations

from dataclasses import dataclass, fields

from domain.common import CLIMB_KEYS, EndgameClimb


@dataclass(frozen=True)
class ScoringWeights:
    """Per-unit point values; defaults follow the 2024 Crescendo game manual."""

    auto_taxi: float = 2.0
    auto_m1: float = 2.0
    auto_m2: float = 2.0
    auto_m3: float = 2.0
    auto_m4: float = 2.0
    auto_m5: float = 2.0
    auto_s1: float = 5.0
    auto_s2: float = 5.0
    auto_s3: float = 5.0
    auto_r: float = 3.0
    teleop_amp: float = 1.0
    teleop_speaker: float = 2.0
    endgame_nothing: float = 0.0
    endgame_park: float = 0.0
    endgame_single_climb: float = 3.0
    endgame_double_climb: float = 10.0
    endgame_triple_climb: float = 20.0
    endgame_1_trap: float = 5.0
    endgame_2_trap: float = 10.0
    endgame_3_trap: float = 15.0

    def auto_position(self, position: str) -> float:
        return getattr(self, f"auto_{position}")

    def climb(self, climb: EndgameClimb) -> float:
        return getattr(self, f"endgame_{CLIMB_KEYS[climb]}")

    def trap(self, trap_count: int) -> float:
        # Zero traps never score.
        if trap_count == 0:
            return 0.0
        return getattr(self, f"endgame_{trap_count}_trap")

    def as_dict(self) -> dict[str, float]:
        return {field.name: getattr(self, field.name) for field in fields(self)}


WEIGHT_NAMES = tuple(field.name for field in fields(ScoringWeights))


__all__ = ["ScoringWeights", "WEIGHT_NAMES"]
