"""Ranking variant profiles.

Each variant fixes the input delimiter, the ranking strategy, whether pairs are
shuffled, and where its state and export land.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Strategy(Enum):
    """Scoring strategies."""
    WIN_COUNT = "win_count"     # Every pair judged, sorted by wins
    ELO = "elo"                 # Open-ended rating updates
    INFERENCE = "inference"     # Transitive closure skips provable pairs


class Variant(Enum):
    """Predefined tool variants."""
    ROOMS = "rooms"
    WINCOUNT = "wincount"
    ELO = "elo"
    INFERENCE = "inference"


@dataclass(frozen=True)
class VariantProfile:
    """Settings for one variant."""
    delimiter: str
    strategy: Strategy
    storage_key: str
    export_filename: str
    shuffle: bool = False
    value_column: bool = False  # Append score/rating to export lines


VARIANT_PROFILES: dict[Variant, VariantProfile] = {
    Variant.ROOMS: VariantProfile(
        delimiter=' ',
        strategy=Strategy.WIN_COUNT,
        storage_key="room_ranking_data",
        export_filename="room_rankings.csv",
        shuffle=True,
    ),
    Variant.WINCOUNT: VariantProfile(
        delimiter=',',
        strategy=Strategy.WIN_COUNT,
        storage_key="wincount_ranking_data",
        export_filename="wincount_rankings.csv",
    ),
    Variant.ELO: VariantProfile(
        delimiter=',',
        strategy=Strategy.ELO,
        storage_key="elo_ranking_data",
        export_filename="elo_rankings.csv",
        value_column=True,
    ),
    Variant.INFERENCE: VariantProfile(
        delimiter=',',
        strategy=Strategy.INFERENCE,
        storage_key="inference_ranking_data",
        export_filename="inference_rankings.csv",
    ),
}
