"""Core ranking engines."""

from __future__ import annotations

import random
from typing import Union

from .elo import EloEngine
from .inference import InferenceEngine
from .mergesort import merge_sort
from .pairs import ComparisonPair, generate_pairs
from .state import RankedItem, state_from_dict
from .variants import VARIANT_PROFILES, Strategy, Variant, VariantProfile
from .wincount import WinCountEngine

Engine = Union[WinCountEngine, EloEngine, InferenceEngine]


def create_engine(variant: Variant, rng: random.Random | None = None) -> Engine:
    """Build the engine configured for ``variant``."""
    profile = VARIANT_PROFILES[variant]
    if profile.strategy == Strategy.WIN_COUNT:
        return WinCountEngine(shuffle=profile.shuffle, rng=rng)
    if profile.strategy == Strategy.ELO:
        return EloEngine(rng=rng)
    return InferenceEngine()


__all__ = [
    "ComparisonPair",
    "EloEngine",
    "Engine",
    "InferenceEngine",
    "RankedItem",
    "Strategy",
    "VARIANT_PROFILES",
    "Variant",
    "VariantProfile",
    "WinCountEngine",
    "create_engine",
    "generate_pairs",
    "merge_sort",
    "state_from_dict",
]
