"""Elo rating engine.

Pairs are drawn from items adjacent in rating order, so comparisons
concentrate on items that are close to each other. The engine never runs out
of pairs; the ranking reflects current ratings at any point.
"""

from __future__ import annotations

import logging
import random

from ..parser.items import Item
from .mergesort import merge_sort
from .pairs import ComparisonPair
from .state import EloState, RankedItem
from .variants import Variant

logger = logging.getLogger(__name__)

DEFAULT_RATING = 1000.0
K_FACTOR = 32.0

# Below this many items the start index may be anywhere
_BAND = 6


def expected_score(rating_x: float, rating_y: float) -> float:
    """Expected score of X against Y."""
    return 1.0 / (1.0 + 10 ** ((rating_y - rating_x) / 400.0))


def expected_scores(rating_winner: float, rating_loser: float) -> tuple[float, float]:
    """Expected scores of winner and loser; they always sum to exactly 1."""
    e_winner = expected_score(rating_winner, rating_loser)
    return e_winner, 1.0 - e_winner


def pick_next_pair(
    items: list[Item],
    ratings: dict[str, float],
    rng: random.Random
) -> ComparisonPair | None:
    """Pick two items adjacent in ascending rating order.

    The start index is uniform in ``[0, len-2]`` for fewer than six items and
    in ``[0, len-6]`` otherwise.

    Returns:
        The pair, or None for fewer than two items
    """
    if len(items) < 2:
        return None

    ordered = sorted(items, key=lambda i: ratings.get(i.name, DEFAULT_RATING))
    if len(ordered) < _BAND:
        idx = rng.randint(0, len(ordered) - 2)
    else:
        idx = rng.randint(0, len(ordered) - _BAND)

    return ComparisonPair(ordered[idx], ordered[idx + 1])


class EloEngine:
    """Maintains Elo ratings from pairwise choices."""

    def __init__(
        self,
        k: float = K_FACTOR,
        base: float = DEFAULT_RATING,
        rng: random.Random | None = None
    ):
        self.k = k
        self.base = base
        self.rng = rng or random.Random()

    def start(self, items: list[Item], variant: Variant = Variant.ELO) -> EloState:
        ratings = {item.name: self.base for item in items}
        return EloState(
            variant=variant,
            items=list(items),
            ratings=ratings,
            history=[],
            current=pick_next_pair(items, ratings, self.rng),
        )

    def current_pair(self, state: EloState) -> ComparisonPair | None:
        return state.current

    def remaining(self, state: EloState) -> int | None:
        """Elo sessions are open-ended."""
        return None

    def is_complete(self, state: EloState) -> bool:
        return False

    def pick_next_pair(self, state: EloState) -> ComparisonPair | None:
        return pick_next_pair(state.items, state.ratings, self.rng)

    def choose(self, state: EloState, pair: ComparisonPair, chosen: Item) -> EloState:
        """Update ratings with ``chosen`` as winner of ``pair``.

        Only the two members of the pair change rating. The next pair is
        drawn from the updated ratings.

        Raises:
            ValueError: If ``pair`` is not current or ``chosen`` is not in it
        """
        if state.current is None:
            raise ValueError("no comparison available")
        if pair != state.current:
            raise ValueError("pair is not the current comparison")
        if not pair.contains(chosen):
            raise ValueError(f"{chosen.name!r} is not part of the current pair")

        winner = chosen
        loser = pair.other(chosen)
        r_winner = state.ratings.get(winner.name, self.base)
        r_loser = state.ratings.get(loser.name, self.base)

        e_winner, e_loser = expected_scores(r_winner, r_loser)

        ratings = dict(state.ratings)
        ratings[winner.name] = r_winner + self.k * (1.0 - e_winner)
        ratings[loser.name] = r_loser + self.k * (0.0 - e_loser)
        logger.debug(
            "%s (%.1f -> %.1f) beats %s (%.1f -> %.1f)",
            winner.name, r_winner, ratings[winner.name],
            loser.name, r_loser, ratings[loser.name],
        )

        return EloState(
            variant=state.variant,
            items=state.items,
            ratings=ratings,
            history=state.history + [(winner.name, loser.name)],
            current=pick_next_pair(state.items, ratings, self.rng),
        )

    def ranking(self, state: EloState) -> list[RankedItem]:
        """Items by descending rating, ties in input order."""
        ratings = state.ratings

        def compare(a: Item, b: Item) -> float:
            return ratings.get(b.name, self.base) - ratings.get(a.name, self.base)

        return [
            RankedItem(item=item, value=round(ratings.get(item.name, self.base)))
            for item in merge_sort(state.items, compare)
        ]
