"""Win-count ranking engine.

Every pair is judged explicitly; the final order is a stable merge sort by
descending win count.
"""

from __future__ import annotations

import logging
import random

from ..parser.items import Item
from .mergesort import merge_sort
from .pairs import ComparisonPair, generate_pairs
from .state import RankedItem, WinCountState
from .variants import Variant

logger = logging.getLogger(__name__)


class WinCountEngine:
    """Counts wins per item across all pairs."""

    def __init__(self, shuffle: bool = False, rng: random.Random | None = None):
        """Initialize engine.

        Args:
            shuffle: Present pairs in random order
            rng: Random source for shuffling
        """
        self.shuffle = shuffle
        self.rng = rng or random.Random()

    def start(self, items: list[Item], variant: Variant = Variant.WINCOUNT) -> WinCountState:
        """Create a fresh session for ``items``."""
        return WinCountState(
            variant=variant,
            items=list(items),
            pending=generate_pairs(items, shuffle=self.shuffle, rng=self.rng),
            scores={item.name: 0 for item in items},
        )

    def current_pair(self, state: WinCountState) -> ComparisonPair | None:
        return state.pending[0] if state.pending else None

    def remaining(self, state: WinCountState) -> int:
        return len(state.pending)

    def is_complete(self, state: WinCountState) -> bool:
        return not state.pending

    def choose(
        self,
        state: WinCountState,
        pair: ComparisonPair,
        preferred: Item
    ) -> WinCountState:
        """Record ``preferred`` as the winner of ``pair``.

        Args:
            state: Current session state
            pair: Pair being judged; must be the head of the queue
            preferred: Chosen member of ``pair``

        Returns:
            New state with the score incremented and the pair dequeued

        Raises:
            ValueError: If ``pair`` is not current or ``preferred`` is not in it
        """
        head = self.current_pair(state)
        if head is None:
            raise ValueError("no comparisons remaining")
        if pair != head:
            raise ValueError("pair is not the current comparison")
        if not pair.contains(preferred):
            raise ValueError(f"{preferred.name!r} is not part of the current pair")

        scores = dict(state.scores)
        scores[preferred.name] = scores.get(preferred.name, 0) + 1
        logger.debug("%s beats %s", preferred.name, pair.other(preferred).name)

        return WinCountState(
            variant=state.variant,
            items=state.items,
            pending=state.pending[1:],
            scores=scores,
        )

    def ranking(self, state: WinCountState) -> list[RankedItem]:
        """Items sorted by descending score, ties in input order.

        Raises:
            ValueError: If comparisons remain
        """
        if not self.is_complete(state):
            raise ValueError(f"{len(state.pending)} comparisons remaining")

        scores = state.scores
        ordered = merge_sort(state.items, lambda a, b: scores.get(b.name, 0) - scores.get(a.name, 0))
        return [RankedItem(item=item, value=scores.get(item.name, 0)) for item in ordered]
