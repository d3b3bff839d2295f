"""Comparison pair generation."""

from __future__ import annotations

import random
from typing import NamedTuple

from ..parser.items import Item


class ComparisonPair(NamedTuple):
    """An unordered two-item choice, stored in input order."""
    first: Item
    second: Item

    def contains(self, item: Item) -> bool:
        return item == self.first or item == self.second

    def other(self, item: Item) -> Item:
        """Return the member of the pair that is not ``item``."""
        if item == self.first:
            return self.second
        if item == self.second:
            return self.first
        raise ValueError(f"{item.name!r} is not part of this pair")


def generate_pairs(
    items: list[Item],
    shuffle: bool = False,
    rng: random.Random | None = None
) -> list[ComparisonPair]:
    """Produce every unordered pair ``(items[i], items[j])`` with ``i < j``.

    Args:
        items: Items in input order
        shuffle: If True, shuffle the pair order uniformly
        rng: Random source used for shuffling

    Returns:
        List of n(n-1)/2 pairs
    """
    pairs = [
        ComparisonPair(items[i], items[j])
        for i in range(len(items))
        for j in range(i + 1, len(items))
    ]

    if shuffle:
        (rng or random.Random()).shuffle(pairs)

    return pairs
