"""Session state for each ranking strategy.

States are plain data. Engines take a state and return a new one; nothing
mutates a state after it has been handed out.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional, Union

from ..parser.items import Item
from .pairs import ComparisonPair
from .variants import Strategy, Variant


@dataclass
class RankedItem:
    """An item in final ranked order with its strategy-specific value."""
    item: Item
    value: Optional[int] = None


def _item_to_dict(item: Item) -> dict:
    return {"name": item.name, "url": item.url}


def _item_from_dict(data: dict) -> Item:
    return Item(name=data["name"], url=data["url"])


def _pair_to_list(pair: ComparisonPair) -> list[dict]:
    return [_item_to_dict(pair.first), _item_to_dict(pair.second)]


def _pair_from_list(data: list) -> ComparisonPair:
    return ComparisonPair(_item_from_dict(data[0]), _item_from_dict(data[1]))


@dataclass
class SessionState:
    """Fields shared by every strategy."""
    variant: Variant
    items: list[Item]

    strategy: ClassVar[Strategy]

    def _base_dict(self) -> dict[str, Any]:
        return {
            "variant": self.variant.value,
            "strategy": self.strategy.value,
            "items": [_item_to_dict(i) for i in self.items],
        }


@dataclass
class WinCountState(SessionState):
    """Score map plus the queue of pairs still to judge."""
    pending: list[ComparisonPair] = field(default_factory=list)
    scores: dict[str, int] = field(default_factory=dict)

    strategy: ClassVar[Strategy] = Strategy.WIN_COUNT

    def to_dict(self) -> dict[str, Any]:
        data = self._base_dict()
        data["pending"] = [_pair_to_list(p) for p in self.pending]
        data["scores"] = dict(self.scores)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> WinCountState:
        return cls(
            variant=Variant(data["variant"]),
            items=[_item_from_dict(i) for i in data.get("items", [])],
            pending=[_pair_from_list(p) for p in data.get("pending", [])],
            scores={k: int(v) for k, v in data.get("scores", {}).items()},
        )


@dataclass
class EloState(SessionState):
    """Rating map, choice history and the pair currently on offer."""
    ratings: dict[str, float] = field(default_factory=dict)
    history: list[tuple[str, str]] = field(default_factory=list)  # (winner, loser)
    current: Optional[ComparisonPair] = None

    strategy: ClassVar[Strategy] = Strategy.ELO

    def to_dict(self) -> dict[str, Any]:
        data = self._base_dict()
        data["ratings"] = dict(self.ratings)
        data["history"] = [{"winner": w, "loser": l} for w, l in self.history]
        data["current"] = _pair_to_list(self.current) if self.current else None
        return data

    @classmethod
    def from_dict(cls, data: dict) -> EloState:
        current = data.get("current")
        return cls(
            variant=Variant(data["variant"]),
            items=[_item_from_dict(i) for i in data.get("items", [])],
            ratings={k: float(v) for k, v in data.get("ratings", {}).items()},
            history=[(h["winner"], h["loser"]) for h in data.get("history", [])],
            current=_pair_from_list(current) if current else None,
        )


@dataclass
class InferenceState(SessionState):
    """Preference graph, unresolved pairs and the final ranking once known."""
    pending: list[ComparisonPair] = field(default_factory=list)
    graph: dict[str, set[str]] = field(default_factory=dict)
    ranking: Optional[list[str]] = None

    strategy: ClassVar[Strategy] = Strategy.INFERENCE

    def to_dict(self) -> dict[str, Any]:
        data = self._base_dict()
        data["pending"] = [_pair_to_list(p) for p in self.pending]
        # Sorted so identical graphs produce identical snapshots
        data["graph"] = {name: sorted(beaten) for name, beaten in sorted(self.graph.items())}
        data["ranking"] = list(self.ranking) if self.ranking is not None else None
        return data

    @classmethod
    def from_dict(cls, data: dict) -> InferenceState:
        ranking = data.get("ranking")
        return cls(
            variant=Variant(data["variant"]),
            items=[_item_from_dict(i) for i in data.get("items", [])],
            pending=[_pair_from_list(p) for p in data.get("pending", [])],
            graph={k: set(v) for k, v in data.get("graph", {}).items()},
            ranking=list(ranking) if ranking is not None else None,
        )


AnyState = Union[WinCountState, EloState, InferenceState]

_STATE_TYPES: dict[Strategy, type] = {
    Strategy.WIN_COUNT: WinCountState,
    Strategy.ELO: EloState,
    Strategy.INFERENCE: InferenceState,
}


def state_from_dict(data: dict) -> AnyState:
    """Rebuild a session state from its serialized form.

    Raises:
        ValueError: If the strategy tag is missing or unknown
        KeyError: If a required field is missing
    """
    try:
        strategy = Strategy(data["strategy"])
    except KeyError:
        raise ValueError("serialized state has no 'strategy' field") from None
    result: AnyState = _STATE_TYPES[strategy].from_dict(data)
    return result
