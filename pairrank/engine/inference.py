"""Transitive-inference ranking engine.

Choices build a preference graph (``A -> B`` means A is preferred over B)
that is kept transitively closed. Any pending pair whose outcome follows from
the graph is dropped without asking, and once no pairs remain the ranking is a
topological sort of the graph.
"""

from __future__ import annotations

import logging
from collections import deque

from ..parser.items import Item
from .pairs import ComparisonPair, generate_pairs
from .state import InferenceState, RankedItem
from .variants import Variant

logger = logging.getLogger(__name__)

Graph = dict[str, set[str]]


def record_edge(graph: Graph, winner: str, loser: str) -> Graph:
    """Add ``winner -> loser`` and restore transitive closure.

    ``graph`` must already be closed. Everything that beats ``winner`` (and
    ``winner`` itself) now beats ``loser`` and everything ``loser`` beats.

    Returns:
        A new graph; the input is left untouched

    Raises:
        ValueError: If the edge contradicts the graph
    """
    if winner == loser:
        raise ValueError(f"{winner!r} cannot be preferred over itself")
    if winner in graph.get(loser, set()):
        raise ValueError(f"{loser!r} is already preferred over {winner!r}")

    result: Graph = {node: set(beaten) for node, beaten in graph.items()}
    downstream = {loser} | result.get(loser, set())

    result.setdefault(winner, set()).update(downstream)
    for node, beaten in result.items():
        if winner in beaten:
            beaten.update(downstream)

    return result


def can_infer_preference(a: str, b: str, graph: Graph) -> bool:
    """Return True if ``b`` is reachable from ``a``."""
    visited: set[str] = set()
    stack = [a]

    while stack:
        node = stack.pop()
        if node in visited:
            continue
        visited.add(node)
        for nxt in graph.get(node, ()):
            if nxt == b:
                return True
            if nxt not in visited:
                stack.append(nxt)

    return False


def topological_sort(names: list[str], graph: Graph) -> list[str]:
    """Order ``names`` so every node precedes the nodes it beats.

    Kahn's algorithm; ties go to the earlier name in ``names``. Nodes on a
    cycle never reach in-degree zero and are left out of the result.
    """
    in_degree = {name: 0 for name in names}
    for node in names:
        for beaten in graph.get(node, ()):
            if beaten in in_degree:
                in_degree[beaten] += 1

    queue = deque(name for name in names if in_degree[name] == 0)
    order: list[str] = []

    while queue:
        node = queue.popleft()
        order.append(node)
        beaten = graph.get(node, set())
        for name in names:
            if name in beaten:
                in_degree[name] -= 1
                if in_degree[name] == 0:
                    queue.append(name)

    return order


def _unique_names(items: list[Item]) -> list[str]:
    return list(dict.fromkeys(item.name for item in items))


def _is_open(pair: ComparisonPair, graph: Graph) -> bool:
    """True if the graph cannot answer ``pair``.

    Items sharing a name are one graph node, so such a pair is never open.
    """
    a, b = pair.first.name, pair.second.name
    if a == b:
        return False
    return not (can_infer_preference(a, b, graph) or can_infer_preference(b, a, graph))


class InferenceEngine:
    """Ranks by asking only the pairs the graph cannot already answer."""

    def start(self, items: list[Item], variant: Variant = Variant.INFERENCE) -> InferenceState:
        state = InferenceState(
            variant=variant,
            items=list(items),
            pending=[p for p in generate_pairs(items) if _is_open(p, {})],
            graph={},
        )
        if not state.pending:
            state.ranking = self._final_ranking(state.items, state.graph)
        return state

    def current_pair(self, state: InferenceState) -> ComparisonPair | None:
        return state.pending[0] if state.pending else None

    def remaining(self, state: InferenceState) -> int:
        return len(state.pending)

    def is_complete(self, state: InferenceState) -> bool:
        return not state.pending and state.ranking is not None

    def choose(
        self,
        state: InferenceState,
        pair: ComparisonPair,
        preferred: Item
    ) -> InferenceState:
        """Record ``preferred`` over the other member of ``pair``.

        Pending pairs that are now decided either way are removed. When the
        queue empties, the final ranking is computed and stored.

        Raises:
            ValueError: If ``pair`` is not current, ``preferred`` is not in it,
                        or the graph turns out to contain a cycle
        """
        head = self.current_pair(state)
        if head is None:
            raise ValueError("no comparisons remaining")
        if pair != head:
            raise ValueError("pair is not the current comparison")
        if not pair.contains(preferred):
            raise ValueError(f"{preferred.name!r} is not part of the current pair")

        winner = preferred
        loser = pair.other(preferred)
        graph = record_edge(state.graph, winner.name, loser.name)

        pending = [p for p in state.pending[1:] if _is_open(p, graph)]
        logger.debug(
            "%s beats %s; %d pairs inferred, %d remaining",
            winner.name, loser.name, len(state.pending) - 1 - len(pending), len(pending),
        )

        ranking = None
        if not pending:
            ranking = self._final_ranking(state.items, graph)

        return InferenceState(
            variant=state.variant,
            items=state.items,
            pending=pending,
            graph=graph,
            ranking=ranking,
        )

    def ranking(self, state: InferenceState) -> list[RankedItem]:
        """Items in topological order.

        Raises:
            ValueError: If comparisons remain
        """
        if state.ranking is None:
            raise ValueError(f"{len(state.pending)} comparisons remaining")

        by_name: dict[str, list[Item]] = {}
        for item in state.items:
            by_name.setdefault(item.name, []).append(item)

        return [RankedItem(item=item) for name in state.ranking for item in by_name.get(name, [])]

    def _final_ranking(self, items: list[Item], graph: Graph) -> list[str]:
        names = _unique_names(items)
        order = topological_sort(names, graph)
        if len(order) != len(names):
            missing = [n for n in names if n not in order]
            raise ValueError(f"preference graph contains a cycle through: {', '.join(missing)}")
        return order
