"""Result containers returned by the flow and cut algorithms.

All results are frozen dataclasses. Those that correspond to a tuple-valued
operation also iterate like that tuple, so ``value, edges = min_cut(...)``
works as well as attribute access.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterator, Tuple

from flowgraph.types import EdgeHandle, Number, VertexID

#: A two-sided vertex partition ``(side_a, side_b)``.
Partition = Tuple[FrozenSet[VertexID], FrozenSet[VertexID]]


@dataclass(frozen=True)
class MinCutResult:
    """Minimum s-t cut read from a saturated residual network.

    Attributes:
        value: Sum of capacities of the cut edges; equals the max-flow value.
        edges: Forward edge handles leaving ``source_side`` for ``sink_side``.
        source_side: Vertices reachable from the source over live edges.
        sink_side: The complement of ``source_side``.
    """

    value: Number
    edges: Tuple[EdgeHandle, ...]
    source_side: FrozenSet[VertexID]
    sink_side: FrozenSet[VertexID]

    def __iter__(self) -> Iterator:
        return iter((self.value, self.edges))


@dataclass(frozen=True)
class MinCostFlowResult:
    """Outcome of a min-cost flow request.

    Attributes:
        flow: Units actually sent.
        cost: Total cost of the sent flow.
        complete: False when the network could not carry the full target.
        potentials: Final vertex potentials (empty for cycle canceling).
    """

    flow: Number
    cost: Number
    complete: bool
    potentials: Tuple[Number, ...] = ()

    def __iter__(self) -> Iterator:
        return iter((self.flow, self.cost))


@dataclass(frozen=True)
class GlobalMinCutResult:
    """Global minimum cut of an undirected weighted graph."""

    value: Number
    partition: Partition

    def __iter__(self) -> Iterator:
        return iter((self.value, self.partition))


@dataclass(frozen=True)
class RandomizedMinCutResult:
    """Best cut over a batch of Karger contraction trials.

    Attributes:
        value: Smallest cut value seen.
        partition: Partition that produced ``value``.
        trials: Number of trials run.
        hits: How many trials reached ``value``.
    """

    value: Number
    partition: Partition
    trials: int
    hits: int


@dataclass(frozen=True)
class MatchingResult:
    """Maximum bipartite matching."""

    size: int
    pairs: Tuple[Tuple[VertexID, VertexID], ...]
