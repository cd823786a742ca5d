"""Global minimum cut of an undirected weighted graph (Stoer-Wagner).

No source or sink is involved. Each minimum-cut phase grows a set from an
arbitrary start vertex, always adding the outside vertex most tightly
connected to the set. The last vertex added, ``t``, is separated from
everything else by a cut whose weight is its connectivity at that moment; the
last two vertices are then merged. The lightest of the V - 1 phase cuts is a
global minimum cut.

Two representations are available:

- sparse (default): adjacency dicts over super-vertices and a lazy max-heap,
  O(V * (E + V) log V);
- dense: a numpy weight matrix scanned with vectorised row updates, O(V^3).
  Weights are stored as int64 when all are integers and float64 otherwise, so
  pick it explicitly for small dense graphs.
"""

from __future__ import annotations

from heapq import heappop, heappush
from typing import FrozenSet, Iterable, List, Optional, Set, Tuple

import numpy as np

from flowgraph.algorithms.types import GlobalMinCutResult, Partition
from flowgraph.errors import InvalidArgument
from flowgraph.graph.contraction import (
    ContractionGraph,
    UndirectedEdge,
    normalize_edges,
)
from flowgraph.logging import get_logger
from flowgraph.types import Number, VertexID, check_limit

logger = get_logger(__name__)


def minimum_cut_phase(graph: ContractionGraph) -> Tuple[Number, VertexID, VertexID]:
    """Run one maximum-adjacency ordering over ``graph``.

    Returns:
        ``(cut_of_the_phase, s, t)`` where ``t`` was added last and ``s``
        second to last.
    """
    vertices = graph.vertices()
    connectivity = {v: 0 for v in vertices}
    added: Set[VertexID] = set()
    # Max-heap via negated weights; the counter breaks ties by insertion order.
    heap: List[Tuple[Number, int, VertexID]] = []
    counter = 0
    for v in vertices:
        heap.append((0, counter, v))
        counter += 1

    s = t = vertices[0]
    cut_value: Number = 0
    while heap:
        neg_weight, _, u = heappop(heap)
        if u in added or -neg_weight != connectivity[u]:
            continue
        added.add(u)
        s, t = t, u
        cut_value = connectivity[u]
        for nbr, w in graph.adj[u].items():
            if nbr in added:
                continue
            connectivity[nbr] += w
            heappush(heap, (-connectivity[nbr], counter, nbr))
            counter += 1
    return cut_value, s, t


def _stoer_wagner_sparse(
    edges: List[UndirectedEdge], vertex_count: int
) -> Tuple[Number, Set[VertexID]]:
    graph = ContractionGraph.from_edges(edges, vertex_count)
    best_value: Optional[Number] = None
    best_side: Set[VertexID] = set()
    phase = 0
    while len(graph) > 1:
        value, s, t = minimum_cut_phase(graph)
        phase += 1
        if best_value is None or value < best_value:
            best_value, best_side = value, graph.side(t)
            logger.debug("Stoer-Wagner phase %d: new best cut %s", phase, value)
        graph.merge(s, t)
    return best_value, best_side


def _stoer_wagner_dense(
    edges: List[UndirectedEdge], vertex_count: int
) -> Tuple[Number, Set[VertexID]]:
    exact = all(isinstance(w, int) for _, _, w in edges)
    dtype = np.int64 if exact else np.float64
    weights = np.zeros((vertex_count, vertex_count), dtype=dtype)
    for u, v, w in edges:
        if u != v:
            weights[u, v] += w
            weights[v, u] += w

    alive = np.ones(vertex_count, dtype=bool)
    members: List[List[VertexID]] = [[v] for v in range(vertex_count)]
    best_value: Optional[Number] = None
    best_side: Set[VertexID] = set()

    for phase in range(1, vertex_count):
        connectivity = np.zeros(vertex_count, dtype=dtype)
        added = ~alive
        s = t = -1
        value: Number = 0
        for _ in range(int(alive.sum())):
            masked = np.where(added, -1, connectivity)
            u = int(np.argmax(masked))
            value = masked[u].item()
            added[u] = True
            s, t = t, u
            connectivity += weights[u]

        if best_value is None or value < best_value:
            best_value, best_side = value, set(members[t])
            logger.debug("Stoer-Wagner (dense) phase %d: new best cut %s", phase, value)

        weights[s, :] += weights[t, :]
        weights[:, s] += weights[:, t]
        weights[s, s] = 0
        weights[t, :] = 0
        weights[:, t] = 0
        alive[t] = False
        members[s].extend(members[t])

    return best_value, best_side


def _as_partition(side: Set[VertexID], vertex_count: int) -> Partition:
    """Order the two sides so the one holding vertex 0 comes first."""
    one: FrozenSet[VertexID] = frozenset(side)
    other = frozenset(range(vertex_count)) - one
    return (one, other) if 0 in one else (other, one)


def global_min_cut(
    edges: Iterable[Tuple],
    *,
    vertex_count: Optional[int] = None,
    dense: bool = False,
) -> GlobalMinCutResult:
    """Minimum-weight cut over all bipartitions of an undirected graph.

    Args:
        edges: Undirected edges ``(u, v)`` or ``(u, v, weight)`` with
            non-negative integer vertex ids and non-negative weights. Parallel
            edges add up; self-loops are ignored.
        vertex_count: Total number of vertices. Defaults to one more than the
            largest endpoint; larger values add isolated vertices.
        dense: Use the numpy matrix variant instead of adjacency dicts.

    Returns:
        GlobalMinCutResult ``(value, partition)``; the first side of the
        partition contains vertex 0.

    Raises:
        InvalidArgument: On malformed edges, negative weights, or fewer than
            two vertices.
        ArithmeticOverflow: If the total edge weight exceeds the value limit.

    Example:
        >>> global_min_cut([(0, 1, 2), (0, 2, 3), (1, 2, 2), (1, 3, 2), (2, 3, 1)]).value
        3
    """
    edge_list, n = normalize_edges(edges, vertex_count)
    if n < 2:
        raise InvalidArgument(f"A global cut needs at least two vertices, got {n}")
    check_limit(sum(w for _, _, w in edge_list), "Total edge weight")

    if dense:
        value, side = _stoer_wagner_dense(edge_list, n)
    else:
        value, side = _stoer_wagner_sparse(edge_list, n)

    logger.debug(
        "Global min cut over %d vertices, %d edges: %s", n, len(edge_list), value
    )
    return GlobalMinCutResult(value=value, partition=_as_partition(side, n))
