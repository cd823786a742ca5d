"""Randomized global minimum cut by edge contraction (Karger).

One trial contracts random edges with a union-find structure until two
components remain, skipping edges whose endpoints are already merged; the
trial's cut is the weight of the edges still joining different components.
Picking uniformly among the not-yet-contracted edges is the same as walking a
uniformly shuffled edge list, which is how a trial is implemented.

A single trial finds a particular minimum cut with probability at least
``2 / (n * (n - 1))``, so many independent trials are run and the lightest cut
is kept. The answer is never below the true minimum but may exceed it; use
``global_min_cut`` when a guaranteed answer is required.

Trial ``i`` draws from a generator seeded with ``derive_seed(seed, "karger", i)``,
so results are reproducible for a given seed and trials are independent of
each other.
"""

from __future__ import annotations

from itertools import accumulate
from typing import Iterable, List, Optional, Tuple, Union

from flowgraph.algorithms.types import Partition, RandomizedMinCutResult
from flowgraph.config import FLOW_CONFIG
from flowgraph.errors import InvalidArgument
from flowgraph.graph.contraction import UndirectedEdge, UnionFind, normalize_edges
from flowgraph.logging import get_logger
from flowgraph.seeding import make_rng
from flowgraph.types import Number, check_limit

logger = get_logger(__name__)


def _finish(
    uf: UnionFind, edges: List[UndirectedEdge]
) -> Tuple[Number, Partition]:
    """Fold leftover components into two sides and weigh the crossing edges."""
    groups = uf.groups()
    # More than two components means the graph is disconnected: one component
    # against the rest is a zero cut.
    first = groups[0]
    for group in groups[2:]:
        uf.union(min(groups[1]), min(group))
    rest = frozenset(range(len(uf.parent))) - first
    value: Number = 0
    for u, v, w in edges:
        if uf.find(u) != uf.find(v):
            value += w
    return value, (first, rest)


def contraction_trial(
    edges: List[UndirectedEdge],
    vertex_count: int,
    rng,
    *,
    weighted: bool = False,
) -> Tuple[Number, Partition]:
    """Run a single contraction down to two super-vertices.

    Args:
        edges: Normalized undirected edges.
        vertex_count: Number of vertices (at least two).
        rng: ``random.Random`` instance driving the edge choices.
        weighted: Pick edges with probability proportional to weight instead
            of uniformly.

    Returns:
        ``(cut_value, partition)`` for this trial.
    """
    uf = UnionFind(vertex_count)
    contractible = [e for e in edges if e[0] != e[1]]

    if not weighted:
        order = list(range(len(contractible)))
        rng.shuffle(order)
        for i in order:
            if uf.components <= 2:
                break
            u, v, _ = contractible[i]
            uf.union(u, v)
        return _finish(uf, edges)

    positive = [e for e in contractible if e[2] > 0]
    if positive:
        cumulative = list(accumulate(w for _, _, w in positive))
        remaining = positive
        while uf.components > 2 and remaining:
            u, v, _ = rng.choices(remaining, cum_weights=cumulative)[0]
            if uf.union(u, v):
                # Drop edges that became internal so the loop cannot stall.
                remaining = [e for e in remaining if uf.find(e[0]) != uf.find(e[1])]
                cumulative = list(accumulate(w for _, _, w in remaining))
    return _finish(uf, edges)


def karger_min_cut(
    edges: Iterable[Tuple],
    trials: Optional[int] = None,
    *,
    seed: Optional[int] = None,
    vertex_count: Optional[int] = None,
    weighted: bool = False,
) -> RandomizedMinCutResult:
    """Best cut over ``trials`` independent contraction runs.

    Args:
        edges: Undirected edges ``(u, v)`` or ``(u, v, weight)``.
        trials: Number of trials; defaults to ``FLOW_CONFIG.karger_trials(n)``,
            about ``n^2 ln n``.
        seed: Master seed for reproducible runs; None uses fresh entropy.
        vertex_count: Total number of vertices (defaults to largest id + 1).
        weighted: Contract edges with probability proportional to weight.

    Returns:
        RandomizedMinCutResult with the best value, its partition (side with
        vertex 0 first), the number of trials, and how many trials hit the best.

    Raises:
        InvalidArgument: If ``trials <= 0``, edges are malformed, or there are
            fewer than two vertices.
    """
    edge_list, n = normalize_edges(edges, vertex_count)
    if trials is None:
        trials = FLOW_CONFIG.karger_trials(n)
    if isinstance(trials, bool) or not isinstance(trials, int) or trials <= 0:
        raise InvalidArgument(f"trials must be a positive integer, got {trials!r}")
    if n < 2:
        raise InvalidArgument(f"A global cut needs at least two vertices, got {n}")
    check_limit(sum(w for _, _, w in edge_list), "Total edge weight")

    best_value: Optional[Number] = None
    best_partition: Partition = (frozenset(), frozenset())
    hits = 0
    for trial in range(trials):
        rng = make_rng(seed, "karger", trial)
        value, partition = contraction_trial(edge_list, n, rng, weighted=weighted)
        if best_value is None or value < best_value:
            best_value, best_partition, hits = value, partition, 1
        elif value == best_value:
            hits += 1

    if 0 not in best_partition[0]:
        best_partition = (best_partition[1], best_partition[0])
    logger.debug(
        "Karger over %d vertices: %d trials, best %s hit %d times",
        n,
        trials,
        best_value,
        hits,
    )
    return RandomizedMinCutResult(
        value=best_value, partition=best_partition, trials=trials, hits=hits
    )


def randomized_min_cut(
    edges: Iterable[Tuple],
    trials: Optional[int] = None,
    *,
    seed: Optional[int] = None,
    vertex_count: Optional[int] = None,
    weighted: bool = False,
    return_partition: bool = False,
) -> Union[Number, Tuple[Number, Partition]]:
    """Estimate the global minimum cut value with Karger's algorithm.

    Thin wrapper over :func:`karger_min_cut` returning the value, or
    ``(value, partition)`` when ``return_partition`` is set.

    Example:
        >>> edges = [(0, 1, 2), (0, 2, 3), (1, 2, 2), (1, 3, 2), (2, 3, 1)]
        >>> randomized_min_cut(edges, 200, seed=7)
        3
    """
    result = karger_min_cut(
        edges, trials, seed=seed, vertex_count=vertex_count, weighted=weighted
    )
    if return_partition:
        return result.value, result.partition
    return result.value
