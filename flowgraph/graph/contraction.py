"""Contractible undirected weighted graphs for global minimum-cut algorithms.

`ContractionGraph` keeps a sparse adjacency map over the current set of
super-vertices together with the original vertices each one represents.
`UnionFind` tracks the same kind of partition for edge-list based contraction.
Both are built fresh for every run and discarded afterwards.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from flowgraph.errors import InvalidArgument
from flowgraph.types import Number, VertexID, require_number

#: Undirected weighted edge ``(u, v, weight)``.
UndirectedEdge = Tuple[VertexID, VertexID, Number]


def normalize_edges(
    edges: Iterable[Tuple], vertex_count: Optional[int] = None
) -> Tuple[List[UndirectedEdge], int]:
    """Validate an undirected edge list and infer the vertex count.

    Edges may be ``(u, v)`` (weight 1) or ``(u, v, weight)``. Vertices are
    non-negative integers; when ``vertex_count`` is omitted it is one more than
    the largest endpoint.

    Returns:
        Tuple of (edges as 3-tuples, vertex count).

    Raises:
        InvalidArgument: On malformed edges, negative weights, or endpoints
            outside an explicit ``vertex_count``.
    """
    result: List[UndirectedEdge] = []
    highest = -1
    for item in edges:
        if len(item) == 2:
            u, v = item
            w: Number = 1
        elif len(item) == 3:
            u, v, w = item
        else:
            raise InvalidArgument(f"Edge must be (u, v) or (u, v, weight), got {item!r}")
        for end in (u, v):
            if isinstance(end, bool) or not isinstance(end, int) or end < 0:
                raise InvalidArgument(f"Vertex ids must be non-negative integers, got {end!r}")
        require_number(w, "weight")
        if w < 0:
            raise InvalidArgument(f"Edge weights must be non-negative, got {w}")
        highest = max(highest, u, v)
        result.append((u, v, w))

    if vertex_count is None:
        vertex_count = highest + 1
    elif highest >= vertex_count:
        raise InvalidArgument(
            f"Edge endpoint {highest} outside vertex_count {vertex_count}"
        )
    return result, vertex_count


class UnionFind:
    """Disjoint sets over ``[0, n)`` with path compression and union by rank."""

    def __init__(self, n: int) -> None:
        self.parent: List[int] = list(range(n))
        self.rank: List[int] = [0] * n
        self.components = n

    def find(self, x: int) -> int:
        root = x
        parent = self.parent
        while parent[root] != root:
            root = parent[root]
        while parent[x] != root:
            parent[x], x = root, parent[x]
        return root

    def union(self, x: int, y: int) -> bool:
        """Merge the sets of ``x`` and ``y``; return False if already merged."""
        rx, ry = self.find(x), self.find(y)
        if rx == ry:
            return False
        if self.rank[rx] < self.rank[ry]:
            rx, ry = ry, rx
        self.parent[ry] = rx
        if self.rank[rx] == self.rank[ry]:
            self.rank[rx] += 1
        self.components -= 1
        return True

    def groups(self) -> List[FrozenSet[int]]:
        """Current sets, ordered by their smallest member."""
        buckets: Dict[int, List[int]] = {}
        for x in range(len(self.parent)):
            buckets.setdefault(self.find(x), []).append(x)
        return sorted((frozenset(b) for b in buckets.values()), key=min)


class ContractionGraph:
    """Undirected weighted graph whose vertices can be merged.

    Parallel edges are summed on insertion and self-loops are dropped, so the
    adjacency map always holds one aggregated weight per super-vertex pair.
    """

    def __init__(self, vertex_count: int) -> None:
        if vertex_count <= 0:
            raise InvalidArgument(f"vertex_count must be positive, got {vertex_count}")
        self.adj: Dict[VertexID, Dict[VertexID, Number]] = {
            v: {} for v in range(vertex_count)
        }
        self.members: Dict[VertexID, List[VertexID]] = {
            v: [v] for v in range(vertex_count)
        }

    @classmethod
    def from_edges(
        cls, edges: Iterable[UndirectedEdge], vertex_count: int
    ) -> ContractionGraph:
        graph = cls(vertex_count)
        for u, v, w in edges:
            graph.add_weight(u, v, w)
        return graph

    def __len__(self) -> int:
        return len(self.adj)

    def vertices(self) -> List[VertexID]:
        return list(self.adj)

    def add_weight(self, u: VertexID, v: VertexID, weight: Number) -> None:
        if u == v:
            return
        self.adj[u][v] = self.adj[u].get(v, 0) + weight
        self.adj[v][u] = self.adj[v].get(u, 0) + weight

    def weight(self, u: VertexID, v: VertexID) -> Number:
        return self.adj[u].get(v, 0)

    def merge(self, keep: VertexID, gone: VertexID) -> None:
        """Fold super-vertex ``gone`` into ``keep``, summing shared weights."""
        if keep == gone:
            raise InvalidArgument("Cannot merge a super-vertex with itself")
        for nbr, w in self.adj.pop(gone).items():
            del self.adj[nbr][gone]
            if nbr != keep:
                self.add_weight(keep, nbr, w)
        self.members[keep].extend(self.members.pop(gone))

    def side(self, v: VertexID) -> Set[VertexID]:
        """Original vertices represented by super-vertex ``v``."""
        return set(self.members[v])
