"""Graph containers used by the flow and cut algorithms."""

from flowgraph.graph.contraction import ContractionGraph, UnionFind
from flowgraph.graph.residual import Edge, ResidualNetwork

__all__ = ["ContractionGraph", "Edge", "ResidualNetwork", "UnionFind"]
