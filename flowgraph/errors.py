"""Error taxonomy for flow-network computations.

Each error also derives from the closest builtin exception so callers that
catch ``ValueError`` or ``IndexError`` keep working.
"""

from __future__ import annotations


class FlowGraphError(Exception):
    """Base class for all flowgraph errors."""


class InvalidArgument(FlowGraphError, ValueError):
    """Malformed input: negative capacity, non-positive counts and similar."""


class OutOfRange(FlowGraphError, IndexError):
    """Vertex index outside ``[0, vertex_count)`` or unknown edge handle."""


class PreconditionViolated(FlowGraphError, RuntimeError):
    """Operation requires state that has not been established."""


class ArithmeticOverflow(FlowGraphError, OverflowError):
    """Accumulated flow or cost exceeds the configured value limit."""


class InfeasibleNetwork(FlowGraphError, ValueError):
    """Min-cost flow request cannot be satisfied with a bounded cost."""
