"""Shared aliases, enums and numeric guards."""

from __future__ import annotations

import math
from enum import IntEnum
from fractions import Fraction
from numbers import Real
from typing import Union

from flowgraph.config import FLOW_CONFIG
from flowgraph.errors import ArithmeticOverflow, InvalidArgument

#: Capacity, flow and cost values. Integers and ``fractions.Fraction`` are exact;
#: floats are accepted but carry no numerical-stability guarantee.
Number = Union[int, float, Fraction]

#: Vertex identifier in ``[0, vertex_count)``.
VertexID = int

#: Opaque edge handle returned by ``ResidualNetwork.add_edge``.
EdgeHandle = int


class MaxFlowAlgorithm(IntEnum):
    """Maximum-flow procedures available through ``calc_max_flow``."""

    #: Shortest (fewest-edge) augmenting paths found by BFS, O(V * E^2).
    EDMONDS_KARP = 1
    #: Any augmenting path found by DFS; pseudo-polynomial.
    FORD_FULKERSON = 2
    #: Level graph plus blocking flow per phase, O(V^2 * E).
    DINIC = 3

    @classmethod
    def from_string(cls, value: str) -> "MaxFlowAlgorithm":
        """Parse a case-insensitive member name.

        Raises:
            InvalidArgument: If the name does not match any member.
        """
        try:
            return cls[value.upper()]
        except KeyError:
            valid = ", ".join(e.name for e in cls)
            raise InvalidArgument(
                f"Invalid max-flow algorithm '{value}'. Valid values are: {valid}"
            ) from None


class SearchOrder(IntEnum):
    """Order in which an augmenting-path search explores the residual graph."""

    BFS = 1
    DFS = 2


def require_number(value: object, name: str) -> Number:
    """Return ``value`` if it is a finite real number, raising InvalidArgument otherwise."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidArgument(f"{name} must be a real number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidArgument(f"{name} must be finite, got {value!r}")
    return value  # type: ignore[return-value]


def check_limit(value: Number, what: str) -> Number:
    """Raise ArithmeticOverflow if ``|value|`` exceeds the configured limit."""
    limit = FLOW_CONFIG.value_limit
    if value > limit or value < -limit:
        raise ArithmeticOverflow(
            f"{what} {value} exceeds the representable limit {limit}"
        )
    return value
