"""Configuration for flowgraph algorithms."""

import math
from dataclasses import dataclass


@dataclass
class FlowConfig:
    """Tunables shared by the flow and cut algorithms."""

    # Largest magnitude an accumulated flow or cost may reach (signed 64-bit).
    value_limit: int = 2**63 - 1

    # Name of the MaxFlowAlgorithm member used by calc_max_flow by default.
    default_max_flow_algorithm: str = "DINIC"

    # Karger trials default to ceil(factor * n^2 * ln n), never below min_trials.
    karger_trial_factor: float = 1.0
    karger_min_trials: int = 1

    # Re-check reduced costs after every potential update in min_cost_flow.
    verify_potentials: bool = False

    def karger_trials(self, vertex_count: int) -> int:
        """Number of contraction trials for a graph with ``vertex_count`` vertices."""
        if vertex_count < 2:
            return self.karger_min_trials
        estimated = math.ceil(
            self.karger_trial_factor * vertex_count**2 * math.log(vertex_count)
        )
        return max(self.karger_min_trials, estimated)


# Global configuration instance
FLOW_CONFIG = FlowConfig()
