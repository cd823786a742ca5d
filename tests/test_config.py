"""Test the configuration module functionality."""

import math

from flowgraph.config import FLOW_CONFIG, FlowConfig


def test_flow_config_defaults():
    """Default values of a fresh configuration."""
    config = FlowConfig()

    assert config.value_limit == 2**63 - 1
    assert config.default_max_flow_algorithm == "DINIC"
    assert config.karger_trial_factor == 1.0
    assert config.karger_min_trials == 1
    assert config.verify_potentials is False


def test_karger_trials_estimate():
    config = FlowConfig()

    assert config.karger_trials(4) == math.ceil(16 * math.log(4))
    assert config.karger_trials(10) == math.ceil(100 * math.log(10))


def test_karger_trials_bounds():
    """Tiny graphs still run at least ``karger_min_trials`` trials."""
    config = FlowConfig(karger_min_trials=30)

    assert config.karger_trials(0) == 30
    assert config.karger_trials(1) == 30
    assert config.karger_trials(2) == 30


def test_karger_trials_factor():
    config = FlowConfig(karger_trial_factor=0.5)
    assert config.karger_trials(10) == math.ceil(50 * math.log(10))


def test_global_config_instance():
    assert isinstance(FLOW_CONFIG, FlowConfig)
    assert FLOW_CONFIG.karger_trials(4) == 23
