"""
Reference harness around the dispatch engine: a timestep grid world, a
CSV scenario loader and per-tick metrics.
"""

from .config import SimulationConfig, load_simulation_config
from .loader import Scenario, ScenarioLoadError, load_scenario
from .metrics import MetricTracker
from .world import World

__all__ = [
    "SimulationConfig",
    "load_simulation_config",
    "Scenario",
    "ScenarioLoadError",
    "load_scenario",
    "MetricTracker",
    "World",
]
