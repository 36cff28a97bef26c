"""
Purpose: Central configuration for the simulation harness.
What it does:
Reads where the scenario lives, how long to run and where to write results
from the environment (a .env file is honoured), with defaults that run the
bundled sample scenario.

Example in .env:
SIM_SCENARIO_DIR=sampledata
SIM_TICKS=200
LOG_LEVEL=DEBUG

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class SimulationConfig:
    scenario_dir: str = "sampledata"

    # Hard cap on ticks. The run also stops once nobody is pending or active.
    ticks: int = 200

    results_path: str = "dispatch_results.csv"
    metrics_path: str = "metrics_snapshot.csv"

    log_level: str = "INFO"

    def validate(self) -> None:
        if self.ticks <= 0:
            raise ValueError("ticks must be > 0")
        if not self.scenario_dir:
            raise ValueError("scenario_dir must be set")


def load_simulation_config() -> SimulationConfig:
    load_dotenv()
    defaults = SimulationConfig()
    config = SimulationConfig(
        scenario_dir=os.getenv("SIM_SCENARIO_DIR", defaults.scenario_dir),
        ticks=int(os.getenv("SIM_TICKS", defaults.ticks)),
        results_path=os.getenv("SIM_RESULTS_PATH", defaults.results_path),
        metrics_path=os.getenv("SIM_METRICS_PATH", defaults.metrics_path),
        log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
    )
    config.validate()
    return config
