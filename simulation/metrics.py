"""Simple per-tick metrics collection for the dispatch simulation.

MetricTracker.snapshot(world, report) records one row per tick:

* waiting / committed / onboard people
* delivered by vehicle, arrived on foot, late deliveries (running totals)
* assignments and pooled riders issued this tick
* idle vehicles this tick

Rows can be exported through pandas for plotting.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from dispatch.events import EventKind, TickReport
from riders.models import PickupStatus
from vehicles.models import VehicleState


class MetricTracker:
    """Collects simulation KPIs every tick and allows exporting them."""

    def __init__(self):
        self._records: List[Dict[str, Any]] = []

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def snapshot(self, world, report: TickReport) -> Dict[str, Any]:
        """Capture key metrics after a tick has been fully applied.

        Parameters
        ----------
        world : simulation.world.World
            The live simulation.
        report : dispatch.events.TickReport
            What the dispatcher did this tick.
        """
        active = world.roster.active_people()

        record = {
            "tick": report.tick,
            "waiting": sum(1 for p in active if p.status == PickupStatus.UNASSIGNED),
            "committed": sum(1 for p in active if p.status == PickupStatus.COMMITTED),
            "onboard": sum(len(v.onboard) for v in world.vehicles),
            "walking": sum(1 for p in active if p.walking),
            "delivered_by_vehicle": world.delivered_by_vehicle,
            "delivered_on_foot": world.delivered_on_foot,
            "late": world.late_deliveries,
            "assigned": len(report.of_kind(EventKind.ASSIGN)),
            "pooled": len(report.of_kind(EventKind.POOL)),
            "idle_vehicles": sum(1 for v in world.vehicles if v.state == VehicleState.IDLE),
        }

        self._records.append(record)
        return record

    # ------------------------------------------------------------------ #
    # Export helpers
    # ------------------------------------------------------------------ #

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(self._records)

    def save_csv(self, path: str | Path):
        df = self.to_dataframe()
        df.to_csv(path, index=False)

    def summary(self) -> Dict[str, Any]:
        """Run-level totals from the last snapshot plus per-tick aggregates."""
        df = self.to_dataframe()
        if df.empty:
            return {"ticks": 0, "pooled_total": 0, "assigned_total": 0, "peak_waiting": 0}

        last = df.iloc[-1]
        return {
            "ticks": int(len(df)),
            "delivered_by_vehicle": int(last["delivered_by_vehicle"]),
            "delivered_on_foot": int(last["delivered_on_foot"]),
            "late": int(last["late"]),
            "assigned_total": int(df["assigned"].sum()),
            "pooled_total": int(df["pooled"].sum()),
            "peak_waiting": int(df["waiting"].max()),
            "avg_idle_vehicles": float(df["idle_vehicles"].mean()),
        }
