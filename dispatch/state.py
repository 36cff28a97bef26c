"""
Purpose: The dispatcher's scheduling state (the single writer's ledger).
What it does:
- scheduled: person name -> vehicle name. A name goes in at most once.
- pick queues: vehicle name -> FIFO of person names the vehicle is
  committed to drive to. Only the head is ever "active".

Pooled riders are recorded in scheduled but never enter a pick queue:
they are picked on the spot.

Rule: State owns commitments; selection and pooling decide them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


class DispatchStateException(Exception):
    """Raised when a commitment would break the one-person-one-vehicle rule."""
    pass


@dataclass
class DispatchState:
    """
    In-memory scheduling ledger owned by the tick driver.
    """
    _scheduled: Dict[str, str] = field(default_factory=dict)
    _pick_queues: Dict[str, List[str]] = field(default_factory=dict)

    # --- Queries ---

    def is_scheduled(self, person_name: str) -> bool:
        return person_name in self._scheduled

    def vehicle_for(self, person_name: str) -> Optional[str]:
        return self._scheduled.get(person_name)

    def pick_queue(self, vehicle_name: str) -> List[str]:
        return list(self._pick_queues.get(vehicle_name, []))

    def queue_head(self, vehicle_name: str) -> Optional[str]:
        queue = self._pick_queues.get(vehicle_name)
        if not queue:
            return None
        return queue[0]

    def on_pickup_run(self, vehicle_name: str) -> bool:
        return bool(self._pick_queues.get(vehicle_name))

    def scheduled_snapshot(self) -> Dict[str, str]:
        return dict(self._scheduled)

    # --- Mutations ---

    def commit(self, person_name: str, vehicle_name: str) -> None:
        """
        Commit person to vehicle and push them onto the vehicle's pick queue.
        """
        self._claim(person_name, vehicle_name)
        self._pick_queues.setdefault(vehicle_name, []).append(person_name)

    def record_pooled(self, person_name: str, vehicle_name: str) -> None:
        """
        Commit a rider picked on the spot by pooling (no pick-queue entry).
        """
        self._claim(person_name, vehicle_name)

    def pop_head(self, vehicle_name: str) -> Optional[str]:
        queue = self._pick_queues.get(vehicle_name)
        if not queue:
            return None
        return queue.pop(0)

    def release(self, person_name: str) -> None:
        """
        Forget a person who left the active roster (delivered or walked off).
        Any stale pick-queue entry goes with them.
        """
        vehicle_name = self._scheduled.pop(person_name, None)
        if vehicle_name is None:
            return
        queue = self._pick_queues.get(vehicle_name)
        if queue and person_name in queue:
            queue.remove(person_name)

    def _claim(self, person_name: str, vehicle_name: str) -> None:
        owner = self._scheduled.get(person_name)
        if owner is not None:
            raise DispatchStateException(
                f"{person_name} is already committed to vehicle {owner}; cannot commit to {vehicle_name}"
            )
        self._scheduled[person_name] = vehicle_name
