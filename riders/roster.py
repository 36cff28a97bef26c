"""
Purpose: Manages the people lifecycle the harness sees (PENDING -> ACTIVE -> FINISHED).
What it does:
- Owns the in-memory lists:
   - pending (scheduled to appear on a later tick)
   - active (the ordered roster handed to the dispatcher every tick)
   - finished (delivered by a vehicle or arrived on foot)

Provides operations:
   - enqueue(person)
   - release_due(tick)
   - active_people()
   - stats()
   - finish(name)

Rule: Roster owns list membership; the dispatcher owns commitments.
Scan order of active_people() is the order people were released, which is
what makes the dispatcher's tie-breaks reproducible.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from .models import Person


@dataclass
class RosterStats:
    pending_count: int
    active_count: int
    finished_count: int


@dataclass
class PeopleRoster:
    """
    In-memory people roster:

    PENDING -> ACTIVE -> FINISHED
    """
    _people: Dict[str, Person] = field(default_factory=dict)  # all people by name

    _pending_names: List[str] = field(default_factory=list)
    _active_names: List[str] = field(default_factory=list)
    _finished_names: List[str] = field(default_factory=list)

    # --- Public API ---

    def enqueue(self, person: Person) -> None:
        """
        Register a person. They become active once their appear_tick arrives.
        """
        if person.name in self._people:
            #idempotency : dont double insert
            return
        self._people[person.name] = person
        self._pending_names.append(person.name)

    def enqueue_many(self, people: Sequence[Person]) -> None:
        for person in people:
            self.enqueue(person)

    def release_due(self, tick: int) -> List[Person]:
        """
        Move pending people whose appear_tick <= tick into the active roster.
        Release keeps the enqueue order.
        """
        released: List[Person] = []
        for name in list(self._pending_names):
            person = self._people[name]
            if person.appear_tick <= tick:
                self._pending_names.remove(name)
                self._active_names.append(name)
                released.append(person)
        return released

    def active_people(self) -> List[Person]:
        return [self._people[name] for name in self._active_names]

    def finish(self, name: str) -> None:
        """
        Move a person from the active roster to finished.
        """
        if name not in self._active_names:
            return
        self._active_names.remove(name)
        self._finished_names.append(name)

    def has_pending(self) -> bool:
        return bool(self._pending_names)

    def stats(self) -> RosterStats:
        return RosterStats(
            pending_count=len(self._pending_names),
            active_count=len(self._active_names),
            finished_count=len(self._finished_names),
        )
