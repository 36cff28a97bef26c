"""
Riders domain package.

Public API:
- Domain models: Person, PickupStatus
- Roster: PeopleRoster
- Pooling entry: pool_riders_at_stop (riders.pooling)
"""
from .models import Person, PickupStatus
from .roster import PeopleRoster, RosterStats

__all__ = ["Person",
           "PickupStatus",
           "PeopleRoster",
           "RosterStats",
           ]
