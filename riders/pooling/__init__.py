"""
Pooling subpackage for the Riders domain.

Public API:
- pool_riders_at_stop
- PoolingResult
- DropSchedule
"""

from .engine import pool_riders_at_stop, PoolingResult, PoolingRejection
from .feasibility import DropSchedule, build_baseline_schedule, drop_times

__all__ = [
    "pool_riders_at_stop",
    "PoolingResult",
    "PoolingRejection",
    "DropSchedule",
    "build_baseline_schedule",
    "drop_times",
]
