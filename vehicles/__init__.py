"""
Vehicles domain package.

Public API:
- Vehicle, VehicleState
"""
from .models import Vehicle, VehicleState

__all__ = ["Vehicle", "VehicleState"]
