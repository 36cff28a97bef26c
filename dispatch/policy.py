"""
Purpose: Central configuration for dispatch and pooling behavior.
What it does:

Stores all tunable thresholds/flags:

WALK_SLOWDOWN_FACTOR = 2   (people walk at half vehicle speed)
ENABLE_POOLING = True
STRICT_INVARIANTS = True   (raise on state-machine violations)
LOG_IDLE_VEHICLES = True

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class DispatchPolicy:
    """
    Central configuration for the per-tick dispatcher.

    Notes:
    - walk_slowdown_factor feeds the walk-away pickup deadline:
        pickup_deadline = time - walk_slowdown_factor * d(origin, destination)
    - strict_invariants turns state-machine violations into exceptions.
      Switch it off in long runs where you'd rather log and keep going.
    """

    # --- Walk-away deadline ---
    walk_slowdown_factor: int = 2

    # --- Ride pooling ---
    # When False the dispatcher only ever serves the pick-queue head.
    enable_pooling: bool = True

    # --- Invariant checking ---
    strict_invariants: bool = True

    # --- Observability ---
    # Emit an IDLE event (and a debug log) for vehicles with nothing to do.
    log_idle_vehicles: bool = True

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if self.walk_slowdown_factor < 1:
            raise ValueError("walk_slowdown_factor must be >= 1")


def default_policy() -> DispatchPolicy:
    """
    Convenience factory for the default policy.
    """
    p = DispatchPolicy()
    p.validate()
    return p


def no_pooling_policy() -> DispatchPolicy:
    """
    Single-rider dispatch only. Useful as a baseline when measuring pooling.
    """
    p = DispatchPolicy(enable_pooling=False)
    p.validate()
    return p


def policy_from_env() -> DispatchPolicy:
    """
    Build a policy from DISPATCH_* environment variables (.env is honoured).

    Example in .env:
    DISPATCH_WALK_SLOWDOWN_FACTOR=2
    DISPATCH_ENABLE_POOLING=true
    DISPATCH_STRICT_INVARIANTS=false
    """
    load_dotenv()
    defaults = DispatchPolicy()
    p = DispatchPolicy(
        walk_slowdown_factor=int(os.getenv("DISPATCH_WALK_SLOWDOWN_FACTOR", defaults.walk_slowdown_factor)),
        enable_pooling=_env_flag("DISPATCH_ENABLE_POOLING", defaults.enable_pooling),
        strict_invariants=_env_flag("DISPATCH_STRICT_INVARIANTS", defaults.strict_invariants),
        log_idle_vehicles=_env_flag("DISPATCH_LOG_IDLE_VEHICLES", defaults.log_idle_vehicles),
    )
    p.validate()
    return p


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")
