#Expose the high-level pipeline pieces:
#Dispatch policy + scheduling state (the ledger the tick driver owns)
#Candidate filtering (hard deadline rules)
#Scoring / ranking
#Assignment Selector
#The per-tick orchestrator lives in dispatch.dispatcher (Dispatcher.turn);
#import it from there, it pulls in riders.pooling.

from .policy import DispatchPolicy, default_policy, no_pooling_policy, policy_from_env
from .state import DispatchState, DispatchStateException
from .events import DispatchEvent, EventKind, TickReport
from .candidate_filter import build_pickup_candidates, PickupCandidate
from .scoring import rank_candidates, select_best_candidate
from .assignment import assign_next_pickup, Assignment

__all__ = [
    "DispatchPolicy",
    "default_policy",
    "no_pooling_policy",
    "policy_from_env",
    "DispatchState",
    "DispatchStateException",
    "DispatchEvent",
    "EventKind",
    "TickReport",
    "build_pickup_candidates",
    "PickupCandidate",
    "rank_candidates",
    "select_best_candidate",
    "assign_next_pickup",
    "Assignment",
]
