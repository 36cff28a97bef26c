#Purpose: Ranking/selection model (the "who is best" layer).
#Takes feasible candidates (already filtered) and picks one.
#Cost is the total trip distance vehicle -> pickup -> destination.
#Tie-breaking is deterministic: lowest scan index (first in the people list) wins.

from typing import List, Optional, Sequence

from .candidate_filter import PickupCandidate


def candidate_sort_key(candidate: PickupCandidate):
    return (candidate.trip_distance, candidate.scan_index)


def rank_candidates(candidates: Sequence[PickupCandidate]) -> List[PickupCandidate]:
    """
    Cheapest trip first; equal trips keep people-list order.
    """
    return sorted(candidates, key=candidate_sort_key)


def select_best_candidate(candidates: Sequence[PickupCandidate]) -> Optional[PickupCandidate]:
    best = None
    for candidate in candidates:
        if best is None or candidate_sort_key(candidate) < candidate_sort_key(best):
            best = candidate
    return best
