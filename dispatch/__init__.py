#Expose the high-level pipeline pieces:
#Candidate filtering (hard rules)
#Scoring
#Dispatcher orchestrator (the "one call" entry point)

from .candidate_filter import build_base_candidates
from .scoring import CandidateScore, score_candidate, score_driver
from .policy import DispatchPolicy, default_dispatch_policy, policy_from_env
from .dispatcher import (
    Assignment,
    DispatchResult,
    DispatchSnapshot,
    Dispatcher,
    SkippedOrder,
    SkipReason,
    assign_drivers, #the main function to call to assign drivers to a snapshot of orders
)

__all__ = [
    "build_base_candidates",
    "CandidateScore",
    "score_candidate",
    "score_driver",
    "DispatchPolicy",
    "default_dispatch_policy",
    "policy_from_env",
    "Assignment",
    "DispatchResult",
    "DispatchSnapshot",
    "Dispatcher",
    "SkippedOrder",
    "SkipReason",
    "assign_drivers",
]
