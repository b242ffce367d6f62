"""
Proof-of-work difficulty rules.

Computes the target each block must meet and checks hashes against it.
"""

from .check import check_proof_of_work
from .classic import (
    calculate_next_work_required,
    classic_next_work_required,
    is_min_difficulty_gap,
)
from .lwma import (
    LwmaWindow,
    lwma_calculate_next_work_required,
    lwma_next_work_required,
    lwma_window,
)
from .retarget import get_next_work_required
from .work import block_proof, target_to_difficulty

__all__ = [
    "LwmaWindow",
    "block_proof",
    "calculate_next_work_required",
    "check_proof_of_work",
    "classic_next_work_required",
    "get_next_work_required",
    "is_min_difficulty_gap",
    "lwma_calculate_next_work_required",
    "lwma_next_work_required",
    "lwma_window",
    "target_to_difficulty",
]
