"""Selection of the retarget algorithm by height."""

from __future__ import annotations

import logging

from pow_spec.types import Uint32, Uint64

from ..chain import BlockMetadata, ChainView
from ..params import ConsensusParams, RetargetAlgorithm
from .classic import classic_next_work_required
from .lwma import lwma_next_work_required

logger = logging.getLogger(__name__)


def get_next_work_required(
    last_block: BlockMetadata,
    candidate_timestamp: Uint64,
    params: ConsensusParams,
    chain: ChainView,
) -> Uint32:
    """
    Compute the compact target a block extending `last_block` must meet.

    The algorithm depends only on the new block's height: classic before
    the LWMA activation height, LWMA from it onwards.

    Args:
        last_block: The current tip the candidate builds on.
        candidate_timestamp: The candidate block's header time.
        params: Network parameters.
        chain: Ancestry of `last_block`.

    Returns:
        The compact target for the candidate block.
    """
    height = int(last_block.height) + 1
    algorithm = params.retarget_algorithm(height)
    logger.debug("Retargeting height %d with %s", height, algorithm.value)

    if algorithm is RetargetAlgorithm.LWMA:
        return lwma_next_work_required(last_block, candidate_timestamp, params, chain)
    return classic_next_work_required(last_block, candidate_timestamp, params, chain)
