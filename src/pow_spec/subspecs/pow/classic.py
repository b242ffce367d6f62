"""
Classic periodic retargeting.

The target changes once per adjustment interval. At each boundary the
previous target is scaled by how long the interval actually took, with the
swing limited to a factor of four in either direction.
"""

from __future__ import annotations

import logging

from pow_spec.types import (
    MissingAncestorError,
    RetargetPreconditionError,
    Uint32,
    Uint64,
    Uint256,
    decode_compact,
    encode_compact,
)

from ..chain import BlockMetadata, ChainView
from ..params import ConsensusParams
from ..params.constants import MIN_DIFFICULTY_GAP_FACTOR, TIMESPAN_ADJUSTMENT_FACTOR

logger = logging.getLogger(__name__)


def is_min_difficulty_gap(
    last_block: BlockMetadata, candidate_timestamp: Uint64, params: ConsensusParams
) -> bool:
    """
    Check whether a candidate qualifies for the minimum difficulty rule.

    Only test networks enable the rule. It applies when the candidate is
    more than two target spacings later than its parent.
    """
    if not params.allow_min_difficulty_blocks:
        return False
    deadline = int(last_block.timestamp) + int(params.pow_target_spacing) * MIN_DIFFICULTY_GAP_FACTOR
    return int(candidate_timestamp) > deadline


def classic_next_work_required(
    last_block: BlockMetadata,
    candidate_timestamp: Uint64,
    params: ConsensusParams,
    chain: ChainView,
) -> Uint32:
    """
    Compute the compact target for the block after `last_block`.

    Between boundaries the target is inherited. On test networks a stalled
    candidate may use the pow limit, and ordinary blocks inherit the last
    target set by a real block rather than a minimum difficulty one.

    Raises:
        RetargetPreconditionError: If the interval would start before genesis.
        MissingAncestorError: If the chain view lacks the interval's first block.
    """
    height = int(last_block.height)
    interval = params.difficulty_adjustment_interval(height)
    pow_limit_compact = params.pow_limit_compact

    if (height + 1) % interval != 0:
        if not params.allow_min_difficulty_blocks:
            return last_block.bits

        if is_min_difficulty_gap(last_block, candidate_timestamp, params):
            logger.debug("Min difficulty block allowed at height %d", height + 1)
            return pow_limit_compact

        # Skip back over blocks mined under the minimum difficulty rule.
        block = last_block
        while int(block.height) % interval != 0 and block.bits == pow_limit_compact:
            previous = chain.get_previous(block)
            if previous is None:
                break
            block = previous
        return block.bits

    # Go back to the first block of the interval that just completed.
    first_height = height - (interval - 1)
    if first_height < 0:
        raise RetargetPreconditionError(
            f"Retarget interval of {interval} blocks starts before genesis at height {height}"
        )
    first_block = chain.get_ancestor(last_block, first_height)
    if first_block is None:
        raise MissingAncestorError(first_height, height)

    return calculate_next_work_required(last_block, first_block.timestamp, params)


def calculate_next_work_required(
    last_block: BlockMetadata, first_block_time: Uint64, params: ConsensusParams
) -> Uint32:
    """
    Scale the target of `last_block` by the measured interval timespan.

    The multiplication happens before the division and wraps at 256 bits.
    Changing that order changes the rounding, which forks the chain.
    """
    if params.no_retargeting:
        return last_block.bits

    height = int(last_block.height)
    target_timespan = params.target_timespan(height)

    # Limit adjustment step.
    actual_timespan = int(last_block.timestamp) - int(first_block_time)
    min_timespan = target_timespan // TIMESPAN_ADJUSTMENT_FACTOR
    max_timespan = target_timespan * TIMESPAN_ADJUSTMENT_FACTOR
    if actual_timespan < min_timespan:
        actual_timespan = min_timespan
    if actual_timespan > max_timespan:
        actual_timespan = max_timespan

    # Retarget.
    target = int(decode_compact(last_block.bits).target)
    new_target = Uint256.wrap(target * actual_timespan)
    new_target = Uint256(int(new_target) // target_timespan)

    if new_target > params.pow_limit:
        new_target = params.pow_limit

    logger.debug(
        "Classic retarget at height %d: timespan %d of %d",
        height + 1,
        actual_timespan,
        target_timespan,
    )
    return encode_compact(new_target)
