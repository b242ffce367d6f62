"""
Linearly weighted moving average (LWMA) retargeting.

Evaluated every block over the last `LWMA_WINDOW` solvetimes. Solvetime j of
the window (oldest j = 1) is weighted by j, so recent blocks dominate and the
target tracks hashrate changes within a few blocks.

The next target is

    next = max(t, N * k / 3) * sum(target_i / (k * N^2))

where t is the weighted solvetime sum. When every block takes exactly a
60 second spacing, t * N / (k * N^2) is close to one and the target holds steady.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

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
from ..params.constants import LWMA_MIN_WEIGHTED_SOLVETIME, LWMA_TARGET_DIVISOR, LWMA_WINDOW
from .classic import is_min_difficulty_gap

logger = logging.getLogger(__name__)


def _to_int32(value: int) -> int:
    """Reduce an integer to the signed 32-bit range, wrapping like two's complement."""
    return ((value + 2**31) % 2**32) - 2**31


@dataclass(frozen=True, slots=True)
class LwmaWindow:
    """The raw accumulators of one LWMA evaluation, before clamping."""

    weighted_solvetime: int
    """Sum of solvetime_j * j over the window, as a signed 32-bit value."""

    target_sum: Uint256
    """Sum of target_i / (k * N^2) over the window."""


def lwma_window(last_block: BlockMetadata, chain: ChainView) -> LwmaWindow:
    """
    Accumulate weighted solvetimes and scaled targets for the next block.

    Solvetimes are signed. Out-of-order timestamps produce zero or negative
    terms and are not rejected here.

    Raises:
        RetargetPreconditionError: If the next height does not exceed the window.
        MissingAncestorError: If the chain view lacks a block of the window.
    """
    height = int(last_block.height) + 1
    if height <= LWMA_WINDOW:
        raise RetargetPreconditionError(
            f"LWMA needs more than {LWMA_WINDOW} blocks of history, next height is {height}"
        )

    weighted_solvetime = 0
    target_sum = 0

    for j, i in enumerate(range(height - LWMA_WINDOW, height), start=1):
        block = chain.get_ancestor(last_block, i)
        if block is None:
            raise MissingAncestorError(i, height - 1)
        previous = chain.get_ancestor(block, i - 1)
        if previous is None:
            raise MissingAncestorError(i - 1, height - 1)

        solvetime = int(block.timestamp) - int(previous.timestamp)

        # The accumulator is a 32-bit register.
        weighted_solvetime = _to_int32(weighted_solvetime + solvetime * j)

        # Divide each term before summing so the sum stays within 256 bits.
        target = int(decode_compact(block.bits).target)
        target_sum = int(Uint256.wrap(target_sum + target // LWMA_TARGET_DIVISOR))

    return LwmaWindow(weighted_solvetime=weighted_solvetime, target_sum=Uint256(target_sum))


def lwma_next_work_required(
    last_block: BlockMetadata,
    candidate_timestamp: Uint64,
    params: ConsensusParams,
    chain: ChainView,
) -> Uint32:
    """
    Compute the compact target for the block after `last_block` with LWMA.

    A stalled candidate on a test network may use the pow limit and skips
    the average entirely.
    """
    if is_min_difficulty_gap(last_block, candidate_timestamp, params):
        logger.debug("Min difficulty block allowed at height %d", int(last_block.height) + 1)
        return params.pow_limit_compact
    return lwma_calculate_next_work_required(last_block, params, chain)


def lwma_calculate_next_work_required(
    last_block: BlockMetadata, params: ConsensusParams, chain: ChainView
) -> Uint32:
    """
    Run the weighted average over the window ending at `last_block`.

    Only a floor is applied to the weighted solvetime. There is no matching
    ceiling, so far-future timestamps can ease the target without bound
    until the pow limit clamp.
    """
    if params.no_retargeting:
        return last_block.bits

    window = lwma_window(last_block, chain)

    weighted_solvetime = window.weighted_solvetime
    if weighted_solvetime < LWMA_MIN_WEIGHTED_SOLVETIME:
        logger.debug(
            "LWMA weighted solvetime %d raised to floor %d",
            weighted_solvetime,
            LWMA_MIN_WEIGHTED_SOLVETIME,
        )
        weighted_solvetime = LWMA_MIN_WEIGHTED_SOLVETIME

    next_target = Uint256.wrap(weighted_solvetime * int(window.target_sum))
    if next_target > params.pow_limit:
        next_target = params.pow_limit

    return encode_compact(next_target)
