"""
Factory functions for constructing test fixtures.

Provides deterministic builders for blocks, chains and parameter sets.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pow_spec.subspecs.chain import BlockIndex, BlockMetadata
from pow_spec.subspecs.params import ConsensusParams
from pow_spec.types import Uint32, Uint64, Uint256

GENESIS_TIME = 1_700_000_000
"""Timestamp of height 0 in every test chain."""

BITCOIN_POW_LIMIT = Uint256((1 << 224) - 1)
"""A pow limit whose compact form is 0x1d00ffff."""

LWMA_POW_LIMIT = Uint256((1 << 236) - 1)
"""A pow limit whose compact form is 0x1e0fffff."""


def make_block(height: int, timestamp: int, bits: int) -> BlockMetadata:
    """Create block metadata from plain integers."""
    return BlockMetadata(height=Uint64(height), timestamp=Uint64(timestamp), bits=Uint32(bits))


def make_chain(
    timestamps: Sequence[int],
    bits: int | Sequence[int],
    base_height: int = 0,
) -> BlockIndex:
    """
    Build a chain segment with one block per timestamp.

    `bits` is either shared by every block or given per block.
    """
    per_block = [bits] * len(timestamps) if isinstance(bits, int) else list(bits)
    assert len(per_block) == len(timestamps), "bits and timestamps must align"
    return BlockIndex.from_blocks(
        make_block(base_height + offset, timestamp, block_bits)
        for offset, (timestamp, block_bits) in enumerate(zip(timestamps, per_block, strict=True))
    )


def make_spaced_chain(
    count: int, spacing: int, bits: int, start: int = GENESIS_TIME, base_height: int = 0
) -> BlockIndex:
    """Build a chain of `count` blocks exactly `spacing` seconds apart."""
    return make_chain([start + spacing * i for i in range(count)], bits, base_height)


def make_classic_params(**overrides: Any) -> ConsensusParams:
    """
    Parameters with Bitcoin's classic schedule and LWMA out of reach.

    Ten minute blocks, two week periods (2016 blocks), pow limit 0x1d00ffff.
    """
    fields: dict[str, Any] = {
        "name": "classic-test",
        "pow_limit": BITCOIN_POW_LIMIT,
        "pow_target_spacing": Uint64(600),
        "pow_target_timespan": Uint64(2016 * 600),
        "lwma_activation_height": Uint64(10**9),
    }
    fields.update(overrides)
    return ConsensusParams(**fields)


def make_lwma_params(**overrides: Any) -> ConsensusParams:
    """Parameters with one minute blocks and LWMA from the earliest allowed height."""
    fields: dict[str, Any] = {
        "name": "lwma-test",
        "pow_limit": LWMA_POW_LIMIT,
        "pow_target_spacing": Uint64(60),
        "pow_target_timespan": Uint64(60 * 1000),
        "lwma_activation_height": Uint64(46),
    }
    fields.update(overrides)
    return ConsensusParams(**fields)
