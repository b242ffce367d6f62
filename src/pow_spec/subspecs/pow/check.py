"""Proof-of-work validity check."""

from pow_spec.types import Uint32, decode_compact, uint256_from_hash

from ..params import ConsensusParams


def check_proof_of_work(block_hash: bytes, bits: Uint32, params: ConsensusParams) -> bool:
    """
    Check that a block hash meets the target it claims.

    Returns False for any compact value that is negative, overflows,
    decodes to zero, or is easier than the pow limit. Never raises for
    any 32-bit `bits`.

    Args:
        block_hash: The 32-byte block hash in internal (little-endian) order.
        bits: The compact target from the block header.
        params: Network parameters supplying the pow limit.

    Raises:
        ValueError: If `block_hash` is not 32 bytes.
    """
    hash_value = uint256_from_hash(block_hash)
    decoded = decode_compact(bits)

    # Check range.
    if not decoded.is_valid_target or decoded.target > params.pow_limit:
        return False

    # Check proof of work matches claimed amount.
    return hash_value <= decoded.target
