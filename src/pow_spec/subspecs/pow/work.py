"""Work and difficulty measures derived from compact targets."""

from pow_spec.types import Uint32, Uint256, decode_compact

from ..params import ConsensusParams


def block_proof(bits: Uint32) -> Uint256:
    """
    Expected number of hashes needed to meet `bits`.

    This is 2**256 / (target + 1), computed as (~target / (target + 1)) + 1
    so the numerator fits in 256 bits. Invalid compact values carry no work.
    """
    decoded = decode_compact(bits)
    if not decoded.is_valid_target:
        return Uint256(0)
    target = decoded.target
    return Uint256(int(~target) // (int(target) + 1) + 1)


def target_to_difficulty(bits: Uint32, params: ConsensusParams) -> float:
    """
    Express a compact target as a multiple of the pow limit's difficulty.

    A block at the pow limit has difficulty 1.0. Meant for display only;
    consensus never compares these floats.

    Raises:
        ValueError: If `bits` does not decode to a valid target.
    """
    decoded = decode_compact(bits)
    if not decoded.is_valid_target:
        raise ValueError(f"Compact value 0x{int(bits):08x} is not a valid target")
    return int(params.pow_limit) / int(decoded.target)
