"""Block metadata consumed by the retargeting rules."""

from pow_spec.types import StrictBaseModel, Uint32, Uint64


class BlockMetadata(StrictBaseModel):
    """
    The slice of a block header that difficulty depends on.

    Timestamps are miner-supplied and may run backwards relative to an
    ancestor. Retargeting tolerates this through its clamps.
    """

    height: Uint64
    """Distance from the genesis block."""

    timestamp: Uint64
    """Header time in seconds since the Unix epoch."""

    bits: Uint32
    """The compact target this block was mined against."""
