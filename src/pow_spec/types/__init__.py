"""Reusable type definitions for the proof-of-work consensus rules."""

from .base import StrictBaseModel
from .compact import DecodedCompact, decode_compact, encode_compact, uint256_from_hash
from .exceptions import ConsensusError, MissingAncestorError, RetargetPreconditionError
from .uint import BaseUint, Uint32, Uint64, Uint256

__all__ = [
    # Core types
    "BaseUint",
    "Uint32",
    "Uint64",
    "Uint256",
    "StrictBaseModel",
    # Compact targets
    "DecodedCompact",
    "decode_compact",
    "encode_compact",
    "uint256_from_hash",
    # Exceptions
    "ConsensusError",
    "MissingAncestorError",
    "RetargetPreconditionError",
]
