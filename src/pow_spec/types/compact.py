"""
Compact target encoding.

A compact target packs a 256-bit magnitude into 32 bits, like a tiny
floating point number:

    bits = exponent (1 byte) || sign (1 bit) || mantissa (23 bits)

The magnitude is `mantissa * 256**(exponent - 3)`.

Decoding is lossy in one direction only. Any value whose significant bytes
fit in the mantissa decodes back exactly. Encoding keeps the top three
significant bytes and drops the rest.
"""

from __future__ import annotations

from dataclasses import dataclass

from .uint import Uint32, Uint256

COMPACT_SIGN_BIT = 0x00800000
"""The sign bit inside the mantissa field."""

COMPACT_MANTISSA_MASK = 0x007FFFFF
"""Mask selecting the 23 magnitude bits of the mantissa."""


@dataclass(frozen=True, slots=True)
class DecodedCompact:
    """The result of decoding a compact target, with its validity flags."""

    target: Uint256
    """The decoded magnitude, truncated to 256 bits."""

    negative: bool
    """The sign bit was set on a non-zero mantissa."""

    overflow: bool
    """The encoded magnitude does not fit in 256 bits."""

    @property
    def is_valid_target(self) -> bool:
        """True when the target is usable as a proof-of-work threshold."""
        return not self.negative and not self.overflow and int(self.target) != 0


def decode_compact(bits: Uint32) -> DecodedCompact:
    """
    Decode a compact target into its magnitude and validity flags.

    Total over all 32-bit patterns. Magnitudes beyond 256 bits are truncated
    and reported through `overflow`.
    """
    compact = int(bits)
    size = compact >> 24
    word = compact & COMPACT_MANTISSA_MASK

    # Small exponents shift mantissa bytes out. The flags only see what remains.
    if size <= 3:
        word >>= 8 * (3 - size)
        value = word
    else:
        value = word << (8 * (size - 3))

    negative = word != 0 and (compact & COMPACT_SIGN_BIT) != 0
    overflow = word != 0 and (
        size > 34 or (word > 0xFF and size > 33) or (word > 0xFFFF and size > 32)
    )
    return DecodedCompact(target=Uint256.wrap(value), negative=negative, overflow=overflow)


def encode_compact(target: Uint256, negative: bool = False) -> Uint32:
    """
    Encode a 256-bit magnitude as a compact target.

    If the top mantissa bit would be set, the mantissa is shifted down one
    byte and the exponent bumped, so the sign bit only ever carries `negative`.
    """
    value = int(target)
    size = (value.bit_length() + 7) // 8

    if size <= 3:
        compact = value << (8 * (3 - size))
    else:
        compact = value >> (8 * (size - 3))

    if compact & COMPACT_SIGN_BIT:
        compact >>= 8
        size += 1

    compact |= size << 24
    if negative and (compact & COMPACT_MANTISSA_MASK):
        compact |= COMPACT_SIGN_BIT
    return Uint32(compact)


def uint256_from_hash(block_hash: bytes) -> Uint256:
    """
    Interpret a 32-byte hash as an unsigned 256-bit magnitude.

    Hashes are held in internal byte order, which is little-endian.
    The familiar hex form shown by explorers is this value byte-reversed.

    Raises:
        ValueError: If the hash is not exactly 32 bytes.
    """
    if len(block_hash) != 32:
        raise ValueError(f"Block hash must be 32 bytes, got {len(block_hash)}")
    return Uint256(int.from_bytes(block_hash, "little"))
