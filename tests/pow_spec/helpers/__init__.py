"""Test helpers for pow_spec unit tests."""

from .builders import (
    BITCOIN_POW_LIMIT,
    GENESIS_TIME,
    LWMA_POW_LIMIT,
    make_block,
    make_chain,
    make_classic_params,
    make_lwma_params,
    make_spaced_chain,
)

__all__ = [
    "BITCOIN_POW_LIMIT",
    "GENESIS_TIME",
    "LWMA_POW_LIMIT",
    "make_block",
    "make_chain",
    "make_classic_params",
    "make_lwma_params",
    "make_spaced_chain",
]
