"""Consensus parameters and network presets."""

from .consensus import ConsensusParams, RetargetAlgorithm, TimespanChange
from .presets import (
    MAINNET_PARAMS,
    NETWORK_PARAMS,
    REGTEST_PARAMS,
    TESTNET_PARAMS,
    get_params,
)

__all__ = [
    "ConsensusParams",
    "MAINNET_PARAMS",
    "NETWORK_PARAMS",
    "REGTEST_PARAMS",
    "RetargetAlgorithm",
    "TESTNET_PARAMS",
    "TimespanChange",
    "get_params",
]
