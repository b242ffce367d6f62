"""
Network parameter presets.

Every preset targets one block per minute, the spacing the LWMA
weighting constant was derived for.
"""

from typing_extensions import Final

from pow_spec.types import Uint64, Uint256

from .consensus import ConsensusParams, TimespanChange

MAINNET_POW_LIMIT: Final = Uint256((1 << 236) - 1)
"""Mainnet pow limit, compact 0x1e0fffff."""

REGTEST_POW_LIMIT: Final = Uint256((1 << 255) - 1)
"""Regtest pow limit, compact 0x207fffff."""

MAINNET_PARAMS: Final = ConsensusParams(
    name="mainnet",
    pow_limit=MAINNET_POW_LIMIT,
    pow_target_spacing=Uint64(60),
    pow_target_timespan=Uint64(302400),
    timespan_changes=[TimespanChange(height=Uint64(100800), timespan=Uint64(86400))],
    allow_min_difficulty_blocks=False,
    no_retargeting=False,
    lwma_activation_height=Uint64(250000),
)
"""
Mainnet parameters.

The classic period starts at 3.5 days (5040 blocks) and shortens to one
day (1440 blocks) from height 100800. LWMA takes over at height 250000.
"""

TESTNET_PARAMS: Final = ConsensusParams(
    name="testnet",
    pow_limit=MAINNET_POW_LIMIT,
    pow_target_spacing=Uint64(60),
    pow_target_timespan=Uint64(86400),
    allow_min_difficulty_blocks=True,
    no_retargeting=False,
    lwma_activation_height=Uint64(4320),
)
"""Testnet parameters with the minimum difficulty rule enabled."""

REGTEST_PARAMS: Final = ConsensusParams(
    name="regtest",
    pow_limit=REGTEST_POW_LIMIT,
    pow_target_spacing=Uint64(60),
    pow_target_timespan=Uint64(86400),
    allow_min_difficulty_blocks=True,
    no_retargeting=True,
    lwma_activation_height=Uint64(150),
)
"""Regression test parameters. Difficulty never changes."""

NETWORK_PARAMS: Final = {
    "mainnet": MAINNET_PARAMS,
    "testnet": TESTNET_PARAMS,
    "regtest": REGTEST_PARAMS,
}
"""Presets by network name."""


def get_params(network: str) -> ConsensusParams:
    """
    Look up the preset for a network name.

    Raises:
        KeyError: If the network has no preset.
    """
    try:
        return NETWORK_PARAMS[network.lower()]
    except KeyError:
        raise KeyError(
            f"Unknown network '{network}'. Known networks: {sorted(NETWORK_PARAMS)}"
        ) from None
