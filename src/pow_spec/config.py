"""
Global configuration for the proof-of-work consensus rules.

This module contains environment-specific settings that apply across all subspecs.
"""

import os

SUPPORTED_NETWORKS: list[str] = ["mainnet", "testnet", "regtest"]

POW_NETWORK = os.environ.get("POW_NETWORK", "mainnet").lower()
"""The default network preset ('mainnet', 'testnet' or 'regtest'). Defaults to 'mainnet'."""

if POW_NETWORK not in SUPPORTED_NETWORKS:
    raise ValueError(
        f"Invalid POW_NETWORK environment variable: '{POW_NETWORK}'. "
        f"Supported values: {SUPPORTED_NETWORKS}"
    )
