"""
Shared pytest fixtures for all pow_spec tests.

Provides parameter sets used across multiple test modules.
"""

from __future__ import annotations

import pytest

from pow_spec.subspecs.params import ConsensusParams
from tests.pow_spec.helpers import make_classic_params, make_lwma_params


@pytest.fixture
def classic_params() -> ConsensusParams:
    """Classic-only parameters: 600s spacing, 2016 block interval, limit 0x1d00ffff."""
    return make_classic_params()


@pytest.fixture
def lwma_params() -> ConsensusParams:
    """LWMA parameters: 60s spacing, LWMA from height 46, limit 0x1e0fffff."""
    return make_lwma_params()
