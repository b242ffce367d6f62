"""
Consensus parameters for proof-of-work retargeting.

Loads network parameters from code presets or YAML files.

The expected YAML format uses UPPERCASE keys:

    NAME: testnet
    POW_LIMIT: 0x00000fffffffffffffffffffffffffffffffffffffffffffffffffffffffffff
    POW_TARGET_SPACING: 60
    POW_TARGET_TIMESPAN: 86400
    TIMESPAN_CHANGES:
    - height: 20000
      timespan: 43200
    POW_ALLOW_MIN_DIFFICULTY_BLOCKS: true
    POW_NO_RETARGETING: false
    LWMA_ACTIVATION_HEIGHT: 1000
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator, model_validator

from pow_spec.types import StrictBaseModel, Uint32, Uint64, Uint256, encode_compact

from .constants import LWMA_WINDOW, TIMESPAN_ADJUSTMENT_FACTOR


class RetargetAlgorithm(Enum):
    """The retargeting algorithm in force at a given height."""

    CLASSIC = "classic"
    """Periodic retarget once per adjustment interval."""

    LWMA = "lwma"
    """Linearly weighted moving average, evaluated every block."""


class TimespanChange(StrictBaseModel):
    """A scheduled change of the classic retarget timespan."""

    height: Uint64
    """First block height whose retarget uses the new timespan."""

    timespan: Uint64
    """Seconds per retarget period from `height` onwards."""


class ConsensusParams(StrictBaseModel):
    """
    The immutable parameters governing difficulty for one network.

    Every node on a network must use identical values. Any difference
    produces a different target for the same history and splits the chain.

    Field names use UPPERCASE aliases to match the YAML convention.
    Python code constructs the model with snake_case names.
    """

    name: str = Field(default="custom", alias="NAME")
    """Human-readable network name."""

    pow_limit: Uint256 = Field(alias="POW_LIMIT")
    """The easiest permitted target. Every valid target lies in (0, pow_limit]."""

    pow_target_spacing: Uint64 = Field(alias="POW_TARGET_SPACING")
    """Intended seconds between consecutive blocks."""

    pow_target_timespan: Uint64 = Field(alias="POW_TARGET_TIMESPAN")
    """Seconds per classic retarget period before any scheduled change."""

    timespan_changes: list[TimespanChange] = Field(default_factory=list, alias="TIMESPAN_CHANGES")
    """Scheduled timespan changes, ordered by strictly increasing height."""

    allow_min_difficulty_blocks: bool = Field(
        default=False, alias="POW_ALLOW_MIN_DIFFICULTY_BLOCKS"
    )
    """
    Permit a pow-limit block after a stall of twice the target spacing.

    Test networks only. Keeps a network with vanishing hashrate moving.
    """

    no_retargeting: bool = Field(default=False, alias="POW_NO_RETARGETING")
    """Keep the parent's target forever. Used by regression test networks."""

    lwma_activation_height: Uint64 = Field(alias="LWMA_ACTIVATION_HEIGHT")
    """First block height that retargets with LWMA instead of the classic rule."""

    @field_validator("pow_limit", mode="before")
    @classmethod
    def parse_pow_limit(cls, v: Any) -> Any:
        """
        Accept the pow limit as a hex string.

        YAML parsers may already turn 0x-prefixed values into integers.
        Those pass through unchanged.
        """
        if isinstance(v, str):
            try:
                return Uint256(int(v, 16))
            except ValueError as e:
                raise ValueError(f"pow_limit is not a hex number: {v!r}") from e
        return v

    @field_validator("timespan_changes", mode="before")
    @classmethod
    def parse_timespan_changes(cls, v: Any) -> Any:
        """Build `TimespanChange` entries from plain mappings."""
        if not isinstance(v, list):
            raise ValueError(f"timespan_changes must be a list, got {type(v).__name__}")
        return [
            TimespanChange.model_validate(entry) if isinstance(entry, dict) else entry
            for entry in v
        ]

    @model_validator(mode="after")
    def validate_schedule(self) -> ConsensusParams:
        """Reject parameter sets that would make retargeting ill-defined."""
        if int(self.pow_limit) == 0:
            raise ValueError("pow_limit must be non-zero")

        spacing = int(self.pow_target_spacing)
        if spacing == 0:
            raise ValueError("pow_target_spacing must be positive")

        previous_height = -1
        timespans = [(0, int(self.pow_target_timespan))]
        for change in self.timespan_changes:
            if int(change.height) <= previous_height:
                raise ValueError("timespan_changes must be ordered by strictly increasing height")
            previous_height = int(change.height)
            timespans.append((previous_height, int(change.timespan)))

        for height, timespan in timespans:
            if timespan == 0:
                raise ValueError(f"Timespan at height {height} must be positive")
            if timespan % spacing != 0:
                raise ValueError(
                    f"Timespan {timespan} at height {height} is not a multiple "
                    f"of the target spacing {spacing}"
                )
            # The clamped timespan multiplies a 256-bit target as a 32-bit word.
            if timespan * TIMESPAN_ADJUSTMENT_FACTOR >= 2**32:
                raise ValueError(f"Timespan {timespan} at height {height} is too large")

        # LWMA reads N blocks plus the one before them.
        if int(self.lwma_activation_height) <= LWMA_WINDOW:
            raise ValueError(
                f"lwma_activation_height must exceed the LWMA window of {LWMA_WINDOW} blocks"
            )
        return self

    @property
    def pow_limit_compact(self) -> Uint32:
        """The pow limit in compact form."""
        return encode_compact(self.pow_limit)

    def target_timespan(self, height: int) -> int:
        """Seconds per classic retarget period for a retarget evaluated at `height`."""
        timespan = int(self.pow_target_timespan)
        for change in self.timespan_changes:
            if int(change.height) > height:
                break
            timespan = int(change.timespan)
        return timespan

    def difficulty_adjustment_interval(self, height: int) -> int:
        """Blocks per classic retarget period at `height`."""
        return self.target_timespan(height) // int(self.pow_target_spacing)

    def retarget_algorithm(self, height: int) -> RetargetAlgorithm:
        """Select the retarget algorithm for the block at `height`."""
        if height >= int(self.lwma_activation_height):
            return RetargetAlgorithm.LWMA
        return RetargetAlgorithm.CLASSIC

    @classmethod
    def from_yaml_file(cls, path: Path | str) -> ConsensusParams:
        """
        Load parameters from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
            pydantic.ValidationError: If the data fails validation.
        """
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data)

    @classmethod
    def from_yaml(cls, content: str) -> ConsensusParams:
        """Load parameters from a YAML string."""
        data = yaml.safe_load(content)
        return cls.model_validate(data)
