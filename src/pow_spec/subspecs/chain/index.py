"""
In-memory block index.

A height-indexed arena holding one contiguous chain segment. Ancestor lookups
are a single list access. The segment may start above genesis, which is how
light tooling holds only the recent blocks retargeting needs.

YAML format:

    BLOCKS:
    - {height: 0, timestamp: 1700000000, bits: 0x1e0fffff}
    - {height: 1, timestamp: 1700000060, bits: 0x1e0fffff}
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .block import BlockMetadata


@dataclass(slots=True)
class BlockIndex:
    """
    A single chain segment addressable by height.

    Implements the `ChainView` protocol.
    """

    _blocks: list[BlockMetadata] = field(default_factory=list)
    """Blocks ordered by height, with no gaps."""

    @classmethod
    def from_blocks(cls, blocks: Iterable[BlockMetadata]) -> BlockIndex:
        """
        Build an index from blocks in ascending height order.

        Raises:
            ValueError: If heights are not consecutive.
        """
        index = cls()
        for block in blocks:
            index.append(block)
        return index

    def __len__(self) -> int:
        """Return the number of indexed blocks."""
        return len(self._blocks)

    def __iter__(self) -> Iterator[BlockMetadata]:
        """Iterate over the blocks from lowest to highest."""
        return iter(self._blocks)

    def __contains__(self, block: object) -> bool:
        """Check whether this exact block sits at its height in the index."""
        if not isinstance(block, BlockMetadata):
            return False
        return self.get(int(block.height)) == block

    @property
    def base_height(self) -> int:
        """Height of the first indexed block."""
        if not self._blocks:
            raise LookupError("Block index is empty")
        return int(self._blocks[0].height)

    @property
    def tip(self) -> BlockMetadata:
        """The highest indexed block."""
        if not self._blocks:
            raise LookupError("Block index is empty")
        return self._blocks[-1]

    def append(self, block: BlockMetadata) -> None:
        """
        Extend the segment by one block.

        Raises:
            ValueError: If the block does not sit directly on the current tip.
        """
        if self._blocks:
            expected = int(self.tip.height) + 1
            if int(block.height) != expected:
                raise ValueError(
                    f"Block at height {int(block.height)} does not extend tip; expected {expected}"
                )
        self._blocks.append(block)

    def get(self, height: int) -> BlockMetadata | None:
        """Return the block at `height`, or None when outside the segment."""
        if not self._blocks:
            return None
        offset = height - self.base_height
        if not (0 <= offset < len(self._blocks)):
            return None
        return self._blocks[offset]

    def get_ancestor(self, block: BlockMetadata, height: int) -> BlockMetadata | None:
        """Return the ancestor of `block` at `height`."""
        if block not in self or height > int(block.height):
            return None
        return self.get(height)

    def get_previous(self, block: BlockMetadata) -> BlockMetadata | None:
        """Return the parent of `block`."""
        return self.get_ancestor(block, int(block.height) - 1)

    @classmethod
    def from_yaml_file(cls, path: Path | str) -> BlockIndex:
        """
        Load a chain segment from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
            pydantic.ValidationError: If a block entry fails validation.
            ValueError: If the heights are not consecutive.
        """
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls._from_data(data)

    @classmethod
    def from_yaml(cls, content: str) -> BlockIndex:
        """Load a chain segment from a YAML string."""
        return cls._from_data(yaml.safe_load(content))

    @classmethod
    def _from_data(cls, data: Any) -> BlockIndex:
        if not isinstance(data, dict) or not isinstance(data.get("BLOCKS"), list):
            raise ValueError("Chain file must contain a BLOCKS list")
        return cls.from_blocks(BlockMetadata.model_validate(entry) for entry in data["BLOCKS"])
