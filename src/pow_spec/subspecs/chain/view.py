"""Read-only ancestry access required by retargeting."""

from __future__ import annotations

from typing import Protocol

from .block import BlockMetadata


class ChainView(Protocol):
    """
    Read access to the chain a block belongs to.

    Implementations must keep the queried range stable for the duration of
    a retarget computation. Retargeting never mutates the view.
    """

    def get_ancestor(self, block: BlockMetadata, height: int) -> BlockMetadata | None:
        """
        Return the ancestor of `block` at `height`.

        A block is its own ancestor at its own height. Returns None when the
        height is above `block` or the ancestor is unknown.
        """
        ...

    def get_previous(self, block: BlockMetadata) -> BlockMetadata | None:
        """Return the parent of `block`, or None for the first known block."""
        ...
