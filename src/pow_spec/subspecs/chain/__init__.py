"""Chain data read by the retargeting rules."""

from .block import BlockMetadata
from .index import BlockIndex
from .view import ChainView

__all__ = [
    "BlockIndex",
    "BlockMetadata",
    "ChainView",
]
