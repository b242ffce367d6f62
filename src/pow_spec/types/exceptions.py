"""Exception hierarchy for consensus computations."""

from __future__ import annotations


class ConsensusError(Exception):
    """
    Base exception for all consensus integrity errors.

    These signal a corrupted chain view or a misconfigured network.
    Continuing past one would risk computing a diverging target.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class MissingAncestorError(ConsensusError):
    """
    Raised when the chain view cannot resolve a structurally required ancestor.

    Attributes:
        height: The height that failed to resolve.
        tip_height: The height of the block the lookup started from.
    """

    def __init__(self, height: int, tip_height: int) -> None:
        self.height = height
        self.tip_height = tip_height
        super().__init__(f"Missing ancestor at height {height} of block at height {tip_height}")


class RetargetPreconditionError(ConsensusError):
    """
    Raised when a retarget algorithm is invoked outside its defined domain.

    Examples are LWMA below its window size or a classic
    interval that would start before the genesis block.
    """
