"""
Retargeting design constants.

These are fixed by the consensus rules and are not network configuration.
Changing any of them is a hard fork.
"""

from typing_extensions import Final

# --- LWMA Parameters ---

LWMA_WINDOW: Final = 45
"""
Number of most recent blocks averaged by LWMA (N).

LWMA reads one block before the window, so it must never run at or below this height.
"""

LWMA_K: Final = 1377
"""
Weighting constant: k = (N + 1) / 2 * target_spacing * 0.998, rounded.

Derived for a 60 second target spacing.
"""

LWMA_TARGET_DIVISOR: Final = LWMA_K * LWMA_WINDOW * LWMA_WINDOW
"""
Per-term divisor applied to each window target before summation (k * N^2).

Dividing each term keeps the running sum inside 256 bits.
"""

LWMA_MIN_WEIGHTED_SOLVETIME: Final = LWMA_WINDOW * LWMA_K // 3
"""Floor for the weighted solvetime sum (N * k / 3)."""

# --- Minimum Difficulty Rule ---

MIN_DIFFICULTY_GAP_FACTOR: Final = 2
"""A candidate later than this many target spacings after its parent may use the pow limit."""

# --- Classic Retarget Clamp ---

TIMESPAN_ADJUSTMENT_FACTOR: Final = 4
"""The measured timespan is clamped to [timespan / 4, timespan * 4]."""
