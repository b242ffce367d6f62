"""Fixed-width unsigned integer types."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema
from typing_extensions import Self


class BaseUint(int):
    """
    A base class for fixed-width unsigned integers that inherits from `int`.

    Values are range-checked on construction. Arithmetic is done on plain
    ints; `wrap` brings a result back into the type the way a fixed-width
    register would.

    Comparisons only accept values of the same width. Comparing a target
    with a timestamp, or with a plain int, is almost always a bug in
    consensus code, so it raises.
    """

    BITS: ClassVar[int]
    """The number of bits in the integer (overridden by subclasses)."""

    def __new__(cls, value: int) -> Self:
        """
        Create and validate a new Uint instance.

        Raises:
            TypeError: If `value` is not an `int` (booleans are rejected).
            OverflowError: If `value` is outside the allowed range [0, 2**BITS - 1].
        """
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"Expected int, got {type(value).__name__}")
        int_value = int(value)
        if not (0 <= int_value < cls.modulus()):
            raise OverflowError(f"{int_value} is out of range for {cls.__name__}")
        return super().__new__(cls, int_value)

    @classmethod
    def modulus(cls) -> int:
        """Return `2**BITS`, one past the largest representable value."""
        return 1 << cls.BITS

    @classmethod
    def wrap(cls, value: int) -> Self:
        """
        Reduce an arbitrary integer modulo `2**BITS`.

        Reproduces the truncation of a fixed-width register: carries out of
        the top bit are discarded and negative values wrap around.
        """
        return cls(int(value) % cls.modulus())

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Validate through the constructor, so pydantic applies the same range checks."""

        def validate(value: Any) -> BaseUint:
            try:
                return cls(value)
            except (OverflowError, TypeError) as e:
                raise ValueError(str(e)) from e

        return core_schema.json_or_python_schema(
            json_schema=core_schema.int_schema(ge=0, lt=cls.modulus()),
            python_schema=core_schema.no_info_plain_validator_function(validate),
        )

    def _check_operand(self, other: Any, op_symbol: str) -> int:
        """Return `other` as an int, or raise if it is not the same Uint type."""
        if not isinstance(other, type(self)):
            raise TypeError(
                f"Unsupported operand type(s) for {op_symbol}: "
                f"'{type(self).__name__}' and '{type(other).__name__}'"
            )
        return int(other)

    def __invert__(self) -> Self:
        """Flip exactly `BITS` bits, as `~` does on an unsigned register."""
        return type(self)(int(self) ^ (self.modulus() - 1))

    def __eq__(self, other: object) -> bool:
        return int(self) == self._check_operand(other, "==")

    def __ne__(self, other: object) -> bool:
        return int(self) != self._check_operand(other, "!=")

    def __lt__(self, other: Any) -> bool:
        return int(self) < self._check_operand(other, "<")

    def __le__(self, other: Any) -> bool:
        return int(self) <= self._check_operand(other, "<=")

    def __gt__(self, other: Any) -> bool:
        return int(self) > self._check_operand(other, ">")

    def __ge__(self, other: Any) -> bool:
        return int(self) >= self._check_operand(other, ">=")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"

    def __str__(self) -> str:
        return str(int(self))

    def __hash__(self) -> int:
        """Hash by width and value, so equal magnitudes of different widths differ."""
        return hash((type(self), int(self)))


class Uint32(BaseUint):
    """A 32-bit unsigned integer. Holds compact targets."""

    BITS = 32


class Uint64(BaseUint):
    """A 64-bit unsigned integer. Holds heights, timestamps and timespans."""

    BITS = 64


class Uint256(BaseUint):
    """A 256-bit unsigned integer. Holds targets, hashes and work."""

    BITS = 256
