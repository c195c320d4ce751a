"""Checked unsigned arithmetic for reserves, shares and fees.

Pool math never goes negative and never divides by an empty reserve. SafeInt
turns either mistake into an ExchangeError instead of a silently wrong
balance, and to_uint256() bounds anything that is about to be stored.

    from exchange.safe_int import S

    shares = (S(asset_amount) * S(supply) // S(asset_reserve)).value
"""

from __future__ import annotations

from functools import total_ordering

from exchange.errors import ErrorKind, ExchangeError

UINT256_MAX = 2**256 - 1


class SafeIntError(ExchangeError, ArithmeticError):
    """Arithmetic fault in reserve or share math."""

    reason = "ArithmeticError"
    kind = ErrorKind.ARITHMETIC


class DivisionByZero(SafeIntError):
    reason = "DivisionByZero"


class Underflow(SafeIntError):
    reason = "Underflow"


class Uint256Overflow(SafeIntError):
    reason = "Uint256Overflow"


def _unwrap(operand: SafeInt | int) -> int:
    if isinstance(operand, SafeInt):
        return operand.value
    if isinstance(operand, bool) or not isinstance(operand, int):
        raise TypeError(f"SafeInt operand must be int, got {type(operand).__name__}")
    return operand


@total_ordering
class SafeInt:
    """Immutable int with checked subtraction and division.

    Addition and multiplication are exact (Python ints do not wrap); bounds
    are enforced only where a value is committed via to_uint256().
    """

    __slots__ = ("_value",)

    def __init__(self, value: SafeInt | int) -> None:
        self._value = _unwrap(value)

    @property
    def value(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"S({self._value})"

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return bool(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (SafeInt, int)) and not isinstance(other, bool):
            return self._value == _unwrap(other)
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _unwrap(other)

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _unwrap(other))

    __radd__ = __add__

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _unwrap(other))

    __rmul__ = __mul__

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Raises Underflow when other exceeds self."""
        subtrahend = _unwrap(other)
        if subtrahend > self._value:
            raise Underflow(f"Underflow: {self._value} - {subtrahend} is negative")
        return SafeInt(self._value - subtrahend)

    def __rsub__(self, other: int) -> SafeInt:
        return SafeInt(other) - self

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Floor division; raises DivisionByZero on a zero divisor."""
        return SafeInt(self._value // self._divisor(other))

    def __rfloordiv__(self, other: int) -> SafeInt:
        return SafeInt(other) // self

    def ceiling_div(self, other: SafeInt | int) -> SafeInt:
        """Division rounded up, used where rounding must favor the pool."""
        divisor = self._divisor(other)
        return SafeInt(-(-self._value // divisor))

    def to_uint256(self) -> int:
        """Return the value if it fits a uint256 slot.

        Raises:
            Uint256Overflow: If the value is negative or above 2**256 - 1
        """
        if not 0 <= self._value <= UINT256_MAX:
            raise Uint256Overflow(f"{self._value} does not fit in uint256")
        return self._value

    def _divisor(self, other: SafeInt | int) -> int:
        divisor = _unwrap(other)
        if divisor == 0:
            raise DivisionByZero(f"Division by zero: {self._value} / 0")
        return divisor


S = SafeInt
