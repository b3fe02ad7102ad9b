"""Fixed-point currency and the per-team salary cap ledger."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from functools import total_ordering
from typing import Union

from rosterledger.errors import CapExceeded, ValidationError


_CENTS = Decimal("0.01")

MoneyLike = Union["Money", Decimal, int, float, str]


def _to_decimal(value: MoneyLike) -> Decimal:
    if isinstance(value, Money):
        return value.amount
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, float):
        # str() keeps the shortest repr, so 19.995 stays 19.995 rather than 19.99499...
        amount = Decimal(str(value))
    else:
        try:
            amount = Decimal(value)
        except InvalidOperation as exc:
            raise ValidationError(f"Not a money amount: {value!r}") from exc
    if not amount.is_finite():
        raise ValidationError(f"Money amount must be finite, got {value!r}")
    return amount


@total_ordering
@dataclass(frozen=True, eq=False)
class Money:
    """USD amount held at two decimal places, rounded half-up."""

    amount: Decimal

    def __init__(self, value: MoneyLike = 0) -> None:
        object.__setattr__(self, "amount", _to_decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP))

    @classmethod
    def zero(cls) -> "Money":
        return cls(0)

    def plus(self, other: "Money") -> "Money":
        return Money(self.amount + other.amount)

    def minus(self, other: "Money") -> "Money":
        return Money(self.amount - other.amount)

    def divided_by(self, divisor: int) -> "Money":
        return Money(self.amount / Decimal(divisor))

    def gte(self, other: "Money") -> bool:
        return self.amount >= other.amount

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return self.plus(other)

    def __sub__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return self.minus(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount == other.amount

    def __lt__(self, other: "Money") -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount < other.amount

    def __hash__(self) -> int:
        return hash(self.amount)

    def __float__(self) -> float:
        return float(self.amount)

    def __str__(self) -> str:
        return f"${self.amount}"

    def __repr__(self) -> str:
        return f"Money('{self.amount}')"


class SalaryCap:
    """Tracks how much of a team's cap is committed to player salaries."""

    def __init__(self, cap: Money) -> None:
        self._cap = cap
        self._committed = Money.zero()

    @property
    def cap(self) -> Money:
        return self._cap

    @property
    def committed(self) -> Money:
        return self._committed

    @property
    def remaining(self) -> Money:
        return self._cap.minus(self._committed)

    def can_commit(self, amount: Money) -> bool:
        return self._cap.gte(self._committed.plus(amount))

    def commit(self, amount: Money) -> None:
        if not self.can_commit(amount):
            raise CapExceeded(
                f"cap exceeded: committing {amount} on top of {self._committed} breaks cap {self._cap}"
            )
        self._committed = self._committed.plus(amount)

    def uncommit(self, amount: Money) -> None:
        # Clamped at zero; releasing more than is committed is not an error.
        self._committed = max(Money.zero(), self._committed.minus(amount))

    def __repr__(self) -> str:
        return f"SalaryCap(cap={self._cap}, committed={self._committed})"
