"""Contract terms and the strategies that turn them into an annual salary."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Protocol

from rosterledger.errors import ValidationError
from rosterledger.models.money import Money
from rosterledger.models.player import Player


ROOKIE_BONUS_THRESHOLD = 70
ROOKIE_BONUS_PER_POINT = 10_000


@dataclass(frozen=True)
class Contract:
    total_value: Money = field(default_factory=Money.zero)
    years: int = 1
    start_date: date = field(default_factory=date.today)

    def __post_init__(self) -> None:
        if self.years <= 0:
            raise ValidationError(f"years must be > 0, got {self.years}")


class SalaryStrategy(Protocol):
    def annual_salary(self, player: Player, contract: Contract) -> Money:
        ...


class StandardSalaryStrategy:
    """Straight-line salary: total value spread evenly over the contract years."""

    def annual_salary(self, player: Player, contract: Contract) -> Money:
        if contract.total_value <= Money.zero():
            return Money.zero()
        return contract.total_value.divided_by(max(1, contract.years))

    def __repr__(self) -> str:
        return "StandardSalaryStrategy()"


class RookieScaleSalaryStrategy:
    """Standard salary plus a rating bonus, capped at ``max_annual``."""

    def __init__(self, max_annual: Money) -> None:
        self.max_annual = max_annual

    def annual_salary(self, player: Player, contract: Contract) -> Money:
        standard = StandardSalaryStrategy().annual_salary(player, contract)
        bonus = max(0, player.overall_rating() - ROOKIE_BONUS_THRESHOLD) * ROOKIE_BONUS_PER_POINT
        with_bonus = standard.plus(Money(bonus))
        return min(self.max_annual, with_bonus)

    def __repr__(self) -> str:
        return f"RookieScaleSalaryStrategy(max_annual={self.max_annual})"
