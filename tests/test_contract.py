from datetime import date

import pytest

from rosterledger.errors import ValidationError
from rosterledger.models import (
    Contract,
    Money,
    Position,
    RookiePlayer,
    RookieScaleSalaryStrategy,
    StandardSalaryStrategy,
    VeteranPlayer,
)


def _veteran() -> VeteranPlayer:
    return VeteranPlayer("v1", "Steady", Position.SF, 30, 80, 80, years_in_league=8)


def test_contract_requires_positive_years():
    with pytest.raises(ValidationError):
        Contract(total_value=Money(1_000_000), years=0)
    with pytest.raises(ValidationError):
        Contract(total_value=Money(1_000_000), years=-2)


def test_contract_defaults():
    contract = Contract()
    assert contract.total_value == Money.zero()
    assert contract.years == 1
    assert contract.start_date == date.today()


def test_standard_strategy_spreads_total_evenly():
    strategy = StandardSalaryStrategy()
    contract = Contract(total_value=Money(30_000_000), years=3, start_date=date(2024, 7, 1))
    assert strategy.annual_salary(_veteran(), contract) == Money(10_000_000)

    uneven = Contract(total_value=Money(10_000_000), years=3)
    assert strategy.annual_salary(_veteran(), uneven) == Money("3333333.33")


def test_standard_strategy_zero_total_is_zero_salary():
    assert StandardSalaryStrategy().annual_salary(_veteran(), Contract()) == Money.zero()


def test_rookie_scale_adds_rating_bonus():
    strategy = RookieScaleSalaryStrategy(Money(8_000_000))
    rookie = RookiePlayer("r1", "Prospect", Position.PG, 19, 80, 80)
    contract = Contract(total_value=Money(6_000_000), years=2)
    # 3,000,000 standard + (80 - 70) * 10,000
    assert strategy.annual_salary(rookie, contract) == Money(3_100_000)


def test_rookie_scale_no_bonus_below_threshold():
    strategy = RookieScaleSalaryStrategy(Money(8_000_000))
    rookie = RookiePlayer("r2", "Project", Position.C, 19, 60, 60)
    contract = Contract(total_value=Money(2_000_000), years=1)
    assert strategy.annual_salary(rookie, contract) == Money(2_000_000)


def test_rookie_scale_is_capped_at_max_annual():
    strategy = RookieScaleSalaryStrategy(Money(3_050_000))
    rookie = RookiePlayer("r1", "Prospect", Position.PG, 19, 80, 80)
    contract = Contract(total_value=Money(3_000_000), years=1)
    assert strategy.annual_salary(rookie, contract) == Money(3_050_000)
