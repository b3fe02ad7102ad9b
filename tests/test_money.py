from decimal import Decimal

import pytest

from rosterledger.errors import CapacityExceeded, CapExceeded, ValidationError
from rosterledger.models import Money, SalaryCap


def test_money_rounds_half_up_to_cents():
    assert Money(19.995).amount == Decimal("20.00")
    assert Money("2.345").amount == Decimal("2.35")
    assert Money(10).amount == Decimal("10.00")
    assert str(Money(1_500_000)) == "$1500000.00"


@pytest.mark.parametrize(
    "a, b",
    [
        (0, 0),
        (19.995, 0.005),
        (1_000_000.10, 2_500_000.55),
        ("123.45", "0.01"),
        (7, 140_000_000),
    ],
)
def test_plus_then_minus_round_trips(a, b):
    assert Money(a).plus(Money(b)).minus(Money(b)) == Money(a)
    assert (Money(a) + Money(b)) - Money(b) == Money(a)


def test_money_ordering_and_hash():
    assert Money(5) < Money("5.01")
    assert Money(5) == Money("5.00")
    assert Money(10).gte(Money(10))
    assert len({Money(1), Money("1.00"), Money(2)}) == 2
    assert min(Money(3), Money(2)) == Money(2)


def test_divided_by_rounds_half_up():
    assert Money(10).divided_by(3) == Money("3.33")
    assert Money("0.05").divided_by(2) == Money("0.03")


def test_commit_never_exceeds_cap():
    cap = SalaryCap(Money(100))
    cap.commit(Money(60))
    with pytest.raises(CapExceeded):
        cap.commit(Money("40.01"))
    assert cap.committed == Money(60)

    cap.commit(Money(40))
    assert cap.remaining == Money.zero()
    with pytest.raises(CapacityExceeded):
        cap.commit(Money("0.01"))


def test_commit_then_uncommit_restores_committed():
    cap = SalaryCap(Money(140_000_000))
    cap.commit(Money(25_000_000))
    prior = cap.committed

    cap.commit(Money(10_000_000))
    cap.uncommit(Money(10_000_000))
    assert cap.committed == prior

    cap.uncommit(Money(5_000_000))
    cap.commit(Money(5_000_000))
    assert cap.committed == prior


def test_uncommit_clamps_at_zero():
    cap = SalaryCap(Money(50))
    cap.commit(Money(10))
    cap.uncommit(Money(25))
    assert cap.committed == Money.zero()
    assert cap.remaining == Money(50)

    # A second release of the same salary is absorbed by the clamp.
    cap.uncommit(Money(10))
    assert cap.committed == Money.zero()


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan"), Decimal("Infinity"), "NaN", "12.5.0"])
def test_money_rejects_values_that_are_not_finite_amounts(value):
    with pytest.raises(ValidationError):
        Money(value)
