import pytest

from splitledger.schemas import Settlement
from splitledger.services.settlement_calculator import compute_settlements


def _pairs(settlements):
    return [(s.from_user, s.to_user, s.amount) for s in settlements]


def test_single_creditor_two_debtors():
    out = compute_settlements({"A": 60.0, "B": -30.0, "C": -30.0})
    assert _pairs(out) == [("B", "A", 30.0), ("C", "A", 30.0)]


def test_two_person_settlement():
    assert compute_settlements({"A": 10.0, "B": -10.0}) == [Settlement(from_user="B", to_user="A", amount=10.0)]


def test_equal_magnitudes_pair_in_balance_order():
    out = compute_settlements({"A": 60.0, "B": 60.0, "C": -60.0, "D": -60.0})
    assert _pairs(out) == [("C", "A", 60.0), ("D", "B", 60.0)]


def test_largest_debtor_pays_largest_creditor_first():
    out = compute_settlements({"A": 20.0, "B": 50.0, "C": -10.0, "D": -60.0})
    assert _pairs(out) == [("D", "B", 50.0), ("D", "A", 10.0), ("C", "A", 10.0)]


def test_nothing_to_settle():
    assert compute_settlements({}) == []
    assert compute_settlements({"A": 0.0, "B": 0.0}) == []
    assert compute_settlements({"A": 0.005, "B": -0.005}) == []


def test_conservation_and_no_tiny_transfers():
    balances = {"A": 100 / 3, "B": 25.555, "C": -40.1, "D": -18.78833, "E": 0.004, "F": -0.004}
    out = compute_settlements(balances)
    assert all(s.amount > 0.01 for s in out)
    expected = sum(b for b in balances.values() if b > 0.01)
    assert sum(s.amount for s in out) == pytest.approx(expected, abs=0.01)


def test_input_not_mutated():
    balances = {"A": 5.0, "B": -5.0}
    compute_settlements(balances)
    assert balances == {"A": 5.0, "B": -5.0}
