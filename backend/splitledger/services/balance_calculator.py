"""Net balance per user from the current expense list."""
from typing import Iterable, Sequence

from splitledger.schemas import Category, Expense

# Balances and transfers within this of zero count as settled.
EPSILON = 0.01


def _credits(e: Expense) -> dict[str, float]:
    explicit = e.explicit_payments()
    if explicit:
        return explicit
    per_payer = e.amount / len(e.payers)
    return {payer: per_payer for payer in e.payers}


def calculate_balances(users: Sequence[str], expenses: Iterable[Expense]) -> dict[str, float]:
    """
    users: every user, in display order, including all named by an expense. Each starts at 0.0.
    Returns user -> net balance (positive = is owed money, negative = owes money).

    Who funded an expense and who consumed it are split independently:
    payers are credited by their explicit amounts (or equally), participants
    are always debited equally.
    """
    balances: dict[str, float] = {u: 0.0 for u in users}
    for e in expenses:
        for payer, paid in _credits(e).items():
            balances[payer] += paid

        share = e.amount / len(e.participants)
        for p in e.participants:
            balances[p] -= share
    return balances


def balance_label(balance: float) -> str:
    if balance > EPSILON:
        return "gets back"
    if balance < -EPSILON:
        return "owes"
    return "settled"


def total_expenses(expenses: Iterable[Expense]) -> float:
    return sum(e.amount for e in expenses)


def category_totals(expenses: Iterable[Expense]) -> dict[str, float]:
    totals: dict[str, float] = {c.value: 0.0 for c in Category}
    for e in expenses:
        totals[e.category.value] += e.amount
    return totals


def paid_totals(users: Sequence[str], expenses: Iterable[Expense]) -> dict[str, float]:
    """Amount each user has been credited as a payer, before any debits."""
    paid: dict[str, float] = {u: 0.0 for u in users}
    for e in expenses:
        for payer, amt in _credits(e).items():
            paid[payer] += amt
    return paid
