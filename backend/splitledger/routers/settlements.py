"""Settlements: balances, who owes whom, spending stats."""
from fastapi import APIRouter, Depends

from splitledger.schemas import BalanceEntry, DashboardStats, SettlementSummary
from splitledger.services.balance_calculator import category_totals, paid_totals, total_expenses
from splitledger.services.entity_store import EntityStore
from splitledger.services.settlement_calculator import compute_settlements
from splitledger.session import get_store

router = APIRouter(prefix="/settlements", tags=["settlements"])


@router.get("", response_model=SettlementSummary)
async def get_settlements(store: EntityStore = Depends(get_store)):
    balances = store.balances()
    return SettlementSummary(
        users=list(store.users),
        balances=[BalanceEntry(user=u, balance=bal) for u, bal in balances.items()],
        settlements=compute_settlements(balances),
    )


@router.get("/dashboard", response_model=DashboardStats)
async def get_dashboard(store: EntityStore = Depends(get_store)):
    expenses = store.expenses
    return DashboardStats(
        total_expenses=round(total_expenses(expenses), 2),
        expense_count=len(expenses),
        category_totals={cat: round(total, 2) for cat, total in category_totals(expenses).items()},
        user_paid={u: round(paid, 2) for u, paid in paid_totals(store.users, expenses).items()},
    )
