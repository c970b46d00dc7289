"""Pydantic schemas for the ledger records and request/response bodies."""
import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, FiniteFloat, field_validator


def _unique(names: list[str]) -> list[str]:
    seen = []
    for name in names:
        if name not in seen:
            seen.append(name)
    return seen


# ----- User -----
class UserCreate(BaseModel):
    name: str


class UserAdded(BaseModel):
    name: str
    added: bool


# ----- Expense -----
class Category(str, Enum):
    FOOD = "Food"
    TRANSPORT = "Transport"
    ACCOMMODATION = "Accommodation"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    BILLS = "Bills"
    OTHER = "Other"


class ExpenseBase(BaseModel):
    description: Optional[str] = None
    category: Category = Category.FOOD
    amount: Optional[FiniteFloat] = None
    date: datetime.date = Field(default_factory=datetime.date.today)
    payers: list[str] = []
    payment_amounts: dict[str, FiniteFloat] = {}
    participants: list[str] = []

    @field_validator("payers", "participants")
    @classmethod
    def _collapse_duplicates(cls, value: list[str]) -> list[str]:
        return _unique(value)

    @field_validator("payment_amounts", mode="before")
    @classmethod
    def _none_is_empty(cls, value):
        return {} if value is None else value


class ExpenseCreate(ExpenseBase):
    """Body for add and edit. Required fields are checked by the store."""


class Expense(ExpenseBase):
    """A stored expense. Only the store creates these."""

    id: int
    description: str
    amount: FiniteFloat

    def explicit_payments(self) -> dict[str, float]:
        """Payment amounts with a positive value, in insertion order."""
        return {payer: amt for payer, amt in self.payment_amounts.items() if amt > 0}


# ----- Settlement -----
class Settlement(BaseModel):
    from_user: str
    to_user: str
    amount: float


class BalanceEntry(BaseModel):
    user: str
    balance: float


class SettlementSummary(BaseModel):
    users: list[str] = []
    balances: list[BalanceEntry]
    settlements: list[Settlement]


# ----- Dashboard -----
class DashboardStats(BaseModel):
    total_expenses: float
    expense_count: int
    category_totals: dict[str, float]
    user_paid: dict[str, float]


# ----- Receipt -----
class ReceiptData(BaseModel):
    expenses: list[Expense]
    users: list[str]
    balances: dict[str, float]
    settlements: list[Settlement]
    generated_at: datetime.datetime
