"""In-memory owner of users and expenses for one session.

Every mutation goes through a method here, and every method either applies
completely or leaves the store untouched. Balances and settlements are never
stored; they are recomputed from the current expenses on each read.
"""
import itertools
import logging
import math
from typing import Optional

from splitledger.errors import ExpenseNotFoundError, ValidationError, ValidationErrorKind
from splitledger.schemas import Expense, ExpenseCreate, Settlement
from splitledger.services.balance_calculator import EPSILON, calculate_balances
from splitledger.services.settlement_calculator import compute_settlements

logger = logging.getLogger(__name__)


def validate_expense(data: ExpenseCreate) -> None:
    """Raise ValidationError for the first broken rule, checked in a fixed order."""
    if not data.description or not data.description.strip():
        raise ValidationError(ValidationErrorKind.MISSING_FIELD, "Description is required")
    if data.amount is None:
        raise ValidationError(ValidationErrorKind.MISSING_FIELD, "Amount is required")
    if not math.isfinite(data.amount) or data.amount <= 0:
        raise ValidationError(ValidationErrorKind.INVALID_AMOUNT, "Amount must be positive")
    if not data.payers:
        raise ValidationError(ValidationErrorKind.NO_PAYERS, "At least one payer required")
    if not data.participants:
        raise ValidationError(ValidationErrorKind.NO_PARTICIPANTS, "At least one participant required")
    if data.payment_amounts:
        strangers = [p for p in data.payment_amounts if p not in data.payers]
        if strangers:
            raise ValidationError(
                ValidationErrorKind.PAYMENT_NOT_FROM_PAYER,
                f"Payment amounts given for non-payers: {', '.join(strangers)}",
            )
        if any(not math.isfinite(amt) or amt < 0 for amt in data.payment_amounts.values()):
            raise ValidationError(ValidationErrorKind.INVALID_AMOUNT, "Payment amounts cannot be negative")
        total_paid = sum(data.payment_amounts.values())
        if abs(total_paid - data.amount) > EPSILON:
            raise ValidationError(
                ValidationErrorKind.PAYMENT_SUM_MISMATCH,
                f"Total payment amounts ({total_paid:.2f}) must equal the expense amount ({data.amount:.2f})",
            )


class EntityStore:
    def __init__(self):
        self._users: list[str] = []
        self._expenses: list[Expense] = []
        self._ids = itertools.count(1)

    @property
    def users(self) -> tuple[str, ...]:
        return tuple(self._users)

    @property
    def expenses(self) -> tuple[Expense, ...]:
        return tuple(self._expenses)

    def get_expense(self, expense_id: int) -> Optional[Expense]:
        return next((e for e in self._expenses if e.id == expense_id), None)

    # ----- Users -----
    def add_user(self, name: str) -> Optional[str]:
        """Add a user. Returns the stored name, or None if blank or already present."""
        name = name.strip()
        if not name or name in self._users:
            logger.debug("Ignoring add of user %r", name)
            return None
        self._users.append(name)
        logger.info("Added user %s", name)
        return name

    def remove_user(self, name: str) -> None:
        """Remove a user from the session and from every expense that names them.

        Expenses left without payers or participants are dropped. Explicit
        payment amounts that no longer add up to the expense are cleared.
        """
        if name not in self._users:
            logger.debug("Ignoring removal of unknown user %r", name)
            return

        kept: list[Expense] = []
        for e in self._expenses:
            payers = [p for p in e.payers if p != name]
            participants = [p for p in e.participants if p != name]
            if not payers or not participants:
                logger.info("Dropping expense %d (%s) left empty by removal of %s", e.id, e.description, name)
                continue
            payment_amounts = {p: amt for p, amt in e.payment_amounts.items() if p != name}
            if payment_amounts and abs(sum(payment_amounts.values()) - e.amount) > EPSILON:
                # Remaining amounts no longer cover the expense; fall back to an equal split.
                logger.info("Expense %d payment amounts reset to equal split after removal of %s", e.id, name)
                payment_amounts = {}
            kept.append(e.model_copy(update={
                "payers": payers,
                "participants": participants,
                "payment_amounts": payment_amounts,
            }))

        self._users = [u for u in self._users if u != name]
        self._expenses = kept
        logger.info("Removed user %s", name)

    # ----- Expenses -----
    def _validate(self, data: ExpenseCreate) -> None:
        validate_expense(data)
        unknown = [u for u in data.payers + data.participants if u not in self._users]
        if unknown:
            raise ValidationError(
                ValidationErrorKind.UNKNOWN_USER,
                f"Payers and participants must be session users: {', '.join(dict.fromkeys(unknown))}",
            )

    def add_expense(self, data: ExpenseCreate) -> Expense:
        try:
            self._validate(data)
        except ValidationError as exc:
            logger.warning("Rejected new expense: %s (%s)", exc.message, exc.kind.value)
            raise
        expense = Expense(id=next(self._ids), **data.model_dump())
        self._expenses.append(expense)
        logger.info("Added expense %d (%s, %.2f)", expense.id, expense.description, expense.amount)
        return expense

    def edit_expense(self, expense_id: int, data: ExpenseCreate) -> Expense:
        """Replace the whole record for expense_id, keeping its id and position."""
        index = next((i for i, e in enumerate(self._expenses) if e.id == expense_id), None)
        if index is None:
            raise ExpenseNotFoundError(expense_id)
        try:
            self._validate(data)
        except ValidationError as exc:
            logger.warning("Rejected edit of expense %d: %s (%s)", expense_id, exc.message, exc.kind.value)
            raise
        expense = Expense(id=expense_id, **data.model_dump())
        self._expenses[index] = expense
        logger.info("Edited expense %d (%s, %.2f)", expense.id, expense.description, expense.amount)
        return expense

    def remove_expense(self, expense_id: int) -> None:
        if self.get_expense(expense_id) is None:
            logger.debug("Ignoring removal of unknown expense %d", expense_id)
            return
        self._expenses = [e for e in self._expenses if e.id != expense_id]
        logger.info("Removed expense %d", expense_id)

    # ----- Derived views -----
    def balances(self) -> dict[str, float]:
        return calculate_balances(self._users, self._expenses)

    def settlements(self) -> list[Settlement]:
        return compute_settlements(self.balances())
