"""Domain errors raised by the entity store."""
from enum import Enum


class ValidationErrorKind(str, Enum):
    MISSING_FIELD = "MissingField"
    INVALID_AMOUNT = "InvalidAmount"
    NO_PAYERS = "NoPayers"
    NO_PARTICIPANTS = "NoParticipants"
    PAYMENT_SUM_MISMATCH = "PaymentSumMismatch"
    PAYMENT_NOT_FROM_PAYER = "PaymentNotFromPayer"
    UNKNOWN_USER = "UnknownUser"


class ValidationError(Exception):
    """An expense was rejected on add/edit. Nothing was written."""

    def __init__(self, kind: ValidationErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


class ExpenseNotFoundError(Exception):
    def __init__(self, expense_id: int):
        super().__init__(f"Expense {expense_id} not found")
        self.expense_id = expense_id
