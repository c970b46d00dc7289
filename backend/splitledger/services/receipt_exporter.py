"""Receipt and CSV export of the current session."""
import csv
import datetime
import io
from typing import Iterable, Optional

from splitledger.schemas import Expense, ReceiptData
from splitledger.services.balance_calculator import balance_label, total_expenses
from splitledger.services.entity_store import EntityStore

CURRENCY_SYMBOL = "₹"
RECEIPT_TITLE = "EXPENSE RECEIPT"
RECEIPT_SUBTITLE = "Shared expense summary"
FOOTER_TEXT = "Thank you for splitting fairly!"
SETTLED_MESSAGE = "All expenses are settled! No payments needed."
RULE = "-" * 48


def format_currency(value: float) -> str:
    return f"{CURRENCY_SYMBOL}{value:,.2f}"


def format_date(d: datetime.date) -> str:
    return d.strftime("%d %b %Y")


def format_time(t: datetime.datetime) -> str:
    return t.strftime("%H:%M")


def payment_details(expense: Expense) -> str:
    """Who paid: explicit amounts when given, otherwise the payer names."""
    explicit = expense.explicit_payments()
    if explicit:
        return ", ".join(f"{payer}: {format_currency(amt)}" for payer, amt in explicit.items())
    return ", ".join(expense.payers)


def build_receipt(store: EntityStore, generated_at: Optional[datetime.datetime] = None) -> ReceiptData:
    return ReceiptData(
        expenses=list(store.expenses),
        users=list(store.users),
        balances=store.balances(),
        settlements=store.settlements(),
        generated_at=generated_at or datetime.datetime.now(),
    )


def render_receipt(data: ReceiptData) -> str:
    lines = [
        RECEIPT_TITLE,
        RECEIPT_SUBTITLE,
        f"{format_date(data.generated_at.date())} • {format_time(data.generated_at)}",
        f"{len(data.users)} participants • {len(data.expenses)} expenses",
        RULE,
        "EXPENSES",
    ]
    if not data.expenses:
        lines.append("No expenses recorded")
    for e in data.expenses:
        lines.append(f"{e.description}  {format_currency(e.amount)}")
        lines.append(f"  {format_date(e.date)} • {e.category.value} • Paid by: {payment_details(e)}")
    lines.append(f"TOTAL  {format_currency(total_expenses(data.expenses))}")
    lines += [RULE, "INDIVIDUAL BALANCES"]

    for user in data.users:
        balance = data.balances.get(user, 0.0)
        label = balance_label(balance)
        sign = "+" if label == "gets back" else ""
        lines.append(f"{user} ({label})  {sign}{format_currency(abs(balance))}")
    lines += [RULE, "SETTLEMENT INSTRUCTIONS"]

    if not data.settlements:
        lines.append(SETTLED_MESSAGE)
    for n, s in enumerate(data.settlements, start=1):
        lines.append(f"{n}. {s.from_user} pays {s.to_user}: {format_currency(s.amount)}")
    lines += [RULE, FOOTER_TEXT, f"Generated {data.generated_at.strftime('%Y-%m-%d %H:%M:%S')}"]
    return "\n".join(lines) + "\n"


def export_expenses_csv(expenses: Iterable[Expense]) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["Date", "Description", "Category", "Amount", "Paid By", "Participants"])
    for e in expenses:
        writer.writerow([
            e.date.isoformat(),
            e.description,
            e.category.value,
            f"{e.amount:.2f}",
            payment_details(e),
            ", ".join(e.participants),
        ])
    return output.getvalue()
