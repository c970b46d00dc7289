"""Greedy matching of debtors to creditors so everyone is settled (who owes whom)."""
from splitledger.schemas import Settlement
from splitledger.services.balance_calculator import EPSILON


def compute_settlements(balances: dict[str, float]) -> list[Settlement]:
    """
    balances: user -> net balance (positive = is owed money, negative = owes money).
    Returns transfers that zero every balance beyond EPSILON.

    Largest debtor pays largest creditor until one side is exhausted. This is
    a heuristic: it does not always find the fewest possible transfers.
    Equal amounts keep the iteration order of ``balances`` (stable sort).
    """
    debtors = []  # [user, amount_owed]
    creditors = []
    for user, bal in balances.items():
        if bal > EPSILON:
            creditors.append([user, bal])
        elif bal < -EPSILON:
            debtors.append([user, -bal])
    debtors.sort(key=lambda x: -x[1])
    creditors.sort(key=lambda x: -x[1])

    out: list[Settlement] = []
    i, j = 0, 0
    while i < len(debtors) and j < len(creditors):
        debtor, creditor = debtors[i], creditors[j]
        transfer = min(debtor[1], creditor[1])
        if transfer > EPSILON:
            out.append(Settlement(from_user=debtor[0], to_user=creditor[0], amount=transfer))
        debtor[1] -= transfer
        creditor[1] -= transfer
        if debtor[1] < EPSILON:
            i += 1
        if creditor[1] < EPSILON:
            j += 1
    return out
