"""Expenses: create, list, replace, delete, export."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse

from splitledger.errors import ExpenseNotFoundError, ValidationError
from splitledger.schemas import Category, Expense, ExpenseCreate
from splitledger.services.entity_store import EntityStore
from splitledger.services.receipt_exporter import export_expenses_csv
from splitledger.session import get_store

router = APIRouter(prefix="/expenses", tags=["expenses"])


def _bad_request(exc: ValidationError) -> HTTPException:
    return HTTPException(status_code=400, detail=exc.message, headers={"X-Error-Kind": exc.kind.value})


@router.post("", response_model=Expense)
async def create_expense(data: ExpenseCreate, store: EntityStore = Depends(get_store)):
    try:
        return store.add_expense(data)
    except ValidationError as exc:
        raise _bad_request(exc)


@router.get("", response_model=list[Expense])
async def list_expenses(
    search: Optional[str] = Query(None),
    category: Optional[Category] = Query(None),
    store: EntityStore = Depends(get_store),
):
    expenses = list(store.expenses)
    if search:
        expenses = [e for e in expenses if search.lower() in e.description.lower()]
    if category:
        expenses = [e for e in expenses if e.category == category]
    return expenses


@router.get("/export")
async def export_expenses(store: EntityStore = Depends(get_store)):
    return StreamingResponse(
        iter([export_expenses_csv(store.expenses)]),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=expenses.csv"},
    )


@router.get("/{expense_id}", response_model=Expense)
async def get_expense(expense_id: int, store: EntityStore = Depends(get_store)):
    expense = store.get_expense(expense_id)
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    return expense


@router.put("/{expense_id}", response_model=Expense)
async def replace_expense(expense_id: int, data: ExpenseCreate, store: EntityStore = Depends(get_store)):
    try:
        return store.edit_expense(expense_id, data)
    except ExpenseNotFoundError:
        raise HTTPException(status_code=404, detail="Expense not found")
    except ValidationError as exc:
        raise _bad_request(exc)


@router.delete("/{expense_id}", status_code=204)
async def delete_expense(expense_id: int, store: EntityStore = Depends(get_store)):
    store.remove_expense(expense_id)
