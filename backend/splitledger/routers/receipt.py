"""Receipt: plain-text summary of the session."""
from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from splitledger.services.entity_store import EntityStore
from splitledger.services.receipt_exporter import build_receipt, render_receipt
from splitledger.session import get_store

router = APIRouter(prefix="/receipt", tags=["receipt"])


@router.get("", response_class=PlainTextResponse)
async def get_receipt(store: EntityStore = Depends(get_store)):
    return render_receipt(build_receipt(store))
