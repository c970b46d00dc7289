"""Users: list, add, remove (cascades into expenses)."""
from fastapi import APIRouter, Depends

from splitledger.schemas import UserAdded, UserCreate
from splitledger.services.entity_store import EntityStore
from splitledger.session import get_store

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[str])
async def list_users(store: EntityStore = Depends(get_store)):
    return list(store.users)


@router.post("", response_model=UserAdded)
async def add_user(data: UserCreate, store: EntityStore = Depends(get_store)):
    added = store.add_user(data.name)
    return UserAdded(name=added or data.name.strip(), added=added is not None)


@router.delete("/{name}", status_code=204)
async def remove_user(name: str, store: EntityStore = Depends(get_store)):
    store.remove_user(name)
