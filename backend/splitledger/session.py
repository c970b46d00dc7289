"""The store owned by this process. One process serves one session.

The store has no locks. Route handlers are ``async def`` so every call into
it runs on the event loop thread, one request at a time.
"""
from splitledger.services.entity_store import EntityStore

_store = EntityStore()


def get_store() -> EntityStore:
    return _store
