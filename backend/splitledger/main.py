"""FastAPI app entrypoint."""
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from splitledger.logging_config import setup_logging
from splitledger.routers import expenses, receipt, settlements, users

setup_logging()

_origins_env = os.getenv("ALLOWED_ORIGINS", "")
allowed_origins = [o.strip() for o in _origins_env.split(",") if o.strip()] if _origins_env else ["*"]

app = FastAPI(
    title="Split Ledger API",
    description="Record shared expenses and work out who owes whom.",
    version="1.0.0",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users.router, prefix="/api")
app.include_router(expenses.router, prefix="/api")
app.include_router(settlements.router, prefix="/api")
app.include_router(receipt.router, prefix="/api")


@app.get("/")
def root():
    return {"message": "Split Ledger API", "docs": "/docs"}
