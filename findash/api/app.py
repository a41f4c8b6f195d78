"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from findash.api.routes import comparison, deposit, loan, portfolio
from findash.config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="FinDash",
    description="Loan prepayment, deposit and portfolio decision engine",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(loan.router)
app.include_router(deposit.router)
app.include_router(portfolio.router)
app.include_router(comparison.router)


@app.get("/health")
def health():
    return {"status": "ok"}
