"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from loan_payoff.api.routes import simulation
from loan_payoff.config import settings

logging.basicConfig(level=settings.log_level)

app = FastAPI(
    title="Loan Payoff Simulator",
    description="Amortization schedule with a capped annual overpayment budget",
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

app.include_router(simulation.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
