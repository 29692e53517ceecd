"""Pydantic schemas for API request/response models."""

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator


# ---- Request schemas ----

class SimulateRequest(BaseModel):
    principal: Decimal = Field(..., gt=0, description="Initial loan balance")
    term_years: int = Field(..., gt=0, le=100, description="Contractual loan term in years")
    monthly_payment: Decimal = Field(..., gt=0, description="Target monthly payment (minimum + overpayment)")
    rates: list[Decimal] = Field(
        ..., min_length=1, description="Annual rates in percent (e.g. 4.64), one per 2-year period"
    )

    @field_validator("rates")
    @classmethod
    def rates_non_negative(cls, v: list[Decimal]) -> list[Decimal]:
        if any(r < 0 for r in v):
            raise ValueError("Interest rates cannot be negative")
        return v


# ---- Response schemas ----

class MonthRecordResponse(BaseModel):
    month: int
    years: Decimal
    annual_rate: Decimal
    interest: Decimal
    minimum_payment: Decimal
    overpayment: Decimal
    payment: Decimal
    balance: Decimal


class YearlySummaryResponse(BaseModel):
    year: int
    interest: Decimal
    payments: Decimal
    overpayments: Decimal
    ending_balance: Decimal


class FormattedSummary(BaseModel):
    payoff_time: str
    total_interest: str
    initial_minimum_payment: str
    total_overpayments: str


class SimulationResponse(BaseModel):
    outcome: str
    paid_off: bool
    months: int
    total_interest: Decimal
    total_overpayments: Decimal
    initial_minimum_payment: Decimal
    remaining_balance: Decimal
    cap_exceeded: bool
    formatted: FormattedSummary
    notices: list[str] = []
    schedule: list[MonthRecordResponse] = []
    yearly: list[YearlySummaryResponse] = []


class InfeasiblePaymentDetail(BaseModel):
    message: str
    month: int
    payment: Decimal
    interest: Decimal
    shortfall: Decimal
    initial_minimum_payment: Decimal
