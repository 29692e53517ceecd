from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from loan_payoff.config import settings


@dataclass(frozen=True)
class SimulationInput:
    principal: Decimal
    term_months: int
    monthly_payment: Decimal  # Minimum payment plus intended overpayment
    rate_schedule: tuple[Decimal, ...]  # Annual rates, one per fixed-rate period; last one extends

    @classmethod
    def from_years(
        cls,
        principal: Decimal,
        term_years: int,
        monthly_payment: Decimal,
        rate_schedule: list[Decimal] | tuple[Decimal, ...],
    ) -> "SimulationInput":
        return cls(
            principal=principal,
            term_months=term_years * 12,
            monthly_payment=monthly_payment,
            rate_schedule=tuple(rate_schedule),
        )


@dataclass(frozen=True)
class EngineConfig:
    """Overpayment policy and rate-period layout for a simulation run."""
    overpayment_cap_fraction: Decimal = Decimal("0.10")
    cap_cycle_months: int = 12
    rate_period_months: int = 24
    settlement_tolerance: Decimal = Decimal("1E-9")

    def __post_init__(self):
        if self.cap_cycle_months <= 0 or self.rate_period_months <= 0:
            raise ValueError("Cap cycle and rate period must be at least one month.")
        if self.overpayment_cap_fraction < 0 or self.settlement_tolerance < 0:
            raise ValueError("Cap fraction and settlement tolerance cannot be negative.")

    @classmethod
    def from_settings(cls) -> "EngineConfig":
        return cls(
            overpayment_cap_fraction=settings.overpayment_cap_fraction,
            cap_cycle_months=settings.cap_cycle_months,
            rate_period_months=settings.rate_period_months,
            settlement_tolerance=settings.settlement_tolerance,
        )


class PayoffOutcome(str, Enum):
    PAID_OFF = "paid_off"
    TERM_EXHAUSTED = "term_exhausted"  # Balance still owed when the term ran out


@dataclass(frozen=True)
class MonthRecord:
    month: int  # 1-based
    annual_rate: Decimal
    interest: Decimal
    minimum_payment: Decimal
    overpayment: Decimal  # After the annual cap
    payment: Decimal  # minimum_payment + overpayment
    balance: Decimal  # Floored at 0

    @property
    def years(self) -> Decimal:
        """Elapsed time in years, the chart x-axis."""
        return Decimal(self.month) / 12


@dataclass(frozen=True)
class SimulationResult:
    outcome: PayoffOutcome
    months: int
    total_interest: Decimal
    total_overpayments: Decimal
    initial_minimum_payment: Decimal  # Benchmark: first rate over the full term
    records: list[MonthRecord] = field(default_factory=list)
    cap_exceeded: bool = False
    remaining_balance: Decimal = Decimal("0")

    @property
    def paid_off(self) -> bool:
        return self.outcome is PayoffOutcome.PAID_OFF

    @property
    def payoff_years_months(self) -> tuple[int, int]:
        return divmod(self.months, 12)

    @property
    def total_paid(self) -> Decimal:
        return sum((r.payment for r in self.records), Decimal("0"))
