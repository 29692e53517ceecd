"""Canonical test fixtures used across all engine tests.

Fixture: £100K loan, 25yr term, flat 5% unless a test says otherwise. Under the
default 10% cap the minimum is re-amortised every month, so a capped loan runs
to the full term; overpaying only lowers the interest.
Stepped schedule: 4.64% / 4.29% / 3.94% for years 0-2 / 2-4 / 4+.
"""

from decimal import Decimal

import pytest

from loan_payoff.models.loan import EngineConfig, SimulationInput


@pytest.fixture
def config() -> EngineConfig:
    """Default policy: 10% cap per 12-month cycle, 24-month rate periods."""
    return EngineConfig()


@pytest.fixture
def uncapped_config() -> EngineConfig:
    """Cap equal to the whole cycle-start balance, so it never binds in practice."""
    return EngineConfig(overpayment_cap_fraction=Decimal("1"))


@pytest.fixture
def flat_rate_input() -> SimulationInput:
    return SimulationInput(
        principal=Decimal("100000"),
        term_months=300,
        monthly_payment=Decimal("700"),
        rate_schedule=(Decimal("0.05"),),
    )


@pytest.fixture
def stepped_rate_input() -> SimulationInput:
    return SimulationInput.from_years(
        principal=Decimal("100000"),
        term_years=25,
        monthly_payment=Decimal("1200"),
        rate_schedule=[Decimal("0.0464"), Decimal("0.0429"), Decimal("0.0394")],
    )
