from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "LOAN_PAYOFF_"}

    # App
    debug: bool = False
    log_level: str = "INFO"

    # Overpayment policy: at most 10% of the balance at the start of each 12-month cycle
    overpayment_cap_fraction: Decimal = Decimal("0.10")
    cap_cycle_months: int = 12

    # Each entry of a rate schedule covers one fixed-rate period
    rate_period_months: int = 24

    # Residual balance treated as settled (Decimal residue, well below a penny)
    settlement_tolerance: Decimal = Decimal("1E-9")

    # Display
    currency_symbol: str = "£"

    # Dashboard form defaults
    default_principal: Decimal = Decimal("250000")
    default_term_years: int = 25
    default_monthly_payment: Decimal = Decimal("1500")
    default_rates_pct: list[Decimal] = [Decimal("4.64"), Decimal("4.29"), Decimal("3.94")]


settings = Settings()
