"""Display strings for simulation results: GBP amounts, payoff time, notices."""

from decimal import Decimal, ROUND_HALF_UP

from loan_payoff.config import settings
from loan_payoff.engine.errors import InfeasiblePaymentError
from loan_payoff.models.loan import SimulationResult

TWO_PLACES = Decimal("0.01")


def format_currency(amount: Decimal) -> str:
    """Format as £1,234.56 (negative amounts as -£1,234.56)."""
    rounded = Decimal(amount).quantize(TWO_PLACES, ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{settings.currency_symbol}{abs(rounded):,.2f}"


def format_payoff_time(months: int) -> str:
    years, remaining_months = divmod(months, 12)
    return f"{years} years, {remaining_months} months"


def cap_notice(cap_fraction: Decimal | None = None) -> str:
    fraction = settings.overpayment_cap_fraction if cap_fraction is None else cap_fraction
    pct = f"{fraction * 100:.0f}%"
    return (
        f"Your {pct} annual overpayment cap was reached in one or more years. "
        "Payments were automatically reduced to stay within the limit."
    )


def term_exhausted_notice(result: SimulationResult) -> str:
    return (
        f"The loan is not paid off within the term: "
        f"{format_currency(result.remaining_balance)} is still owed after {result.months} months."
    )


def infeasible_message(err: InfeasiblePaymentError) -> str:
    return (
        f"Payment of {format_currency(err.payment)} is not enough to cover interest of "
        f"{format_currency(err.interest)} in month {err.month}."
    )


def result_summary(result: SimulationResult) -> dict[str, str]:
    """Formatted values for the four result cards."""
    return {
        "payoff_time": format_payoff_time(result.months),
        "total_interest": format_currency(result.total_interest),
        "initial_minimum_payment": format_currency(result.initial_minimum_payment),
        "total_overpayments": format_currency(result.total_overpayments),
    }
