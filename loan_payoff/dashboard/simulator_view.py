"""View logic for the simulator page: raw form values in, page outputs out.

Kept apart from the page module so it can be exercised without a Dash app.
"""

from decimal import Decimal, InvalidOperation

from loan_payoff.engine.amortization import simulate
from loan_payoff.engine.charts import payoff_figure
from loan_payoff.engine.errors import InfeasiblePaymentError, InvalidLoanInput
from loan_payoff.engine.presentation import (
    cap_notice,
    format_currency,
    infeasible_message,
    result_summary,
    term_exhausted_notice,
)
from loan_payoff.models.loan import EngineConfig, SimulationInput

ERROR_STYLE = {
    "backgroundColor": "#fdecea", "padding": "0.75rem 1rem", "borderRadius": "8px",
    "marginBottom": "1rem", "border": "1px solid #e94560",
}
INFO_STYLE = {
    "backgroundColor": "#fff3cd", "padding": "0.75rem 1rem", "borderRadius": "8px",
    "marginBottom": "1rem", "border": "1px solid #ffc107",
}
HIDDEN = {"display": "none"}

EMPTY_SUMMARY = {
    "payoff_time": "-",
    "total_interest": "-",
    "initial_minimum_payment": "-",
    "total_overpayments": "-",
}


def _to_decimal(value):
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


def _error(message, summary=None):
    summary = summary or EMPTY_SUMMARY
    return (
        message, ERROR_STYLE,
        "", HIDDEN,
        summary["payoff_time"], summary["total_interest"],
        summary["initial_minimum_payment"], summary["total_overpayments"],
        payoff_figure(None),
    )


def compute_view(principal, term_years, payment, rates_pct):
    """Map raw form values to the page outputs.

    Returns (error text, error style, info text, info style, payoff time,
    total interest, initial minimum payment, total overpayments, figure).
    """
    principal = _to_decimal(principal)
    payment = _to_decimal(payment)
    rates = [_to_decimal(r) for r in rates_pct]

    if principal is None or principal <= 0:
        return _error("Invalid principal amount.")
    if term_years is None or int(term_years) != term_years or term_years <= 0:
        return _error("Invalid term.")
    if payment is None or payment <= 0:
        return _error("Invalid payment amount.")
    if any(r is None for r in rates):
        return _error("Please fill in all interest rate fields.")
    if not rates:
        return _error("Please add at least one interest rate period.")

    config = EngineConfig.from_settings()
    inputs = SimulationInput.from_years(
        principal=principal,
        term_years=int(term_years),
        monthly_payment=payment,
        rate_schedule=[r / 100 for r in rates],
    )
    try:
        result = simulate(inputs, config)
    except InvalidLoanInput as e:
        return _error(e.message)
    except InfeasiblePaymentError as e:
        summary = dict(EMPTY_SUMMARY, initial_minimum_payment=format_currency(e.initial_minimum_payment))
        return _error(infeasible_message(e), summary)

    notices = []
    if result.cap_exceeded:
        notices.append(cap_notice(config.overpayment_cap_fraction))
    if not result.paid_off:
        notices.append(term_exhausted_notice(result))

    summary = result_summary(result)
    return (
        "", HIDDEN,
        " ".join(notices), INFO_STYLE if notices else HIDDEN,
        summary["payoff_time"], summary["total_interest"],
        summary["initial_minimum_payment"], summary["total_overpayments"],
        payoff_figure(result, principal),
    )
