"""Amortization simulation with a capped annual overpayment budget.

Pure functions: Decimal in, dataclass out. No I/O.
"""

import logging
from decimal import Decimal, InvalidOperation, Overflow, localcontext

from loan_payoff.engine.errors import InfeasiblePaymentError, InvalidLoanInput
from loan_payoff.models.loan import (
    EngineConfig,
    MonthRecord,
    PayoffOutcome,
    SimulationInput,
    SimulationResult,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def minimum_payment(principal: Decimal, monthly_rate: Decimal, months: int) -> Decimal:
    """Fixed payment that fully repays `principal` over `months` at `monthly_rate`.

    Edge cases:
        principal <= 0:  nothing owed, 0
        months <= 0:     pay it all now
        rate <= 0:       straight-line repayment
        factor overflow: pay it all now
    """
    if principal <= 0:
        return ZERO
    if months <= 0:
        return principal
    if monthly_rate <= 0:
        return principal / months

    # M = P * [r(1+r)^n] / [(1+r)^n - 1]
    with localcontext() as ctx:
        ctx.traps[Overflow] = False
        factor = (1 + monthly_rate) ** months
    if not factor.is_finite():
        return principal
    if factor == 1:
        # Rate below working precision
        return principal / months
    return principal * (monthly_rate * factor) / (factor - 1)


def rate_for_month(
    rate_schedule: tuple[Decimal, ...],
    month_index: int,
    period_months: int = 24,
) -> Decimal:
    """Annual rate for a 0-based month: one schedule entry per period, the last one extends."""
    period = month_index // period_months
    return rate_schedule[min(period, len(rate_schedule) - 1)]


def _as_decimal(value, name: str) -> Decimal:
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError) as e:
        raise InvalidLoanInput(f"Invalid {name}.", context={name: value}) from e
    if not amount.is_finite():
        raise InvalidLoanInput(f"Invalid {name}.", context={name: value})
    return amount


def validate_inputs(inputs: SimulationInput) -> tuple[Decimal, Decimal, tuple[Decimal, ...]]:
    """Check preconditions and return (principal, monthly_payment, rate_schedule) as Decimals."""
    principal = _as_decimal(inputs.principal, "principal amount")
    if principal <= 0:
        raise InvalidLoanInput("Invalid principal amount.", context={"principal": principal})

    term = inputs.term_months
    if isinstance(term, bool) or not isinstance(term, int) or term <= 0:
        raise InvalidLoanInput("Invalid term.", context={"term_months": term})

    payment = _as_decimal(inputs.monthly_payment, "payment amount")
    if payment <= 0:
        raise InvalidLoanInput("Invalid payment amount.", context={"monthly_payment": payment})

    if not inputs.rate_schedule:
        raise InvalidLoanInput("Please add at least one interest rate period.")
    rates = tuple(_as_decimal(r, "interest rate") for r in inputs.rate_schedule)
    for i, rate in enumerate(rates):
        if rate < 0:
            raise InvalidLoanInput("Interest rates cannot be negative.", context={"period": i, "rate": rate})

    return principal, payment, rates


def simulate(inputs: SimulationInput, config: EngineConfig | None = None) -> SimulationResult:
    """Run the loan month by month until it is paid off or the term runs out.

    Each month:
        1. At the start of every cap cycle, the overpayment budget is reset to
           a fraction of the balance at that moment.
        2. The minimum payment is recomputed from the current balance, rate
           and remaining term.
        3. Whatever the target payment exceeds the minimum by is overpaid,
           up to what is left of the cycle's budget.

    Raises:
        InvalidLoanInput: before any work, if a precondition fails
        InfeasiblePaymentError: if a month's payment does not cover its interest
    """
    config = config or EngineConfig.from_settings()
    principal, payment, rates = validate_inputs(inputs)
    term = inputs.term_months

    initial_min_payment = minimum_payment(principal, rates[0] / 12, term)
    logger.debug(
        "Simulating %s over %d months at %s/month, %d rate period(s)",
        principal, term, payment, len(rates),
    )

    balance = principal
    month_index = 0
    total_interest = ZERO
    total_overpayments = ZERO
    cycle_cap = ZERO
    overpaid_this_cycle = ZERO
    cap_exceeded = False
    records: list[MonthRecord] = []

    while balance > config.settlement_tolerance and month_index < term:
        if month_index % config.cap_cycle_months == 0:
            cycle_cap = balance * config.overpayment_cap_fraction
            overpaid_this_cycle = ZERO

        annual_rate = rate_for_month(rates, month_index, config.rate_period_months)
        monthly_rate = annual_rate / 12
        interest = balance * monthly_rate
        min_payment = minimum_payment(balance, monthly_rate, term - month_index)

        intended = max(ZERO, payment - min_payment)
        allowed = max(ZERO, cycle_cap - overpaid_this_cycle)
        overpayment = min(intended, allowed)

        if intended > overpayment:
            if not cap_exceeded:
                logger.debug("Overpayment cap reached in month %d", month_index + 1)
            cap_exceeded = True
            total_payment = min_payment + overpayment
        else:
            # Same value as min_payment + overpayment without the rounding residue
            total_payment = max(payment, min_payment)

        if total_payment < interest and balance > 0:
            err = InfeasiblePaymentError(
                month=month_index + 1,
                payment=total_payment,
                interest=interest,
                initial_minimum_payment=initial_min_payment,
            )
            logger.warning("Infeasible payment: %s", err)
            raise err

        balance -= total_payment - interest
        total_interest += interest
        overpaid_this_cycle += overpayment
        total_overpayments += overpayment
        month_index += 1

        records.append(MonthRecord(
            month=month_index,
            annual_rate=annual_rate,
            interest=interest,
            minimum_payment=min_payment,
            overpayment=overpayment,
            payment=total_payment,
            balance=max(ZERO, balance),
        ))

    if balance > config.settlement_tolerance:
        outcome = PayoffOutcome.TERM_EXHAUSTED
        remaining = balance
    else:
        outcome = PayoffOutcome.PAID_OFF
        remaining = ZERO

    logger.debug(
        "Simulation finished: %s after %d months, interest %s, overpayments %s",
        outcome.value, month_index, total_interest, total_overpayments,
    )

    return SimulationResult(
        outcome=outcome,
        months=month_index,
        total_interest=total_interest,
        total_overpayments=total_overpayments,
        initial_minimum_payment=initial_min_payment,
        records=records,
        cap_exceeded=cap_exceeded,
        remaining_balance=remaining,
    )


def yearly_summary(result: SimulationResult) -> list[dict[str, Decimal]]:
    """Aggregate the month series by loan year.

    Returns list of dicts with keys: year, interest, payments, overpayments, ending_balance
    """
    yearly: list[dict[str, Decimal]] = []
    year_interest = ZERO
    year_payments = ZERO
    year_overpayments = ZERO

    for r in result.records:
        year_interest += r.interest
        year_payments += r.payment
        year_overpayments += r.overpayment

        if r.month % 12 == 0 or r.month == len(result.records):
            year_num = (r.month - 1) // 12 + 1
            yearly.append({
                "year": Decimal(str(year_num)),
                "interest": year_interest,
                "payments": year_payments,
                "overpayments": year_overpayments,
                "ending_balance": r.balance,
            })
            year_interest = ZERO
            year_payments = ZERO
            year_overpayments = ZERO

    return yearly
