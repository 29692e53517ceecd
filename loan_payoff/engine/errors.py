"""Exceptions raised by the amortization engine.

Both failures are deterministic functions of the input: callers report them
and wait for the input to change, there is nothing to retry.
"""

from decimal import Decimal
from typing import Any


class LoanSimulationError(Exception):
    """Base class for engine failures.

    Attributes:
        message: Human-readable error description
        context: Extra values describing the failure (month, amounts, ...)
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


class InvalidLoanInput(LoanSimulationError, ValueError):
    """A precondition on the simulation input does not hold.

    Raised before any simulation work starts, e.g. a non-positive principal
    or an empty rate schedule.
    """


class InfeasiblePaymentError(LoanSimulationError):
    """The month's total payment does not cover the interest accruing that month.

    The balance would never converge, so the run stops at the offending month.
    The benchmark minimum payment is computed before the loop starts and is
    carried along so callers can still show it.
    """

    def __init__(
        self,
        month: int,
        payment: Decimal,
        interest: Decimal,
        initial_minimum_payment: Decimal,
    ) -> None:
        self.month = month
        self.payment = payment
        self.interest = interest
        self.shortfall = interest - payment
        self.initial_minimum_payment = initial_minimum_payment
        super().__init__(
            f"Payment of {payment:.2f} does not cover interest of {interest:.2f} in month {month}",
            context={"month": month, "shortfall": f"{self.shortfall:.2f}"},
        )
