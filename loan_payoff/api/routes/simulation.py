"""Simulation route: scenario in, payoff schedule out."""

from fastapi import APIRouter, HTTPException

from loan_payoff.api.schemas import (
    FormattedSummary,
    InfeasiblePaymentDetail,
    MonthRecordResponse,
    SimulateRequest,
    SimulationResponse,
    YearlySummaryResponse,
)
from loan_payoff.engine.amortization import simulate, yearly_summary
from loan_payoff.engine.errors import InfeasiblePaymentError, InvalidLoanInput
from loan_payoff.engine.presentation import (
    cap_notice,
    infeasible_message,
    result_summary,
    term_exhausted_notice,
)
from loan_payoff.models.loan import EngineConfig, SimulationInput, SimulationResult

router = APIRouter(prefix="/api/v1", tags=["simulation"])


def _build_input(req: SimulateRequest) -> SimulationInput:
    """Request rates are percentages; the engine takes fractions."""
    return SimulationInput.from_years(
        principal=req.principal,
        term_years=req.term_years,
        monthly_payment=req.monthly_payment,
        rate_schedule=[r / 100 for r in req.rates],
    )


def _result_to_response(result: SimulationResult, config: EngineConfig) -> SimulationResponse:
    notices = []
    if result.cap_exceeded:
        notices.append(cap_notice(config.overpayment_cap_fraction))
    if not result.paid_off:
        notices.append(term_exhausted_notice(result))

    schedule = [
        MonthRecordResponse(
            month=r.month,
            years=r.years,
            annual_rate=r.annual_rate,
            interest=r.interest,
            minimum_payment=r.minimum_payment,
            overpayment=r.overpayment,
            payment=r.payment,
            balance=r.balance,
        )
        for r in result.records
    ]
    yearly = [
        YearlySummaryResponse(
            year=int(y["year"]),
            interest=y["interest"],
            payments=y["payments"],
            overpayments=y["overpayments"],
            ending_balance=y["ending_balance"],
        )
        for y in yearly_summary(result)
    ]

    return SimulationResponse(
        outcome=result.outcome.value,
        paid_off=result.paid_off,
        months=result.months,
        total_interest=result.total_interest,
        total_overpayments=result.total_overpayments,
        initial_minimum_payment=result.initial_minimum_payment,
        remaining_balance=result.remaining_balance,
        cap_exceeded=result.cap_exceeded,
        formatted=FormattedSummary(**result_summary(result)),
        notices=notices,
        schedule=schedule,
        yearly=yearly,
    )


@router.post("/simulate", response_model=SimulationResponse)
def run_simulation(req: SimulateRequest):
    """Run one payoff simulation.

    Stateless: every call is independent, so this is safe to hit on every
    form change.
    """
    config = EngineConfig.from_settings()
    try:
        result = simulate(_build_input(req), config)
    except InvalidLoanInput as e:
        raise HTTPException(status_code=400, detail=e.message)
    except InfeasiblePaymentError as e:
        detail = InfeasiblePaymentDetail(
            message=infeasible_message(e),
            month=e.month,
            payment=e.payment,
            interest=e.interest,
            shortfall=e.shortfall,
            initial_minimum_payment=e.initial_minimum_payment,
        )
        raise HTTPException(status_code=422, detail=detail.model_dump(mode="json"))

    return _result_to_response(result, config)
