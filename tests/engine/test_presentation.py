from decimal import Decimal

from loan_payoff.engine.amortization import simulate
from loan_payoff.engine.errors import InfeasiblePaymentError
from loan_payoff.engine.presentation import (
    cap_notice,
    format_currency,
    format_payoff_time,
    infeasible_message,
    result_summary,
    term_exhausted_notice,
)
from loan_payoff.models.loan import PayoffOutcome, SimulationResult


class TestFormatCurrency:
    def test_thousands_and_pence(self):
        assert format_currency(Decimal("1234.567")) == "£1,234.57"

    def test_rounds_half_up(self):
        assert format_currency(Decimal("0.125")) == "£0.13"

    def test_zero(self):
        assert format_currency(Decimal("0")) == "£0.00"

    def test_negative(self):
        assert format_currency(Decimal("-5")) == "-£5.00"

    def test_large(self):
        assert format_currency(Decimal("250000")) == "£250,000.00"


class TestFormatPayoffTime:
    def test_whole_years(self):
        assert format_payoff_time(300) == "25 years, 0 months"

    def test_years_and_months(self):
        assert format_payoff_time(100) == "8 years, 4 months"

    def test_under_a_year(self):
        assert format_payoff_time(7) == "0 years, 7 months"


class TestMessages:
    def test_cap_notice_default_fraction(self):
        notice = cap_notice()
        assert "10% annual overpayment cap" in notice
        assert "automatically reduced" in notice

    def test_cap_notice_custom_fraction(self):
        assert "15% annual overpayment cap" in cap_notice(Decimal("0.15"))

    def test_infeasible_message(self):
        """£10K at 100% a year: month 1 interest of ~£833.33 against a £10 payment."""
        err = InfeasiblePaymentError(
            month=1,
            payment=Decimal("10"),
            interest=Decimal("10000") / 12,
            initial_minimum_payment=Decimal("0"),
        )
        assert infeasible_message(err) == (
            "Payment of £10.00 is not enough to cover interest of £833.33 in month 1."
        )
        assert err.shortfall.quantize(Decimal("0.01")) == Decimal("823.33")
        assert "month=1" in str(err)

    def test_term_exhausted_notice(self):
        result = SimulationResult(
            outcome=PayoffOutcome.TERM_EXHAUSTED,
            months=24,
            total_interest=Decimal("240"),
            total_overpayments=Decimal("0"),
            initial_minimum_payment=Decimal("10"),
            remaining_balance=Decimal("1000"),
        )
        assert term_exhausted_notice(result) == (
            "The loan is not paid off within the term: £1,000.00 is still owed after 24 months."
        )


class TestResultSummary:
    def test_summary_fields(self, flat_rate_input, config):
        result = simulate(flat_rate_input, config)
        summary = result_summary(result)
        assert summary["payoff_time"] == format_payoff_time(result.months)
        assert summary["initial_minimum_payment"] == "£584.59"
        assert summary["total_interest"].startswith("£")
        assert summary["total_overpayments"] == format_currency(result.total_overpayments)

    def test_payoff_years_months(self, flat_rate_input, config):
        result = simulate(flat_rate_input, config)
        years, months = result.payoff_years_months
        assert years * 12 + months == result.months
