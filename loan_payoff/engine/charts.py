"""Plotly figure for the payoff chart.

Monthly interest and actual payment share the left axis; the remaining
principal sits on a second axis to the right. The x-axis is elapsed years.
"""

from decimal import Decimal

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from loan_payoff.config import settings
from loan_payoff.models.loan import SimulationResult

INTEREST_COLOR = "rgba(220, 38, 38, 1)"
PAYMENT_COLOR = "rgba(79, 70, 229, 1)"
PRINCIPAL_COLOR = "rgba(5, 150, 105, 1)"
PRINCIPAL_FILL = "rgba(16, 185, 129, 0.2)"


def payoff_figure(result: SimulationResult | None, principal: Decimal | None = None) -> go.Figure:
    """Build the three-series payoff chart.

    `principal` anchors the balance series at year 0. An empty chart (axes
    only) is returned when there is no result to show.
    """
    fig = make_subplots(specs=[[{"secondary_y": True}]])
    records = result.records if result is not None else []

    years = [float(r.years) for r in records]
    balance_x = years
    balance_y = [float(r.balance) for r in records]
    if principal is not None and records:
        balance_x = [0.0] + years
        balance_y = [float(principal)] + balance_y

    fig.add_trace(go.Scatter(
        x=years,
        y=[float(r.interest) for r in records],
        mode="lines",
        name="Monthly Interest",
        line=dict(color=INTEREST_COLOR, width=2),
    ), secondary_y=False)
    fig.add_trace(go.Scatter(
        x=years,
        y=[float(r.payment) for r in records],
        mode="lines",
        name="Actual Payment",
        line=dict(color=PAYMENT_COLOR, width=2),
    ), secondary_y=False)
    fig.add_trace(go.Scatter(
        x=balance_x,
        y=balance_y,
        mode="lines",
        name="Remaining Principal",
        line=dict(color=PRINCIPAL_COLOR, width=2),
        fill="tozeroy",
        fillcolor=PRINCIPAL_FILL,
    ), secondary_y=True)

    symbol = settings.currency_symbol
    fig.update_layout(hovermode="x unified", margin=dict(l=40, r=40, t=30, b=40))
    fig.update_xaxes(title_text="Years", dtick=0.5 if len(records) <= 60 else 1)
    fig.update_yaxes(
        title_text="Monthly Amount", tickprefix=symbol, tickformat=",.0f",
        rangemode="tozero", secondary_y=False,
    )
    fig.update_yaxes(
        title_text="Remaining Principal", tickprefix=symbol, tickformat="~s",
        rangemode="tozero", showgrid=False, secondary_y=True,
    )
    fig.update_traces(hovertemplate=symbol + "%{y:,.2f}")
    return fig
