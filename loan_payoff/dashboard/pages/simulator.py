"""Payoff simulator page — loan inputs, 2-year rate periods, results and chart.

Results refresh on every input change; there is no submit button.
"""

import dash
from dash import html, dcc, callback, Input, Output, State, ALL

from loan_payoff.config import settings
from loan_payoff.dashboard.simulator_view import HIDDEN, compute_view
from loan_payoff.engine.charts import payoff_figure

dash.register_page(__name__, path="/", name="Simulator")

FIELD_STYLE = {"width": "100%", "padding": "0.5rem", "fontSize": "0.95rem"}

BTN_STYLE = {
    "padding": "0.5rem 1rem",
    "fontSize": "0.9rem",
    "backgroundColor": "#1a1a2e",
    "color": "white",
    "border": "none",
    "cursor": "pointer",
}

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


def _field(label, component):
    return html.Div([
        html.Label(label, style={"fontSize": "0.85rem", "marginBottom": "0.25rem", "display": "block"}),
        component,
    ], style={"flex": "1", "minWidth": "140px"})


def rate_period_row(index, rate_value=None):
    """One rate input, labelled with the two years it covers."""
    period_years = settings.rate_period_months // 12
    start_year = index * period_years
    return html.Div([
        html.Label(
            f"Years {start_year}-{start_year + period_years}",
            style={"fontSize": "0.85rem", "width": "40%"},
        ),
        dcc.Input(
            id={"type": "rate-input", "index": index},
            type="number",
            value=float(rate_value) if rate_value is not None else None,
            step=0.01,
            placeholder="e.g., 5.5",
            style={"width": "60%", "padding": "0.25rem 0.5rem"},
        ),
        html.Span("%", style={"marginLeft": "0.25rem"}),
    ], style={"display": "flex", "alignItems": "center", "gap": "0.5rem", "marginBottom": "0.5rem"})


def _metric_card(label, value_id):
    return html.Div([
        html.Div(label, style={"fontSize": "0.8rem", "color": "#666"}),
        html.Div("-", id=value_id, style={"fontSize": "1.4rem", "fontWeight": "bold"}),
    ], style={
        "flex": "1", "minWidth": "180px", "padding": "1rem",
        "backgroundColor": "#f5f5f5", "borderRadius": "8px",
    })


layout = html.Div([
    html.H2("Loan Payoff"),

    html.Div([
        # --- Inputs ---
        html.Div([
            _field("Loan Amount (£)", dcc.Input(
                id="principal", type="number", value=float(settings.default_principal),
                style=FIELD_STYLE,
            )),
            _field("Term (years)", dcc.Input(
                id="term-years", type="number", value=settings.default_term_years, step=1,
                style=FIELD_STYLE,
            )),
            _field("Monthly Payment (£)", dcc.Input(
                id="payment-amount", type="number", value=float(settings.default_monthly_payment),
                style=FIELD_STYLE,
            )),
            html.H4("Interest Rate Periods", style={"marginBottom": "0.5rem"}),
            html.Div(
                id="rate-periods",
                children=[rate_period_row(i, r) for i, r in enumerate(settings.default_rates_pct)],
            ),
            html.Button("Add rate period", id="add-rate-btn", n_clicks=0, style=BTN_STYLE),
        ], style={"display": "flex", "flexDirection": "column", "gap": "0.75rem", "flex": "0 0 320px"}),

        # --- Results ---
        html.Div([
            html.Div(id="error-message", style=HIDDEN),
            html.Div(id="info-message", style=HIDDEN),
            html.Div([
                _metric_card("Payoff Time", "payoff-time"),
                _metric_card("Total Interest", "total-interest"),
                _metric_card("Initial Minimum Payment", "initial-min-payment"),
                _metric_card("Total Overpayments", "total-overpayments"),
            ], style={"display": "flex", "gap": "1rem", "marginBottom": "1.5rem", "flexWrap": "wrap"}),
            dcc.Graph(id="payoff-chart", figure=payoff_figure(None), style={"height": "450px"}),
        ], style={"flex": "1"}),
    ], style={"display": "flex", "gap": "2rem", "alignItems": "flex-start"}),
])

# ---------------------------------------------------------------------------
# Callbacks
# ---------------------------------------------------------------------------


@callback(
    Output("rate-periods", "children"),
    Input("add-rate-btn", "n_clicks"),
    State("rate-periods", "children"),
    prevent_initial_call=True,
)
def add_rate_period(n_clicks, rows):
    rows = rows or []
    return rows + [rate_period_row(len(rows))]


@callback(
    [
        Output("error-message", "children"),
        Output("error-message", "style"),
        Output("info-message", "children"),
        Output("info-message", "style"),
        Output("payoff-time", "children"),
        Output("total-interest", "children"),
        Output("initial-min-payment", "children"),
        Output("total-overpayments", "children"),
        Output("payoff-chart", "figure"),
    ],
    [
        Input("principal", "value"),
        Input("term-years", "value"),
        Input("payment-amount", "value"),
        Input({"type": "rate-input", "index": ALL}, "value"),
    ],
)
def run_simulation(principal, term_years, payment, rates_pct):
    return compute_view(principal, term_years, payment, rates_pct)
