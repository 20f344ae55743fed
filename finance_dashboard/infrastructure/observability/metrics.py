"""Prometheus metrics for dashboard activity and market data health"""

from prometheus_client import Counter, Histogram

# Ledger metrics
transactions_recorded_counter = Counter(
    "finance_transactions_recorded_total",
    "Transactions added to the ledger",
    ["kind"],  # income | expense
)

transactions_removed_counter = Counter(
    "finance_transactions_removed_total",
    "Transactions removed from the ledger",
)

# Calculator metrics
emergency_fund_counter = Counter(
    "finance_emergency_fund_calculations_total",
    "Emergency fund calculations",
    ["household_status"],
)

investment_projection_counter = Counter(
    "finance_investment_projections_total",
    "Investment projections run",
    ["horizon"],  # short | moderate | long
)

# Market data metrics
market_fallback_counter = Counter(
    "finance_market_fallback_total",
    "Market refreshes served from mock data after a live API failure",
    ["source"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_projection(horizon_years: int) -> None:
    """Record projection metrics bucketed the way strategy advice is"""
    if horizon_years <= 3:
        horizon = "short"
    elif horizon_years <= 10:
        horizon = "moderate"
    else:
        horizon = "long"

    investment_projection_counter.labels(horizon=horizon).inc()
