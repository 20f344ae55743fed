"""ETF investment growth projection - monthly compounding with regular contributions"""

from typing import List

from finance_dashboard.domain.models import GrowthPoint, InvestmentProjection, Recommendation, YearlyRow
from finance_dashboard.utils.math_utils import safe_ratio

MONTHS_PER_YEAR = 12


def _step(balance: float, monthly: float, monthly_rate: float) -> float:
    # Contribution is deposited at the start of the month and earns that month's return
    return (balance + monthly) * (1 + monthly_rate)


def future_value(initial: float, monthly: float, monthly_rate: float, months: int) -> float:
    """
    Closed-form value after `months` of compounding.

    FV = initial(1+r)^n + monthly((1+r)^n - 1)/r (1+r), or the linear
    initial + monthly*n when r is 0.
    """
    if months <= 0:
        return float(initial)
    if monthly_rate == 0:
        return initial + monthly * months

    growth = (1 + monthly_rate) ** months
    return initial * growth + monthly * ((growth - 1) / monthly_rate) * (1 + monthly_rate)


def simulate_balance(initial: float, monthly: float, monthly_rate: float, months: int) -> float:
    """Same process as future_value, iterated month by month"""
    balance = float(initial)
    for _ in range(max(0, months)):
        balance = _step(balance, monthly, monthly_rate)
    return balance


def project_investment(
    initial_investment: int,
    monthly_investment: int,
    annual_return_rate: float,
    horizon_years: int,
    annual_inflation_rate: float = 0.0,
) -> InvestmentProjection:
    """
    Project ETF growth under a fixed monthly contribution.

    Requirements:
    - Monthly compounding at annual_return_rate / 12
    - Zero return rate uses the linear fallback (no division by r)
    - ROI relative to total contributed; 0% when nothing was contributed
    - Real value deflates the final value by yearly inflation
    - Yearly schedule continues one recurrence, so rows are cumulative

    A horizon under one year projects nothing: the final value is the
    initial capital and the schedule is empty.
    """
    initial_investment = max(0, initial_investment or 0)
    monthly_investment = max(0, monthly_investment or 0)
    horizon_years = max(0, int(horizon_years))

    monthly_rate = annual_return_rate / MONTHS_PER_YEAR
    total_months = horizon_years * MONTHS_PER_YEAR

    final_value = future_value(initial_investment, monthly_investment, monthly_rate, total_months)
    total_invested = initial_investment + monthly_investment * total_months
    total_profit = final_value - total_invested
    roi = safe_ratio(total_profit, total_invested) * 100

    real_value = safe_ratio(final_value, (1 + annual_inflation_rate) ** horizon_years)
    real_profit = real_value - total_invested

    return InvestmentProjection(
        initial_investment=initial_investment,
        monthly_investment=monthly_investment,
        annual_return_rate=annual_return_rate,
        horizon_years=horizon_years,
        annual_inflation_rate=annual_inflation_rate,
        final_value=final_value,
        total_invested=total_invested,
        total_profit=total_profit,
        roi=roi,
        real_value=real_value,
        real_profit=real_profit,
        yearly_schedule=tuple(
            yearly_schedule(initial_investment, monthly_investment, monthly_rate, horizon_years)
        ),
    )


def yearly_schedule(initial: int, monthly: int, monthly_rate: float, years: int) -> List[YearlyRow]:
    """Cumulative contributed vs balance at the end of each year 1..years"""
    rows = []
    balance = float(initial)

    for year in range(1, years + 1):
        for _ in range(MONTHS_PER_YEAR):
            balance = _step(balance, monthly, monthly_rate)

        total_invested = initial + monthly * MONTHS_PER_YEAR * year
        rows.append(
            YearlyRow(
                year=year,
                total_invested=total_invested,
                balance=balance,
                profit=balance - total_invested,
            )
        )

    return rows


def growth_series(projection: InvestmentProjection) -> List[GrowthPoint]:
    """Chart points from year 0 (initial capital) to the horizon"""
    points = [
        GrowthPoint(
            year=0,
            invested=projection.initial_investment,
            value=float(projection.initial_investment),
        )
    ]
    points.extend(
        GrowthPoint(year=row.year, invested=row.total_invested, value=row.balance)
        for row in projection.yearly_schedule
    )
    return points


def investment_recommendations(projection: InvestmentProjection) -> List[Recommendation]:
    """
    Strategy advice for a projection.

    Thresholds:
    - Horizon <= 3 years: conservative mix, <= 10 years: moderate, beyond: aggressive
    - Contribution < Rp 500.000: start small, < Rp 2.000.000: stay consistent
    - Expected return >= 12%/year is flagged as optimistic
    """
    years = projection.horizon_years
    monthly = projection.monthly_investment
    recommendations = []

    if years <= 3:
        recommendations.append(
            Recommendation("warning", "short_horizon", {"years": years, "etf": 50, "bonds": 30, "deposit": 20})
        )
    elif years <= 10:
        recommendations.append(
            Recommendation("info", "moderate_strategy", {"years": years, "etf": 60, "bonds": 30, "cash": 10})
        )
    else:
        recommendations.append(
            Recommendation("success", "aggressive_strategy", {"years": years, "etf": 80, "bonds": 15, "cash": 5})
        )

    if monthly < 500_000:
        recommendations.append(Recommendation("info", "start_small", {"monthly": monthly}))
    elif monthly < 2_000_000:
        recommendations.append(Recommendation("info", "stay_consistent", {"monthly": monthly}))
    else:
        recommendations.append(Recommendation("success", "serious_investor", {"monthly": monthly}))

    expected_return_pct = round(projection.annual_return_rate * 100, 2)
    if expected_return_pct >= 12:
        recommendations.append(
            Recommendation("warning", "high_return_expectation", {"expected_return": expected_return_pct})
        )

    recommendations.append(Recommendation("info", "dollar_cost_averaging"))
    recommendations.append(
        Recommendation(
            "info",
            "etf_picks",
            {"beginner": "R-LQ45X", "growth": "XIIT", "diversified": "XIJI+XISI", "esg": "XISI"},
        )
    )
    recommendations.append(
        Recommendation("info", "tax_notes", {"dividend_tax": 10.0, "sale_tax": 0.1})
    )

    return recommendations
