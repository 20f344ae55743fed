"""POST /v1/investment/projection - ETF growth simulation"""

import time
from dataclasses import asdict

from fastapi import APIRouter, Request

from finance_dashboard.api.dependencies import get_request_id
from finance_dashboard.api.v1.schemas import (
    GrowthPointSchema,
    ProjectionRequest,
    ProjectionResponse,
    RecommendationSchema,
    YearlyRowSchema,
)
from finance_dashboard.domain.investment import growth_series, investment_recommendations, project_investment
from finance_dashboard.infrastructure.observability.logging import log_projection
from finance_dashboard.infrastructure.observability.metrics import record_projection

router = APIRouter()


@router.post("/investment/projection", response_model=ProjectionResponse)
def create_projection(body: ProjectionRequest, request: Request):
    """
    Project investment growth under monthly contributions.

    Returns:
        Final nominal and inflation-adjusted values, ROI, a cumulative
        year-by-year schedule, chart points and strategy advice
    """
    start_time = time.time()

    projection = project_investment(
        initial_investment=body.initial_investment,
        monthly_investment=body.monthly_investment,
        annual_return_rate=body.annual_return_rate,
        horizon_years=body.horizon_years,
        annual_inflation_rate=body.annual_inflation_rate,
    )

    duration_ms = (time.time() - start_time) * 1000
    record_projection(projection.horizon_years)
    log_projection(get_request_id(request), projection, duration_ms)

    return ProjectionResponse(
        final_value=projection.final_value,
        total_invested=projection.total_invested,
        total_profit=projection.total_profit,
        roi=projection.roi,
        real_value=projection.real_value,
        real_profit=projection.real_profit,
        yearly_schedule=[YearlyRowSchema(**asdict(row)) for row in projection.yearly_schedule],
        growth=[GrowthPointSchema(**asdict(point)) for point in growth_series(projection)],
        recommendations=[RecommendationSchema(**asdict(r)) for r in investment_recommendations(projection)],
    )
