"""Emergency fund endpoints"""

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Request

from finance_dashboard.api.dependencies import get_dashboard, get_request_id
from finance_dashboard.api.v1.schemas import (
    EmergencyFundRequest,
    EmergencyFundResponse,
    EmergencyFundSchema,
    RecommendationSchema,
)
from finance_dashboard.domain.dashboard import Dashboard
from finance_dashboard.domain.emergency import emergency_recommendations, normalize_status
from finance_dashboard.infrastructure.observability.logging import log_emergency_fund
from finance_dashboard.infrastructure.observability.metrics import emergency_fund_counter

router = APIRouter()


@router.post("/emergency-fund", response_model=EmergencyFundResponse)
def calculate_fund(
    body: EmergencyFundRequest,
    request: Request,
    dashboard: Dashboard = Depends(get_dashboard),
):
    """
    Size the emergency fund and store it as the latest snapshot.

    Flow:
    1. Compute target, shortfall and progress from the household profile
    2. Replace the dashboard's stored snapshot
    3. Attach progress/household/allocation recommendations
    """
    status = normalize_status(body.household_status).value
    profile = dashboard.record_emergency_fund(body.monthly_expense, status, body.current_savings)

    emergency_fund_counter.labels(household_status=status).inc()
    log_emergency_fund(get_request_id(request), status, profile)

    return EmergencyFundResponse(
        fund=EmergencyFundSchema.from_domain(profile),
        recommendations=[RecommendationSchema(**asdict(r)) for r in emergency_recommendations(profile, status)],
    )


@router.get("/emergency-fund", response_model=EmergencyFundSchema)
def get_fund(dashboard: Dashboard = Depends(get_dashboard)):
    """Latest emergency fund snapshot"""
    if dashboard.emergency is None:
        raise HTTPException(status_code=404, detail="Emergency fund not calculated yet")

    return EmergencyFundSchema.from_domain(dashboard.emergency)
