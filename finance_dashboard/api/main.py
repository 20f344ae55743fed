"""FastAPI application factory"""

import random

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from finance_dashboard.api.middleware import RequestIDMiddleware, MetricsMiddleware
from finance_dashboard.api.v1 import dashboard, emergency, investment, market, state, transactions
from finance_dashboard.domain.dashboard import Dashboard
from finance_dashboard.domain.market import MockQuoteGenerator
from finance_dashboard.infrastructure.observability.logging import setup_logging
from finance_dashboard.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Finance Dashboard",
        description="Weekly cash flow, emergency fund and ETF projection service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # One session per process; the browser keeps the durable copy
    app.state.dashboard = Dashboard()
    app.state.quote_generator = MockQuoteGenerator(random.Random(settings.market_seed))

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(emergency.router, prefix="/v1", tags=["emergency-fund"])
    app.include_router(investment.router, prefix="/v1", tags=["investment"])
    app.include_router(market.router, prefix="/v1", tags=["market"])
    app.include_router(state.router, prefix="/v1", tags=["state"])

    return app


app = create_app()
