"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from budget_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from budget_gateway.api.v1 import debts, forecast, payments, proposal, risk
from budget_gateway.infrastructure.observability.logging import setup_logging
from budget_gateway.config import settings

setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Budget Gateway",
        description="Debt payoff forecasts, priorities, risk alerts and payment tracking",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Last added runs first
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(debts.router, prefix="/v1", tags=["debts"])
    app.include_router(forecast.router, prefix="/v1", tags=["forecasts"])
    app.include_router(risk.router, prefix="/v1", tags=["risk"])
    app.include_router(proposal.router, prefix="/v1", tags=["proposals"])
    app.include_router(payments.router, prefix="/v1", tags=["payments"])

    return app


app = create_app()
