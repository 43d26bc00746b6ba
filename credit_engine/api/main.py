"""FastAPI application factory"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from credit_engine.api.middleware import RequestIDMiddleware, MetricsMiddleware
from credit_engine.api.v1 import decision, profile, score
from credit_engine.domain.exceptions import InvalidProfileDataError
from credit_engine.infrastructure.observability.logging import setup_logging
from credit_engine.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Credit Engine",
        description="Credit scoring and loan eligibility service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Unparseable profile fields are client errors
    @app.exception_handler(InvalidProfileDataError)
    async def invalid_profile_handler(request: Request, exc: InvalidProfileDataError):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(profile.router, prefix="/v1", tags=["profiles"])
    app.include_router(score.router, prefix="/v1", tags=["scores"])
    app.include_router(decision.router, prefix="/v1", tags=["decisions"])

    return app


app = create_app()
