"""FastAPI application factory"""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from credit_desk.api.dependencies import get_request_id
from credit_desk.api.middleware import RequestIDMiddleware, MetricsMiddleware
from credit_desk.api.v1 import collections, delinquency, loans
from credit_desk.domain.exceptions import InvalidInputError
from credit_desk.infrastructure.observability.logging import setup_logging
from credit_desk.infrastructure.observability.metrics import invalid_input_counter
from credit_desk.config import settings

# Setup structured logging
setup_logging(settings.log_level)

# (router, tag) pairs mounted under /v1
V1_ROUTERS = (
    (loans.router, "loans"),
    (delinquency.router, "delinquency"),
    (collections.router, "collections"),
)


async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    """422 for domain validation errors a route did not translate itself"""
    invalid_input_counter.labels(operation=request.url.path).inc()
    logging.warning(f"Invalid input: {exc}", extra={"request_id": get_request_id(request)})
    return JSONResponse(status_code=422, content={"detail": str(exc)})


def create_app() -> FastAPI:
    """Create the credit desk app: health, metrics and the v1 calculators"""
    app = FastAPI(
        title="Credit Desk",
        description="Loan cost preview and delinquency classification service",
        version="0.1.0",
    )

    # last added runs first, so request ids exist before metrics are taken
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_exception_handler(InvalidInputError, invalid_input_handler)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    for router, tag in V1_ROUTERS:
        app.include_router(router, prefix="/v1", tags=[tag])

    return app


app = create_app()
