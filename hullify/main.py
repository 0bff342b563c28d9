from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Routers
from .routers.valuation import router as valuation_router

# Core modules
from .core.config import settings
from .core.logging import configure_logging, CorrelationIdMiddleware
from .core.metrics import PromMiddleware, metrics_endpoint
from .models.base import Estimator
from .services.valuation_service import estimator_from_settings

def create_app(estimator: Estimator | None = None) -> FastAPI:
    """
    App factory so tests and ASGI servers can instantiate cleanly.
    Pass `estimator` to override the one chosen from settings.
    """
    configure_logging()  # Set up JSON logs + request-id filter

    app = FastAPI(
        title="Hullify Boat Valuation API",
        version="1.0.0",
        description="Used-boat valuations: deterministic baseline guard with a bounded external estimator.",
    )
    app.state.estimator = estimator or estimator_from_settings()

    # CORS: allow the static site to call the API.
    allow_origins = [o.strip() for o in settings.ALLOW_ORIGINS.split(",")] if settings.ALLOW_ORIGINS else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id"],
    )

    # Observability middlewares
    app.add_middleware(CorrelationIdMiddleware)  # Adds/propagates X-Request-Id
    if settings.PROMETHEUS_ENABLED:
        app.add_middleware(PromMiddleware)       # Records req/latency metrics

    # Meta routes
    @app.get("/v1/health", tags=["meta"])
    def health():
        return {"status": "ok", "estimator": app.state.estimator.name}

    @app.get("/v1/ping", tags=["meta"])
    def ping():
        return {"pong": True}

    if settings.PROMETHEUS_ENABLED:
        # Standard Prometheus scrape endpoint
        app.add_route("/v1/metrics", metrics_endpoint, methods=["GET"])

    # Business routes
    app.include_router(valuation_router, prefix="/v1", tags=["valuation"])

    return app

app = create_app()

if __name__ == "__main__":
    # Local dev: python -m hullify.main (prod: uvicorn hullify.main:app)
    import uvicorn
    uvicorn.run("hullify.main:app", host="0.0.0.0", port=8000)
