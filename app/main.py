"""
api-demo - In-memory resource services for usage events and images.

Features:
- Events and images with Create/Get/List/Delete and cursor pagination
- PNG previews generated at image upload
- Structured logging with correlation IDs
- Prometheus metrics
- Health checks (liveness and readiness)
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from .config import SERVICE_NAME, VERSION, get_settings
from .logging import setup_logging, get_logger
from .api.deps import get_event_service, get_image_service, get_metrics
from .api.events_router import router as events_router
from .api.images_router import router as images_router
from .error_handlers import ErrorHandlerMiddleware, register_exception_handlers
from .middleware import CorrelationIdMiddleware, MetricsMiddleware, RequestValidationMiddleware
from .health import HealthChecker

settings = get_settings()

setup_logging(json_output=settings.LOG_JSON, service_name=SERVICE_NAME, level=settings.LOG_LEVEL)
logger = get_logger()

metrics = get_metrics()

health_checker = HealthChecker(
    stores={
        "events": get_event_service().store,
        "images": get_image_service().store,
    },
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("service_starting", version=VERSION, env=settings.ENV)
    yield
    logger.info("service_stopping")
    metrics.app_up.labels(service=SERVICE_NAME, version=VERSION).set(0)


app = FastAPI(
    title="api-demo",
    version=VERSION,
    description="In-memory event and image resource services",
    lifespan=lifespan,
)

# Last added runs first: CORS, correlation ID, metrics, request validation, then error handling
app.add_middleware(ErrorHandlerMiddleware)
app.add_middleware(RequestValidationMiddleware, max_size=settings.MAX_REQUEST_SIZE)
app.add_middleware(MetricsMiddleware, metrics=metrics)
app.add_middleware(CorrelationIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

register_exception_handlers(app)

app.include_router(events_router)
app.include_router(images_router)

# Mount Prometheus metrics endpoint
metrics_app = make_asgi_app(registry=metrics.registry)
app.mount("/metrics", metrics_app)


@app.get("/health")
async def health():
    """
    Liveness probe - basic health check.

    Returns 200 if service is running.
    """
    logger.debug("health_check_liveness")
    return health_checker.liveness()


@app.get("/health/ready")
async def health_ready():
    """
    Readiness probe - comprehensive health check.

    Returns:
        200: Service is ready to handle traffic
        503: Service is not ready
    """
    logger.debug("health_check_readiness")
    result = health_checker.readiness()
    status_code = 200 if result["status"] == "ready" else 503
    return JSONResponse(content=result, status_code=status_code)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=settings.SERVICE_PORT,
    )
