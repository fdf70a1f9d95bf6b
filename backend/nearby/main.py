from contextlib import asynccontextmanager

import sentry_sdk
import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration
from starlette.exceptions import HTTPException

from .api.deps import close_http_client, get_store
from .api.routes import places as places_routes
from .api.routes import restaurants as restaurants_routes
from .health import health_checker
from .logging_config import SERVICE_VERSION, configure_structlog, get_logger
from .metrics import PrometheusMiddleware, get_metrics
from .settings import settings
from .storage import RestaurantStore, StoreError
from .upstream import UpstreamError
from .utils import add_cors, add_request_id_tracing

# Configure structured logging (must be done before any logging calls)
configure_structlog(json_logs=not settings.DEBUG)

if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT,
        release=settings.SENTRY_RELEASE or f"nearby-eats@{SERVICE_VERSION}",
        integrations=[FastApiIntegration()],
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
    )

logger = get_logger(__name__)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # create the JSON file up front so a bad DATA_DIR fails at boot
    get_store().read_all()
    logger.info("startup", db_path=str(settings.db_path), places_enabled=settings.places_configured)
    yield
    close_http_client()


app = FastAPI(
    title="Nearby Eats API",
    version=SERVICE_VERSION,
    description="Local restaurant records blended with places search and directions",
    lifespan=lifespan,
)
add_cors(app)
add_request_id_tracing(app)
app.add_middleware(PrometheusMiddleware)

app.include_router(restaurants_routes.router, prefix=API_PREFIX)
app.include_router(places_routes.router, prefix=API_PREFIX)


@app.exception_handler(HTTPException)
async def http_error(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(UpstreamError)
async def upstream_error(request: Request, exc: UpstreamError):
    logger.error(
        "upstream_error",
        path=request.url.path,
        label=exc.label,
        status_code=exc.status_code,
        error=exc.message,
    )
    return JSONResponse(status_code=500, content={"error": exc.label, "details": exc.message})


@app.exception_handler(StoreError)
async def store_error(request: Request, exc: StoreError):
    logger.error("store_error", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content={"error": "storage error", "details": str(exc)})


@app.get(f"{API_PREFIX}/health")
def health(store: RestaurantStore = Depends(get_store)):
    body = health_checker.check(store)
    return JSONResponse(content=body, status_code=200 if body["ok"] else 503)


@app.get("/metrics", include_in_schema=False)
def metrics():
    """Expose Prometheus metrics."""
    return get_metrics()


def run() -> None:
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()
