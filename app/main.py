# app/main.py
"""
FastAPI application entry point.
Includes security middleware, error handlers for the service error kinds, and all routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from app.routers import health, profiles, vehicles, work_orders, settings as settings_router, dashboard
from app.database import create_tables
from app.config import settings
from app.exceptions import FleetError, Transient
from sqlalchemy.exc import OperationalError
from app.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title="Fleet Work Order API",
    description="Vehicle inventory, status history, maintenance work orders and user administration.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (dashboard frontend calls the API from the browser) ────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── API Key Middleware ───────────────────────────────────────────────────────
class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Optional shared-key check between the auth gateway and this API.
    Set API_KEY in .env. Leave empty to disable.
    """
    open_paths = {"/api/v1/health", "/docs", "/redoc", "/openapi.json"}

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.open_paths or not settings.API_KEY:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key") or request.query_params.get("api_key")
        if api_key != settings.API_KEY:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Invalid or missing API key"},
            )
        return await call_next(request)


if settings.API_KEY:
    app.add_middleware(APIKeyMiddleware)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Exception Handlers ───────────────────────────────────────────────────────
@app.exception_handler(FleetError)
async def fleet_error_handler(request: Request, exc: FleetError):
    if exc.status_code >= 500:
        logger.error(f"{exc.kind} on {request.url.path}: {exc}")
    else:
        logger.info(f"{exc.kind} on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.kind},
    )


@app.exception_handler(OperationalError)
async def database_error_handler(request: Request, exc: OperationalError):
    # Driver errors raised outside atomic() (lookups, policy checks) are transient too
    error = Transient("process request", "database unavailable, please try again")
    logger.error(f"Database error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=error.status_code,
        content={"detail": error.message, "error": error.kind},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(dashboard.router,       prefix="/api/v1", tags=["Dashboard"])
app.include_router(vehicles.router,        prefix="/api/v1", tags=["Vehicles"])
app.include_router(work_orders.router,     prefix="/api/v1", tags=["Work Orders"])
app.include_router(profiles.router,        prefix="/api/v1", tags=["Users"])
app.include_router(settings_router.router, prefix="/api/v1", tags=["Settings"])
app.include_router(health.router,          prefix="/api/v1", tags=["Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("Fleet Work Order API starting up...")
    create_tables()
    logger.info("Database tables ready")
    logger.info(f"Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT}")
    logger.info("API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info("Fleet Work Order API shutting down...")
