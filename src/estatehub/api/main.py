"""
FastAPI Main Application

EstateHub property listing and lead capture REST API.
"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from config.settings import settings
from src import __version__
from src.estatehub.api import rate_limit
from src.estatehub.api.dependencies import get_db
from src.estatehub.api.routers import (
    admin_leads,
    admin_properties,
    auth,
    leads,
    properties,
    search,
    stats,
)
from src.estatehub.api.schemas import HealthCheck
from src.estatehub.db.session import close_connections
from src.estatehub.db.session import health_check as database_health_check
from src.estatehub.utils.logger import get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("api_starting", environment=settings.environment)
    yield
    close_connections()


# Create FastAPI app
app = FastAPI(
    title="EstateHub API",
    description="REST API for property listings, search, and lead capture with an authenticated admin area",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

@app.middleware("http")
async def limit_api_requests(request: Request, call_next):
    """Apply the general per-client request cap to /api/ routes."""
    if settings.rate_limit_enabled and request.url.path.startswith("/api/"):
        key = rate_limit.client_key(request)
        result = rate_limit.general_limiter.hit(key)
        if not result.allowed:
            logger.warning("rate_limit_exceeded", scope="general", client=key, path=request.url.path)
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={"detail": "Too many requests, please try again later"},
                headers={"Retry-After": str(result.retry_after)},
            )
    return await call_next(request)


# Registered last so it is outermost and also wraps 429 responses
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Invalid request parameters",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(IntegrityError)
async def integrity_exception_handler(request: Request, exc: IntegrityError):
    logger.warning("database_integrity_error", path=request.url.path, error=str(exc.orig))
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "Request conflicts with existing data"},
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error("database_error", path=request.url.path, method=request.method, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# Include routers
app.include_router(properties.router)
app.include_router(leads.router)
app.include_router(search.router)
app.include_router(auth.router)
app.include_router(stats.router)
app.include_router(admin_properties.router)
app.include_router(admin_leads.router)


@app.get("/health", response_model=HealthCheck, tags=["health"])
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint.

    Returns:
        Health status with database connectivity check
    """
    database_status = "connected" if database_health_check(db) else "unavailable"

    return HealthCheck(
        status="healthy" if database_status == "connected" else "degraded",
        version=__version__,
        database=database_status,
        timestamp=datetime.now(timezone.utc),
    )


@app.get("/", tags=["root"])
def root():
    """
    Root endpoint.

    Returns:
        API information
    """
    return {
        "name": "EstateHub API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "features": [
            "Property Search",
            "Lead Capture",
            "JWT Admin Authentication",
            "Rate Limiting",
        ],
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.estatehub.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
