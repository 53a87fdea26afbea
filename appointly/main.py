"""
FastAPI application for the booking engine

Availability lookups, guarded bookings and business configuration
"""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from appointly.api.v1.router import api_v1_router
from appointly.config.settings import get_settings
from appointly.core.exceptions import DomainException
from appointly.core.middleware import correlation_id_middleware, request_logging_middleware
from appointly.core.monitoring import health_router
from appointly.utils.my_logging import setup_logging

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    setup_logging()
    logger.info(f"{settings.APP_NAME} starting up (slot step {settings.SLOT_STEP_MINUTES} min)")
    yield
    logger.info(f"{settings.APP_NAME} shutting down")


async def domain_exception_handler(request: Request, exc: DomainException):
    http_exc = exc.to_http_exception()
    if http_exc.status_code >= 500:
        logger.error(f"{exc.code}: {exc.message}", exc_info=exc)
    return JSONResponse(status_code=http_exc.status_code, content={"detail": http_exc.detail})


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title=settings.APP_NAME,
        description="Multi-tenant appointment booking with availability and conflict prevention",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "PUT"],
        allow_headers=["*"],
    )

    app.middleware("http")(request_logging_middleware)
    app.middleware("http")(correlation_id_middleware)

    app.add_exception_handler(DomainException, domain_exception_handler)

    app.include_router(health_router, prefix="/health", tags=["monitoring"])
    app.include_router(api_v1_router, prefix="/api/v1")

    @app.get("/")
    async def root():
        return {
            "service": settings.APP_NAME,
            "version": "0.1.0",
            "status": "running",
            "docs": "/docs" if settings.DEBUG else "disabled"
        }

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "appointly.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info"
    )
