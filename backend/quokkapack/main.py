"""
FastAPI entrypoint for QuokkaPack backend application.
"""
import logging
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from quokkapack.core.config import settings
from quokkapack.core.exceptions import StoreUnavailable
from quokkapack.core.logging import configure_logging
from quokkapack.core.utils import format_error
from quokkapack.api.router import api_router

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="QuokkaPack API",
    description="Backend API for trip packing lists",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
    """Transient database failures are retryable by the client."""
    logger.error(f"Store unavailable while handling {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=format_error("Service temporarily unavailable, please retry"),
        headers={"Retry-After": "1"},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception while handling {request.method} {request.url.path}")
    details = str(exc) if settings.DEBUG else None
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=format_error("An internal server error occurred", details),
    )


# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "QuokkaPack API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
