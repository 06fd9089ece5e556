"""
Movie Catalog - FastAPI Application

Main entry point for the API server.
Environment-agnostic: configuration reads from settings (.env file).
"""

import logging
from typing import Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from movie_catalog.exceptions import CatalogError, ErrorKind
from movie_catalog.logging_setup import setup_logging
from movie_catalog.settings import get_settings
from api.dependencies import lifespan_handler
from api.routers import movies, health
from api.schemas.movies import ErrorResponse

# Get settings
cfg = get_settings()

# Configure logging
setup_logging(cfg.log_level)
logger = logging.getLogger(__name__)

ERROR_STATUS: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.INVALID_CREDENTIAL: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.DUPLICATE: 409,
    ErrorKind.STORAGE_FAILURE: 500,
    ErrorKind.EXTERNAL_FAILURE: 502,
    ErrorKind.EXTERNAL_TIMEOUT: 504,
}


def _error_response(status_code: int, error: str, message: str) -> JSONResponse:
    body = ErrorResponse(status_code=status_code, error=error, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    status_code = ERROR_STATUS.get(exc.kind, 500)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return _error_response(status_code, exc.kind.value, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": ".".join(str(part) for part in err["loc"][1:]), "message": err["msg"]}
        for err in exc.errors()
    ]
    logger.warning(f"{request.method} {request.url.path} validation failed: {errors}")
    return JSONResponse(
        status_code=400,
        content={
            "statusCode": 400,
            "error": ErrorKind.VALIDATION.value,
            "message": "Validation failed",
            "errors": errors,
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return _error_response(500, "internal_error", "Internal server error")


def create_app() -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Configuration is loaded from settings (reads from .env file).

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Movie Catalog API",
        description="Search movies via OMDb and manage a list of favorites",
        version="0.1.0",
        lifespan=lifespan_handler  # Handles startup/shutdown
    )

    # CORS configuration from settings
    logger.info(f"Configuring CORS with origins: {cfg.cors_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Mount routers
    app.include_router(movies.router, prefix="/api/v1/movies", tags=["movies"])
    app.include_router(health.router, prefix="/api/v1/health", tags=["health"])

    logger.info(f"FastAPI application created (env={cfg.env})")

    return app


# Create app instance
app = create_app()


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint - API info"""
    return {
        "name": "Movie Catalog API",
        "version": "0.1.0",
        "environment": cfg.env,
        "status": "running",
        "docs": "/docs",
        "health": "/api/v1/health/ready"
    }


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting API server on {cfg.api_host}:{cfg.api_port}")
    logger.info(f"Environment: {cfg.env}")
    logger.info(f"Reload: {cfg.api_reload}")

    uvicorn.run(
        "api.main:app",
        host=cfg.api_host,
        port=cfg.api_port,
        reload=cfg.api_reload,
        workers=cfg.api_workers if not cfg.api_reload else 1,  # Workers only work without reload
        log_level=cfg.log_level.lower()
    )
