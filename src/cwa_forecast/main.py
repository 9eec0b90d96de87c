"""Main FastAPI application for the CWA forecast proxy."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cwa_forecast.api.endpoints import router as weather_router
from cwa_forecast.config import CWA_API_KEY, DEBUG, ENVIRONMENT, HOST, PORT
from cwa_forecast.logging_config import configure_logging
from cwa_forecast.weather.cities import supported_slugs
from cwa_forecast.weather.errors import WeatherServiceError
from cwa_forecast.weather.models import ErrorResponse

# Configure logging
configure_logging(debug=DEBUG)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info(f"Starting CWA Forecast Proxy (environment: {ENVIRONMENT})")
    if not CWA_API_KEY:
        logger.warning("CWA_API_KEY is not set; weather requests will fail until it is configured")
    yield
    logger.info("Shutting down CWA Forecast Proxy")


def error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    """Render an ErrorResponse, omitting fields that are not set."""
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True)
    )


async def weather_error_handler(request: Request, exc: WeatherServiceError) -> JSONResponse:
    """Translate pipeline errors into their JSON error response."""
    return error_response(
        exc.status_code,
        ErrorResponse(error=exc.error, message=exc.message, details=exc.details)
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render routing errors (unknown path, wrong method) as JSON."""
    if exc.status_code == 404:
        logger.info(f"Route not found: {request.method} {request.url.path}")
        body = ErrorResponse(error="Route not found", message=request.url.path)
    else:
        body = ErrorResponse(error=str(exc.detail))
    return error_response(exc.status_code, body)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unexpected errors; the traceback only goes to the log."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return error_response(500, ErrorResponse(error="Internal server error", message=str(exc)))


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="CWA Forecast Proxy",
        description="Proxy for the Central Weather Administration 36-hour forecast by city",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(WeatherServiceError, weather_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Include API routers
    app.include_router(weather_router)

    @app.get("/", tags=["root"])
    async def root() -> dict:
        """Welcome endpoint listing the available endpoints.

        Returns:
            Basic service information
        """
        return {
            "message": "Welcome to the CWA weather forecast API",
            "endpoints": {
                "weather_by_city": "/api/weather/{city_slug}",
                "health": "/api/health"
            },
            "cities": supported_slugs()
        }

    return app


# Create app instance for uvicorn
app = create_app()


def main() -> None:
    """Main entry point for the application."""
    logger.info(f"Starting server on {HOST}:{PORT}")
    uvicorn.run(
        app,
        host=HOST,
        port=PORT,
        log_level="info" if not DEBUG else "debug"
    )


if __name__ == "__main__":
    main()
