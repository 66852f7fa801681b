"""
Auth Service - Main Application
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config import Settings, settings
from .dependencies import init_dependencies, close_dependencies
from .errors import AuthError, MissingField, ServerError
from .routes import auth_router, pages_router

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


async def auth_error_handler(request: Request, exc: AuthError):
    """Designed failures: kind + message, nothing internal."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed or non-JSON bodies are reported like missing fields."""
    logger.debug(f"Rejected request body on {request.url.path}: {exc.errors()}")
    error = MissingField("Request body must be a JSON object with string fields")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unexpected error on {request.method} {request.url.path}")
    error = ServerError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the application. Each app owns its own user store."""
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan - startup and shutdown."""
        logger.info("Starting Auth Service...")
        init_dependencies(app, app_settings)
        logger.info(
            f"Application ready (environment={app_settings.environment}, "
            f"secure_cookies={app_settings.is_production})"
        )
        yield
        logger.info("Shutting down...")
        await close_dependencies(app)

    app = FastAPI(
        title="Auth Service",
        description="Signup, login and cookie-based sessions",
        version="1.0.0",
        lifespan=lifespan
    )

    app.add_exception_handler(AuthError, auth_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    # Include routers
    app.include_router(auth_router)
    app.include_router(pages_router)

    @app.get("/health")
    async def health():
        """Health check endpoint (no auth required)."""
        return {"status": "ok"}

    return app


configure_logging(settings.log_level)

# Create app
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "authservice.main:app",
        host=settings.host,
        port=settings.port,
    )
