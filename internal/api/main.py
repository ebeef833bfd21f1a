"""
FastAPI Service - Main entry point for the AI Transcripts API.
Transcribes uploaded media or YouTube audio through OpenAI or ElevenLabs.
"""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request  # type: ignore
from fastapi.exceptions import RequestValidationError  # type: ignore
from fastapi.staticfiles import StaticFiles  # type: ignore
from starlette.exceptions import HTTPException as StarletteHTTPException  # type: ignore

from core.config import get_settings
from core.dependencies import provision_temp_dir
from core.logger import logger
from core.messages import ErrorMessages
from internal.api.routes.health_routes import router as health_router
from internal.api.routes.transcribe_routes import router as transcribe_router
from internal.api.utils import json_error_response, normalized_error_response
from services.error_normalizer import normalize_error
from services.provider_gateway import shutdown_provider_gateway


HTTP_ERROR_MESSAGES = {
    404: ErrorMessages.NOT_FOUND,
    405: ErrorMessages.METHOD_NOT_ALLOWED,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan - startup and shutdown.

    Provisions the temp directory before the first upload arrives.
    """
    settings = get_settings()
    logger.info(
        f"========== Starting {settings.app_name} v{settings.app_version} API service =========="
    )
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"API: {settings.api_host}:{settings.api_port}")

    provision_temp_dir()

    logger.info(
        f"========== {settings.app_name} API service started successfully =========="
    )

    yield

    logger.info("========== Shutting down API service ==========")

    await shutdown_provider_gateway()

    logger.info("========== API service stopped successfully ==========")


def mount_static(app: FastAPI, static_dir: str) -> None:
    """Serve the browser UI from `static_dir` at "/" when the directory exists."""
    directory = Path(static_dir)
    if not directory.is_dir():
        logger.info(f"Static directory not found, UI disabled: {directory}")
        return

    app.mount("/", StaticFiles(directory=str(directory), html=True), name="static")
    logger.info(f"Serving static files from {directory}")


def create_app() -> FastAPI:
    """
    Factory function to create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    description = """
## AI Transcripts API

Turn an uploaded audio/video file or a YouTube URL into text with
OpenAI or ElevenLabs, using your own API key.

### Processing Flow

1. **Request** - POST multipart form to `/api/transcribe`
2. **Acquire** - Uploaded file is stored, or YouTube audio is downloaded
3. **Transcribe** - The selected provider processes the audio
4. **Response** - Transcript returned immediately; temp files are deleted
    """

    tags_metadata = [
        {
            "name": "Transcription",
            "description": "Synchronous transcription of uploads and YouTube audio.",
        },
        {
            "name": "Health",
            "description": "Health check endpoint for monitoring API status.",
        },
    ]

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=description,
        lifespan=lifespan,
        openapi_tags=tags_metadata,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.include_router(transcribe_router)
    app.include_router(health_router)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        """Handle malformed requests with the {error} format."""
        messages = []
        for e in exc.errors():
            field = e["loc"][-1] if e["loc"] else "request"
            messages.append(f"{field}: {e['msg']}")

        error_msg = "; ".join(messages) or "Invalid request."
        logger.error(f"Validation error: {error_msg}")
        return json_error_response(error_msg, status_code=400)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions (404, 405, ...) with the {error} format."""
        message = HTTP_ERROR_MESSAGES.get(exc.status_code, str(exc.detail))
        logger.warning(f"HTTP error {exc.status_code}: {exc.detail}")
        response = json_error_response(message, status_code=exc.status_code)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle all other exceptions through the error normalizer."""
        logger.exception("Unhandled exception:")
        return normalized_error_response(normalize_error(exc))

    # Mounted last so API routes take precedence over "/"
    mount_static(app, settings.static_dir)

    return app


# Create application instance
try:
    app = create_app()
except Exception as e:
    logger.error(f"Failed to create application instance: {e}")
    logger.exception("Startup error details:")
    raise


# Run with: uvicorn internal.api.main:app --host 0.0.0.0 --port 3000
if __name__ == "__main__":
    import uvicorn  # type: ignore

    settings = get_settings()
    logger.info(f"AI Transcripts running on http://localhost:{settings.api_port}")

    uvicorn.run(
        "internal.api.main:app" if settings.api_reload else app,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level="info" if settings.debug else "warning",
    )
