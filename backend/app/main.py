"""Photo Upload Backend Application.

This is the main entry point for the photo upload service. Users pick
photos in the browser, preview them locally and upload them as one batch;
the service stores every photo in an object store and returns public URLs.

Modules:
    - uploads: POST /api/upload batch handler and local file serving
    - storage: Object store back-ends (S3, local filesystem, in-memory)
    - client: Client-side staging, batch submit and uploaded gallery
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import AppConfig, get_config
from app.uploads.router import build_upload_router
from app.uploads.service import get_upload_service

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# Silence verbose third-party loggers.
# botocore.auth logs the full SigV4 canonical request, including
# x-amz-security-token, which leaks credentials into the console.
for _noisy in (
    "botocore",
    "boto3",
    "s3transfer",
    "urllib3",
    "urllib3.connectionpool",
    "httpx",
    "httpcore",
    "python_multipart",
    "multipart",
):
    logging.getLogger(_noisy).setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown events."""
    # Startup
    config = get_config()

    # Apply configured log level to root logger so that
    # `logging.level: "debug"` in photoupload.settings.yaml activates DEBUG output.
    configured_level = getattr(logging, config.logging.level.upper(), None)
    if configured_level is not None:
        logging.getLogger().setLevel(configured_level)
        logger.info("Root logger level set to %s", config.logging.level.upper())

    service = get_upload_service()
    logger.info(
        "Upload service ready: backend=%s. Server running on http://%s:%s",
        service.store.name,
        config.server.host,
        config.server.port,
    )

    yield  # Application runs here

    # Shutdown
    logger.info("Application shutdown complete")


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Settings for CORS and the upload route.  Defaults to the
            process-wide configuration.
    """
    config = config or get_config()

    application = FastAPI(
        title="Photo Upload API",
        description="Batch photo upload to object storage with public URLs",
        version="0.1.0",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register all routers
    application.include_router(
        build_upload_router(
            upload_path=config.uploads.path,
            field_name=config.uploads.field_name,
        )
    )

    @application.get("/health")
    async def health() -> dict:
        """Health check endpoint.

        Returns:
            dict: Status object indicating the server is running.
        """
        return {"status": "ok"}

    return application


# Module-level app for `uvicorn app.main:app`; settings are read on import.
app = create_app()
