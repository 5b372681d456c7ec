from textwrap import dedent
import logging
import pydantic
from fastapi import FastAPI
from fastapi.routing import APIRoute
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from uploads_api.adapters.upload_engine import load_upload_engine
from uploads_api.errors import (
    UploadsApiError,
    handle_broad_exceptions,
    handle_pydantic_validation_errors,
    handle_uploads_api_errors,
)
from uploads_api.gateway import UploadGateway
from uploads_api.routers.files import router as files_router
from uploads_api.routers.health import router as health_router
from uploads_api.config.settings import Settings
from uploads_api.storage.artifacts import UploadDirectory

# Set up logging
logger = logging.getLogger(__name__)

# Headers of the resumable upload protocol that browsers must be allowed to read.
UPLOAD_PROTOCOL_HEADERS = [
    "Location",
    "Tus-Resumable",
    "Tus-Version",
    "Tus-Extension",
    "Tus-Max-Size",
    "Upload-Offset",
    "Upload-Length",
    "Upload-Metadata",
    "Upload-Expires",
]


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create a FastAPI application."""
    settings = settings or Settings()

    app = FastAPI(
        title="Uploads API",
        summary="Resumable uploads and file management",
        version="v1",
        description=dedent(
            """\
        Upload large files in resumable chunks, then list, download and delete them.

        | Endpoint | Notes |
        | --- | --- |
        | `/files` | Resumable upload protocol endpoint, served by the upload engine |
        | `/api/files` | JSON file management API |
        """
        ),
        docs_url="/docs",
        generate_unique_id_function=custom_generate_unique_id,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials="*" not in settings.cors_allow_origins,
        allow_methods=["*"],  # Allow all methods
        allow_headers=["*"],  # Allow all headers
        expose_headers=UPLOAD_PROTOCOL_HEADERS,
    )

    upload_directory = UploadDirectory.from_settings(settings)
    upload_directory.ensure_exists()
    upload_engine = load_upload_engine(settings, upload_directory)

    app.state.settings = settings
    app.state.upload_directory = upload_directory
    app.state.upload_engine = upload_engine

    # Only the JSON API gets parsed bodies; the upload path streams raw requests to the engine.
    app.include_router(files_router, prefix=settings.api_prefix, tags=["files"])
    app.include_router(health_router, tags=["health"])

    gateway = UploadGateway(upload_engine)
    app.add_route(settings.upload_path, gateway, include_in_schema=False)
    app.add_route(f"{settings.upload_path}/{{upload_path:path}}", gateway, include_in_schema=False)

    app.add_exception_handler(UploadsApiError, handle_uploads_api_errors)
    app.add_exception_handler(
        exc_class_or_status_code=pydantic.ValidationError,
        handler=handle_pydantic_validation_errors,
    )
    app.middleware("http")(handle_broad_exceptions)

    if settings.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")

    logger.info(f"Upload endpoint: {settings.upload_path}")
    logger.info(f"Files directory: {upload_directory.path}")

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn
    from uploads_api.config.settings import get_settings

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    app = create_app(settings)
    logger.info(f"Server is running on http://localhost:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)
