import os

from fastapi import APIRouter, Request

from uploads_api.schemas import HealthResponse

router = APIRouter()

@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """
    Health check endpoint for monitoring API status and component readiness.

    Reports whether the upload directory is usable and an upload engine is configured.
    """
    directory = request.app.state.upload_directory

    health_status = {
        "status": "ok",
        "components": {
            "api": "ready",
            "storage": "ready",
            "upload_engine": "ready",
        },
        "ready": False
    }

    if not directory.path.is_dir():
        health_status["components"]["storage"] = "error: upload directory missing"
        health_status["status"] = "degraded"
    elif not os.access(directory.path, os.R_OK | os.W_OK | os.X_OK):
        health_status["components"]["storage"] = "error: upload directory not accessible"
        health_status["status"] = "degraded"

    if request.app.state.upload_engine is None:
        health_status["components"]["upload_engine"] = "not configured"
        health_status["status"] = "degraded"

    health_status["ready"] = all(
        state == "ready" for state in health_status["components"].values()
    )

    return health_status
