from fastapi import Request

from uploads_api.config.settings import Settings
from uploads_api.storage.artifacts import UploadDirectory


def get_upload_directory(request: Request) -> UploadDirectory:
    """Upload directory dependency."""
    return request.app.state.upload_directory


def get_app_settings(request: Request) -> Settings:
    """Settings the app was created with."""
    return request.app.state.settings
