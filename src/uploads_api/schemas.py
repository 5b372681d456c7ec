####################################
# --- Request/response schemas --- #
####################################

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)


class FileMetadata(BaseModel):
    """Metadata of an uploaded file."""
    name: str = Field(
        description="The name of the file in the upload directory.",
        json_schema_extra={"example": "video.mp4"},
    )
    size: int = Field(description="The size of the file in bytes.")
    uploaded_at: datetime = Field(
        alias="uploadedAt",
        description="The last modified date of the file.",
    )
    url: str = Field(
        description="Download URL of the file.",
        json_schema_extra={"example": "/api/files/video.mp4"},
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "name": "video.mp4",
                "size": 1048576,
                "uploadedAt": "2024-01-01T00:00:00Z",
                "url": "/api/files/video.mp4",
            }
        }
    )


class CleanupWarning(BaseModel):
    """A bookkeeping artifact left behind by a delete."""
    artifact: str
    error: str


class DeleteFileResponse(BaseModel):
    """Response model for `DELETE /api/files/:filename`."""
    message: str
    warnings: Optional[List[CleanupWarning]] = Field(
        None,
        description="Present only when some bookkeeping artifact could not be removed.",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"message": "File deleted successfully"}
        }
    )


class ErrorResponse(BaseModel):
    """Error body shared by all `/api` endpoints."""
    error: str


class HealthResponse(BaseModel):
    status: str
    components: Dict[str, str]
    ready: bool
