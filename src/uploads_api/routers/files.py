import stat
from typing import List
from urllib.parse import quote

from fastapi import (
    APIRouter,
    Depends,
    Path,
)
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse

from uploads_api.config.settings import Settings
from uploads_api.dependencies import get_app_settings, get_upload_directory
from uploads_api.errors import NotFound
from uploads_api.schemas import (
    CleanupWarning,
    DeleteFileResponse,
    ErrorResponse,
    FileMetadata,
)
from uploads_api.storage.artifacts import UploadDirectory
from uploads_api.storage.deletion import delete_file as delete_upload
from uploads_api.storage.listing import list_files

router = APIRouter()

ERROR_RESPONSES = {
    404: {"model": ErrorResponse, "description": "File not found"},
    500: {"model": ErrorResponse, "description": "Storage or internal failure"},
}


def _content_disposition(filename: str) -> str:
    try:
        filename.encode("latin-1")
    except UnicodeEncodeError:
        ascii_name = quote(filename, safe="")
        return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{ascii_name}"
    quoted = filename.replace("\\", "\\\\").replace('"', '\\"')
    return f'attachment; filename="{quoted}"'


@router.get("/files", response_model=List[FileMetadata], responses={500: ERROR_RESPONSES[500]})
async def get_files(
    directory: UploadDirectory = Depends(get_upload_directory),
    settings: Settings = Depends(get_app_settings),
):
    """
    List uploaded files.

    Bookkeeping artifacts kept by the upload engine are not included. The
    order is the directory's enumeration order.
    """
    return await run_in_threadpool(list_files, directory, settings.api_prefix)


@router.get(
    "/files/{filename}",
    response_class=FileResponse,
    responses=ERROR_RESPONSES,
)
async def download_file(
    filename: str = Path(..., description="The name of the file to download, percent-encoded in the URL"),
    directory: UploadDirectory = Depends(get_upload_directory),
):
    """
    Download a file.

    Returns:
        FileResponse: The file content as an attachment
    """
    stat_result = await run_in_threadpool(directory.stat, filename)
    if stat_result is None or not stat.S_ISREG(stat_result.st_mode):
        raise NotFound("File not found")

    return FileResponse(
        directory.entry(filename),
        media_type="application/octet-stream",
        headers={"Content-Disposition": _content_disposition(filename)},
        stat_result=stat_result,
    )


@router.delete(
    "/files/{filename}",
    response_model=DeleteFileResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def delete_file(
    filename: str = Path(..., description="The name of the file to delete, percent-encoded in the URL"),
    directory: UploadDirectory = Depends(get_upload_directory),
) -> DeleteFileResponse:
    """
    Delete a file together with its upload bookkeeping artifacts.

    If the file was deleted but some bookkeeping artifact could not be
    removed, the response lists it under `warnings`.
    """
    result = await run_in_threadpool(delete_upload, directory, filename)
    return DeleteFileResponse(
        message="File deleted successfully",
        warnings=[
            CleanupWarning(artifact=warning.artifact, error=warning.error)
            for warning in result.warnings
        ] or None,
    )
