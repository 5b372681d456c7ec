"""List the user-visible files of the upload directory."""

import logging
import stat
from datetime import datetime, timezone
from typing import List
from urllib.parse import quote

from uploads_api.errors import StorageUnavailable
from uploads_api.schemas import FileMetadata
from uploads_api.storage.artifacts import ArtifactKind, UploadDirectory, classify
from uploads_api.utils.decorators import log_execution_time

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves unescaped besides alphanumerics and "-_.".
_URL_SAFE_CHARS = "!~*'()"


def download_url(name: str, api_prefix: str = "/api") -> str:
    """Download reference of a file, stable for a given name."""
    return f"{api_prefix}/files/{quote(name, safe=_URL_SAFE_CHARS)}"


@log_execution_time
def list_files(directory: UploadDirectory, api_prefix: str = "/api") -> List[FileMetadata]:
    """
    Enumerate logical files in directory order.

    Bookkeeping artifacts are left out. An entry removed between the scan and
    its stat is skipped; an unreadable directory fails the whole listing.
    """
    try:
        names = list(directory.names())
    except OSError as e:
        logger.error("Cannot read upload directory %s: %s", directory.path, e)
        raise StorageUnavailable(f"Upload directory is unavailable: {e.strerror or e}") from e

    files: List[FileMetadata] = []
    for name in names:
        if classify(directory, name) is not ArtifactKind.LOGICAL_FILE:
            continue

        result = directory.stat(name)
        if result is None or not stat.S_ISREG(result.st_mode):
            logger.debug("Entry %s disappeared during listing", name)
            continue

        files.append(
            FileMetadata(
                name=name,
                size=result.st_size,
                uploaded_at=datetime.fromtimestamp(result.st_mtime, tz=timezone.utc),
                url=download_url(name, api_prefix),
            )
        )
    return files
