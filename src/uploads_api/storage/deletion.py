"""Delete a logical file together with its bookkeeping artifacts."""

import logging
import os
from dataclasses import dataclass, field
from typing import List

from uploads_api.errors import InternalError, NotFound, PartialCleanupWarning
from uploads_api.storage.artifacts import UploadDirectory

logger = logging.getLogger(__name__)


@dataclass
class DeletionResult:
    name: str
    removed: List[str] = field(default_factory=list)
    warnings: List[PartialCleanupWarning] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not self.warnings


def delete_file(directory: UploadDirectory, name: str) -> DeletionResult:
    """
    Remove the primary file `name`, then its progress and sidecar artifacts.

    The primary deletion must succeed. Auxiliary deletions are best effort:
    a missing artifact is ignored and any other failure is reported as a
    `PartialCleanupWarning` on the result. The three deletions are not atomic.

    Raises:
        NotFound: if `name` is not a regular file in the directory.
    """
    if not directory.is_regular_file(name):
        raise NotFound("File not found")

    try:
        os.unlink(directory.entry(name))
    except FileNotFoundError as e:
        # removed concurrently since the check above
        raise NotFound("File not found") from e
    except OSError as e:
        raise InternalError(f"Could not delete {name}: {e.strerror or e}") from e

    result = DeletionResult(name=name, removed=[name])
    logger.info("Deleted %s from %s", name, directory.path)

    for artifact in (directory.progress_artifact_name(name), directory.sidecar_artifact_name(name)):
        try:
            os.unlink(directory.entry(artifact))
        except FileNotFoundError:
            continue
        except OSError as e:
            logger.warning("Could not remove bookkeeping artifact %s: %s", artifact, e)
            result.warnings.append(PartialCleanupWarning(artifact=artifact, error=e.strerror or str(e)))
            continue
        result.removed.append(artifact)
        logger.info("Deleted bookkeeping artifact %s", artifact)

    return result
