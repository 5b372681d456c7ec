"""
Upload directory handle and artifact classification.

The upload engine stores each upload as a primary file plus bookkeeping
entries named `<primary><suffix>`:

- the progress artifact (`.info` by default) lives as long as the upload;
- the sidecar metadata artifact (`.json` by default) only counts as
  bookkeeping while its primary file exists. Without a primary file it is a
  user file in its own right, e.g. an uploaded `report.json`.

Classification is recomputed from the directory on every call.
"""

import os
import stat
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional


class ArtifactKind(str, Enum):
    """Kinds of entries found in the upload directory."""
    LOGICAL_FILE = "logical_file"
    PROGRESS = "progress"
    SIDECAR = "sidecar"


@dataclass(frozen=True)
class UploadDirectory:
    """The shared directory the upload engine writes into."""
    path: Path
    progress_suffix: str = ".info"
    sidecar_suffix: str = ".json"

    @classmethod
    def from_settings(cls, settings) -> "UploadDirectory":
        return cls(
            path=Path(settings.upload_dir).resolve(),
            progress_suffix=settings.progress_suffix,
            sidecar_suffix=settings.sidecar_suffix,
        )

    def ensure_exists(self) -> None:
        self.path.mkdir(parents=True, exist_ok=True)

    def entry(self, name: str) -> Path:
        return self.path / name

    def names(self) -> Iterator[str]:
        """Yield entry names in directory enumeration order; raises OSError if unreadable."""
        with os.scandir(self.path) as entries:
            for entry in entries:
                yield entry.name

    def stat(self, name: str) -> Optional[os.stat_result]:
        """Stat an entry, following symlinks. None when it does not exist."""
        if not name:
            return None
        try:
            return os.stat(self.entry(name))
        except (FileNotFoundError, NotADirectoryError):
            return None

    def is_regular_file(self, name: str) -> bool:
        result = self.stat(name)
        return result is not None and stat.S_ISREG(result.st_mode)

    def progress_artifact_name(self, name: str) -> str:
        return f"{name}{self.progress_suffix}"

    def sidecar_artifact_name(self, name: str) -> str:
        return f"{name}{self.sidecar_suffix}"


def classify(directory: UploadDirectory, name: str) -> Optional[ArtifactKind]:
    """
    Classify a directory entry.

    Returns None for entries that take no part in listings: directories,
    special files and entries that vanished.
    """
    if name.endswith(directory.progress_suffix):
        return ArtifactKind.PROGRESS

    if name.endswith(directory.sidecar_suffix):
        primary = name[: -len(directory.sidecar_suffix)]
        if directory.is_regular_file(primary):
            return ArtifactKind.SIDECAR

    if directory.is_regular_file(name):
        return ArtifactKind.LOGICAL_FILE
    return None
