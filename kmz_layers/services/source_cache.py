"""Cache copies of ingested source files."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from pathlib import Path

from ..config import STORAGE_PATHS
from ..core import IoError
from ..utils.io import ensure_directory, safe_filename


@dataclass(slots=True)
class SourceCache:
    """Keep the original bytes of every ingested file on disk."""

    root: Path = field(default_factory=lambda: STORAGE_PATHS.uploads)

    def store(self, data: bytes, filename: str) -> Path:
        """Write ``data`` to a fresh directory and return the cached path."""

        name = safe_filename(Path(filename).name) or "source.kmz"
        try:
            directory = ensure_directory(Path(self.root) / uuid.uuid4().hex)
            target = directory / name
            target.write_bytes(data)
        except OSError as exc:
            raise IoError(
                f"Unable to cache source file: {filename}",
                details={"filename": filename, "reason": str(exc)},
            ) from exc
        return target
