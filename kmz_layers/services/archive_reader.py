"""Extraction of the KML document from KMZ containers."""

from __future__ import annotations

import io
import logging
import zlib
from pathlib import Path
from zipfile import BadZipFile, ZipFile, ZipInfo

from ..core import CorruptArchive, IoError, MissingKmlEntry
from ..utils import decode_text

logger = logging.getLogger(__name__)

DEFAULT_ENTRY = "doc.kml"


def _is_plain_kml(filename: str) -> bool:
    return filename.lower().endswith(".kml")


class ArchiveReader:
    """Turn raw source bytes into KML text.

    ``.kml`` files are decoded directly; anything else is opened as a zip
    container and the main document is pulled out of it.
    """

    def read(self, data: bytes, filename: str) -> str:
        if _is_plain_kml(filename):
            return decode_text(data)

        try:
            with ZipFile(io.BytesIO(data)) as archive:
                entry = self._select_entry(archive.infolist(), filename)
                logger.info("Reading %s from %s", entry.filename, filename)
                raw = archive.read(entry)
        except (BadZipFile, EOFError, ValueError, NotImplementedError, zlib.error) as exc:
            raise CorruptArchive(
                f"Unable to open KMZ archive: {filename}",
                details={"filename": filename, "reason": str(exc)},
            ) from exc
        return decode_text(raw)

    def read_path(self, path: Path | str) -> str:
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise IoError(
                f"Unable to read source file: {path}",
                details={"path": str(path), "reason": str(exc)},
            ) from exc
        return self.read(data, path.name)

    @staticmethod
    def _select_entry(entries: list[ZipInfo], filename: str) -> ZipInfo:
        files = [entry for entry in entries if not entry.is_dir()]
        for entry in files:
            if entry.filename == DEFAULT_ENTRY:
                return entry
        for entry in files:
            if entry.filename.lower().endswith(".kml"):
                return entry
        raise MissingKmlEntry(
            "KMZ archive does not contain a KML document",
            details={"filename": filename, "entries": [entry.filename for entry in entries]},
        )
