"""Custom exception hierarchy for the KMZ Layers domain."""

from __future__ import annotations


class ProcessingError(RuntimeError):
    """Raised when ingesting or framing layer data fails."""

    code = "processing_error"

    def __init__(self, message: str, *, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}

    def as_dict(self) -> dict:
        """Return a serializable representation."""
        payload = {"error": self.code, "message": str(self)}
        if self.details:
            payload["details"] = self.details
        return payload


class IoError(ProcessingError):
    """The source file could not be read."""

    code = "io_error"


class CorruptArchive(ProcessingError):
    """The KMZ container could not be decoded as a zip archive."""

    code = "corrupt_archive"


class MissingKmlEntry(ProcessingError):
    """The KMZ container holds no ``.kml`` member."""

    code = "missing_kml_entry"


class MalformedXml(ProcessingError):
    """The KML document is not well-formed XML."""

    code = "malformed_xml"


class NoVisibleFeatures(ProcessingError):
    """There is nothing visible to frame on the map."""

    code = "no_visible_features"
