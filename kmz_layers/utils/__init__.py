"""Utility helpers for the KMZ Layers project."""

from .formatting import layer_name_from_filename, split_on_last_occurrence
from .io import decode_text, ensure_directory, safe_filename

__all__ = [
    "layer_name_from_filename",
    "split_on_last_occurrence",
    "decode_text",
    "ensure_directory",
    "safe_filename",
]
