"""Formatting helpers."""

from __future__ import annotations

from pathlib import PurePath


def split_on_last_occurrence(value: str, delimiter: str) -> str:
    """Return ``value`` up to the last ``delimiter``, or unchanged when absent."""

    if delimiter not in value:
        return value
    return value[: value.rindex(delimiter)]


def layer_name_from_filename(filename: str) -> str:
    """Derive a display name for a layer from an uploaded file name.

    Exports are commonly named ``<title>_<suffix>.kmz``; the trailing suffix is
    dropped and the remaining underscores become spaces.
    """

    stem = PurePath(filename).stem or filename
    name = split_on_last_occurrence(stem, "_").replace("_", " ").strip()
    return name or stem
