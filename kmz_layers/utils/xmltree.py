"""Namespace-agnostic lookups over ElementTree nodes.

KML documents may or may not declare the ``http://www.opengis.net/kml/2.2``
namespace (or an older one), so every lookup matches on the local tag name
using ElementPath's ``{*}`` wildcard.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Iterator


def local_name(node: ET.Element) -> str:
    """Return the tag of ``node`` without its namespace."""

    tag = node.tag if isinstance(node.tag, str) else ""
    return tag.rsplit("}", 1)[-1]


def child(node: ET.Element, name: str) -> ET.Element | None:
    """Return the first direct child called ``name``."""

    return node.find(f"{{*}}{name}")


def first_descendant(node: ET.Element, name: str) -> ET.Element | None:
    """Return the first descendant called ``name`` in document order."""

    return node.find(f".//{{*}}{name}")


def descendants(node: ET.Element, name: str) -> Iterator[ET.Element]:
    """Yield every descendant called ``name`` depth-first."""

    return node.iterfind(f".//{{*}}{name}")


def child_chain(node: ET.Element, *names: str) -> ET.Element | None:
    """Follow direct children ``names`` in order; ``None`` if a link is missing."""

    current: ET.Element | None = node
    for name in names:
        if current is None:
            return None
        current = child(current, name)
    return current


def text_of(node: ET.Element | None) -> str:
    """Return the text content of ``node`` (including nested text), stripped."""

    if node is None:
        return ""
    return "".join(node.itertext()).strip()
