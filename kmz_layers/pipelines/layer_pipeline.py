"""Ingestion pipeline orchestrator."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from ..config import APP_CONFIG
from ..core import FramingRequest, IngestionResult, IoError, Layer, ProcessingError
from ..services import ArchiveReader, BoundsCalculator, KmlParser, LayerRegistry
from ..utils import layer_name_from_filename

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LayerPipeline:
    """Reads sources, parses them into layers and frames what is visible."""

    reader: ArchiveReader
    parser: KmlParser
    registry: LayerRegistry
    bounds: BoundsCalculator
    max_workers: int = APP_CONFIG.max_workers

    def ingest(
        self,
        data: bytes,
        filename: str,
        *,
        source: str | None = None,
        name: str | None = None,
        visible: bool = True,
    ) -> IngestionResult:
        """Create a layer for ``filename`` and fill it from ``data``.

        A failure is reported on the result; the layer stays registered with
        empty feature sets.
        """

        layer = self.registry.create_layer(
            name or layer_name_from_filename(filename),
            source or filename,
            visible=visible,
        )
        return self.populate(layer, data, filename)

    def populate(self, layer: Layer, data: bytes, filename: str) -> IngestionResult:
        try:
            text = self.reader.read(data, filename)
            self.parser.parse(text, layer)
        except ProcessingError as exc:
            logger.warning("Failed to ingest %s into layer %s: %s", filename, layer.name, exc)
            return IngestionResult(layer=layer, error=exc)
        return IngestionResult(layer=layer)

    def ingest_path(self, path: Path | str, *, visible: bool = True) -> IngestionResult:
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            layer = self.registry.create_layer(
                layer_name_from_filename(path.name), str(path), visible=visible
            )
            error = IoError(
                f"Unable to read source file: {path}",
                details={"path": str(path), "reason": str(exc)},
            )
            logger.warning("Failed to ingest %s: %s", path, error)
            return IngestionResult(layer=layer, error=error)
        return self.ingest(data, path.name, source=str(path), visible=visible)

    def ingest_many(
        self, sources: Iterable[tuple[bytes, str]], *, visible: bool = True
    ) -> list[IngestionResult]:
        """Ingest several sources concurrently; results arrive in completion order."""

        results: list[IngestionResult] = []
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [
                executor.submit(self.ingest, data, filename, visible=visible)
                for data, filename in sources
            ]
            for future in as_completed(futures):
                results.append(future.result())
        return results

    def load_bundled(self, paths: Iterable[Path | str]) -> list[IngestionResult]:
        """Load bundled layer files hidden, then show them once all are parsed."""

        paths = list(paths)
        results: list[IngestionResult] = []
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [executor.submit(self.ingest_path, path, visible=False) for path in paths]
            for future in as_completed(futures):
                results.append(future.result())

        self.registry.set_visible(result.layer for result in results)
        logger.info(
            "Loaded %d bundled layers (%d failed)",
            len(results),
            sum(1 for result in results if not result.ok),
        )
        return results

    def frame(self) -> FramingRequest:
        """Framing request for every visible feature; raises ``NoVisibleFeatures``."""

        return self.bounds.frame(self.registry.visible_coordinates())

    @classmethod
    def default(cls, registry: LayerRegistry | None = None) -> "LayerPipeline":
        registry = registry or LayerRegistry()
        return cls(
            reader=ArchiveReader(),
            parser=KmlParser(color_allocator=registry.color_allocator),
            registry=registry,
            bounds=BoundsCalculator(),
        )
