"""Processing pipelines."""

from .layer_pipeline import LayerPipeline

__all__ = ["LayerPipeline"]
