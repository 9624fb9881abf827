"""Positive news ingestion pipeline."""

from .config import PipelineConfig
from .pipeline import NewsPipeline, PipelineResult

__all__ = ["NewsPipeline", "PipelineConfig", "PipelineResult"]
