"""Catalog build orchestration.

This module provides:
- CatalogPipeline: enrich -> dedup -> sort -> stats over one batch
- PipelineRunResult / StageTiming: Run output and timings
"""

from .models import PipelineRunResult, StageTiming
from .runner import CatalogPipeline

__all__ = ["CatalogPipeline", "PipelineRunResult", "StageTiming"]
