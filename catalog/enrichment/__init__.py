"""Record enrichment layer.

This module provides:
- RecordEnricher: Cleans text and fills missing structured fields
- EnrichmentResult / EnrichmentSummary: Batch output and counters
"""

from .models import EnrichmentResult, EnrichmentSummary
from .service import RecordEnricher

__all__ = ["RecordEnricher", "EnrichmentResult", "EnrichmentSummary"]
