"""Job catalog: record linkage and enrichment for aggregated job postings."""

__version__ = "0.1.0"
