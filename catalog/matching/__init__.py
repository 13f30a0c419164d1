"""Similarity scoring for duplicate detection.

This module provides:
- similarity_score: Symmetric [0, 1] similarity between normalized keys
"""

from .similarity import CONTAINMENT_SCORE, similarity_score

__all__ = ["similarity_score", "CONTAINMENT_SCORE"]
