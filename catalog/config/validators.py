"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List

LOW_THRESHOLD = 0.5


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    dedup = config_dict.get("dedup", {})
    if not isinstance(dedup, dict):
        return warning_messages

    # Low thresholds collapse unrelated postings together
    for key in ("company_threshold", "title_threshold"):
        value = dedup.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value < LOW_THRESHOLD:
            warning_messages.append(
                f"Low dedup.{key} ({value}) may merge unrelated job postings"
            )

    if dedup.get("merge_duplicates") is True:
        warning_messages.append(
            "dedup.merge_duplicates is enabled: survivors will absorb fields from removed duplicates"
        )

    priority = dedup.get("source_priority")
    if isinstance(priority, dict) and not priority:
        warning_messages.append(
            "dedup.source_priority is empty: survivors are chosen by completeness and recency only"
        )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
