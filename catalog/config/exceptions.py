"""Exceptions raised while loading catalog configuration."""

from pathlib import Path
from typing import Iterable, Optional, Tuple


class ConfigurationError(Exception):
    """
    Raised when a catalog configuration cannot be loaded or validated.

    Carries every validation problem found in one pass, so a bad YAML file
    or environment is reported in full instead of one field at a time.

    Attributes:
        message: Primary error message
        errors: Individual problems, one per offending field or variable
        suggestions: Hints for fixing the problems
        source: Configuration file the problems were found in, if any
    """

    def __init__(
        self,
        message: str,
        errors: Optional[Iterable[str]] = None,
        suggestions: Optional[Iterable[str]] = None,
        source: Optional[Path] = None,
    ):
        self.message = message
        self.errors: Tuple[str, ...] = tuple(errors or ())
        self.suggestions: Tuple[str, ...] = tuple(suggestions or ())
        self.source = source
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        header = self.message
        if self.source is not None:
            header = f"{header} ({self.source})"
        lines = [header]

        if self.errors:
            lines.append("\nValidation Errors:")
            lines.extend(f"  {i}. {error}" for i, error in enumerate(self.errors, 1))

        if self.suggestions:
            lines.append("\nSuggestions:")
            lines.extend(f"  - {suggestion}" for suggestion in self.suggestions)

        return "\n".join(lines)
