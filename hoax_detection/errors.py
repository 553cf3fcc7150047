"""Error hierarchy for the hoax detection pipeline.

Every failure raised here comes from bad input or bad configuration, never
from a transient fault, so callers report the message and stop.
"""
from __future__ import annotations

import textwrap
from typing import Optional


class HoaxDetectionError(RuntimeError):
    """Base error for all pipeline failures."""

    def __init__(self, message: str, *, hint: Optional[str] = None) -> None:
        final_message = message
        if hint:
            final_message = f"{message}\n{self._format_hint(hint)}"
        super().__init__(final_message)
        self.message = message
        self.hint = hint

    @staticmethod
    def _format_hint(hint: str) -> str:
        return textwrap.indent(f"Hint: {hint}", prefix="  ")


class DataSourceError(HoaxDetectionError):
    """Raised when a dataset artifact is missing or cannot be read."""


class InsufficientClassDiversityError(HoaxDetectionError):
    """Raised when a dataset holds records of only one label."""

    def __init__(self, valid: int, hoax: int, *, subset: str = "dataset") -> None:
        super().__init__(
            f"The {subset} contains only one label (valid={valid}, hoax={hoax}); "
            "a binary classifier needs both.",
            hint="Check the label column of the raw dataset.",
        )
        self.valid = valid
        self.hoax = hoax


class ModelArtifactError(HoaxDetectionError):
    """Raised when a saved model cannot be loaded."""


class ConfigurationError(HoaxDetectionError):
    """Raised when settings taken from the environment are invalid."""
