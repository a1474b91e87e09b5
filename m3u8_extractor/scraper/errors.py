"""Exceptions raised by the extraction pipeline."""

from __future__ import annotations


class ExtractionError(Exception):
    """A browser launch, navigation or in-page evaluation step failed.

    ``stage`` names the step (``launch``, ``navigation`` or ``evaluation``);
    the message carries the underlying error text for diagnostics.
    """

    def __init__(self, stage: str, message: str) -> None:
        self.stage = stage
        super().__init__(message)
