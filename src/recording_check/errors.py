"""Exceptions raised by recording-check."""

from __future__ import annotations


class RecordingCheckError(Exception):
    """Base class for recording-check failures."""


class NotFoundError(RecordingCheckError, LookupError):
    """A recording name or id did not resolve to a known recording."""

    def __init__(self, recording_ref: str, hint: str = "rcheck check") -> None:
        self.recording_ref = recording_ref
        super().__init__(
            f"Could not find {recording_ref}.\n\n"
            f"Use {hint} without options to see list of all available recordings."
        )


class ConfigError(RecordingCheckError, ValueError):
    """A state snapshot could not be turned into recordings and event types."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        self.errors = list(errors or [])
        if self.errors:
            message = f"{message}: " + "; ".join(self.errors)
        super().__init__(message)
