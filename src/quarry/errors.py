"""Custom exception types raised while scaffolding a project."""

from __future__ import annotations


class ScaffoldError(RuntimeError):
    """Base class for failures that abort a scaffolding run."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class OperationCancelled(ScaffoldError):
    """Raised when the user stops the run before anything is written."""


class OverwriteDeclined(OperationCancelled):
    """Raised when the user refuses to empty a non-empty target directory."""


class PromptInterrupted(OperationCancelled):
    """Raised when the user interrupts an interactive prompt."""


class FetchError(ScaffoldError):
    """Raised when the template could not be fetched into the target."""


class PopulationTimeout(FetchError):
    """Raised when the fetch did not populate the target in time."""


class ManifestError(ScaffoldError):
    """Raised when the template manifest is missing or malformed."""


__all__ = [
    "FetchError",
    "ManifestError",
    "OperationCancelled",
    "OverwriteDeclined",
    "PopulationTimeout",
    "PromptInterrupted",
    "ScaffoldError",
]
