"""Scaffold new projects from a template repository.

The package exposes the building blocks of the ``quarry`` command: package
name validation, safe preparation of the target directory, a small prompt
chain and the orchestrator tying them to a template fetcher. Each piece can be
embedded in other scaffolding tools.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import ScaffoldSettings
from .errors import (
    FetchError,
    ManifestError,
    OperationCancelled,
    OverwriteDeclined,
    PopulationTimeout,
    PromptInterrupted,
    ScaffoldError,
)
from .filesystem import can_safely_overwrite, empty_directory, remove_tree
from .naming import is_valid_package_name, to_valid_package_name
from .scaffold import ScaffoldOrchestrator, ScaffoldResult, Stage

__all__ = [
    "FetchError",
    "ManifestError",
    "OperationCancelled",
    "OverwriteDeclined",
    "PopulationTimeout",
    "PromptInterrupted",
    "ScaffoldError",
    "ScaffoldOrchestrator",
    "ScaffoldResult",
    "ScaffoldSettings",
    "Stage",
    "can_safely_overwrite",
    "empty_directory",
    "is_valid_package_name",
    "remove_tree",
    "to_valid_package_name",
]
