"""Configuration shared by the scaffolder and the command line interface."""

from __future__ import annotations

import os
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["DEFAULT_TEMPLATE_SOURCE", "ScaffoldSettings"]


DEFAULT_TEMPLATE_SOURCE = "https://github.com/MaleWeb/fast-vue3.git"


class ScaffoldSettings(BaseModel):
    """Tunable values for a scaffolding run.

    Instances are built once by the command line entry point, usually through
    :meth:`from_env`, and handed to :class:`~quarry.scaffold.ScaffoldOrchestrator`
    so that nothing below the CLI reads process-wide state.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    template_source: str = Field(DEFAULT_TEMPLATE_SOURCE, min_length=1, description="Repository cloned into the target directory.")
    default_project_name: str = Field("fast-vue3-demo", min_length=1, description="Project name offered when none is supplied.")
    manifest_name: str = Field("package.json", description="Manifest file rewritten after the clone.")
    vcs_dir: str = Field(".git", description="Version-control metadata directory removed after the clone.")
    reset_version: str = Field("0.0.0", description="Version written into the manifest.")
    poll_interval: float = Field(0.5, ge=0, description="Seconds between population checks.")
    max_poll_attempts: int = Field(240, ge=1, description="Population checks performed before giving up.")
    npm_execpath: str = Field("", description="Value of ``npm_execpath`` used to pick a package manager.")

    @property
    def max_wait(self) -> float:
        """Seconds slept between the first and the last population check."""

        return self.poll_interval * (self.max_poll_attempts - 1)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> "ScaffoldSettings":
        """Build settings from environment variables.

        Recognised variables (all optional): ``QUARRY_TEMPLATE``,
        ``QUARRY_DEFAULT_NAME``, ``QUARRY_POLL_INTERVAL``,
        ``QUARRY_MAX_POLL_ATTEMPTS`` and ``npm_execpath``. Keyword
        ``overrides`` win over the environment; ``None`` values are ignored.
        Values are coerced and checked by pydantic, so a malformed variable
        raises :class:`pydantic.ValidationError`.
        """

        env = os.environ if environ is None else environ
        values: dict[str, Any] = {"npm_execpath": env.get("npm_execpath", "")}
        if env.get("QUARRY_TEMPLATE"):
            values["template_source"] = env["QUARRY_TEMPLATE"]
        if env.get("QUARRY_DEFAULT_NAME"):
            values["default_project_name"] = env["QUARRY_DEFAULT_NAME"]
        if env.get("QUARRY_POLL_INTERVAL"):
            values["poll_interval"] = env["QUARRY_POLL_INTERVAL"]
        if env.get("QUARRY_MAX_POLL_ATTEMPTS"):
            values["max_poll_attempts"] = env["QUARRY_MAX_POLL_ATTEMPTS"]

        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)
