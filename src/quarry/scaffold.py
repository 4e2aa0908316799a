"""Project scaffolding orchestration.

:class:`ScaffoldOrchestrator` is the composition root of the tool. A run moves
through the stages of :class:`Stage` in order: the inputs are collected, the
target directory is prepared, the template is fetched into it, the result is
sanitised and the follow-up commands are printed. A declined overwrite ends
the run in :attr:`Stage.CANCELLED` before anything on disk is touched.
"""

from __future__ import annotations

import logging
import os
import time
from concurrent.futures import Future
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Mapping

from rich.console import Console
from rich.markup import escape

from .config import ScaffoldSettings
from .errors import FetchError, OperationCancelled, OverwriteDeclined, PopulationTimeout
from .fetch import Fetcher, GitFetcher
from .filesystem import can_safely_overwrite, count_entries, empty_directory, remove_tree
from .manifest import rewrite_manifest
from .naming import is_valid_package_name, to_valid_package_name
from .package_manager import PackageManager, detect_package_manager, get_command
from .prompts import PromptKind, PromptSession, PromptSpec, RichAsker

__all__ = ["ScaffoldAnswers", "ScaffoldOrchestrator", "ScaffoldResult", "Stage"]


LOGGER = logging.getLogger(__name__)


class Stage(str, Enum):
    """Stages of a scaffolding run."""

    COLLECT = "collect"
    PREPARE = "prepare"
    POPULATE = "populate"
    SANITIZE = "sanitize"
    REPORT = "report"
    DONE = "done"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class ScaffoldAnswers:
    """Inputs confirmed by the user before anything is written."""

    project_name: str
    package_name: str
    overwrite: bool = False


@dataclass(frozen=True, slots=True)
class ScaffoldResult:
    """Outcome of a completed run."""

    root: Path
    package_name: str
    package_manager: PackageManager
    commands: tuple[str, ...]


def _reject_declined_overwrite(value: Any, answers: Mapping[str, Any]) -> None:
    if value is False:
        raise OverwriteDeclined("Operation cancelled")


def _check_package_name(value: Any) -> bool | str:
    return is_valid_package_name(value) or "Invalid package.json name"


class ScaffoldOrchestrator:
    """Collect inputs, prepare the target and populate it from a template."""

    def __init__(
        self,
        settings: ScaffoldSettings | None = None,
        *,
        prompter: PromptSession | None = None,
        fetcher: Fetcher | None = None,
        console: Console | None = None,
        cwd: str | Path | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.settings = settings or ScaffoldSettings()
        self.console = console or Console()
        self.prompter = prompter or PromptSession(RichAsker(self.console))
        self.fetcher = fetcher or GitFetcher(timeout=self.settings.max_wait or None)
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        self.stage = Stage.COLLECT
        self._sleep = sleep

    def target_path(self, project_name: str) -> Path:
        """Return the absolute directory ``project_name`` is scaffolded into."""

        return self.cwd / project_name

    def run(self, target_name: str | None = None, *, force: bool = False) -> ScaffoldResult:
        """Scaffold a project and return a summary of what was created.

        Parameters
        ----------
        target_name:
            Directory name supplied on the command line. When omitted the user
            is asked for one.
        force:
            Empty a non-empty target without asking for confirmation.
        """

        self.stage = Stage.COLLECT
        try:
            answers = self.collect_inputs(target_name, force=force)
        except OperationCancelled:
            self.stage = Stage.CANCELLED
            raise

        root = self.target_path(answers.project_name)
        try:
            self.stage = Stage.PREPARE
            self.prepare(root, answers)

            self.stage = Stage.POPULATE
            self.console.print(f"\nScaffolding project in {escape(str(root))}...")
            self.populate(root)

            self.stage = Stage.SANITIZE
            self.sanitize(root, answers.package_name)

            self.stage = Stage.REPORT
            result = self.report(root, answers.package_name)
        except KeyboardInterrupt as exc:
            self.stage = Stage.CANCELLED
            raise OperationCancelled("Operation cancelled") from exc
        except Exception:
            self.stage = Stage.FAILED
            raise

        self.stage = Stage.DONE
        return result

    def collect_inputs(self, target_name: str | None = None, *, force: bool = False) -> ScaffoldAnswers:
        """Ask for whatever the command line did not provide.

        The project name is asked for only without ``target_name``. The
        overwrite confirmation is asked for only when the target is not empty
        and ``force`` is unset; declining it raises
        :class:`~quarry.errors.OverwriteDeclined` before the next question.
        The package name is asked for only when the project name is not a valid
        package name itself.
        """

        default_name = target_name or self.settings.default_project_name

        def project_name(answers: Mapping[str, Any]) -> str:
            if target_name:
                return target_name
            return str(answers.get("project_name", "")).strip() or default_name

        def overwrite_kind(answers: Mapping[str, Any]) -> PromptKind | None:
            if force or can_safely_overwrite(self.target_path(project_name(answers))):
                return None
            return PromptKind.CONFIRM

        def overwrite_message(answers: Mapping[str, Any]) -> str:
            name = project_name(answers)
            subject = "Current directory" if name == "." else f'Target directory "{name}"'
            return f"{subject} is not empty. Remove existing files and continue?"

        def package_kind(answers: Mapping[str, Any]) -> PromptKind | None:
            return None if is_valid_package_name(project_name(answers)) else PromptKind.TEXT

        specs = [
            PromptSpec(
                name="project_name",
                message="Project name",
                kind=None if target_name else PromptKind.TEXT,
                initial=default_name,
            ),
            PromptSpec(
                name="should_overwrite",
                message=overwrite_message,
                kind=overwrite_kind,
                on_answer=_reject_declined_overwrite,
            ),
            PromptSpec(
                name="package_name",
                message="Package name",
                kind=package_kind,
                initial=lambda answers: to_valid_package_name(project_name(answers)),
                validate=_check_package_name,
            ),
        ]

        answers = self.prompter.run(specs)
        name = project_name(answers)
        overwrite = answers.get("should_overwrite") is True
        if force and not can_safely_overwrite(self.target_path(name)):
            overwrite = True

        return ScaffoldAnswers(
            project_name=name,
            package_name=answers.get("package_name", name),
            overwrite=overwrite,
        )

    def prepare(self, root: Path, answers: ScaffoldAnswers) -> None:
        """Empty ``root`` when the user agreed to, or forced, an overwrite."""

        if answers.overwrite:
            LOGGER.info("emptying target directory path=%s", root)
            empty_directory(root)

    def populate(self, root: Path) -> None:
        """Fetch the template into ``root`` and wait until it has arrived.

        A fetch that is still running when the wait fails or is interrupted is
        cancelled before the error propagates.
        """

        future = self.fetcher.fetch(self.settings.template_source, root)
        try:
            self.wait_for_population(root, future)
        except BaseException:
            self.fetcher.cancel()
            raise

    def wait_for_population(self, root: Path, future: Future[None]) -> None:
        """Block until ``future`` finished and ``root`` holds template files.

        At most ``max_poll_attempts`` checks are made, ``poll_interval``
        seconds apart, with no sleep after the last one. A directory holding
        only version-control metadata does not count as populated.

        Raises
        ------
        FetchError
            If the fetch failed or finished without producing any files.
        PopulationTimeout
            If the fetch was still running after the last check.
        """

        ignore = (self.settings.vcs_dir,)
        for attempt in range(1, self.settings.max_poll_attempts + 1):
            if future.done():
                error = future.exception()
                if isinstance(error, FetchError):
                    raise error
                if error is not None:
                    raise FetchError(f"fetching template failed: {error}") from error
                if count_entries(root, ignore=ignore) == 0:
                    raise FetchError(f"fetching template produced no files in {root}")
                LOGGER.debug("template populated path=%s attempts=%s", root, attempt)
                return

            if attempt < self.settings.max_poll_attempts:
                LOGGER.debug("waiting for template path=%s attempt=%s", root, attempt)
                self._sleep(self.settings.poll_interval)

        raise PopulationTimeout(
            f"template was not fetched into {root} within {self.settings.max_wait:.1f}s"
        )

    def sanitize(self, root: Path, package_name: str) -> None:
        """Drop version-control metadata and give the manifest a new identity."""

        remove_tree(root / self.settings.vcs_dir)
        rewrite_manifest(
            root / self.settings.manifest_name,
            name=package_name,
            version=self.settings.reset_version,
        )

    def report(self, root: Path, package_name: str) -> ScaffoldResult:
        """Print the commands the user should run next."""

        package_manager = detect_package_manager(self.settings.npm_execpath)
        commands: list[str] = []
        if root != self.cwd:
            commands.append(f"cd {os.path.relpath(root, self.cwd)}")
        commands.append(get_command(package_manager, "install"))
        commands.append(get_command(package_manager, "dev"))

        self.console.print("\nDone. Now run:\n")
        for command in commands:
            self.console.print(f"  [bold green]{escape(command)}[/bold green]")
        self.console.print()

        return ScaffoldResult(
            root=root,
            package_name=package_name,
            package_manager=package_manager,
            commands=tuple(commands),
        )
