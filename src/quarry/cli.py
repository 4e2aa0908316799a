"""Command line interface for quarry."""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import ScaffoldSettings
from .errors import OperationCancelled, ScaffoldError
from .scaffold import ScaffoldOrchestrator

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quarry",
        description="Scaffold a new project from a template repository",
    )
    parser.add_argument(
        "name",
        nargs="?",
        help="Directory to create the project in, relative to the current directory",
    )
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Empty a non-empty target directory without asking",
    )
    parser.add_argument("--template", help="Override the template repository to clone")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every step to stderr",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )


def main(
    argv: Sequence[str] | None = None,
    *,
    orchestrator: ScaffoldOrchestrator | None = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if orchestrator is None:
        try:
            settings = ScaffoldSettings.from_env(template_source=args.template)
        except ValidationError as exc:
            Console(stderr=True).print(f"[bold red]Invalid configuration:[/bold red] {escape(_describe(exc))}")
            return 1
        orchestrator = ScaffoldOrchestrator(settings)
    console = orchestrator.console

    try:
        orchestrator.run(args.name, force=args.force)
    except KeyboardInterrupt:
        console.print("[red]✖[/red] Operation cancelled")
        return 1
    except OperationCancelled as exc:
        console.print(f"[red]✖[/red] {escape(str(exc))}")
        return 1
    except (ScaffoldError, OSError) as exc:
        LOGGER.debug("scaffolding failed at stage=%s", orchestrator.stage.value, exc_info=True)
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
