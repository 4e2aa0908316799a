"""Interactive prompt chain used to collect scaffolding inputs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Protocol, Sequence, runtime_checkable

from rich.console import Console
from rich.prompt import Confirm, Prompt

from .errors import PromptInterrupted

__all__ = [
    "Asker",
    "PromptKind",
    "PromptSession",
    "PromptSpec",
    "RichAsker",
]


LOGGER = logging.getLogger(__name__)

Answers = Mapping[str, Any]
Validator = Callable[[Any], "bool | str"]


class PromptKind(str, Enum):
    """Kinds of questions the prompt chain can ask."""

    TEXT = "text"
    CONFIRM = "confirm"


@dataclass(frozen=True, slots=True)
class PromptSpec:
    """Description of a single question in a prompt chain.

    ``kind``, ``message`` and ``initial`` may be callables receiving the
    answers collected so far. A ``kind`` that resolves to ``None`` skips the
    question. ``validate`` returns ``True`` or an error message, in which case
    the question is asked again. ``on_answer`` runs once the answer is
    recorded and may raise to stop the chain.
    """

    name: str
    message: str | Callable[[Answers], str]
    kind: PromptKind | None | Callable[[Answers], PromptKind | None] = PromptKind.TEXT
    initial: Any = None
    validate: Validator | None = None
    on_answer: Callable[[Any, Answers], None] | None = None


@runtime_checkable
class Asker(Protocol):
    """Terminal front-end used by :class:`PromptSession`."""

    def text(self, message: str, default: str | None = None) -> str:
        """Ask for free-form text."""

    def confirm(self, message: str, default: bool = False) -> bool:
        """Ask a yes/no question."""

    def error(self, message: str) -> None:
        """Report an answer that failed validation."""


class RichAsker:
    """:class:`Asker` backed by ``rich`` prompts."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def text(self, message: str, default: str | None = None) -> str:
        if default is None:
            return Prompt.ask(message, console=self.console)
        return Prompt.ask(message, default=default, console=self.console)

    def confirm(self, message: str, default: bool = False) -> bool:
        return Confirm.ask(message, default=default, console=self.console)

    def error(self, message: str) -> None:
        self.console.print(f"[red]✖[/red] {message}")


def _resolve(value: Any, answers: Answers) -> Any:
    if callable(value):
        return value(answers)
    return value


class PromptSession:
    """Run an ordered list of :class:`PromptSpec` objects."""

    def __init__(self, asker: Asker | None = None) -> None:
        self.asker = asker or RichAsker()

    def run(self, specs: Sequence[PromptSpec]) -> dict[str, Any]:
        """Ask every applicable question and return the answers by name.

        Raises
        ------
        PromptInterrupted
            If the user interrupts a question with Ctrl-C or end-of-file.
        """

        answers: dict[str, Any] = {}
        for spec in specs:
            kind = _resolve(spec.kind, answers)
            if kind is None:
                LOGGER.debug("prompt skipped name=%s", spec.name)
                continue

            try:
                value = self._ask(spec, PromptKind(kind), answers)
            except (KeyboardInterrupt, EOFError) as exc:
                raise PromptInterrupted("Operation cancelled") from exc

            answers[spec.name] = value
            if spec.on_answer is not None:
                spec.on_answer(value, answers)
        return answers

    def _ask(self, spec: PromptSpec, kind: PromptKind, answers: Answers) -> Any:
        message = _resolve(spec.message, answers)
        initial = _resolve(spec.initial, answers)

        while True:
            if kind is PromptKind.CONFIRM:
                value: Any = self.asker.confirm(message, default=bool(initial))
            else:
                default = None if initial is None else str(initial)
                value = self.asker.text(message, default=default)

            if spec.validate is None:
                return value
            verdict = spec.validate(value)
            if verdict is True:
                return value
            self.asker.error(verdict if isinstance(verdict, str) else f"invalid value for {spec.name}")
