"""Deterministic prompt and fetch collaborators for offline tests."""

from __future__ import annotations

import json
from collections import deque
from concurrent.futures import Future
from pathlib import Path
from typing import Any, Deque, Iterable, Mapping

from quarry.errors import FetchError

TEMPLATE_MANIFEST: dict[str, Any] = {
    "name": "fast-vue3",
    "version": "1.4.2",
    "author": "Template Author <author@example.com>",
    "private": True,
    "scripts": {"dev": "vite", "build": "vite build"},
}

TEMPLATE_FILES: dict[str, str] = {
    "README.md": "# fast-vue3\n",
    "src/main.ts": "console.log('hello')\n",
    ".git/HEAD": "ref: refs/heads/main\n",
    ".git/objects/ab/cdef": "blob",
}


class ScriptedAsker:
    """Asker replaying pre-defined answers.

    ``None`` accepts the default offered by the prompt. Exception instances
    are raised instead of answering.
    """

    def __init__(self, answers: Iterable[Any] = ()) -> None:
        self._answers: Deque[Any] = deque(answers)
        self.questions: list[tuple[str, str, Any]] = []
        self.errors: list[str] = []

    def _next(self, message: str, kind: str, default: Any) -> Any:
        self.questions.append((kind, message, default))
        if not self._answers:
            raise AssertionError(f"unexpected prompt: {message}")
        answer = self._answers.popleft()
        if isinstance(answer, BaseException):
            raise answer
        return default if answer is None else answer

    def text(self, message: str, default: str | None = None) -> str:
        return self._next(message, "text", default)

    def confirm(self, message: str, default: bool = False) -> bool:
        return self._next(message, "confirm", default)

    def error(self, message: str) -> None:
        self.errors.append(message)

    @property
    def exhausted(self) -> bool:
        return not self._answers


class TemplateFetcher:
    """Fetcher that writes a small template tree synchronously."""

    def __init__(
        self,
        files: Mapping[str, str] | None = None,
        manifest: Mapping[str, Any] | None = TEMPLATE_MANIFEST,
    ) -> None:
        self.files = dict(TEMPLATE_FILES if files is None else files)
        self.manifest = manifest
        self.calls: list[tuple[str, Path]] = []
        self.cancelled = False

    def fetch(self, source: str, destination: Path, /) -> Future[None]:
        self.calls.append((source, destination))
        destination.mkdir(parents=True, exist_ok=True)
        for relative, content in self.files.items():
            path = destination / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        if self.manifest is not None:
            (destination / "package.json").write_text(json.dumps(self.manifest, indent=2), encoding="utf-8")

        future: Future[None] = Future()
        future.set_result(None)
        return future

    def cancel(self) -> None:
        self.cancelled = True


class FailingFetcher:
    """Fetcher whose future fails immediately."""

    def __init__(self, error: BaseException | None = None) -> None:
        self.error = error or FetchError("fatal: repository not found")
        self.calls: list[tuple[str, Path]] = []
        self.cancelled = False

    def fetch(self, source: str, destination: Path, /) -> Future[None]:
        self.calls.append((source, destination))
        future: Future[None] = Future()
        future.set_exception(self.error)
        return future

    def cancel(self) -> None:
        self.cancelled = True


class PendingFetcher:
    """Fetcher whose future never completes."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Path]] = []
        self.futures: list[Future[None]] = []
        self.cancelled = False

    def fetch(self, source: str, destination: Path, /) -> Future[None]:
        self.calls.append((source, destination))
        future: Future[None] = Future()
        self.futures.append(future)
        return future

    def cancel(self) -> None:
        self.cancelled = True
        for future in self.futures:
            future.cancel()
