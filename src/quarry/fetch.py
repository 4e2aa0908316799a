"""Collaborators that populate a target directory from a template source."""

from __future__ import annotations

import logging
import subprocess
import threading
from concurrent.futures import Future
from pathlib import Path
from typing import Protocol, runtime_checkable

from .errors import FetchError

__all__ = ["Fetcher", "GitFetcher"]


LOGGER = logging.getLogger(__name__)


@runtime_checkable
class Fetcher(Protocol):
    """Protocol implemented by template fetchers."""

    def fetch(self, source: str, destination: Path, /) -> Future[None]:
        """Start populating ``destination`` from ``source``.

        The returned future resolves to ``None`` on success and raises
        :class:`~quarry.errors.FetchError` on failure.
        """

    def cancel(self) -> None:
        """Stop every fetch still in progress and wait until it has stopped."""


class GitFetcher:
    """Fetch templates with a ``git clone`` child process.

    The clone runs in its own process and is watched by a daemon thread, so
    an abandoned clone never keeps the interpreter alive. :meth:`cancel`
    terminates the child, escalating to a kill after ``grace`` seconds.
    """

    def __init__(
        self,
        git: str = "git",
        *,
        depth: int | None = 1,
        timeout: float | None = None,
        grace: float = 5.0,
    ) -> None:
        self.git = git
        self.depth = depth
        self.timeout = timeout
        self.grace = grace
        self._processes: list[subprocess.Popen[str]] = []
        self._lock = threading.Lock()

    @property
    def running(self) -> list[subprocess.Popen[str]]:
        """Child processes that have not exited yet."""

        with self._lock:
            return [proc for proc in self._processes if proc.poll() is None]

    def command(self, source: str, destination: Path) -> list[str]:
        """Return the ``git clone`` invocation for ``source``."""

        cmd = [self.git, "clone"]
        if self.depth is not None:
            cmd.extend(["--depth", str(self.depth)])
        cmd.extend([source, str(destination)])
        return cmd

    def fetch(self, source: str, destination: Path, /) -> Future[None]:
        cmd = self.command(source, destination)
        LOGGER.info("running %s", " ".join(cmd))
        future: Future[None] = Future()
        future.set_running_or_notify_cancel()

        try:
            proc = subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except FileNotFoundError as exc:
            error = FetchError(f"git executable not found: {self.git}")
            error.__cause__ = exc
            future.set_exception(error)
            return future

        with self._lock:
            self._processes.append(proc)
        watcher = threading.Thread(
            target=self._watch,
            args=(proc, future),
            name="quarry-fetch",
            daemon=True,
        )
        watcher.start()
        return future

    def cancel(self) -> None:
        for proc in self.running:
            LOGGER.info("stopping git clone pid=%s", proc.pid)
            self._stop(proc)

    def _watch(self, proc: subprocess.Popen[str], future: Future[None]) -> None:
        try:
            stdout, stderr = proc.communicate(timeout=self.timeout)
        except subprocess.TimeoutExpired:
            self._stop(proc)
            future.set_exception(FetchError(f"git clone timed out after {self.timeout}s"))
            return
        finally:
            with self._lock:
                if proc.poll() is not None and proc in self._processes:
                    self._processes.remove(proc)

        if proc.returncode == 0:
            future.set_result(None)
            return
        msg = (stderr or "").strip() or (stdout or "").strip()
        if not msg:
            msg = f"git clone failed (exit {proc.returncode})"
        future.set_exception(FetchError(msg))

    def _stop(self, proc: subprocess.Popen[str]) -> None:
        if proc.poll() is not None:
            return
        proc.terminate()
        try:
            proc.wait(timeout=self.grace)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.wait()
