from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest
from rich.console import Console

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from quarry.config import ScaffoldSettings  # noqa: E402


@pytest.fixture()
def console() -> Console:
    """Console writing plain text into an in-memory buffer."""

    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture()
def settings() -> ScaffoldSettings:
    return ScaffoldSettings(
        template_source="https://example.com/template.git",
        poll_interval=0,
        max_poll_attempts=5,
    )
