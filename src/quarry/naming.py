"""Package name validation and normalisation helpers."""

from __future__ import annotations

import re
from typing import Any

__all__ = ["PACKAGE_NAME_PATTERN", "is_valid_package_name", "to_valid_package_name"]


PACKAGE_NAME_PATTERN = re.compile(r"^(?:@[a-z0-9-*~][a-z0-9-*._~]*/)?[a-z0-9-~][a-z0-9-._~]*$")

_WHITESPACE = re.compile(r"\s+")
_LEADING_MARKER = re.compile(r"^[._]")
_INVALID_CHARACTERS = re.compile(r"[^a-z0-9-~]+")


def is_valid_package_name(name: Any) -> bool:
    """Return ``True`` when ``name`` is usable as a ``package.json`` name.

    Scoped names such as ``@scope/name`` are accepted. The check never raises;
    anything that is not a string is simply reported as invalid.
    """

    if not isinstance(name, str):
        return False
    return PACKAGE_NAME_PATTERN.fullmatch(name) is not None


def to_valid_package_name(name: str) -> str:
    """Return a best-effort package name derived from ``name``.

    The transformation trims and lowercases the input, turns whitespace runs
    into hyphens, drops a single leading ``.`` or ``_`` and replaces every run
    of unsupported characters with a hyphen. The result is not guaranteed to
    be valid (``"."`` normalises to an empty string), so callers should check
    it with :func:`is_valid_package_name` before using it.
    """

    candidate = str(name).strip().lower()
    candidate = _WHITESPACE.sub("-", candidate)
    candidate = _LEADING_MARKER.sub("", candidate, count=1)
    return _INVALID_CHARACTERS.sub("-", candidate)
