"""Package manager detection and command formatting."""

from __future__ import annotations

from enum import Enum

__all__ = ["PackageManager", "detect_package_manager", "get_command"]


class PackageManager(str, Enum):
    """Package managers the follow-up instructions can be written for."""

    PNPM = "pnpm"
    YARN = "yarn"
    NPM = "npm"


def detect_package_manager(npm_execpath: str | None) -> PackageManager:
    """Pick the package manager that launched the tool.

    ``npm_execpath`` is the value the running package manager exports; pnpm is
    checked before yarn and anything unrecognised falls back to npm.
    """

    signal = npm_execpath or ""
    if "pnpm" in signal:
        return PackageManager.PNPM
    if "yarn" in signal:
        return PackageManager.YARN
    return PackageManager.NPM


def get_command(package_manager: PackageManager, script: str) -> str:
    """Return the shell command running ``script`` with ``package_manager``."""

    manager = PackageManager(package_manager)
    if script == "install":
        return "yarn" if manager is PackageManager.YARN else f"{manager.value} install"
    if manager is PackageManager.NPM:
        return f"npm run {script}"
    return f"{manager.value} {script}"
