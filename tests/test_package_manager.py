from __future__ import annotations

import pytest

from quarry.package_manager import PackageManager, detect_package_manager, get_command


@pytest.mark.parametrize(
    "npm_execpath, expected",
    [
        ("/usr/local/lib/node_modules/pnpm/bin/pnpm.cjs", PackageManager.PNPM),
        ("/home/me/.yarn/releases/yarn-3.6.1.cjs", PackageManager.YARN),
        ("/usr/lib/node_modules/npm/bin/npm-cli.js", PackageManager.NPM),
        ("", PackageManager.NPM),
        (None, PackageManager.NPM),
    ],
)
def test_detect_package_manager(npm_execpath, expected):
    assert detect_package_manager(npm_execpath) is expected


@pytest.mark.parametrize(
    "manager, script, expected",
    [
        (PackageManager.NPM, "install", "npm install"),
        (PackageManager.NPM, "dev", "npm run dev"),
        (PackageManager.YARN, "install", "yarn"),
        (PackageManager.YARN, "dev", "yarn dev"),
        (PackageManager.PNPM, "install", "pnpm install"),
        (PackageManager.PNPM, "dev", "pnpm dev"),
        ("pnpm", "build", "pnpm build"),
    ],
)
def test_get_command(manager, script, expected):
    assert get_command(manager, script) == expected
