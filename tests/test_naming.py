from __future__ import annotations

import pytest

from quarry.naming import is_valid_package_name, to_valid_package_name


@pytest.mark.parametrize(
    "value",
    ["my-app", "@scope/name", "@my-org/ui.kit", "app2", "a~b", "-leading", "name_with.dots"],
)
def test_is_valid_package_name_accepts(value):
    assert is_valid_package_name(value)


@pytest.mark.parametrize(
    "value",
    ["", "My App", ".hidden", "_private", "UPPER", "@scope/", "scope/name", "a b", "my-app\n", None, 42],
)
def test_is_valid_package_name_rejects(value):
    assert not is_valid_package_name(value)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("My App", "my-app"),
        ("   Hello    World  ", "hello-world"),
        (".hidden", "hidden"),
        ("_private", "private"),
        ("..double", "-double"),
        ("Foo@Bar!", "foo-bar-"),
        ("a.b_c", "a-b-c"),
        ("Café ☕", "caf---"),
        ("tilde~ok", "tilde~ok"),
        (".", ""),
        ("", ""),
    ],
)
def test_to_valid_package_name(value, expected):
    assert to_valid_package_name(value) == expected


@pytest.mark.parametrize(
    "value",
    ["My App", "  spaced out  ", ".dotfile", "__dunder__", "Über Projekt", "x!!y", "@scope/name", "123"],
)
def test_normalised_names_are_valid_unless_empty(value):
    normalised = to_valid_package_name(value)
    assert normalised
    assert is_valid_package_name(normalised)


@pytest.mark.parametrize("value", [".", "_", "   "])
def test_names_that_normalise_to_nothing_stay_invalid(value):
    assert not is_valid_package_name(to_valid_package_name(value))
