# tests/test_variables.py

import pytest

from podweave.core.exceptions import InvalidUsageError, UnresolvedVariableError
from podweave.core.models import LibrarySpec
from podweave.core.variables import (
    Literal,
    Reference,
    parse_placeholder,
    parse_variable_assignments,
    resolve,
    resolve_library,
)


@pytest.mark.parametrize("raw, expected", [
    ("$FIREBASE_VERSION", Reference("FIREBASE_VERSION")),
    ("$_x1", Reference("_x1")),
    ("~> 4.0", Literal("~> 4.0")),
    ("a$b", Literal("a$b")),
    ("$1", Literal("$1")),
    ("$", Literal("$")),
    ("../$PACKAGE_NAME", Literal("../$PACKAGE_NAME")),
])
def test_parse_placeholder(raw, expected):
    assert parse_placeholder(raw) == expected


def test_resolve():
    variables = {"VERSION": "10.1.0"}
    assert resolve(None, variables) is None
    assert resolve("1.0", variables) == "1.0"
    assert resolve("$VERSION", variables) == "10.1.0"


def test_resolve_unknown_variable():
    with pytest.raises(UnresolvedVariableError) as exc:
        resolve("$MISSING", {}, field="spec", key="Firebase")
    assert exc.value.variable == "MISSING"
    assert exc.value.field == "spec"
    assert "--var MISSING=" in str(exc.value)

    assert resolve("$MISSING", {}, strict=False) is None


def test_resolve_library():
    library = LibrarySpec(name="$POD", spec="$VERSION", git="https://github.com/a/b.git")
    resolved = resolve_library("key", library, {"POD": "Firebase/Core", "VERSION": "10.1.0"})

    assert resolved.name == "Firebase/Core"
    assert resolved.spec == "10.1.0"
    assert resolved.git == "https://github.com/a/b.git"
    assert library.name == "$POD"


def test_resolve_library_lenient():
    library = LibrarySpec(name="Firebase/Core", spec="$VERSION")
    resolved = resolve_library("key", library, {}, strict=False)
    assert resolved.spec is None
    assert resolved.payload() == {"name": "Firebase/Core"}


def test_parse_variable_assignments():
    assert parse_variable_assignments(None) == {}
    assert parse_variable_assignments(["A=1", "URL=https://x?a=b", "EMPTY="]) == {
        "A": "1",
        "URL": "https://x?a=b",
        "EMPTY": "",
    }


@pytest.mark.parametrize("assignment", ["NOVALUE", "=1", "1A=2", "A B=3"])
def test_parse_invalid_variable_assignment(assignment):
    with pytest.raises(InvalidUsageError):
        parse_variable_assignments([assignment])
