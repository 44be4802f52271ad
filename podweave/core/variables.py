# podweave/core/variables.py

"""
$VARIABLE placeholder resolution for pod declarations.

Plugins may declare a library field as a placeholder, e.g.
``spec: $FIREBASE_VERSION``, and let the user supply the value at install
time. A field is a placeholder only when the whole value is ``$NAME``;
anything else (``~> 1.0``, ``a$b``) is a literal and is never looked up.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from podweave.core.models import LibrarySpec, LIBRARY_VARIABLE_FIELDS
from podweave.core.exceptions import UnresolvedVariableError, InvalidUsageError

PLACEHOLDER_PATTERN = re.compile(r"^\$(?P<name>[A-Za-z_][A-Za-z0-9_]*)$")

# ==============================================================
# PLACEHOLDER TYPES
# ==============================================================

@dataclass(frozen=True)
class Literal:
    """A value used as-is."""
    value: str

@dataclass(frozen=True)
class Reference:
    """A value looked up by name in the install variables."""
    name: str

Placeholder = Union[Literal, Reference]

def parse_placeholder(value: str) -> Placeholder:
    """Classify a raw field value as a Reference or a Literal."""
    match = PLACEHOLDER_PATTERN.match(value.strip())
    if match:
        return Reference(match.group("name"))
    return Literal(value)

# ==============================================================
# RESOLUTION
# ==============================================================

def resolve(
    value: Optional[str],
    variables: Dict[str, str],
    strict: bool = True,
    field: Optional[str] = None,
    key: Optional[str] = None,
) -> Optional[str]:
    """
    Resolve a single field value against the supplied variables.

    Args:
        value: Raw field value (None passes through)
        variables: Variable name → value mapping
        strict: Raise on unknown variables; otherwise resolve them to None
        field: Field name, used in error messages
        key: Pod identity, used in error messages

    Returns:
        Resolved value, or None for an unresolved reference in lenient mode

    Raises:
        UnresolvedVariableError: strict mode and the variable is missing
    """
    if value is None:
        return None

    placeholder = parse_placeholder(value)
    if isinstance(placeholder, Literal):
        return placeholder.value

    if placeholder.name in variables:
        return variables[placeholder.name]

    if strict:
        raise UnresolvedVariableError(placeholder.name, field=field, key=key)
    return None

def resolve_library(
    key: str,
    library: LibrarySpec,
    variables: Dict[str, str],
    strict: bool = True,
) -> LibrarySpec:
    """
    Return a copy of the library with every mutable field resolved once.

    The key is the pod identity and is never resolved.
    """
    updates = {
        field: resolve(getattr(library, field), variables, strict, field=field, key=key)
        for field in LIBRARY_VARIABLE_FIELDS
        if getattr(library, field) is not None
    }
    return library.model_copy(update=updates)

def parse_variable_assignments(assignments: Optional[List[str]]) -> Dict[str, str]:
    """
    Parse command line `NAME=VALUE` assignments.

    Raises:
        InvalidUsageError: An assignment has no '=' or an invalid name
    """
    variables: Dict[str, str] = {}
    for assignment in assignments or []:
        name, sep, value = assignment.partition("=")
        name = name.strip()
        if not sep or not PLACEHOLDER_PATTERN.match(f"${name}"):
            raise InvalidUsageError(
                f"Invalid variable '{assignment}', expected NAME=VALUE"
            )
        variables[name] = value
    return variables
