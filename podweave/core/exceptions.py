# podweave/core/exceptions.py

from typing import Optional

"""
podweave domain-specific exceptions.

This module contains custom exceptions for the podweave pod manager,
providing clear error messages and separating concerns between library
code (which raises exceptions) and CLI code (which handles them).
"""

class PodweaveError(Exception):
    """Base exception for all podweave errors."""
    pass

class InvalidUsageError(PodweaveError):
    """Raised when a command is called with inconsistent arguments."""
    pass

# ==============================================================
# POD SPEC (CONFIGURATION) ERRORS
# ==============================================================

class PodSpecError(PodweaveError):
    """Base exception for malformed pod declarations."""
    pass

class InvalidPodSpecError(PodSpecError):
    """Raised when a plugin declares a pod unit that cannot be installed."""
    def __init__(self, plugin_id: str, key: str, reason: str):
        self.plugin_id = plugin_id
        self.key = key
        self.reason = reason
        super().__init__(
            f"Plugin '{plugin_id}' declares an invalid pod '{key}': {reason}"
        )

class UnresolvedVariableError(PodSpecError):
    """Raised when a $VARIABLE placeholder has no value in the install options."""
    def __init__(self, variable: str, field: Optional[str] = None, key: Optional[str] = None):
        self.variable = variable
        self.field = field
        self.key = key
        location = ""
        if key and field:
            location = f" (pod '{key}', field '{field}')"
        elif key:
            location = f" (pod '{key}')"
        super().__init__(
            f"Variable '${variable}' is not defined{location}. "
            f"Hint: pass it with `--var {variable}=<value>`"
        )

# ==============================================================
# PLUGIN DESCRIPTOR ERRORS
# ==============================================================

class PluginDescriptorError(PodweaveError):
    """Base exception for plugin descriptor errors."""
    pass

class PluginDescriptorNotFoundError(PluginDescriptorError):
    """Raised when plugin.yaml/plugin.json is not found."""
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"No plugin descriptor found in {path}")

class PluginDescriptorLoadError(PluginDescriptorError):
    """Raised when a plugin descriptor cannot be parsed or validated."""
    def __init__(self, path: str, details: str):
        self.path = path
        self.details = details
        super().__init__(f"Error reading plugin descriptor {path}: {details}")

# ==============================================================
# LEDGER / PERSISTENCE ERRORS
# ==============================================================

class LedgerError(PodweaveError):
    """Base exception for pods.json ledger errors."""
    pass

class LedgerLoadError(LedgerError):
    """Raised when pods.json exists but cannot be parsed."""
    def __init__(self, path: str, details: str):
        self.path = path
        self.details = details
        super().__init__(f"Cannot load pod ledger {path}: {details}")

class LedgerEntryNotFoundError(LedgerError):
    """Raised when incrementing an entry that was never registered."""
    def __init__(self, kind: str, key: str):
        self.kind = kind
        self.key = key
        super().__init__(f"No {kind} entry '{key}' in pod ledger")

class PersistenceError(PodweaveError):
    """Raised when a state file cannot be written."""
    def __init__(self, path: str, details: str):
        self.path = path
        self.details = details
        super().__init__(f"Failed to write {path}: {details}")
