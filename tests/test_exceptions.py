# tests/test_exceptions.py

"""Tests for custom podweave exceptions."""

from podweave.core.exceptions import (
    PodweaveError,
    InvalidPodSpecError,
    UnresolvedVariableError,
    LedgerLoadError,
    PersistenceError,
)
from podweave.ios import (
    CocoaPodsNotFoundError,
    InstallError,
    PodInstallError,
    PodfileLoadError,
)


def test_hierarchy():
    assert issubclass(InvalidPodSpecError, PodweaveError)
    assert issubclass(PodfileLoadError, PodweaveError)
    assert issubclass(PodInstallError, InstallError)
    assert issubclass(CocoaPodsNotFoundError, InstallError)


def test_invalid_pod_spec_message():
    e = InvalidPodSpecError("cordova-plugin-x", "Broken", "missing required 'name'")
    assert e.plugin_id == "cordova-plugin-x"
    assert "cordova-plugin-x" in str(e)
    assert "Broken" in str(e)


def test_unresolved_variable_message():
    e = UnresolvedVariableError("VERSION", field="spec", key="Firebase")
    assert "$VERSION" in str(e)
    assert "pod 'Firebase', field 'spec'" in str(e)
    assert "(pod" not in str(UnresolvedVariableError("VERSION"))


def test_pod_install_error_message():
    e = PodInstallError("pod install", 1, "  [!] Oh no  \n")
    assert e.returncode == 1
    assert str(e) == "`pod install` failed with exit code 1\n[!] Oh no"
    assert str(PodInstallError("pod install", 2)) == "`pod install` failed with exit code 2"


def test_io_error_attributes():
    e = LedgerLoadError("/p/pods.json", "Expecting value")
    assert e.path == "/p/pods.json"
    assert e.details in str(e)
    e = PersistenceError("/p/Podfile", "Permission denied")
    assert "Permission denied" in str(e)
