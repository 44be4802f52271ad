# tests/test_podfile.py

from pathlib import Path

import pytest

from podweave.ios.podfile import HEADER, Podfile, proof_declaration, render_pod_options

HANDWRITTEN = """\
source 'https://cdn.cocoapods.org/'
platform :ios, '12.0'
use_frameworks!

target 'MyApp' do
  project 'MyApp.xcodeproj'
  pod 'Alamofire', '~> 5.0'
  pod 'Local', :path => '../Local'
end
"""

# --------------------------------------------------------------------------- #
# Fixtures
# --------------------------------------------------------------------------- #
@pytest.fixture
def handwritten(tmp_path: Path) -> Path:
    path = tmp_path / "Podfile"
    path.write_text(HANDWRITTEN, encoding="utf-8")
    return path

# --------------------------------------------------------------------------- #
# Rendering helpers
# --------------------------------------------------------------------------- #
@pytest.mark.parametrize("raw, expected", [
    ("use-frameworks", "use_frameworks!"),
    ("use_frameworks!", "use_frameworks!"),
    ("inhibit-all-warnings", "inhibit_all_warnings!"),
    ("  use_modular_headers ", "use_modular_headers!"),
    ("install! 'cocoapods', :deterministic_uuids => false", "install! 'cocoapods', :deterministic_uuids => false"),
])
def test_proof_declaration(raw: str, expected: str):
    assert proof_declaration(raw) == expected


@pytest.mark.parametrize("payload, expected", [
    ({}, ""),
    ({"spec": "~> 4.0"}, ", '~> 4.0'"),
    ({"spec": ":modular_headers => true"}, ", :modular_headers => true"),
    ({"git": "https://github.com/a/b.git", "tag": "1.2.0"}, ", :git => 'https://github.com/a/b.git', :tag => '1.2.0'"),
    ({"git": "https://github.com/a/b.git", "branch": "main", "commit": "abc123"},
     ", :git => 'https://github.com/a/b.git', :branch => 'main', :commit => 'abc123'"),
    ({"path": "../Local", "tag": "ignored"}, ", :path => '../Local'"),
    ({"spec": "1.0", "configurations": "Debug, Release"}, ", '1.0', :configurations => ['Debug', 'Release']"),
    ({"spec": "1.0", "options": ":modular_headers => true", "git": "https://x"}, ", '1.0', :modular_headers => true"),
])
def test_render_pod_options(payload: dict, expected: str):
    assert render_pod_options(payload) == expected

# --------------------------------------------------------------------------- #
# Loading and dirty tracking
# --------------------------------------------------------------------------- #
def test_new_podfile_is_clean(tmp_path: Path):
    podfile = Podfile(tmp_path / "Podfile")
    assert not podfile.is_dirty()
    assert podfile.pods == {}
    assert podfile.deployment_target == "13.0"


def test_template_layout(tmp_path: Path):
    podfile = Podfile(tmp_path / "Podfile", project_name="HelloCordova", deployment_target="14.0")
    podfile.add_source("https://cdn.cocoapods.org/")
    podfile.add_declaration("use-frameworks")
    podfile.add_spec("AFNetworking", {"spec": "~> 4.0"})

    assert podfile.get_template() == (
        f"{HEADER}\n"
        "source 'https://cdn.cocoapods.org/'\n"
        "platform :ios, '14.0'\n"
        "use_frameworks!\n"
        "target 'HelloCordova' do\n"
        "\tproject 'HelloCordova.xcodeproj'\n"
        "\tpod 'AFNetworking', '~> 4.0'\n"
        "end\n"
    )


def test_parse_handwritten(handwritten: Path):
    podfile = Podfile(handwritten, project_name="MyApp")

    assert podfile.sources == ["https://cdn.cocoapods.org/"]
    assert podfile.declarations == ["use_frameworks!"]
    assert podfile.deployment_target == "12.0"
    assert podfile.pods == {
        "Alamofire": ", '~> 5.0'",
        "Local": ", :path => '../Local'",
    }
    assert not podfile.is_dirty()


def test_overrides_show_as_changes(handwritten: Path):
    assert Podfile(handwritten, project_name="MyApp", deployment_target="13.0").is_dirty()
    assert Podfile(handwritten, project_name="Other").is_dirty()
    assert not Podfile(handwritten, project_name="MyApp", deployment_target="12.0").is_dirty()


def test_reverted_change_is_clean(handwritten: Path):
    podfile = Podfile(handwritten, project_name="MyApp")
    podfile.add_spec("AFNetworking", {"spec": "~> 4.0"})
    assert podfile.is_dirty()
    podfile.remove_spec("AFNetworking")
    assert not podfile.is_dirty()


def test_write_round_trip(tmp_path: Path):
    path = tmp_path / "ios" / "Podfile"
    podfile = Podfile(path)
    podfile.add_spec("Firebase/Core", {"spec": "10.1.0"})
    podfile.add_declaration("inhibit_all_warnings!")
    podfile.write()

    assert not podfile.is_dirty()
    reloaded = Podfile(path)
    assert reloaded.pods == podfile.pods
    assert reloaded.declarations == ["inhibit_all_warnings!"]
    assert not reloaded.is_dirty()
    assert path.read_text(encoding="utf-8").startswith(HEADER)


def test_removals_of_missing_units_are_no_ops(tmp_path: Path):
    podfile = Podfile(tmp_path / "Podfile")
    podfile.remove_spec("Nope")
    podfile.remove_source("https://nope")
    podfile.remove_declaration("use_frameworks!")
    assert not podfile.is_dirty()


def test_add_spec_replaces_existing_line(tmp_path: Path):
    podfile = Podfile(tmp_path / "Podfile")
    podfile.add_spec("AFNetworking", {"spec": "~> 3.0"})
    podfile.add_spec("AFNetworking", {"spec": "~> 4.0"})
    assert podfile.pods == {"AFNetworking": ", '~> 4.0'"}
    assert podfile.exists_pod("AFNetworking")


def test_existing_target_and_platform_are_kept(handwritten: Path):
    podfile = Podfile(handwritten)
    assert podfile.project_name == "MyApp"
    assert podfile.deployment_target == "12.0"
    assert not podfile.is_dirty()


def test_contains(handwritten: Path):
    from podweave.core.models import DependencyKind

    podfile = Podfile(handwritten)
    assert podfile.contains(DependencyKind.DECLARATION, "use-frameworks")
    assert podfile.contains(DependencyKind.SOURCE, "https://cdn.cocoapods.org/")
    assert podfile.contains(DependencyKind.LIBRARY, "Alamofire")
    assert not podfile.contains(DependencyKind.LIBRARY, "AFNetworking")
