# podweave/core/file_reading.py

"""
File reading utilities for podweave.

This module provides functions to read plugin descriptors
(plugin.yaml/plugin.json) and hand-maintained text files such as the
Podfile with proper encoding detection.
"""

import json
import yaml
from pathlib import Path
from typing import Optional, Union
import chardet

from .constants import PLUGIN_DESCRIPTOR_FILES
from .models import PluginDescriptor
from .exceptions import PluginDescriptorLoadError, PluginDescriptorNotFoundError

def _normalize(text: str) -> str:
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text.replace("\x00", "")

def read_source_file_smart(path: Path) -> str:
    """
    Read a text file with the correct encoding (UTF-8, UTF-16, etc.)
    and safely remove null bytes / line-ending issues common with UTF-16 files.

    Args:
        path: Path to file

    Returns:
        File content as string with normalized line endings
    """
    raw = path.read_bytes()

    # BOM-aware encodings first; utf-16 without a BOM is left to chardet
    if raw.startswith((b"\xff\xfe", b"\xfe\xff")):
        try:
            return _normalize(raw.decode("utf-16"))
        except UnicodeDecodeError:
            pass
    try:
        return _normalize(raw.decode("utf-8-sig"))
    except UnicodeDecodeError:
        pass

    detected = chardet.detect(raw)
    encoding = detected["encoding"] or "utf-8"
    try:
        return _normalize(raw.decode(encoding))
    except (UnicodeDecodeError, LookupError):
        pass

    # Last resort: force UTF-8 with replacement
    return _normalize(raw.decode("utf-8", errors="replace"))

def load_plugin_descriptor(path: Optional[Union[str, Path]] = None) -> PluginDescriptor:
    """
    Load plugin.yaml, plugin.yml OR plugin.json (YAML takes precedence).

    Args:
        path:
            - None: current directory
            - Path to a descriptor file
            - Directory (searches for a descriptor inside it)

    Returns:
        PluginDescriptor instance

    Raises:
        PluginDescriptorNotFoundError: No descriptor found
        PluginDescriptorLoadError: Descriptor cannot be parsed or validated

    Example:
        >>> plugin = load_plugin_descriptor("plugins/cordova-plugin-firebase")
        >>> print(plugin.id)
    """
    if path is None:
        path = Path.cwd()

    path = Path(path)

    if path.is_file():
        candidates = [path]
    elif path.is_dir():
        candidates = [path / name for name in PLUGIN_DESCRIPTOR_FILES]
    else:
        raise PluginDescriptorNotFoundError(str(path))

    for candidate in candidates:
        if not candidate.exists():
            continue
        if candidate.suffix in (".yaml", ".yml"):
            return _load_from_yaml(candidate)
        if candidate.suffix == ".json":
            return _load_from_json(candidate)
        raise PluginDescriptorLoadError(
            str(candidate),
            f"unsupported file type, expected one of: {', '.join(PLUGIN_DESCRIPTOR_FILES)}"
        )

    raise PluginDescriptorNotFoundError(str(path))

def _load_from_yaml(path: Path) -> PluginDescriptor:
    """Load and parse a YAML plugin descriptor."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        if data is None:
            raise PluginDescriptorLoadError(str(path), "descriptor is empty")
        return PluginDescriptor(**data)
    except PluginDescriptorLoadError:
        raise
    except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
        raise PluginDescriptorLoadError(str(path), str(e))

def _load_from_json(path: Path) -> PluginDescriptor:
    """Load and parse a JSON plugin descriptor."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return PluginDescriptor(**data)
    except (OSError, ValueError, TypeError) as e:
        raise PluginDescriptorLoadError(str(path), str(e))
