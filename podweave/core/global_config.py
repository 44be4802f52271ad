# podweave/core/global_config.py

from pathlib import Path
from typing import Optional, Any
import yaml

from podweave.core.constants import GLOBAL_CONFIG_DIR


def global_config_path() -> Path:
    return Path.home() / GLOBAL_CONFIG_DIR / "config.yaml"


def load_global_config() -> Optional[dict]:
    """Load config from ~/.podweave/config.yaml"""
    config_path = global_config_path()

    if not config_path.exists():
        return None

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError):
        return None
    return data if isinstance(data, dict) else None


def get_global_default() -> dict:
    """Defaults shared by every project, from the 'defaults' section of the global config."""
    config = load_global_config()
    if config and isinstance(config.get("defaults"), dict):
        return config["defaults"]
    return {}


def set_global(key, value: Any):
    """Set global configuration key in ~/.podweave/config.yaml"""
    config_path = global_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # Load existing config or create new
    config = load_global_config() or {}
    config[key] = value

    config_path.write_text(yaml.dump(config, default_flow_style=False), encoding="utf-8")


def set_global_default(key: str, value: Any):
    defaults = get_global_default()
    defaults[key] = value
    set_global("defaults", defaults)
