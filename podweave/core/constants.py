# ==============================================================
# CONSTANTS
# ==============================================================
from pathlib import Path


LEDGER_FILE = "pods.json"
CONFIG_FILE = Path(".podweave/config.yaml")
GLOBAL_CONFIG_DIR = ".podweave"
PLUGIN_DESCRIPTOR_FILES = ("plugin.yaml", "plugin.yml", "plugin.json")
