from typing import Dict, Iterator, Optional, Tuple
from pathlib import Path
import json
from podweave.core.constants import LEDGER_FILE
from podweave.core.models import DependencyKind
from podweave.core.exceptions import (
    LedgerLoadError,
    LedgerEntryNotFoundError,
    PersistenceError,
)

# ==============================================================
# POD LEDGER CLASS
# ==============================================================

class PodsLedger:
    """
    Reference-counted record of every pod unit added by plugins (pods.json).

    Layout:
        {
          "declarations": {"use_frameworks!": {"declaration": "use_frameworks!", "count": 2}},
          "sources":      {"<key>": {"source": "https://...", "count": 1}},
          "libraries":    {"<key>": {"name": "AFNetworking", "spec": "~> 4.0", "count": 1}}
        }

    An entry exists only while its count is positive: decrementing to zero
    deletes it.
    """

    def __init__(self, project_dir: str | Path):
        self.project_dir: Path = Path(project_dir)
        self.ledger_path: Path = self.project_dir / LEDGER_FILE
        self._data: Optional[Dict] = None

    def load(self) -> Dict:
        """Load ledger data and cache it."""
        data = self._empty()
        if self.ledger_path.exists():
            try:
                json_data = json.loads(self.ledger_path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
                raise LedgerLoadError(str(self.ledger_path), str(e))

            if not isinstance(json_data, dict):
                raise LedgerLoadError(str(self.ledger_path), "top-level value must be an object")

            if any(kind.value in json_data for kind in DependencyKind):
                for kind in DependencyKind:
                    section = json_data.get(kind.value)
                    if section is None:
                        section = {}
                    if not isinstance(section, dict):
                        raise LedgerLoadError(str(self.ledger_path), f"'{kind.value}' must be an object")
                    data[kind.value] = section
            else:
                data[DependencyKind.LIBRARY.value] = self._migrate_flat(json_data)

        self._data = data
        return data

    def write(self) -> None:
        """Serialize the full ledger, overwriting prior content."""
        if self._data is None:
            self.load()
        try:
            self.ledger_path.parent.mkdir(parents=True, exist_ok=True)
            self.ledger_path.write_text(
                json.dumps(self._data, indent=2, ensure_ascii=False) + "\n",
                encoding="utf-8"
            )
        except OSError as e:
            raise PersistenceError(str(self.ledger_path), str(e))

    def get(self, kind: DependencyKind, key: str) -> Optional[Dict]:
        """Get a ledger entry, or None if not registered."""
        entry = self._section(kind).get(key)
        return dict(entry) if entry is not None else None

    def count(self, kind: DependencyKind, key: str) -> int:
        entry = self._section(kind).get(key)
        return int(entry.get("count", 0)) if entry else 0

    def set_entry(self, kind: DependencyKind, key: str, payload: Dict) -> None:
        """Register a new entry with a reference count of 1."""
        entry = {k: v for k, v in payload.items() if k != "count"}
        entry["count"] = 1
        self._section(kind)[key] = entry

    def increment(self, kind: DependencyKind, key: str) -> int:
        """Add one reference to an existing entry and return the new count."""
        section = self._section(kind)
        if key not in section:
            raise LedgerEntryNotFoundError(kind.value, key)
        section[key]["count"] = int(section[key].get("count", 0)) + 1
        return section[key]["count"]

    def decrement(self, kind: DependencyKind, key: str) -> int:
        """
        Drop one reference and return the remaining count.

        The count never goes below zero; an entry reaching zero is removed.
        Decrementing an unknown key is a no-op returning 0.
        """
        section = self._section(kind)
        if key not in section:
            return 0
        remaining = max(int(section[key].get("count", 0)) - 1, 0)
        if remaining == 0:
            del section[key]
        else:
            section[key]["count"] = remaining
        return remaining

    def entries(self, kind: DependencyKind) -> Iterator[Tuple[str, Dict]]:
        """Iterate (key, entry) pairs of a kind in insertion order."""
        for key, entry in self._section(kind).items():
            yield key, dict(entry)

    def to_dict(self) -> Dict:
        if self._data is None:
            self.load()
        return json.loads(json.dumps(self._data))

    def _section(self, kind: DependencyKind) -> Dict:
        if self._data is None:
            self.load()
        data: Dict = self._data # type: ignore
        return data.setdefault(kind.value, {})

    @staticmethod
    def _empty() -> Dict:
        return {kind.value: {} for kind in DependencyKind}

    @staticmethod
    def _migrate_flat(json_data: Dict) -> Dict:
        """Older pods.json files kept libraries at the top level."""
        libraries = {}
        for key, entry in json_data.items():
            if isinstance(entry, dict) and "count" in entry:
                migrated = {k: v for k, v in entry.items() if k != "type"}
                migrated.setdefault("name", key)
                libraries[key] = migrated
        return libraries
