"""
Local Key-Value Storage
=======================
JSON file-backed store playing the role of browser local storage.

Design Principles:
- One JSON object on disk, keyed by human-readable names
- Best-effort: unreadable files and corrupt values are logged and the
  caller's default is used, so the dashboard always renders
- No schema versioning or migration
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from brewboard.utils.logger import get_logger

logger = get_logger(__name__)

_MISSING = object()


class LocalStore:
    """
    Persist small JSON blobs under string keys.

    Usage
    -----
    >>> store = LocalStore("data/local_storage.json")
    >>> store.save_json("catalog", [])
    >>> store.load_json("catalog", default=[])
    []
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    # ------------------------------------------------------------------
    # Raw file access
    # ------------------------------------------------------------------

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read local storage at {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Local storage at {self.path} is not a JSON object; ignoring it")
            return {}
        return data

    def _write_all(self, data: Dict[str, Any]) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + '.tmp')
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, default=str)
            tmp_path.replace(self.path)
            return True
        except OSError as e:
            logger.warning(f"Could not write local storage at {self.path}: {e}")
            return False

    # ------------------------------------------------------------------
    # Local-storage style API (string values)
    # ------------------------------------------------------------------

    def get_item(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) or value is None else json.dumps(value)

    def set_item(self, key: str, value: str) -> bool:
        data = self._read_all()
        data[key] = value
        return self._write_all(data)

    def remove_item(self, key: str) -> bool:
        data = self._read_all()
        if key not in data:
            return True
        del data[key]
        return self._write_all(data)

    def keys(self) -> List[str]:
        return list(self._read_all().keys())

    def clear(self) -> bool:
        return self._write_all({})

    # ------------------------------------------------------------------
    # JSON helpers
    # ------------------------------------------------------------------

    def load_json(self, key: str, default: Any = None) -> Any:
        """
        Load and decode the JSON stored under ``key``.

        Returns ``default`` when the key is absent or its value does not
        decode.
        """
        raw = self._read_all().get(key, _MISSING)
        if raw is _MISSING or raw is None:
            return default
        if not isinstance(raw, str):
            return raw
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Stored value for '{key}' is not valid JSON ({e}); using default")
            return default

    def save_json(self, key: str, value: Any) -> bool:
        return self.set_item(key, json.dumps(value, default=str))
