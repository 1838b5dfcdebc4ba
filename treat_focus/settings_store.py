import os
import json
import logging
import threading

from .utils import ensure_dir


def _same_shape(value, fallback) -> bool:
    if fallback is None:
        return True
    if isinstance(fallback, bool):
        return isinstance(value, bool)
    if isinstance(fallback, int):
        return isinstance(value, int) and not isinstance(value, bool)
    if isinstance(fallback, float):
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    return isinstance(value, type(fallback))


class SettingsStore:
    def __init__(self, path: str, logger: logging.Logger):
        self._path = path
        self._logger = logger
        self._lock = threading.Lock()
        self._raw: dict[str, str] = {}

    def refresh(self) -> None:
        ensure_dir(os.path.dirname(self._path))
        if not os.path.exists(self._path):
            return
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except Exception:
            self._logger.warning(f"Settings file unreadable, using defaults path={self._path}")
            return
        if not isinstance(data, dict):
            return
        with self._lock:
            self._raw = {str(k): v for k, v in data.items() if isinstance(v, str)}

    def load(self, key: str, fallback):
        with self._lock:
            text = self._raw.get(key)
        if not text:
            return fallback
        try:
            value = json.loads(text)
        except ValueError:
            return fallback
        if not _same_shape(value, fallback):
            return fallback
        return value

    def save(self, key: str, value) -> None:
        try:
            text = json.dumps(value)
        except (TypeError, ValueError):
            self._logger.warning(f"Settings value not serializable key={key}")
            return
        with self._lock:
            self._raw[key] = text
            data = dict(self._raw)
        try:
            ensure_dir(os.path.dirname(self._path))
            with open(self._path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except Exception:
            self._logger.warning(f"Settings save failed key={key}")
