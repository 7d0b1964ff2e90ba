"""Session-keyed storage for the last known token total."""

import logging
import re
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

CACHE_FILE_PREFIX = "statusline_cache_"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class CacheStore(Protocol):
    """Best-effort integer store keyed by session id.

    Implementations never raise: `get` returns None when no usable value
    exists and `set` returns False when the write did not happen.
    """

    def get(self, key: str) -> int | None: ...

    def set(self, key: str, value: int) -> bool: ...


class MemoryCacheStore:
    """In-memory CacheStore."""

    def __init__(self, values: dict[str, int] | None = None) -> None:
        self.values: dict[str, int] = dict(values or {})

    def get(self, key: str) -> int | None:
        return self.values.get(key)

    def set(self, key: str, value: int) -> bool:
        self.values[key] = value
        return True


class FileCacheStore:
    """CacheStore holding one decimal integer per file.

    Files live at `<directory>/statusline_cache_<key>`, with characters outside
    `[A-Za-z0-9._-]` in the key replaced by `_`. Distinct ids can therefore
    share a file (`a/b` and `a_b`). Concurrent writers for the same file are
    not synchronized; the last write wins.
    """

    def __init__(self, directory: Path | str) -> None:
        self._directory = Path(directory)

    def path_for(self, key: str) -> Path:
        """Return the cache file path for a session key."""
        safe_key = _UNSAFE_CHARS.sub("_", key) or "default"
        return self._directory / f"{CACHE_FILE_PREFIX}{safe_key}"

    def get(self, key: str) -> int | None:
        path = self.path_for(key)
        try:
            content = path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            logger.debug("no cached total at %s", path)
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("failed to read cache %s: %s", path, e)
            return None

        try:
            value = int(content)
        except ValueError:
            logger.debug("ignoring corrupt cache %s: %r", path, content)
            return None

        if value < 0:
            logger.debug("ignoring negative cached total in %s", path)
            return None
        return value

    def set(self, key: str, value: int) -> bool:
        path = self.path_for(key)
        try:
            path.write_text(str(value), encoding="utf-8")
        except OSError as e:
            logger.debug("failed to write cache %s: %s", path, e)
            return False
        return True
