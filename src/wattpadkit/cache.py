"""Content-addressed disk cache for raw response bodies.

One file per entry, named ``<md5 hex of the request URL>.cache``, holding the
unmodified response text. No envelope, no metadata, no expiry.

All cache operations catch ``OSError`` internally and degrade gracefully:
read failures return ``None`` (treated as cache miss by callers) after a
best-effort delete of the unreadable entry, write failures are logged and
ignored (fetched content is still returned). Filesystem errors never cross
the DiskCache class boundary.

Writes go to a temporary file in the same directory and are moved into place
with ``os.replace``, so a reader sees either the whole previous value, the
whole new value, or no entry at all.
"""

from __future__ import annotations

import hashlib
import os
import re
import tempfile
from pathlib import Path

import structlog

log = structlog.get_logger()

CACHE_SUFFIX = ".cache"
_ENTRY_NAME_RE = re.compile(r"^[0-9a-f]{32}\.cache$")
# Leftovers from a put that died between mkstemp and os.replace.
_TEMP_NAME_RE = re.compile(r"^\.[0-9a-f]{32}\..*\.tmp$")


def cache_key(url: str) -> str:
    """Derive the entry key for a request URL: lowercase hex MD5 of the full string."""
    return hashlib.md5(url.encode("utf-8"), usedforsecurity=False).hexdigest()


class DiskCache:
    """File-per-entry cache implementing CacheProtocol.

    Safe for concurrent readers and writers on different keys. Two writers
    racing on the same key both succeed; the last ``os.replace`` wins.
    """

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self._dir = Path(directory).expanduser()

    @property
    def directory(self) -> Path:
        return self._dir

    def path_for(self, key: str) -> Path:
        return self._dir / f"{cache_key(key)}{CACHE_SUFFIX}"

    def get(self, key: str) -> str | None:
        """Read an entry. Returns ``None`` on cache miss or read failure.

        Empty bodies are never stored, so a zero-length entry is damaged and
        handled like any other unreadable one.
        """
        path = self.path_for(key)
        try:
            with open(path, encoding="utf-8", newline="") as fh:
                value = fh.read()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError):
            log.warning("cache_read_error", key=key, path=str(path), exc_info=True)
            self._discard(path)
            return None
        if not value:
            log.warning("cache_read_error", key=key, path=str(path), reason="empty entry")
            self._discard(path)
            return None
        return value

    def put(self, key: str, value: str) -> bool:
        """Write an entry, replacing any previous value. Non-fatal on failure."""
        path = self.path_for(key)
        tmp_name: str | None = None
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._dir, prefix=f".{path.stem}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
                fh.write(value)
            os.replace(tmp_name, path)
            return True
        except OSError:
            log.warning("cache_write_error", key=key, path=str(path), exc_info=True)
            if tmp_name is not None:
                self._discard(Path(tmp_name))
            return False

    def remove(self, key: str) -> bool:
        """Delete an entry. Returns True only if an entry existed and was removed."""
        path = self.path_for(key)
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError:
            log.warning("cache_remove_error", key=key, path=str(path), exc_info=True)
            return False

    def clear(self) -> None:
        """Delete every cache-managed entry and any stale temp files left by
        interrupted writes. Other files in the directory are left alone."""
        if not self._dir.is_dir():
            return
        removed = 0
        try:
            for entry in self._dir.iterdir():
                if not (
                    _ENTRY_NAME_RE.match(entry.name) or _TEMP_NAME_RE.match(entry.name)
                ):
                    continue
                try:
                    entry.unlink()
                    removed += 1
                except FileNotFoundError:
                    continue
                except OSError:
                    log.warning("cache_remove_error", path=str(entry), exc_info=True)
        except OSError:
            log.warning("cache_clear_error", directory=str(self._dir), exc_info=True)
        log.info("cache_cleared", directory=str(self._dir), removed=removed)

    def _discard(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError:
            log.warning("cache_remove_error", path=str(path), exc_info=True)
