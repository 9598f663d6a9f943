from __future__ import annotations

import hashlib
import logging
import os
import threading
import time
from pathlib import Path
from typing import Callable

from ...config import AUDIO_CACHE_DIR, AUDIO_CACHE_MAX_AGE, AUDIO_CACHE_MAX_BYTES

logger = logging.getLogger(__name__)


def cache_key(url: str) -> str:
    return hashlib.sha1(url.encode("utf-8")).hexdigest() + ".audio"


class AudioCache:
    """Pronunciation audio on disk, keyed by URL.

    Entries older than ``max_age`` seconds are refetched on access. ``cleanup``
    first evicts the least recently modified files until the directory fits in
    ``max_bytes``, then removes every expired file regardless of size.
    """

    def __init__(
        self,
        fetch: Callable[[str], bytes],
        directory: str | Path = AUDIO_CACHE_DIR,
        max_bytes: int = AUDIO_CACHE_MAX_BYTES,
        max_age: float = AUDIO_CACHE_MAX_AGE,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._fetch = fetch
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self.max_bytes = max_bytes
        self.max_age = max_age
        self._clock = clock
        self._lock = threading.Lock()

    def path_for(self, url: str) -> Path:
        return self.directory / cache_key(url)

    def _is_fresh(self, path: Path) -> bool:
        try:
            return self._clock() - path.stat().st_mtime < self.max_age
        except FileNotFoundError:
            return False

    def get(self, url: str) -> bytes:
        path = self.path_for(url)
        with self._lock:
            if self._is_fresh(path):
                return path.read_bytes()

        data = self._fetch(url)
        with self._lock:
            path.write_bytes(data)
            now = self._clock()
            os.utime(path, (now, now))
            self._cleanup_locked()
        return data

    def cleanup(self) -> None:
        with self._lock:
            self._cleanup_locked()

    def _cleanup_locked(self) -> None:
        try:
            files = [path for path in self.directory.iterdir() if path.is_file()]
        except OSError as exc:
            logger.warning("Audio cache cleanup failed: %s", exc)
            return

        stats = {}
        for path in files:
            try:
                stats[path] = path.stat()
            except FileNotFoundError:
                continue

        total = sum(stat.st_size for stat in stats.values())
        for path in sorted(stats, key=lambda item: stats[item].st_mtime):
            if total <= self.max_bytes:
                break
            path.unlink(missing_ok=True)
            total -= stats[path].st_size

        now = self._clock()
        for path, stat in stats.items():
            if now - stat.st_mtime >= self.max_age:
                path.unlink(missing_ok=True)

    def clear(self) -> None:
        with self._lock:
            for path in self.directory.iterdir():
                if path.is_file():
                    path.unlink(missing_ok=True)


__all__ = ["AudioCache", "cache_key"]
