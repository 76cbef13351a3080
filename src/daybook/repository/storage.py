# SPDX-License-Identifier: MIT

import logging
import os
import re
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Protocol

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")

# A lock older than this is left over from a crashed writer
_LOCK_STALE_SECONDS = 30.0
_LOCK_POLL_SECONDS = 0.02


class StaleDataError(RuntimeError):
    """The stored value changed between the last read and the attempted write."""

    def __init__(self, key: str) -> None:
        super().__init__(f"'{key}' was modified by another process")
        self.key = key


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, text: str) -> None: ...

    def compare_and_set(self, key: str, expected: Optional[str], text: str) -> bool: ...

    def location(self, key: str) -> str: ...


class FileKeyValueStore:
    """
    Durable key-value store keeping one file per key.

    Values are opaque text; ``None`` from ``get`` means the key was never
    written.
    """

    def __init__(
        self, base_path: Path, suffix: str = ".yaml", lock_timeout: float = 5.0
    ) -> None:
        self.base_path = base_path
        self.suffix = suffix
        self.lock_timeout = lock_timeout

    def _path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"invalid storage key: '{key}'")
        return self.base_path / f"{key}{self.suffix}"

    def location(self, key: str) -> str:
        return str(self._path_for(key))

    def get(self, key: str) -> Optional[str]:
        file_path = self._path_for(key)
        if not file_path.is_file():
            logger.debug("storage key '%s' is absent", key)
            return None
        return file_path.read_text(encoding="utf-8")

    def set(self, key: str, text: str) -> None:
        file_path = self._path_for(key)
        self.base_path.mkdir(parents=True, exist_ok=True)

        # Write next to the target and swap it in so readers never see half a file
        temp_path = file_path.with_name(f".{file_path.name}.tmp")
        temp_path.write_text(text, encoding="utf-8")
        os.replace(temp_path, file_path)
        logger.debug("wrote storage key '%s' (%d chars)", key, len(text))

    def compare_and_set(self, key: str, expected: Optional[str], text: str) -> bool:
        """
        Write ``text`` only if the current value equals ``expected``.

        ``expected=None`` means the key must still be absent. The compare and
        the write happen under an exclusive lock file, so of two writers that
        read the same value only one succeeds. A lock that cannot be taken
        within ``lock_timeout`` seconds counts as a conflict.
        """
        with self._locked(key) as locked:
            if not locked:
                logger.warning("storage key '%s' is locked by another writer", key)
                return False

            current = self.get(key)
            if current != expected:
                logger.warning("storage key '%s' changed since it was read", key)
                return False
            self.set(key, text)
            return True

    @contextmanager
    def _locked(self, key: str) -> Iterator[bool]:
        lock_path = self._path_for(key).with_name(f".{key}.lock")
        self.base_path.mkdir(parents=True, exist_ok=True)

        locked = self._acquire_lock(lock_path)
        try:
            yield locked
        finally:
            if locked:
                lock_path.unlink(missing_ok=True)

    def _acquire_lock(self, lock_path: Path) -> bool:
        deadline = time.monotonic() + self.lock_timeout
        while True:
            try:
                os.close(os.open(lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY))
                return True
            except FileExistsError:
                if self._remove_stale_lock(lock_path):
                    continue
                if time.monotonic() >= deadline:
                    return False
                time.sleep(_LOCK_POLL_SECONDS)

    def _remove_stale_lock(self, lock_path: Path) -> bool:
        try:
            age = time.time() - lock_path.stat().st_mtime
        except FileNotFoundError:
            # Released in the meantime
            return True
        if age < _LOCK_STALE_SECONDS:
            return False

        logger.warning("removing stale lock %s", lock_path)
        lock_path.unlink(missing_ok=True)
        return True


class MemoryKeyValueStore:
    """In-process store with the same contract as FileKeyValueStore."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._values: dict[str, str] = dict(initial) if initial is not None else {}

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, text: str) -> None:
        self._values[key] = text

    def compare_and_set(self, key: str, expected: Optional[str], text: str) -> bool:
        if self._values.get(key) != expected:
            return False
        self._values[key] = text
        return True

    def location(self, key: str) -> str:
        return f"<memory>/{key}"
