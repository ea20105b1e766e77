"""Key-value store backends used by the storage gateway.

A store maps string keys to string values, in the manner of a browser's
local storage. The gateway only talks to the :class:`KeyValueStore`
protocol, so tests can inject :class:`MemoryStore` and the CLI uses
:class:`DirectoryStore`.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

log = logging.getLogger(__name__)


class StoreError(Exception):
    """Base class for failures raised by a store backend."""


class QuotaExceededError(StoreError):
    """The write would exceed the store's capacity."""


class StorageSecurityError(StoreError):
    """The store refuses access (disabled, sandboxed, private mode...)."""


class KeyValueStore(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...

    def keys(self) -> list[str]: ...


# ---------------------------------------------------------------------------
# In-memory backend
# ---------------------------------------------------------------------------


class MemoryStore:
    """Dict-backed store.

    Parameters
    ----------
    initial:
        Optional starting contents.
    quota_bytes:
        When set, a write that would push the summed key and value
        lengths past this size raises :class:`QuotaExceededError`.
    disabled:
        While true every operation raises :class:`StorageSecurityError`.
    """

    def __init__(
        self,
        initial: dict[str, str] | None = None,
        *,
        quota_bytes: int | None = None,
        disabled: bool = False,
    ) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self.quota_bytes = quota_bytes
        self.disabled = disabled

    def _check_access(self) -> None:
        if self.disabled:
            raise StorageSecurityError("store is disabled")

    def get_item(self, key: str) -> str | None:
        self._check_access()
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._check_access()
        if self.quota_bytes is not None:
            used = sum(len(k) + len(v) for k, v in self._data.items() if k != key)
            if used + len(key) + len(value) > self.quota_bytes:
                raise QuotaExceededError(
                    f"write of {len(value)} chars exceeds quota of {self.quota_bytes}"
                )
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._check_access()
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        self._check_access()
        return list(self._data)


# ---------------------------------------------------------------------------
# File backend
# ---------------------------------------------------------------------------


class DirectoryStore:
    """One UTF-8 file per key inside *root*.

    The directory is created on the first write. Writes land in a temp
    file that is then moved over the target, so a reader never sees a
    half-written value.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        if not key or key in (".", "..") or "/" in key or os.sep in key:
            raise ValueError(f"Invalid store key {key!r}")
        return self.root / key

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        self.root.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.root, prefix=".tmp-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp, path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        log.debug("Wrote %d chars to %s", len(value), path)

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def keys(self) -> list[str]:
        if not self.root.is_dir():
            return []
        return sorted(
            p.name for p in self.root.iterdir() if p.is_file() and not p.name.startswith(".tmp-")
        )
