"""Holiday persistence on top of an unreliable key-value store.

The whole holiday list lives as one JSON array under a single key:

    [{"id": "...", "name": "...", "date": "YYYY-MM-DD"}, ...]

Every save rewrites the full array (last write wins). Expected failures
are returned as :class:`StorageError` values rather than raised, so the
caller decides whether to surface, retry or ignore them.
"""

from __future__ import annotations

import contextlib
import errno
import json
import logging
from collections.abc import Sequence
from enum import Enum
from typing import NamedTuple

from longweekend.config import Settings
from longweekend.models import HolidayRecord, coerce_record
from longweekend.stores import KeyValueStore, QuotaExceededError, StorageSecurityError

log = logging.getLogger(__name__)

_CHECK_KEY = "__lw_check__"
_CHECK_VALUE = "1"

# ---------------------------------------------------------------------------
# Error taxonomy
# ---------------------------------------------------------------------------


class StorageErrorType(str, Enum):
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    SECURITY_ERROR = "SECURITY_ERROR"
    GENERIC_ERROR = "GENERIC_ERROR"
    CORRUPTION_ERROR = "CORRUPTION_ERROR"


class StorageError(NamedTuple):
    """A classified storage failure.

    ``message`` is for logs; ``user_message`` is safe to show end users.
    """

    type: StorageErrorType
    message: str
    user_message: str


class LoadResult(NamedTuple):
    holidays: list[HolidayRecord]
    error: StorageError | None
    had_corruption: bool


class QuotaInfo(NamedTuple):
    used: int
    available: int | None = None
    total: int | None = None


_QUOTA_USER_MESSAGE = "Storage is full. Please remove some holidays to free up space."
_SECURITY_USER_MESSAGE = (
    "Unable to access storage. Your browser or environment may be restricting saved data."
)
_CORRUPTION_USER_MESSAGE = "Your saved holidays were corrupted and have been reset."
_GENERIC_USER_MESSAGE = "Unable to save holidays. Please try again later."

_QUOTA_ERRNOS = {errno.ENOSPC, getattr(errno, "EDQUOT", errno.ENOSPC)}

# A payload nested deeper than the interpreter stack is as unreadable as bad syntax.
_PARSE_ERRORS = (json.JSONDecodeError, UnicodeDecodeError, RecursionError)


def _is_quota_error(exc: BaseException) -> bool:
    return isinstance(exc, QuotaExceededError) or (
        isinstance(exc, OSError) and exc.errno in _QUOTA_ERRNOS
    )


def classify_storage_error(exc: BaseException, *, loading: bool = False) -> StorageError:
    """Map an exception raised by a store operation onto the taxonomy.

    The internal message names the condition and the exception class only;
    it never carries stored payload text.
    """
    kind = type(exc).__name__
    if _is_quota_error(exc):
        return StorageError(
            StorageErrorType.QUOTA_EXCEEDED, f"Storage quota exceeded ({kind})", _QUOTA_USER_MESSAGE
        )
    if isinstance(exc, (StorageSecurityError, PermissionError)):
        return StorageError(
            StorageErrorType.SECURITY_ERROR, f"Storage access denied ({kind})", _SECURITY_USER_MESSAGE
        )
    if loading and isinstance(exc, _PARSE_ERRORS):
        return StorageError(
            StorageErrorType.CORRUPTION_ERROR,
            f"Stored holiday data could not be parsed ({kind})",
            _CORRUPTION_USER_MESSAGE,
        )
    return StorageError(
        StorageErrorType.GENERIC_ERROR, f"Storage operation failed ({kind})", _GENERIC_USER_MESSAGE
    )


def _validation_error(detail: str) -> StorageError:
    return StorageError(
        StorageErrorType.GENERIC_ERROR, f"Invalid holiday data: {detail}", _GENERIC_USER_MESSAGE
    )


# ---------------------------------------------------------------------------
# Gateway
# ---------------------------------------------------------------------------


class StorageGateway:
    """Loads, validates and saves the holiday list through a store.

    Parameters
    ----------
    store:
        Any object implementing :class:`~longweekend.stores.KeyValueStore`.
    settings:
        Storage key and quota heuristics. Defaults to :class:`Settings`.
    """

    def __init__(self, store: KeyValueStore, settings: Settings | None = None) -> None:
        self.store = store
        self.settings = settings or Settings()

    @property
    def key(self) -> str:
        return self.settings.storage_key

    # ------------------------------------------------------------------
    # Availability and quota
    # ------------------------------------------------------------------

    def is_storage_available(self) -> bool:
        """Return True if a one-character test value can be written and removed."""
        return self._availability_failure() is None

    def _availability_failure(self) -> Exception | None:
        try:
            self.store.set_item(_CHECK_KEY, _CHECK_VALUE)
            self.store.remove_item(_CHECK_KEY)
        except Exception as exc:
            log.debug("Storage availability check failed: %s", type(exc).__name__)
            with contextlib.suppress(Exception):
                self.store.remove_item(_CHECK_KEY)
            return exc
        return None

    def get_storage_quota_info(self) -> QuotaInfo:
        """Estimate characters used across every key, against the configured quota."""
        try:
            used = 0
            for key in self.store.keys():
                value = self.store.get_item(key)
                used += len(key) + (len(value) if value is not None else 0)
        except Exception as exc:
            log.debug("Could not introspect store: %s", type(exc).__name__)
            return QuotaInfo(used=0)
        total = self.settings.quota_bytes
        return QuotaInfo(used=used, available=max(total - used, 0), total=total)

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    def load_holidays(self) -> LoadResult:
        """Read the stored holiday list, recovering from corrupted data.

        A payload that is not JSON at all is reported as a
        ``CORRUPTION_ERROR`` and removed so the next load starts clean.
        Individually invalid entries are dropped and only flagged through
        ``had_corruption``.
        """
        failure = self._availability_failure()
        # A full store can still be read.
        if failure is not None and not _is_quota_error(failure):
            return LoadResult([], None, False)

        try:
            raw = self.store.get_item(self.key)
            if not raw:
                return LoadResult([], None, False)
            parsed = json.loads(raw)
        except _PARSE_ERRORS as exc:
            error = classify_storage_error(exc, loading=True)
            log.error("Failed to load holidays: %s; clearing stored value", error.message)
            self._discard_corrupted()
            return LoadResult([], error, True)
        except Exception as exc:
            error = classify_storage_error(exc, loading=True)
            log.error("Failed to load holidays: %s", error.message)
            return LoadResult([], error, False)

        if not isinstance(parsed, list):
            log.warning(
                "Stored holidays are a %s, not a list; ignoring them", type(parsed).__name__
            )
            return LoadResult([], None, True)

        holidays: list[HolidayRecord] = []
        seen_ids: set[str] = set()
        for entry in parsed:
            record = coerce_record(entry)
            if record is None or record.id in seen_ids:
                continue
            seen_ids.add(record.id)
            holidays.append(record)

        dropped = len(parsed) - len(holidays)
        if dropped:
            log.warning(
                "Removed %d invalid holiday entries out of %d total", dropped, len(parsed)
            )
        return LoadResult(holidays, None, dropped > 0)

    def _discard_corrupted(self) -> None:
        try:
            self.store.remove_item(self.key)
        except Exception as exc:
            log.warning("Could not clear corrupted holidays: %s", type(exc).__name__)

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def save_holidays(self, holidays: Sequence[HolidayRecord]) -> StorageError | None:
        """Overwrite the stored list with *holidays*.

        Returns None on success. Invalid input is rejected before the store
        is touched.
        """
        if not isinstance(holidays, (list, tuple)):
            error = _validation_error(f"expected a list, got {type(holidays).__name__}")
            log.error("Refusing to save holidays: %s", error.message)
            return error

        records: list[HolidayRecord] = []
        seen_ids: set[str] = set()
        for index, item in enumerate(holidays):
            record = coerce_record(item)
            if record is None:
                error = _validation_error(f"entry {index} is not a valid holiday")
                log.error("Refusing to save holidays: %s", error.message)
                return error
            if record.id in seen_ids:
                error = _validation_error(f"entry {index} repeats an existing id")
                log.error("Refusing to save holidays: %s", error.message)
                return error
            seen_ids.add(record.id)
            records.append(record)

        failure = self._availability_failure()
        if failure is not None and not _is_quota_error(failure):
            error = StorageError(
                StorageErrorType.SECURITY_ERROR,
                "Storage is unavailable or disabled",
                _SECURITY_USER_MESSAGE,
            )
            log.error("Failed to save holidays: %s", error.message)
            return error

        payload = json.dumps([r.to_dict() for r in records])
        self._warn_if_near_quota(len(self.key) + len(payload))

        try:
            self.store.set_item(self.key, payload)
        except Exception as exc:
            error = classify_storage_error(exc)
            log.error("Failed to save holidays: %s", error.message)
            return error

        log.debug("Saved %d holidays (%d chars)", len(records), len(payload))
        return None

    def _warn_if_near_quota(self, size: int) -> None:
        threshold = self.settings.quota_warning_bytes
        if size > threshold:
            log.warning(
                "Holiday data is %d chars, above the %d-char warning threshold "
                "(quota %d)",
                size,
                threshold,
                self.settings.quota_bytes,
            )
