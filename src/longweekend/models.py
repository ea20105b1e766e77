"""Holiday records and the recommendation types derived from them."""

from __future__ import annotations

import random
import time
import uuid
from collections.abc import Mapping
from typing import NamedTuple

# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


class HolidayRecord(NamedTuple):
    """A user-entered holiday. ``date`` is an ISO ``YYYY-MM-DD`` string."""

    id: str
    name: str
    date: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name, "date": self.date}


class Recommendation(NamedTuple):
    """A suggested extra day off next to an existing holiday."""

    holiday_name: str
    holiday_date: str
    holiday_day_of_week: str
    recommended_date: str
    recommended_day: str
    explanation: str

    def to_dict(self) -> dict[str, str]:
        return self._asdict()


class BridgeSuggestion(NamedTuple):
    """Working days that join two nearby holidays into one long vacation."""

    holiday_names: tuple[str, str]
    start_date: str
    end_date: str
    bridge_dates: list[str]
    total_days: int
    explanation: str

    def to_dict(self) -> dict[str, object]:
        return {
            "holiday_names": list(self.holiday_names),
            "start_date": self.start_date,
            "end_date": self.end_date,
            "bridge_dates": list(self.bridge_dates),
            "total_days": self.total_days,
            "explanation": self.explanation,
        }


# ---------------------------------------------------------------------------
# Construction and validation
# ---------------------------------------------------------------------------


def new_holiday_id() -> str:
    """Return a fresh opaque id.

    Falls back to ``<millis>-<random>`` in hex when the platform has no
    random source for :func:`uuid.uuid4`.
    """
    try:
        return str(uuid.uuid4())
    except NotImplementedError:
        millis = int(time.time() * 1000)
        return f"{millis:x}-{random.getrandbits(48):012x}"


def create_holiday(name: str, date: str) -> HolidayRecord:
    """Build a new record with a freshly generated id."""
    return HolidayRecord(id=new_holiday_id(), name=name, date=date)


def coerce_record(obj: object) -> HolidayRecord | None:
    """Return *obj* as a :class:`HolidayRecord`, or *None* if it is invalid.

    Accepts records and mappings carrying ``id``, ``name`` and ``date``.
    All three must be strings that are non-empty after stripping.
    """
    if isinstance(obj, HolidayRecord):
        fields = (obj.id, obj.name, obj.date)
    elif isinstance(obj, Mapping):
        fields = (obj.get("id"), obj.get("name"), obj.get("date"))
    else:
        return None
    for value in fields:
        if not isinstance(value, str) or not value.strip():
            return None
    return obj if isinstance(obj, HolidayRecord) else HolidayRecord(*fields)  # type: ignore[arg-type]


def is_valid_record(obj: object) -> bool:
    return coerce_record(obj) is not None
