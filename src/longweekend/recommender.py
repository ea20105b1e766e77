"""Long Weekend Recommendations

Suggest single extra days off that turn an existing holiday into a
4-day weekend:

  Thursday holiday -> take the Friday after   (Thu-Fri-Sat-Sun)
  Tuesday holiday  -> take the Monday before  (Sat-Sun-Mon-Tue)

Holidays on any other weekday produce nothing. A suggested day that is
already a holiday is dropped. Everything here is pure date arithmetic on
``datetime.date``; malformed entries are skipped rather than raised.
"""

from __future__ import annotations

import datetime
import re
from collections.abc import Iterable, Sequence
from typing import NamedTuple

from longweekend.models import BridgeSuggestion, HolidayRecord, Recommendation, coerce_record

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY = range(5)
MAX_BRIDGE_WORKDAYS = 4

# ---------------------------------------------------------------------------
# Date helpers
# ---------------------------------------------------------------------------


def parse_holiday_date(value: object) -> datetime.date | None:
    """Parse a strict ``YYYY-MM-DD`` string, or return None if it is not a real date."""
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        return None
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        return None


def _short_date(d: datetime.date) -> str:
    return f"{d.strftime('%b')} {d.day}"


def _extend_over_weekends(
    start: datetime.date, end: datetime.date
) -> tuple[datetime.date, datetime.date]:
    """Grow [start, end] outward across adjacent Saturdays and Sundays."""
    one = datetime.timedelta(days=1)
    while (start - one).weekday() >= 5:
        start -= one
    while (end + one).weekday() >= 5:
        end += one
    return start, end


class _ParsedHoliday(NamedTuple):
    record: HolidayRecord
    date: datetime.date


def _parse_all(holidays: Iterable[object]) -> list[_ParsedHoliday]:
    parsed: list[_ParsedHoliday] = []
    for item in holidays:
        record = coerce_record(item)
        if record is None:
            continue
        d = parse_holiday_date(record.date)
        if d is None:
            continue
        parsed.append(_ParsedHoliday(record, d))
    return parsed


# ---------------------------------------------------------------------------
# Single-day recommendations
# ---------------------------------------------------------------------------

# weekday -> offset of the day to take off
_ADJACENT_DAY_OFFSETS: dict[int, int] = {
    THURSDAY: 1,
    TUESDAY: -1,
}


def calculate_recommendations(holidays: Sequence[HolidayRecord]) -> list[Recommendation]:
    """Return extra days off that make long weekends, ordered by holiday date.

    Raises ``TypeError`` if *holidays* is not a list or tuple. Entries that
    are not valid records or whose date does not parse are skipped.
    """
    if not isinstance(holidays, (list, tuple)):
        raise TypeError(f"holidays must be a list, not {type(holidays).__name__}")

    parsed = _parse_all(holidays)
    taken = {p.date for p in parsed}

    recommendations: list[Recommendation] = []
    for record, d in parsed:
        offset = _ADJACENT_DAY_OFFSETS.get(d.weekday())
        if offset is None:
            continue
        day_off = d + datetime.timedelta(days=offset)
        if day_off in taken:
            continue

        start, end = _extend_over_weekends(min(d, day_off), max(d, day_off))
        length = (end - start).days + 1
        day_name = day_off.strftime("%A")
        recommendations.append(
            Recommendation(
                holiday_name=record.name,
                holiday_date=record.date,
                holiday_day_of_week=d.strftime("%A"),
                recommended_date=day_off.isoformat(),
                recommended_day=day_name,
                explanation=(
                    f"Take {day_name}, {_short_date(day_off)} off to make a "
                    f"{length}-day weekend!"
                ),
            )
        )

    # ISO strings sort chronologically; sorted() is stable.
    return sorted(recommendations, key=lambda r: r.holiday_date)


# ---------------------------------------------------------------------------
# Bridges between nearby holidays
# ---------------------------------------------------------------------------


# (first weekday, second weekday) of two holidays on consecutive days ->
# ways to extend them, as offsets from the first holiday.
_BACK_TO_BACK_OPTIONS: dict[tuple[int, int], list[tuple[int, ...]]] = {
    (WEDNESDAY, THURSDAY): [(2,), (-1, 2)],
    (THURSDAY, FRIDAY): [(4,)],
    (MONDAY, TUESDAY): [(-3,)],
}


def _bridge(
    names: tuple[str, str], holiday_dates: Sequence[datetime.date], workdays: list[datetime.date]
) -> BridgeSuggestion:
    start, end = _extend_over_weekends(
        min(*holiday_dates, *workdays), max(*holiday_dates, *workdays)
    )
    total = (end - start).days + 1
    n = len(workdays)
    if workdays[0] > holiday_dates[0] and workdays[-1] < holiday_dates[-1]:
        where = "between"
    else:
        where = "around"
    return BridgeSuggestion(
        holiday_names=names,
        start_date=start.isoformat(),
        end_date=end.isoformat(),
        bridge_dates=[w.isoformat() for w in workdays],
        total_days=total,
        explanation=(
            f"Take {n} day{'s' if n > 1 else ''} off {where} {names[0]} and "
            f"{names[1]} for a {total}-day vacation!"
        ),
    )


def find_holiday_bridges(holidays: Sequence[HolidayRecord]) -> list[BridgeSuggestion]:
    """Find pairs of holidays that a few days off join into one vacation.

    For each pair of consecutive holiday dates with 1 to
    ``MAX_BRIDGE_WORKDAYS`` weekdays between them, suggest taking those
    weekdays off. Holidays on back-to-back days (Wed+Thu, Thu+Fri, Mon+Tue)
    are instead extended outward toward the nearest weekend, skipping any
    option that would land on another holiday. Each vacation is measured
    from its first day off to its last, extended over adjacent weekends.
    """
    if not isinstance(holidays, (list, tuple)):
        raise TypeError(f"holidays must be a list, not {type(holidays).__name__}")

    # First name wins when several entries share a date.
    by_date: dict[datetime.date, str] = {}
    for record, d in _parse_all(holidays):
        by_date.setdefault(d, record.name)
    dates = sorted(by_date)

    one = datetime.timedelta(days=1)
    suggestions: list[BridgeSuggestion] = []
    for first, second in zip(dates, dates[1:]):
        names = (by_date[first], by_date[second])

        if second - first == one:
            for offsets in _BACK_TO_BACK_OPTIONS.get((first.weekday(), second.weekday()), []):
                days_off = [first + datetime.timedelta(days=o) for o in offsets]
                if any(d in by_date for d in days_off):
                    continue
                suggestions.append(_bridge(names, (first, second), days_off))
            continue

        workdays: list[datetime.date] = []
        d = first + one
        while d < second and len(workdays) <= MAX_BRIDGE_WORKDAYS:
            if d.weekday() < 5:
                workdays.append(d)
            d += one
        if not 1 <= len(workdays) <= MAX_BRIDGE_WORKDAYS:
            continue
        suggestions.append(_bridge(names, (first, second), workdays))
    return sorted(suggestions, key=lambda b: b.start_date)


# ---------------------------------------------------------------------------
# Output formatting
# ---------------------------------------------------------------------------


def format_recommendations(
    recommendations: Sequence[Recommendation],
    bridges: Sequence[BridgeSuggestion] = (),
) -> str:
    """Return a human-readable summary of recommendations and bridges."""
    lines: list[str] = []
    w = 64

    lines.append("=" * w)
    lines.append("  LONG WEEKEND RECOMMENDATIONS")
    lines.append("=" * w)

    if not recommendations:
        lines.append("  No long weekend opportunities found.")
        lines.append("  Holidays on a Tuesday or Thursday can be stretched to 4 days.")

    for i, rec in enumerate(recommendations, 1):
        holiday = datetime.date.fromisoformat(rec.holiday_date)
        lines.append(f"  {i:>2}. {rec.holiday_name} ({holiday.strftime('%a, %b %d, %Y')})")
        lines.append(f"      -> {rec.explanation}")

    if bridges:
        lines.append("")
        lines.append("  Bridge Opportunities:")
        lines.append("  " + "-" * (w - 4))
        for i, bridge in enumerate(bridges, 1):
            lines.append(f"  {i:>2}. {bridge.holiday_names[0]} + {bridge.holiday_names[1]}")
            lines.append(f"      {bridge.explanation}")
            for d in bridge.bridge_dates:
                day = datetime.date.fromisoformat(d)
                lines.append(f"      -> {day.strftime('%A, %B %d, %Y')}")

    return "\n".join(lines)
