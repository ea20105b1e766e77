"""Predefined public holidays that can be added in bulk.

Each preset computes the *observed* days off for a given year, since
that is the day a long weekend has to be built around.
"""

from __future__ import annotations

import datetime
from collections.abc import Callable

from longweekend.models import HolidayRecord, create_holiday

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _nth_weekday(year: int, month: int, weekday: int, n: int) -> datetime.date:
    """Return the *n*-th (1-based) *weekday* of *month*; 0 = Monday."""
    first = datetime.date(year, month, 1)
    delta = (weekday - first.weekday()) % 7
    return first + datetime.timedelta(days=delta, weeks=n - 1)


def _last_weekday(year: int, month: int, weekday: int) -> datetime.date:
    """Return the last *weekday* of *month*."""
    if month == 12:
        last = datetime.date(year, 12, 31)
    else:
        last = datetime.date(year, month + 1, 1) - datetime.timedelta(days=1)
    return last - datetime.timedelta(days=(last.weekday() - weekday) % 7)


def _easter_sunday(year: int) -> datetime.date:
    """Gregorian Easter (anonymous Gregorian algorithm)."""
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return datetime.date(year, month, day + 1)


def _us_observed(d: datetime.date) -> datetime.date:
    """US rule: Saturday holidays move to Friday, Sunday ones to Monday."""
    if d.weekday() == 5:
        return d - datetime.timedelta(days=1)
    if d.weekday() == 6:
        return d + datetime.timedelta(days=1)
    return d


def _substitute_days(
    holidays: list[tuple[datetime.date, str]],
) -> list[tuple[datetime.date, str]]:
    """UK rule: weekend holidays move to the next weekday not already off."""
    taken = {d for d, _ in holidays if d.weekday() < 5}
    result = [(d, name) for d, name in holidays if d.weekday() < 5]
    for d, name in sorted(h for h in holidays if h[0].weekday() >= 5):
        sub = d
        while sub.weekday() >= 5 or sub in taken:
            sub += datetime.timedelta(days=1)
        taken.add(sub)
        result.append((sub, f"{name} (substitute day)"))
    return sorted(result)


# ---------------------------------------------------------------------------
# Country presets
# ---------------------------------------------------------------------------

PRESETS: dict[str, str] = {
    "uk": "England and Wales bank holidays",
    "us": "United States federal holidays",
}


def us_holidays(year: int) -> list[tuple[datetime.date, str]]:
    """US federal holidays (observed) for *year*."""
    return sorted(
        [
            (_us_observed(datetime.date(year, 1, 1)), "New Year's Day"),
            (_nth_weekday(year, 1, 0, 3), "Martin Luther King Jr. Day"),
            (_nth_weekday(year, 2, 0, 3), "Presidents' Day"),
            (_last_weekday(year, 5, 0), "Memorial Day"),
            (_us_observed(datetime.date(year, 6, 19)), "Juneteenth"),
            (_us_observed(datetime.date(year, 7, 4)), "Independence Day"),
            (_nth_weekday(year, 9, 0, 1), "Labor Day"),
            (_nth_weekday(year, 10, 0, 2), "Columbus Day"),
            (_us_observed(datetime.date(year, 11, 11)), "Veterans Day"),
            (_nth_weekday(year, 11, 3, 4), "Thanksgiving"),
            (_us_observed(datetime.date(year, 12, 25)), "Christmas Day"),
        ]
    )


def uk_holidays(year: int) -> list[tuple[datetime.date, str]]:
    """England and Wales bank holidays for *year*, with substitute days."""
    easter = _easter_sunday(year)
    return _substitute_days(
        [
            (datetime.date(year, 1, 1), "New Year's Day"),
            (easter - datetime.timedelta(days=2), "Good Friday"),
            (easter + datetime.timedelta(days=1), "Easter Monday"),
            (_nth_weekday(year, 5, 0, 1), "Early May Bank Holiday"),
            (_last_weekday(year, 5, 0), "Spring Bank Holiday"),
            (_last_weekday(year, 8, 0), "Summer Bank Holiday"),
            (datetime.date(year, 12, 25), "Christmas Day"),
            (datetime.date(year, 12, 26), "Boxing Day"),
        ]
    )


_PRESET_FNS: dict[str, Callable[[int], list[tuple[datetime.date, str]]]] = {
    "uk": uk_holidays,
    "us": us_holidays,
}


def get_holidays(country: str, year: int) -> list[tuple[datetime.date, str]]:
    """Return ``(date, name)`` pairs for the *country* preset and *year*.

    Raises ``KeyError`` if the country is not supported.
    """
    fn = _PRESET_FNS.get(country)
    if fn is None:
        supported = ", ".join(sorted(PRESETS))
        msg = f"Unknown country preset {country!r}. Supported: {supported}"
        raise KeyError(msg)
    return fn(year)


def preset_records(country: str, year: int) -> list[HolidayRecord]:
    """Preset holidays as new records, each with a fresh id."""
    return [create_holiday(name, d.isoformat()) for d, name in get_holidays(country, year)]
