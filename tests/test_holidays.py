from __future__ import annotations

import datetime

import pytest

from longweekend.holidays import get_holidays, preset_records, uk_holidays, us_holidays


class TestUSPresets:
    def test_us_holidays_count(self) -> None:
        assert len(us_holidays(2025)) == 11

    def test_us_holidays_sorted(self) -> None:
        dates = [d for d, _ in us_holidays(2025)]
        assert dates == sorted(dates)

    def test_thanksgiving_2025(self) -> None:
        dates = dict(us_holidays(2025))
        assert dates[datetime.date(2025, 11, 27)] == "Thanksgiving"

    def test_us_holidays_observed_saturday(self) -> None:
        # July 4, 2026 falls on Saturday -> observed Friday July 3
        assert datetime.date(2026, 7, 3) in dict(us_holidays(2026))

    def test_us_holidays_observed_sunday(self) -> None:
        # July 4, 2021 falls on Sunday -> observed Monday July 5
        assert datetime.date(2021, 7, 5) in dict(us_holidays(2021))


class TestUKPresets:
    def test_uk_2025(self) -> None:
        assert [d.isoformat() for d, _ in uk_holidays(2025)] == [
            "2025-01-01",
            "2025-04-18",
            "2025-04-21",
            "2025-05-05",
            "2025-05-26",
            "2025-08-25",
            "2025-12-25",
            "2025-12-26",
        ]

    def test_easter_2024(self) -> None:
        dates = dict(uk_holidays(2024))
        assert dates[datetime.date(2024, 3, 29)] == "Good Friday"
        assert dates[datetime.date(2024, 4, 1)] == "Easter Monday"

    def test_christmas_on_saturday(self) -> None:
        # 2021: Christmas Sat, Boxing Day Sun -> Mon 27 and Tue 28
        december = [d for d, _ in uk_holidays(2021) if d.month == 12]
        assert december == [datetime.date(2021, 12, 27), datetime.date(2021, 12, 28)]

    def test_christmas_on_sunday(self) -> None:
        # 2022: Boxing Day Mon 26, Christmas substitute Tue 27
        december = dict((d, n) for d, n in uk_holidays(2022) if d.month == 12)
        assert december[datetime.date(2022, 12, 26)] == "Boxing Day"
        assert december[datetime.date(2022, 12, 27)] == "Christmas Day (substitute day)"


class TestGetHolidays:
    def test_unknown_country(self) -> None:
        with pytest.raises(KeyError):
            get_holidays("xx", 2025)

    def test_us(self) -> None:
        assert get_holidays("us", 2025) == us_holidays(2025)

    def test_preset_records(self) -> None:
        records = preset_records("us", 2025)
        assert len(records) == 11
        assert len({r.id for r in records}) == 11
        assert records[0].date == "2025-01-01"
        assert records[0].name == "New Year's Day"
