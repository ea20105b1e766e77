from __future__ import annotations

import json
import logging

import pytest

from longweekend.config import STORAGE_KEY
from longweekend.models import HolidayRecord
from longweekend.planner import HolidayPlanner
from longweekend.storage import StorageErrorType, StorageGateway
from longweekend.stores import MemoryStore


@pytest.fixture()
def planner(gateway: StorageGateway) -> HolidayPlanner:
    p = HolidayPlanner(gateway)
    p.load()
    return p


class TestMutations:
    def test_add_persists(self, planner: HolidayPlanner, store: MemoryStore) -> None:
        assert planner.add_holiday("Thanksgiving", "2025-11-27") is None
        assert len(planner.holidays) == 1
        stored = json.loads(store.get_item(STORAGE_KEY) or "")
        assert stored[0]["name"] == "Thanksgiving"
        assert stored[0]["id"] == planner.holidays[0].id

    def test_add_strips_name(self, planner: HolidayPlanner) -> None:
        planner.add_holiday("  Thanksgiving ", "2025-11-27")
        assert planner.holidays[0].name == "Thanksgiving"

    def test_ids_are_unique(self, planner: HolidayPlanner) -> None:
        planner.add_holiday("A", "2025-01-01")
        planner.add_holiday("A", "2025-01-01")
        assert len({h.id for h in planner.holidays}) == 2

    @pytest.mark.parametrize(("name", "date"), [("   ", "2025-01-01"), ("X", "01/01/2025")])
    def test_add_rejects_bad_input(self, planner: HolidayPlanner, name: str, date: str) -> None:
        with pytest.raises(ValueError):
            planner.add_holiday(name, date)
        assert planner.holidays == ()

    def test_delete(self, planner: HolidayPlanner, gateway: StorageGateway) -> None:
        planner.add_holiday("A", "2025-01-01")
        planner.add_holiday("B", "2025-01-02")
        assert planner.delete_holiday(planner.holidays[0].id) is None
        assert [h.name for h in planner.holidays] == ["B"]
        assert [h.name for h in gateway.load_holidays().holidays] == ["B"]

    def test_delete_unknown_id(self, planner: HolidayPlanner) -> None:
        with pytest.raises(KeyError):
            planner.delete_holiday("missing")

    def test_failed_save_rolls_back(self) -> None:
        store = MemoryStore(quota_bytes=250)
        planner = HolidayPlanner(StorageGateway(store))
        planner.load()
        assert planner.add_holiday("Short", "2025-01-01") is None
        error = planner.add_holiday("A very long holiday name " * 4, "2025-01-02")
        assert error is not None
        assert error.type is StorageErrorType.QUOTA_EXCEEDED
        assert [h.name for h in planner.holidays] == ["Short"]


class TestPresets:
    def test_add_presets_skips_existing_dates(self, planner: HolidayPlanner) -> None:
        planner.add_holiday("Turkey Day", "2025-11-27")
        added, error = planner.add_presets("us", 2025)
        assert error is None
        assert added == 10
        assert len(planner.holidays) == 11
        assert [h.name for h in planner.holidays if h.date == "2025-11-27"] == ["Turkey Day"]

    def test_add_presets_twice(self, planner: HolidayPlanner) -> None:
        planner.add_presets("uk", 2025)
        assert planner.add_presets("uk", 2025) == (0, None)

    def test_unknown_preset(self, planner: HolidayPlanner) -> None:
        with pytest.raises(KeyError):
            planner.add_presets("zz", 2025)


class TestLoadAndRecommend:
    def test_load_restores_saved_holidays(
        self, gateway: StorageGateway, sample_holidays: list[HolidayRecord]
    ) -> None:
        gateway.save_holidays(sample_holidays)
        planner = HolidayPlanner(gateway)
        result = planner.load()
        assert result.error is None
        assert list(planner.holidays) == sample_holidays

    def test_recommendations(
        self, gateway: StorageGateway, sample_holidays: list[HolidayRecord]
    ) -> None:
        gateway.save_holidays(sample_holidays)
        planner = HolidayPlanner(gateway)
        planner.load()
        assert [r.recommended_date for r in planner.recommendations()] == [
            "2025-11-03",
            "2025-11-28",
        ]

    def test_bridges(self, planner: HolidayPlanner) -> None:
        planner.add_holiday("Christmas", "2025-12-25")
        planner.add_holiday("New Year", "2026-01-01")
        assert len(planner.bridges()) == 1

    def test_engine_failure_yields_no_recommendations(
        self,
        planner: HolidayPlanner,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        def boom(holidays: object) -> list[object]:
            raise TypeError("boom")

        monkeypatch.setattr("longweekend.planner.calculate_recommendations", boom)
        with caplog.at_level(logging.ERROR):
            assert planner.recommendations() == []
        assert "Could not calculate recommendations" in caplog.text
