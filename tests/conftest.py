"""Shared fixtures for the long-weekend test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from longweekend.config import Settings
from longweekend.models import HolidayRecord
from longweekend.storage import StorageGateway
from longweekend.stores import MemoryStore


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a temporary data directory."""
    return Settings(data_dir=tmp_path / "data")


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def gateway(store: MemoryStore, settings: Settings) -> StorageGateway:
    return StorageGateway(store, settings)


@pytest.fixture()
def sample_holidays() -> list[HolidayRecord]:
    return [
        HolidayRecord(id="1", name="Election Day", date="2025-11-04"),
        HolidayRecord(id="2", name="Veterans Day", date="2025-11-12"),
        HolidayRecord(id="3", name="Thanksgiving", date="2025-11-27"),
    ]
