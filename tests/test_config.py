"""Tests for longweekend.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from longweekend.config import STORAGE_KEY, Settings


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LONGWEEKEND_QUOTA_BYTES", raising=False)
        cfg = Settings.load()
        assert cfg.storage_key == STORAGE_KEY
        assert cfg.quota_bytes == 5 * 1024 * 1024
        assert cfg.quota_warning_bytes == int(cfg.quota_bytes * 0.8)

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("LONGWEEKEND_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("LONGWEEKEND_QUOTA_BYTES", "1000")
        monkeypatch.setenv("LONGWEEKEND_QUOTA_WARNING_RATIO", "0.5")
        cfg = Settings.load()
        assert cfg.data_dir == tmp_path
        assert cfg.quota_bytes == 1000
        assert cfg.quota_warning_bytes == 500

    def test_xdg_data_home(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.delenv("LONGWEEKEND_DATA_DIR", raising=False)
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
        assert Settings.load().data_dir == tmp_path / "long-weekend"
