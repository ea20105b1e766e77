"""Planner settings.

Defaults live here; ``Settings.load()`` applies environment overrides.
The quota figures are heuristics for a browser-style store, not limits
enforced by any backend.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

STORAGE_KEY = "long-weekend-optimizer-holidays"
_DEFAULT_QUOTA_BYTES = 5 * 1024 * 1024
_DEFAULT_QUOTA_WARNING_RATIO = 0.8


def _default_data_dir() -> Path:
    """Return the directory that holds the file-backed store."""
    if xdg := os.environ.get("XDG_DATA_HOME"):
        return Path(xdg) / "long-weekend"
    return Path.home() / ".local" / "share" / "long-weekend"


@dataclass
class Settings:
    """Runtime configuration for the storage gateway and CLI."""

    storage_key: str = STORAGE_KEY
    quota_bytes: int = _DEFAULT_QUOTA_BYTES
    quota_warning_ratio: float = _DEFAULT_QUOTA_WARNING_RATIO
    data_dir: Path = field(default_factory=_default_data_dir)

    @property
    def quota_warning_bytes(self) -> int:
        return int(self.quota_bytes * self.quota_warning_ratio)

    @classmethod
    def load(cls) -> Settings:
        """Build settings from defaults plus ``LONGWEEKEND_*`` env vars."""
        cfg = cls()
        if env := os.environ.get("LONGWEEKEND_DATA_DIR"):
            cfg.data_dir = Path(env)
        if env := os.environ.get("LONGWEEKEND_QUOTA_BYTES"):
            cfg.quota_bytes = int(env)
        if env := os.environ.get("LONGWEEKEND_QUOTA_WARNING_RATIO"):
            cfg.quota_warning_ratio = float(env)
        return cfg
