"""Long Weekend Planner.

Keep a list of holidays and find the single extra days off that turn
them into 4-day weekends.
"""

from longweekend.holidays import get_holidays, uk_holidays, us_holidays
from longweekend.models import BridgeSuggestion, HolidayRecord, Recommendation, create_holiday
from longweekend.planner import HolidayPlanner
from longweekend.recommender import calculate_recommendations, find_holiday_bridges
from longweekend.storage import (
    LoadResult,
    QuotaInfo,
    StorageError,
    StorageErrorType,
    StorageGateway,
)
from longweekend.stores import DirectoryStore, MemoryStore

__all__ = [
    "BridgeSuggestion",
    "DirectoryStore",
    "HolidayPlanner",
    "HolidayRecord",
    "LoadResult",
    "MemoryStore",
    "QuotaInfo",
    "Recommendation",
    "StorageError",
    "StorageErrorType",
    "StorageGateway",
    "calculate_recommendations",
    "create_holiday",
    "find_holiday_bridges",
    "get_holidays",
    "uk_holidays",
    "us_holidays",
]
