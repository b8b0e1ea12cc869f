"""Application services root exports."""
from .overall_statistics import OverallStatistics, OverallSnapshot
from .statistic_aggregator import aggregate, derive_view, top_champions, level_histogram, grade_histogram, chest_summary
from .summoner_cache import SummonerCache, CacheStats

__all__ = [
    "OverallStatistics",
    "OverallSnapshot",
    "aggregate",
    "derive_view",
    "top_champions",
    "level_histogram",
    "grade_histogram",
    "chest_summary",
    "SummonerCache",
    "CacheStats",
]
