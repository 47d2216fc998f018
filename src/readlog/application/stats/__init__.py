# Application Stats Package
from .aggregator import ChallengeProgress, StatsAggregator, empty_week
from .service import ReadingStatsService

__all__ = ["StatsAggregator", "ChallengeProgress", "ReadingStatsService", "empty_week"]
