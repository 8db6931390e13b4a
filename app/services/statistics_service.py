# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Service: assignment statistics."""

from typing import Any, Dict

from app.core.logging import get_logger
from app.repositories.statistics_repository import StatisticsRepository

logger = get_logger(__name__)


class StatisticsService:
    def __init__(self, stats_repo: StatisticsRepository) -> None:
        self._stats = stats_repo

    def get_statistics(self) -> Dict[str, Any]:
        stats = self._stats.get_statistics()
        logger.debug("Statistics fetched teams=%d users=%d prs=%d assignments=%d",
                     stats["teams"]["total"], stats["users"]["total"],
                     stats["pull_requests"]["total"], stats["review_assignments"]["total"])
        return stats
