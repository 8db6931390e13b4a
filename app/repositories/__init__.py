# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository package."""
from app.repositories.pull_request_repository import PullRequestRepository
from app.repositories.statistics_repository import StatisticsRepository
from app.repositories.team_repository import TeamRepository
from app.repositories.user_repository import UserRepository

__all__ = ["PullRequestRepository", "StatisticsRepository", "TeamRepository", "UserRepository"]
