# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection — wire repositories and services.
"""

from app.core.database import engine
from app.repositories.pull_request_repository import PullRequestRepository
from app.repositories.statistics_repository import StatisticsRepository
from app.repositories.team_repository import TeamRepository
from app.repositories.user_repository import UserRepository
from app.services.pull_request_service import PullRequestService
from app.services.statistics_service import StatisticsService
from app.services.team_service import TeamService
from app.services.user_service import UserService

# ── Singleton repository instances (shared engine) ──
_team_repo = TeamRepository(engine)
_user_repo = UserRepository(engine)
_pr_repo = PullRequestRepository(engine)
_stats_repo = StatisticsRepository(engine)

# ── Service instances (with injected dependencies) ──
_team_service = TeamService(team_repo=_team_repo, user_repo=_user_repo, pr_repo=_pr_repo)
_user_service = UserService(user_repo=_user_repo, pr_repo=_pr_repo)
_pr_service = PullRequestService(pr_repo=_pr_repo, user_repo=_user_repo)
_stats_service = StatisticsService(stats_repo=_stats_repo)


# ── FastAPI dependency functions ──
def get_team_service() -> TeamService:
    return _team_service


def get_user_service() -> UserService:
    return _user_service


def get_pull_request_service() -> PullRequestService:
    return _pr_service


def get_statistics_service() -> StatisticsService:
    return _stats_service


def get_pull_request_repo() -> PullRequestRepository:
    return _pr_repo
