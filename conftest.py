# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Shared fixtures: a fresh in-memory SQLite store per test and seeded services."""

import os
import random

# Must be set before any app module builds the shared engine.
os.environ["DATABASE_URL"] = "sqlite://"

import pytest

from app.core.database import build_engine, init_schema
from app.repositories.pull_request_repository import PullRequestRepository
from app.repositories.statistics_repository import StatisticsRepository
from app.repositories.team_repository import TeamRepository
from app.repositories.user_repository import UserRepository
from app.services.pull_request_service import PullRequestService
from app.services.statistics_service import StatisticsService
from app.services.team_service import TeamService
from app.services.user_service import UserService


@pytest.fixture
def db_engine():
    eng = build_engine("sqlite://")
    init_schema(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def rng():
    return random.Random(20240601)


@pytest.fixture
def team_repo(db_engine):
    return TeamRepository(db_engine)


@pytest.fixture
def user_repo(db_engine):
    return UserRepository(db_engine)


@pytest.fixture
def pr_repo(db_engine):
    return PullRequestRepository(db_engine)


@pytest.fixture
def stats_repo(db_engine):
    return StatisticsRepository(db_engine)


@pytest.fixture
def team_service(team_repo, user_repo, pr_repo):
    return TeamService(team_repo=team_repo, user_repo=user_repo, pr_repo=pr_repo)


@pytest.fixture
def user_service(user_repo, pr_repo):
    return UserService(user_repo=user_repo, pr_repo=pr_repo)


@pytest.fixture
def pr_service(pr_repo, user_repo, rng):
    return PullRequestService(pr_repo=pr_repo, user_repo=user_repo, rng=rng)


@pytest.fixture
def stats_service(stats_repo):
    return StatisticsService(stats_repo=stats_repo)


@pytest.fixture
def make_team(team_service):
    """
    Create a team from ``{user_id: is_active}``; usernames are derived from ids.
    """
    def _make(team_name, members):
        return team_service.create_team(
            team_name,
            [
                {"user_id": uid, "username": f"user-{uid}", "is_active": active}
                for uid, active in members.items()
            ],
        )
    return _make
