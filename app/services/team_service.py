# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Teams — creation, lookup and bulk member deactivation.

Bulk deactivation re-homes the open PRs of the leaving members before they
are switched off. Validation, planning and every write share one transaction:
either the whole batch lands or nothing does.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy.exc import IntegrityError

from app.core.logging import get_logger
from app.metrics.prometheus import REASSIGNMENTS, USERS_DEACTIVATED
from app.repositories.pull_request_repository import PullRequestRepository
from app.repositories.team_repository import TeamRepository
from app.repositories.user_repository import UserRepository
from app.services.cascade import ADD, AUTHOR, REMOVE, plan_cascade
from app.services.errors import TeamAlreadyExists, TeamNotFound, UserNotFound, UserNotInTeam

logger = get_logger(__name__)


class TeamService:
    """Business logic for team membership."""

    def __init__(
        self,
        team_repo: TeamRepository,
        user_repo: UserRepository,
        pr_repo: PullRequestRepository,
    ) -> None:
        self._teams = team_repo
        self._users = user_repo
        self._prs = pr_repo

    # ── Commands ──

    def create_team(self, team_name: str, members: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Create a team and create or update its members."""
        now = datetime.now(timezone.utc)
        try:
            with self._teams.begin() as conn:
                if self._teams.exists(conn, team_name):
                    raise TeamAlreadyExists()
                self._teams.create(conn, team_name, now)
                for member in members:
                    self._users.upsert(conn, team_name, member["user_id"],
                                       member["username"], member["is_active"], now)
                team = self._teams.get_with_members(conn, team_name)
        except IntegrityError:
            with self._teams.connect() as conn:
                if self._teams.exists(conn, team_name):
                    raise TeamAlreadyExists()
            raise
        except TeamAlreadyExists:
            logger.warning("Team create rejected: team=%s already exists", team_name)
            raise

        logger.info("Team created team=%s members=%d", team_name, len(members))
        return team

    def deactivate_members(self, team_name: str, user_ids: List[str]) -> Dict[str, Any]:
        """
        Deactivate ``user_ids`` (all members of ``team_name``) and hand their
        open PRs to the teammates that remain active.
        """
        ids = list(dict.fromkeys(user_ids))
        now = datetime.now(timezone.utc)

        with self._teams.begin() as conn:
            if not self._teams.exists(conn, team_name):
                logger.warning("Deactivation rejected: team=%s not found", team_name)
                raise TeamNotFound()
            if not ids:
                return {"team_name": team_name, "deactivated_user_ids": [], "reassigned_count": 0}

            users = self._users.get_many(conn, ids)
            for user_id in ids:
                if user_id not in users:
                    logger.warning("Deactivation rejected: user=%s not found", user_id)
                    raise UserNotFound(f"user {user_id} not found")
                if users[user_id]["team_name"] != team_name:
                    logger.warning("Deactivation rejected: user=%s not in team=%s",
                                   user_id, team_name)
                    raise UserNotInTeam(f"user {user_id} is not a member of team {team_name}")

            remaining = self._users.list_active_member_ids(conn, team_name, exclude=ids)
            authored = self._prs.list_open_by_authors(conn, ids)
            reviewed = self._prs.list_open_by_reviewers(conn, ids)
            plan = plan_cascade(ids, remaining, authored, reviewed)

            for action, pr_id, user_id in plan.steps:
                if action == AUTHOR:
                    self._prs.reassign_author(conn, pr_id, user_id)
                elif action == REMOVE:
                    self._prs.remove_reviewer(conn, pr_id, user_id)
                elif action == ADD:
                    self._prs.add_reviewer(conn, pr_id, user_id, now)
            self._users.deactivate(conn, ids, now)

        USERS_DEACTIVATED.inc(len(ids))
        REASSIGNMENTS.labels(reason="cascade_author").inc(plan.author_reassignments)
        REASSIGNMENTS.labels(reason="cascade_reviewer").inc(plan.reviewer_replacements)
        if plan.skipped_authors:
            logger.warning("No replacement author for prs=%s team=%s",
                           plan.skipped_authors, team_name)
        logger.info("Members deactivated team=%s users=%s remaining=%d reassigned=%d",
                    team_name, ids, len(remaining), plan.reassigned_count)
        return {
            "team_name": team_name,
            "deactivated_user_ids": ids,
            "reassigned_count": plan.reassigned_count,
        }

    # ── Queries ──

    def get_team(self, team_name: str) -> Dict[str, Any]:
        with self._teams.connect() as conn:
            team = self._teams.get_with_members(conn, team_name)
        if team is None:
            raise TeamNotFound()
        return team
