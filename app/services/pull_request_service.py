# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Pull request lifecycle and reviewer assignment.

Every operation runs inside one transaction. Merge and reassign lock the PR
row before checking its state so concurrent callers cannot interleave between
check and write.
"""

import random
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from app.core.logging import get_logger
from app.metrics.prometheus import (
    OPEN_PRS,
    PRS_CREATED,
    PRS_MERGED,
    REASSIGNMENTS,
    REVIEWERS_ASSIGNED,
)
from app.models.domain import STATUS_MERGED, STATUS_OPEN
from app.repositories.pull_request_repository import PullRequestRepository
from app.repositories.user_repository import UserRepository
from app.services.errors import (
    AuthorNotFound,
    NoReplacementCandidate,
    PRAlreadyExists,
    PRMerged,
    PRNotFound,
    ReviewerNotAssigned,
    UserNotFound,
)
from app.services.reviewer_selection import pick_replacement, select_reviewers

logger = get_logger(__name__)


class PullRequestService:
    """Business logic for creating, merging and re-staffing pull requests."""

    def __init__(
        self,
        pr_repo: PullRequestRepository,
        user_repo: UserRepository,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._prs = pr_repo
        self._users = user_repo
        self._rng = rng or random.Random()

    def seed_gauges(self) -> None:
        OPEN_PRS.set(self._prs.count_by_status(STATUS_OPEN))
        logger.info("Prometheus gauges loaded from DB")

    # ── Commands ──

    def create_pull_request(self, pr_id: str, name: str, author_id: str) -> Dict[str, Any]:
        """Create an OPEN PR with up to two reviewers from the author's team."""
        now = datetime.now(timezone.utc)
        try:
            with self._prs.begin() as conn:
                if self._prs.exists(conn, pr_id):
                    raise PRAlreadyExists()
                author = self._users.get(conn, author_id)
                if author is None:
                    raise AuthorNotFound()

                candidates = self._users.list_active_member_ids(
                    conn, author["team_name"], exclude=[author_id]
                )
                reviewers = select_reviewers(candidates, rng=self._rng)
                pr = self._prs.create(conn, pr_id, name, author_id, reviewers, now)
        except IntegrityError:
            # Lost a race on the primary key against a concurrent create.
            with self._prs.connect() as conn:
                if self._prs.exists(conn, pr_id):
                    raise PRAlreadyExists()
            raise
        except (PRAlreadyExists, AuthorNotFound) as exc:
            logger.warning("PR create rejected pr=%s author=%s: %s", pr_id, author_id, exc)
            raise

        PRS_CREATED.inc()
        OPEN_PRS.inc()
        REVIEWERS_ASSIGNED.observe(len(reviewers))
        logger.info("PR created pr=%s author=%s reviewers=%s candidates=%d",
                    pr_id, author_id, reviewers, len(candidates))
        return pr

    def merge_pull_request(self, pr_id: str) -> Dict[str, Any]:
        """Mark a PR as MERGED. Merging an already merged PR returns it unchanged."""
        with self._prs.begin() as conn:
            pr = self._prs.get(conn, pr_id, for_update=True)
            if pr is None:
                logger.warning("Merge rejected: pr=%s not found", pr_id)
                raise PRNotFound()
            if pr["status"] == STATUS_MERGED:
                logger.info("PR already merged pr=%s", pr_id)
                return pr
            self._prs.set_status(conn, pr_id, STATUS_MERGED, datetime.now(timezone.utc))
            pr = self._prs.get(conn, pr_id)

        PRS_MERGED.inc()
        OPEN_PRS.dec()
        logger.info("PR merged pr=%s", pr_id)
        return pr

    def reassign_reviewer(self, pr_id: str, old_reviewer_id: str) -> Tuple[Dict[str, Any], str]:
        """
        Replace ``old_reviewer_id`` on an open PR with a random active teammate
        of the old reviewer. Returns the updated PR and the new reviewer id.
        """
        try:
            with self._prs.begin() as conn:
                pr = self._prs.get(conn, pr_id, for_update=True)
                if pr is None:
                    raise PRNotFound()
                if pr["status"] == STATUS_MERGED:
                    raise PRMerged()
                if old_reviewer_id not in pr["assigned_reviewers"]:
                    raise ReviewerNotAssigned()
                old_reviewer = self._users.get(conn, old_reviewer_id)
                if old_reviewer is None:
                    raise UserNotFound()

                taken = set(pr["assigned_reviewers"]) | {pr["author_id"]}
                candidates = self._users.list_active_member_ids(
                    conn, old_reviewer["team_name"], exclude=sorted(taken)
                )
                new_reviewer_id = pick_replacement(candidates, rng=self._rng)
                if new_reviewer_id is None:
                    raise NoReplacementCandidate()

                now = datetime.now(timezone.utc)
                self._prs.remove_reviewer(conn, pr_id, old_reviewer_id)
                self._prs.add_reviewer(conn, pr_id, new_reviewer_id, now)
                pr = self._prs.get(conn, pr_id)
        except (PRNotFound, PRMerged, ReviewerNotAssigned, UserNotFound,
                NoReplacementCandidate) as exc:
            logger.warning("Reassign rejected pr=%s old=%s: %s", pr_id, old_reviewer_id, exc)
            raise

        REASSIGNMENTS.labels(reason="manual").inc()
        logger.info("Reviewer reassigned pr=%s old=%s new=%s",
                    pr_id, old_reviewer_id, new_reviewer_id)
        return pr, new_reviewer_id
