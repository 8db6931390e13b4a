# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Service: single-user activity and review listing."""

from datetime import datetime, timezone
from typing import Any, Dict, List

from app.core.logging import get_logger
from app.repositories.pull_request_repository import PullRequestRepository
from app.repositories.user_repository import UserRepository
from app.services.errors import UserNotFound

logger = get_logger(__name__)


class UserService:
    def __init__(self, user_repo: UserRepository, pr_repo: PullRequestRepository) -> None:
        self._users = user_repo
        self._prs = pr_repo

    def set_active(self, user_id: str, is_active: bool) -> Dict[str, Any]:
        """Flip one user's activity flag. Open PRs are left as they are."""
        with self._users.begin() as conn:
            user = self._users.set_active(conn, user_id, is_active, datetime.now(timezone.utc))
        if user is None:
            logger.warning("Activity update rejected: user=%s not found", user_id)
            raise UserNotFound()
        logger.info("User activity updated user=%s is_active=%s", user_id, is_active)
        return user

    def get_reviews(self, user_id: str) -> List[Dict[str, Any]]:
        with self._users.connect() as conn:
            if self._users.get(conn, user_id) is None:
                raise UserNotFound()
            reviews = self._prs.list_by_reviewer(conn, user_id)
        logger.debug("Reviews fetched user=%s count=%d", user_id, len(reviews))
        return reviews
