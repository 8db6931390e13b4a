# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Aggregate counters over teams, users, pull requests and assignments."""
from typing import Any, Dict

from sqlalchemy import text

from app.models.domain import STATUS_MERGED, STATUS_OPEN
from app.repositories.base import BaseRepository


class StatisticsRepository(BaseRepository):

    def get_statistics(self) -> Dict[str, Any]:
        with self._engine.connect() as conn:
            teams_total = conn.execute(text("SELECT COUNT(*) FROM teams")).scalar() or 0
            users = conn.execute(
                text("""
                    SELECT COUNT(*) AS total,
                           SUM(CASE WHEN is_active = :active THEN 1 ELSE 0 END) AS active
                    FROM users
                """),
                {"active": True},
            ).mappings().first()
            prs = conn.execute(
                text("""
                    SELECT COUNT(*) AS total,
                           SUM(CASE WHEN status = :open THEN 1 ELSE 0 END)   AS open_count,
                           SUM(CASE WHEN status = :merged THEN 1 ELSE 0 END) AS merged_count
                    FROM pull_requests
                """),
                {"open": STATUS_OPEN, "merged": STATUS_MERGED},
            ).mappings().first()
            by_reviewer = conn.execute(
                text("""
                    SELECT reviewer_id, COUNT(*) AS cnt
                    FROM pr_reviewers
                    GROUP BY reviewer_id
                    ORDER BY cnt DESC, reviewer_id
                """)
            ).fetchall()

        users_total = users["total"] or 0
        users_active = int(users["active"] or 0)
        return {
            "teams": {"total": teams_total},
            "users": {
                "total": users_total,
                "active": users_active,
                "inactive": users_total - users_active,
            },
            "pull_requests": {
                "total": prs["total"] or 0,
                "open": int(prs["open_count"] or 0),
                "merged": int(prs["merged_count"] or 0),
            },
            "review_assignments": {
                "total": sum(r[1] for r in by_reviewer),
                "by_reviewer": [{"user_id": r[0], "count": r[1]} for r in by_reviewer],
            },
        }
