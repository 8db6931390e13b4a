# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Data-access layer for pull requests and their reviewer assignments.

Reviewer sets are only ever changed row by row (``add_reviewer`` /
``remove_reviewer``); the ``slot`` column keeps assignment order for display.
"""
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import DateTime, bindparam, text

from app.models.domain import STATUS_MERGED, STATUS_OPEN
from app.repositories.base import BaseRepository, iso

PR_COLS = "pull_request_id, pull_request_name, author_id, status, created_at, merged_at"
_TS_TYPES = {"created_at": DateTime(timezone=True), "merged_at": DateTime(timezone=True)}


def _row_to_dict(row, reviewers: List[str]) -> Dict[str, Any]:
    return {
        "pull_request_id": row["pull_request_id"],
        "pull_request_name": row["pull_request_name"],
        "author_id": row["author_id"],
        "status": row["status"],
        "assigned_reviewers": list(reviewers),
        "created_at": iso(row["created_at"]),
        "merged_at": iso(row["merged_at"]),
    }


class PullRequestRepository(BaseRepository):

    # ── Read ───────────────────────────────────────────────────────────

    def exists(self, conn, pr_id: str) -> bool:
        return conn.execute(
            text("SELECT 1 FROM pull_requests WHERE pull_request_id = :id"), {"id": pr_id}
        ).first() is not None

    def get(self, conn, pr_id: str, for_update: bool = False) -> Optional[Dict[str, Any]]:
        lock = self._for_update if for_update else ""
        row = conn.execute(
            text(f"SELECT {PR_COLS} FROM pull_requests WHERE pull_request_id = :id{lock}")
            .columns(**_TS_TYPES),
            {"id": pr_id},
        ).mappings().first()
        if not row:
            return None
        reviewers = self._load_reviewers(conn, [pr_id])
        return _row_to_dict(row, reviewers.get(pr_id, []))

    def list_open_by_authors(self, conn, author_ids: Iterable[str]) -> List[Dict[str, Any]]:
        """Open PRs authored by any of ``author_ids``; rows are locked."""
        ids = list(author_ids)
        if not ids:
            return []
        rows = conn.execute(
            text(f"""
                SELECT {PR_COLS} FROM pull_requests
                WHERE author_id IN :ids AND status = :status
                ORDER BY pull_request_id{self._for_update}
            """).bindparams(bindparam("ids", expanding=True)).columns(**_TS_TYPES),
            {"ids": ids, "status": STATUS_OPEN},
        ).mappings().all()
        reviewers = self._load_reviewers(conn, [r["pull_request_id"] for r in rows])
        return [_row_to_dict(r, reviewers.get(r["pull_request_id"], [])) for r in rows]

    def list_open_by_reviewers(self, conn,
                               reviewer_ids: Iterable[str]) -> Dict[str, List[Dict[str, Any]]]:
        """Open PRs reviewed by any of ``reviewer_ids``, grouped by reviewer; rows are locked."""
        ids = list(reviewer_ids)
        if not ids:
            return {}
        prefixed = ", ".join(f"pr.{c.strip()}" for c in PR_COLS.split(","))
        rows = conn.execute(
            text(f"""
                SELECT prr.reviewer_id AS reviewer_id, {prefixed}
                FROM pr_reviewers prr
                JOIN pull_requests pr ON pr.pull_request_id = prr.pull_request_id
                WHERE prr.reviewer_id IN :ids AND pr.status = :status
                ORDER BY prr.reviewer_id, pr.pull_request_id{self._for_update}
            """).bindparams(bindparam("ids", expanding=True)).columns(**_TS_TYPES),
            {"ids": ids, "status": STATUS_OPEN},
        ).mappings().all()
        reviewers = self._load_reviewers(conn, {r["pull_request_id"] for r in rows})
        grouped: Dict[str, List[Dict[str, Any]]] = {}
        for r in rows:
            grouped.setdefault(r["reviewer_id"], []).append(
                _row_to_dict(r, reviewers.get(r["pull_request_id"], []))
            )
        return grouped

    def list_by_reviewer(self, conn, user_id: str) -> List[Dict[str, Any]]:
        rows = conn.execute(
            text("""
                SELECT pr.pull_request_id, pr.pull_request_name, pr.author_id, pr.status
                FROM pr_reviewers prr
                JOIN pull_requests pr ON pr.pull_request_id = prr.pull_request_id
                WHERE prr.reviewer_id = :uid
                ORDER BY pr.created_at, pr.pull_request_id
            """),
            {"uid": user_id},
        ).mappings().all()
        return [dict(r) for r in rows]

    def count_by_status(self, status: str) -> int:
        with self._engine.connect() as conn:
            return conn.execute(
                text("SELECT COUNT(*) FROM pull_requests WHERE status = :s"), {"s": status}
            ).scalar() or 0

    # ── Write ──────────────────────────────────────────────────────────

    def create(self, conn, pr_id: str, name: str, author_id: str,
               reviewers: List[str], now: datetime) -> Dict[str, Any]:
        conn.execute(
            text(f"""
                INSERT INTO pull_requests ({PR_COLS})
                VALUES (:id, :name, :author, :status, :created_at, NULL)
            """).bindparams(bindparam("created_at", type_=DateTime(timezone=True))),
            {"id": pr_id, "name": name, "author": author_id,
             "status": STATUS_OPEN, "created_at": now},
        )
        for reviewer_id in reviewers:
            self.add_reviewer(conn, pr_id, reviewer_id, now)
        return self.get(conn, pr_id)

    def set_status(self, conn, pr_id: str, status: str,
                   merged_at: Optional[datetime] = None) -> bool:
        """Move an OPEN PR to ``status``; False when it was not OPEN any more."""
        result = conn.execute(
            text("""
                UPDATE pull_requests SET status = :status, merged_at = :merged_at
                WHERE pull_request_id = :id AND status = :open
            """).bindparams(bindparam("merged_at", type_=DateTime(timezone=True))),
            {"id": pr_id, "status": status, "open": STATUS_OPEN,
             "merged_at": merged_at if status == STATUS_MERGED else None},
        )
        return result.rowcount > 0

    def reassign_author(self, conn, pr_id: str, author_id: str) -> None:
        conn.execute(
            text("UPDATE pull_requests SET author_id = :author WHERE pull_request_id = :id"),
            {"id": pr_id, "author": author_id},
        )

    def add_reviewer(self, conn, pr_id: str, reviewer_id: str, now: datetime) -> None:
        conn.execute(
            text("""
                INSERT INTO pr_reviewers (pull_request_id, reviewer_id, slot, assigned_at)
                SELECT :pr, :reviewer, COALESCE(MAX(slot), 0) + 1, :ts
                FROM pr_reviewers WHERE pull_request_id = :pr
                ON CONFLICT (pull_request_id, reviewer_id) DO NOTHING
            """).bindparams(bindparam("ts", type_=DateTime(timezone=True))),
            {"pr": pr_id, "reviewer": reviewer_id, "ts": now},
        )

    def remove_reviewer(self, conn, pr_id: str, reviewer_id: str) -> None:
        conn.execute(
            text("DELETE FROM pr_reviewers WHERE pull_request_id = :pr AND reviewer_id = :reviewer"),
            {"pr": pr_id, "reviewer": reviewer_id},
        )

    # ── Private ────────────────────────────────────────────────────────

    def _load_reviewers(self, conn, pr_ids: Iterable[str]) -> Dict[str, List[str]]:
        ids = list(pr_ids)
        if not ids:
            return {}
        rows = conn.execute(
            text("""
                SELECT pull_request_id, reviewer_id FROM pr_reviewers
                WHERE pull_request_id IN :ids
                ORDER BY pull_request_id, slot
            """).bindparams(bindparam("ids", expanding=True)),
            {"ids": ids},
        ).fetchall()
        reviewers: Dict[str, List[str]] = {}
        for pr_id, reviewer_id in rows:
            reviewers.setdefault(pr_id, []).append(reviewer_id)
        return reviewers
