# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for users — pure CRUD, no business rules."""
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import DateTime, bindparam, text

from app.repositories.base import BaseRepository

USER_COLS = "user_id, username, team_name, is_active"


def _row_to_dict(row) -> Dict[str, Any]:
    return {
        "user_id": row["user_id"],
        "username": row["username"],
        "team_name": row["team_name"],
        "is_active": bool(row["is_active"]),
    }


class UserRepository(BaseRepository):

    # ── Read ───────────────────────────────────────────────────────────

    def get(self, conn, user_id: str) -> Optional[Dict[str, Any]]:
        row = conn.execute(
            text(f"SELECT {USER_COLS} FROM users WHERE user_id = :id"),
            {"id": user_id},
        ).mappings().first()
        return _row_to_dict(row) if row else None

    def get_many(self, conn, user_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        ids = list(user_ids)
        if not ids:
            return {}
        rows = conn.execute(
            text(f"SELECT {USER_COLS} FROM users WHERE user_id IN :ids")
            .bindparams(bindparam("ids", expanding=True)),
            {"ids": ids},
        ).mappings().all()
        return {r["user_id"]: _row_to_dict(r) for r in rows}

    def list_active_member_ids(self, conn, team_name: str,
                               exclude: Iterable[str] = ()) -> List[str]:
        """Active members of a team minus ``exclude``, ordered by user_id."""
        rows = conn.execute(
            text("""
                SELECT user_id FROM users
                WHERE team_name = :team
                  AND is_active = :active
                  AND user_id NOT IN :exclude
                ORDER BY user_id
            """).bindparams(bindparam("exclude", expanding=True)),
            {"team": team_name, "active": True, "exclude": list(exclude)},
        ).fetchall()
        return [r[0] for r in rows]

    # ── Write ──────────────────────────────────────────────────────────

    def upsert(self, conn, team_name: str, user_id: str, username: str,
               is_active: bool, now: datetime) -> None:
        conn.execute(
            text("""
                INSERT INTO users (user_id, username, team_name, is_active, created_at, updated_at)
                VALUES (:id, :username, :team, :active, :ts, :ts)
                ON CONFLICT (user_id) DO UPDATE SET
                    username   = excluded.username,
                    team_name  = excluded.team_name,
                    is_active  = excluded.is_active,
                    updated_at = excluded.updated_at
            """).bindparams(bindparam("ts", type_=DateTime(timezone=True))),
            {"id": user_id, "username": username, "team": team_name,
             "active": is_active, "ts": now},
        )

    def set_active(self, conn, user_id: str, is_active: bool,
                   now: datetime) -> Optional[Dict[str, Any]]:
        result = conn.execute(
            text("UPDATE users SET is_active = :active, updated_at = :ts WHERE user_id = :id")
            .bindparams(bindparam("ts", type_=DateTime(timezone=True))),
            {"id": user_id, "active": is_active, "ts": now},
        )
        if result.rowcount == 0:
            return None
        return self.get(conn, user_id)

    def deactivate(self, conn, user_ids: Iterable[str], now: datetime) -> int:
        ids = list(user_ids)
        if not ids:
            return 0
        result = conn.execute(
            text("UPDATE users SET is_active = :active, updated_at = :ts WHERE user_id IN :ids")
            .bindparams(bindparam("ids", expanding=True),
                        bindparam("ts", type_=DateTime(timezone=True))),
            {"ids": ids, "active": False, "ts": now},
        )
        return result.rowcount
