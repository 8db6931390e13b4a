# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for teams and their member lists."""
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import DateTime, bindparam, text

from app.repositories.base import BaseRepository


class TeamRepository(BaseRepository):

    def exists(self, conn, team_name: str) -> bool:
        return conn.execute(
            text("SELECT 1 FROM teams WHERE team_name = :name"), {"name": team_name}
        ).first() is not None

    def create(self, conn, team_name: str, now: datetime) -> None:
        conn.execute(
            text("INSERT INTO teams (team_name, created_at) VALUES (:name, :ts)")
            .bindparams(bindparam("ts", type_=DateTime(timezone=True))),
            {"name": team_name, "ts": now},
        )

    def get_with_members(self, conn, team_name: str) -> Optional[Dict[str, Any]]:
        if not self.exists(conn, team_name):
            return None
        rows = conn.execute(
            text("""
                SELECT user_id, username, is_active FROM users
                WHERE team_name = :name ORDER BY user_id
            """),
            {"name": team_name},
        ).mappings().all()
        return {
            "team_name": team_name,
            "members": [
                {"user_id": r["user_id"], "username": r["username"],
                 "is_active": bool(r["is_active"])}
                for r in rows
            ],
        }
