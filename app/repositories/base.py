# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository base: engine handle, transaction entry points, row helpers.

Repository methods take the caller's ``conn`` so a service can run several
reads and writes, across repositories, inside one ``begin()`` block.
"""

from typing import Any, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine


def iso(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat() if hasattr(value, "isoformat") else str(value)


class BaseRepository:
    def __init__(self, engine: Engine):
        self._engine = engine
        # SQLite serialises writers itself and has no row locks.
        self._for_update = "" if engine.dialect.name == "sqlite" else " FOR UPDATE"

    def begin(self):
        """Open a transaction; commits on exit, rolls back on any exception."""
        return self._engine.begin()

    def connect(self):
        return self._engine.connect()

    def verify_connection(self):
        with self._engine.connect() as conn:
            conn.execute(text("SELECT 1"))
