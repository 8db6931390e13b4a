# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Database engine — single source of truth for DB connectivity and schema.
"""

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

# Portable DDL: PostgreSQL in production, SQLite in tests.
SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS teams (
        team_name  VARCHAR(255) PRIMARY KEY,
        created_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS users (
        user_id    VARCHAR(255) PRIMARY KEY,
        username   VARCHAR(255) NOT NULL,
        team_name  VARCHAR(255) NOT NULL REFERENCES teams(team_name),
        is_active  BOOLEAN NOT NULL DEFAULT TRUE,
        created_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_users_team ON users(team_name)",
    "CREATE INDEX IF NOT EXISTS idx_users_active ON users(is_active)",
    """
    CREATE TABLE IF NOT EXISTS pull_requests (
        pull_request_id   VARCHAR(255) PRIMARY KEY,
        pull_request_name VARCHAR(255) NOT NULL,
        author_id         VARCHAR(255) NOT NULL REFERENCES users(user_id),
        status            VARCHAR(20)  NOT NULL CHECK (status IN ('OPEN', 'MERGED')),
        created_at        TIMESTAMP WITH TIME ZONE NOT NULL,
        merged_at         TIMESTAMP WITH TIME ZONE
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_pr_status ON pull_requests(status)",
    "CREATE INDEX IF NOT EXISTS idx_pr_author ON pull_requests(author_id)",
    """
    CREATE TABLE IF NOT EXISTS pr_reviewers (
        pull_request_id VARCHAR(255) NOT NULL REFERENCES pull_requests(pull_request_id),
        reviewer_id     VARCHAR(255) NOT NULL REFERENCES users(user_id),
        slot            INTEGER NOT NULL,
        assigned_at     TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP,
        PRIMARY KEY (pull_request_id, reviewer_id)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_pr_reviewers_reviewer ON pr_reviewers(reviewer_id)",
)


def build_engine(url: str) -> Engine:
    """Create an engine tuned for the target database."""
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)

    connect_args = {}
    if url.startswith("postgresql") and settings.DB_STATEMENT_TIMEOUT_MS > 0:
        connect_args["options"] = f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}"
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_recycle=settings.DB_POOL_RECYCLE,
        connect_args=connect_args,
    )


def init_schema(target: Engine) -> None:
    """Create tables and indexes if they do not exist yet."""
    with target.begin() as conn:
        for statement in SCHEMA_STATEMENTS:
            conn.execute(text(statement))
    logger.info("Database schema ready")


engine = build_engine(settings.DATABASE_URL)
