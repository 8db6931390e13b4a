# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.
"""

from pydantic import BaseModel, Field

STATUS_OPEN = "OPEN"
STATUS_MERGED = "MERGED"

# Upper bound of reviewers attached to a single PR.
MAX_REVIEWERS = 2


class TeamMember(BaseModel):
    """A user as listed inside a team."""
    user_id: str = Field(..., min_length=1, max_length=255, description="User id")
    username: str = Field(..., min_length=1, max_length=255, description="Display name")
    is_active: bool = Field(default=True, description="Eligible for review assignment")
