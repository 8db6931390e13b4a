# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas — API contract definitions.
These are Pydantic models used ONLY at the controller (HTTP) boundary.
"""

from typing import Optional

from pydantic import BaseModel, Field

from app.models.domain import TeamMember


# ── Team Schemas ──

class TeamCreateRequest(BaseModel):
    team_name: str = Field(..., min_length=1, max_length=255, description="Team name")
    members: list[TeamMember] = Field(default_factory=list, description="Team members")


class TeamOut(BaseModel):
    team_name: str
    members: list[TeamMember]


class TeamCreateResponse(BaseModel):
    team: TeamOut


class DeactivateMembersRequest(BaseModel):
    team_name: str = Field(..., min_length=1, max_length=255)
    user_ids: list[str] = Field(default_factory=list, description="Members to deactivate")


class DeactivateMembersResponse(BaseModel):
    team_name: str
    deactivated_user_ids: list[str]
    reassigned_count: int


# ── User Schemas ──

class SetIsActiveRequest(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=255)
    is_active: bool


class UserOut(BaseModel):
    user_id: str
    username: str
    team_name: str
    is_active: bool


class UserResponse(BaseModel):
    user: UserOut


class PullRequestShort(BaseModel):
    pull_request_id: str
    pull_request_name: str
    author_id: str
    status: str


class UserReviewsResponse(BaseModel):
    user_id: str
    pull_requests: list[PullRequestShort]


# ── Pull Request Schemas ──

class PullRequestCreateRequest(BaseModel):
    pull_request_id: str = Field(..., min_length=1, max_length=255)
    pull_request_name: str = Field(..., min_length=1, max_length=255)
    author_id: str = Field(..., min_length=1, max_length=255)


class MergeRequest(BaseModel):
    pull_request_id: str = Field(..., min_length=1, max_length=255)


class ReassignRequest(BaseModel):
    pull_request_id: str = Field(..., min_length=1, max_length=255)
    old_user_id: str = Field(..., min_length=1, max_length=255)


class PullRequestOut(BaseModel):
    pull_request_id: str
    pull_request_name: str
    author_id: str
    status: str
    assigned_reviewers: list[str]
    created_at: Optional[str] = Field(default=None, serialization_alias="createdAt")
    merged_at: Optional[str] = Field(default=None, serialization_alias="mergedAt")


class PullRequestResponse(BaseModel):
    pr: PullRequestOut


class ReassignResponse(BaseModel):
    pr: PullRequestOut
    replaced_by: str


# ── Statistics Schemas ──

class TeamTotals(BaseModel):
    total: int


class UserTotals(BaseModel):
    total: int
    active: int
    inactive: int


class PullRequestTotals(BaseModel):
    total: int
    open: int
    merged: int


class ReviewerCount(BaseModel):
    user_id: str
    count: int


class AssignmentTotals(BaseModel):
    total: int
    by_reviewer: list[ReviewerCount]


class StatisticsResponse(BaseModel):
    teams: TeamTotals
    users: UserTotals
    pull_requests: PullRequestTotals
    review_assignments: AssignmentTotals


# ── Errors ──

class ErrorDetail(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorDetail
