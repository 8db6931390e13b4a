# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Team endpoints.
Thin HTTP layer — delegates ALL logic to TeamService.
"""

from fastapi import APIRouter, Depends, Query

from app.core.dependencies import get_team_service
from app.schemas.reviewer import (
    DeactivateMembersRequest,
    DeactivateMembersResponse,
    TeamCreateRequest,
    TeamCreateResponse,
    TeamOut,
)
from app.services.team_service import TeamService

router = APIRouter(prefix="/team", tags=["Teams"])


@router.post("/add", status_code=201, response_model=TeamCreateResponse)
def add_team(
    payload: TeamCreateRequest,
    service: TeamService = Depends(get_team_service),
):
    """Create a team with its members (existing users are updated)."""
    team = service.create_team(
        team_name=payload.team_name,
        members=[m.model_dump() for m in payload.members],
    )
    return {"team": team}


@router.get("/get", response_model=TeamOut)
def get_team(
    team_name: str = Query(..., min_length=1, description="Team name"),
    service: TeamService = Depends(get_team_service),
):
    return service.get_team(team_name)


@router.post("/deactivateMembers", response_model=DeactivateMembersResponse)
def deactivate_members(
    payload: DeactivateMembersRequest,
    service: TeamService = Depends(get_team_service),
):
    """Deactivate members and hand their open PRs to the remaining teammates."""
    return service.deactivate_members(payload.team_name, payload.user_ids)
