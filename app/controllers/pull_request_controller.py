# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Pull request endpoints — create, merge, reassign.
Thin HTTP layer — delegates ALL logic to PullRequestService.
"""

from fastapi import APIRouter, Depends

from app.core.dependencies import get_pull_request_service
from app.schemas.reviewer import (
    MergeRequest,
    PullRequestCreateRequest,
    PullRequestResponse,
    ReassignRequest,
    ReassignResponse,
)
from app.services.pull_request_service import PullRequestService

router = APIRouter(prefix="/pullRequest", tags=["Pull Requests"])


@router.post("/create", status_code=201, response_model=PullRequestResponse)
def create_pull_request(
    payload: PullRequestCreateRequest,
    service: PullRequestService = Depends(get_pull_request_service),
):
    """Create a PR and assign up to two active teammates of the author."""
    pr = service.create_pull_request(
        pr_id=payload.pull_request_id,
        name=payload.pull_request_name,
        author_id=payload.author_id,
    )
    return {"pr": pr}


@router.post("/merge", response_model=PullRequestResponse)
def merge_pull_request(
    payload: MergeRequest,
    service: PullRequestService = Depends(get_pull_request_service),
):
    """Idempotent: merging a merged PR returns it unchanged."""
    return {"pr": service.merge_pull_request(payload.pull_request_id)}


@router.post("/reassign", response_model=ReassignResponse)
def reassign_reviewer(
    payload: ReassignRequest,
    service: PullRequestService = Depends(get_pull_request_service),
):
    pr, replaced_by = service.reassign_reviewer(payload.pull_request_id, payload.old_user_id)
    return {"pr": pr, "replaced_by": replaced_by}
