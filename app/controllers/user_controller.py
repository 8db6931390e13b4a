# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: User endpoints — activity flag and review listing."""

from fastapi import APIRouter, Depends, Query

from app.core.dependencies import get_user_service
from app.schemas.reviewer import SetIsActiveRequest, UserResponse, UserReviewsResponse
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/setIsActive", response_model=UserResponse)
def set_is_active(
    payload: SetIsActiveRequest,
    service: UserService = Depends(get_user_service),
):
    return {"user": service.set_active(payload.user_id, payload.is_active)}


@router.get("/getReview", response_model=UserReviewsResponse)
def get_review(
    user_id: str = Query(..., min_length=1, description="Reviewer id"),
    service: UserService = Depends(get_user_service),
):
    """PRs the user is assigned to review, in any status."""
    return {"user_id": user_id, "pull_requests": service.get_reviews(user_id)}
