"""Rating routes."""

from fastapi import APIRouter

from core.auth import IdentityDep
from core.dependencies import RatingManagerDep
from schemas.rating import CreateRatingRequest, RatingInfo

router = APIRouter(prefix="/api/ratings", tags=["Rating"])


@router.post("", summary="Rate a report")
def create_rating(
    req: CreateRatingRequest,
    rating_manager: RatingManagerDep,
    identity: IdentityDep,
) -> dict:
    """Rate a report the caller can see. The rater is always the caller."""
    model = rating_manager.create_rating(req, identity)
    return {"success": True, "rating": RatingInfo.model_validate(model)}


@router.get("", summary="List ratings")
def list_ratings(
    rating_manager: RatingManagerDep,
    identity: IdentityDep,
) -> dict:
    models = rating_manager.list_ratings(identity)
    return {"success": True, "ratings": [RatingInfo.model_validate(m) for m in models]}
