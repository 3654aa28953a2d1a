"""Activity feed and skill validation routes."""

from fastapi import APIRouter, Depends, HTTPException, Query

from store import activity as activity_store
from store import skills as skill_store
from web.auth import get_current_user
from web.models import ValidationCreate

router = APIRouter(prefix="/api", tags=["activity"])


@router.get("/activities")
async def list_activities(
    limit: int = Query(20, ge=1, le=100),
    user: dict = Depends(get_current_user),
):
    return activity_store.recent_activities(user["id"], limit=limit)


@router.get("/validations")
async def list_validations(user: dict = Depends(get_current_user)):
    return activity_store.list_validations(user["id"])


@router.post("/validations", status_code=201)
async def create_validation(body: ValidationCreate, user: dict = Depends(get_current_user)):
    """Attach evidence to a skill the user has already assessed."""
    held = skill_store.get_user_skill(user["id"], body.skill_name)
    if held is None:
        raise HTTPException(status_code=400, detail=f"Assess {body.skill_name} before validating it")
    return activity_store.create_validation(
        user["id"],
        held["skill_id"],
        body.validation_type,
        score=body.score,
        evidence=body.evidence,
        validated_by=body.validated_by,
    )
