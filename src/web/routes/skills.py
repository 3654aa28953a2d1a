"""Skill catalog and self-assessment routes."""

import structlog
from fastapi import APIRouter, Depends, HTTPException

from gaps import CareerContext
from shared_types import SkillCategory
from store import skills as skill_store
from web.auth import get_current_user
from web.deps import get_career_context
from web.models import AssessmentBatch, SkillAssessment, UserSkillOut

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["skills"])


@router.get("/skills")
async def list_skills(
    category: SkillCategory | None = None,
    user: dict = Depends(get_current_user),
):
    return skill_store.list_skills(category=category)


@router.get("/user-skills", response_model=list[UserSkillOut])
async def list_user_skills(user: dict = Depends(get_current_user)):
    return skill_store.list_user_skills(user["id"])


def _assess(user_id: str, body: SkillAssessment) -> dict:
    try:
        return skill_store.upsert_user_skill(
            user_id,
            body.skill_name,
            body.current_level,
            body.target_level,
            category=body.category,
            notes=body.notes,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/user-skills", response_model=UserSkillOut, status_code=201)
async def assess_skill(
    body: SkillAssessment,
    user: dict = Depends(get_current_user),
    ctx: CareerContext = Depends(get_career_context),
):
    """Create or update one self-assessed skill; the gap report goes stale."""
    record = _assess(user["id"], body)
    ctx.skills_changed()
    return record


@router.post("/user-skills/assessment", response_model=list[UserSkillOut], status_code=201)
async def submit_assessment(
    body: AssessmentBatch,
    user: dict = Depends(get_current_user),
    ctx: CareerContext = Depends(get_career_context),
):
    """Submit a whole assessment form; one recompute follows the batch."""
    records = []
    try:
        for item in body.skills:
            records.append(_assess(user["id"], item))
    finally:
        if records:
            ctx.skills_changed()
    logger.info("skills.assessment_submitted", user_id=user["id"], skills=len(records))
    return records
