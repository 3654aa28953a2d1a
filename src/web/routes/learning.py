"""Learning path routes: list, fetch, delete and generate."""

import asyncio

import structlog
from fastapi import APIRouter, Depends, HTTPException

from advisor import LearningPathGenerator
from gaps import CareerContext
from store import learning as learning_store
from store import skills as skill_store
from web.auth import get_current_user
from web.deps import get_career_context, get_goal_or_404, get_llm_for_user, goal_gap_report
from web.models import LearningPathGenerate

logger = structlog.get_logger()

router = APIRouter(prefix="/api/learning", tags=["learning"])


@router.get("/paths")
async def list_paths(user: dict = Depends(get_current_user)):
    return learning_store.list_paths(user["id"])


@router.get("/paths/{path_id}")
async def get_path(path_id: int, user: dict = Depends(get_current_user)):
    result = learning_store.get_path(user["id"], path_id)
    if not result:
        raise HTTPException(status_code=404, detail="Learning path not found")
    return result


@router.delete("/paths/{path_id}", status_code=204)
async def delete_path(path_id: int, user: dict = Depends(get_current_user)):
    if not learning_store.delete_path(user["id"], path_id):
        raise HTTPException(status_code=404, detail="Learning path not found")


@router.post("/paths/generate", status_code=201)
async def generate_path(
    body: LearningPathGenerate,
    user: dict = Depends(get_current_user),
    ctx: CareerContext = Depends(get_career_context),
):
    """Generate a path for a goal; without a working LLM a default two-module path is saved."""
    goal = get_goal_or_404(user["id"], body.career_goal_id)
    generator = LearningPathGenerator(llm=get_llm_for_user(user["id"], required=False))
    report, _ = await asyncio.to_thread(goal_gap_report, user["id"], goal, ctx)
    path = await asyncio.to_thread(
        generator.generate,
        user["id"],
        goal,
        skill_store.list_user_skills(user["id"]),
        report,
    )
    logger.info("learning.path_generated", user_id=user["id"], path_id=path["id"], source=path["source"])
    return path
