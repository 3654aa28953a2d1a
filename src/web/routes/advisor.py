"""AI advisor routes: gap analysis, skill recommendations, learning advice, chat."""

import asyncio

import structlog
from fastapi import APIRouter, Depends, HTTPException

from advisor import AdvisorError, SkillAdvisor, SkillGapAnalyzer
from gaps import CareerContext
from store import goals as goal_store
from store import skills as skill_store
from web.auth import get_current_user
from web.deps import get_career_context, get_catalog, get_goal_or_404, get_llm_for_user, goal_gap_report
from web.models import (
    ChatRequest,
    ChatResponse,
    GapAnalysisRequest,
    LearningAdviceRequest,
    SkillRecommendationRequest,
)

logger = structlog.get_logger()

router = APIRouter(prefix="/api/advisor", tags=["advisor"])


def _require_role(ctx: CareerContext):
    role = ctx.target_role
    if role is None:
        raise HTTPException(status_code=400, detail="Set a target role first")
    return role


@router.post("/gap-analysis")
async def gap_analysis(
    body: GapAnalysisRequest,
    user: dict = Depends(get_current_user),
    ctx: CareerContext = Depends(get_career_context),
):
    """LLM narrative over the computed report; deterministic when the LLM is unavailable."""
    goal = get_goal_or_404(user["id"], body.career_goal_id)
    analyzer = SkillGapAnalyzer(get_llm_for_user(user["id"], required=False))
    report, role = await asyncio.to_thread(goal_gap_report, user["id"], goal, ctx)
    return await asyncio.to_thread(
        analyzer.analyze,
        goal,
        report,
        skill_store.list_user_skills(user["id"]),
        role,
    )


@router.post("/skill-recommendations")
async def skill_recommendations(
    body: SkillRecommendationRequest,
    user: dict = Depends(get_current_user),
    ctx: CareerContext = Depends(get_career_context),
):
    role = _require_role(ctx)
    advisor = SkillAdvisor(get_llm_for_user(user["id"]))
    try:
        return await asyncio.to_thread(
            advisor.recommend_skills,
            role.title,
            skill_store.list_user_skills(user["id"]),
            body.industry or role.industry,
        )
    except AdvisorError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.post("/learning-advice")
async def learning_advice(
    body: LearningAdviceRequest,
    user: dict = Depends(get_current_user),
    ctx: CareerContext = Depends(get_career_context),
):
    role = _require_role(ctx)
    held = skill_store.get_user_skill(user["id"], body.skill_name)
    advisor = SkillAdvisor(get_llm_for_user(user["id"]))
    try:
        return await asyncio.to_thread(
            advisor.learning_advice,
            body.skill_name,
            held["current_level"] if held else 0,
            role.title,
            body.learning_preference,
        )
    except AdvisorError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.post("/chat", response_model=ChatResponse)
async def chat(
    body: ChatRequest,
    user: dict = Depends(get_current_user),
    ctx: CareerContext = Depends(get_career_context),
):
    role = ctx.target_role
    goals = goal_store.list_goals(user["id"])
    catalog = get_catalog()
    role_titles = {}
    for g in goals:
        for key in ("target_role_id", "current_role_id"):
            rid = g.get(key)
            if rid and rid not in role_titles:
                found = catalog.get(rid)
                role_titles[rid] = found.title if found else "Unknown role"

    advisor = SkillAdvisor(get_llm_for_user(user["id"]))
    try:
        reply = await asyncio.to_thread(
            advisor.chat,
            body.message,
            [t.model_dump() for t in body.history],
            role.title if role else None,
            skill_store.list_user_skills(user["id"]),
            goals,
            role_titles,
        )
    except AdvisorError as e:
        raise HTTPException(status_code=502, detail=str(e))
    logger.info("advisor.chat", user_id=user["id"], history=len(body.history))
    return ChatResponse(response=reply)
