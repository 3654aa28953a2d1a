"""Target role selection: the pointer that drives the gap report."""

import structlog
from fastapi import APIRouter, Depends

from gaps import CareerContext
from store import goals as goal_store
from web.auth import get_current_user
from web.deps import get_career_context, get_role_or_404
from web.models import TargetRoleSet

logger = structlog.get_logger()

router = APIRouter(prefix="/api/target-role", tags=["target-role"])


@router.get("")
async def get_target_role(ctx: CareerContext = Depends(get_career_context)):
    role = ctx.target_role
    return {"role": role.to_dict() if role else None}


@router.put("")
async def set_target_role(
    body: TargetRoleSet,
    user: dict = Depends(get_current_user),
    ctx: CareerContext = Depends(get_career_context),
):
    """Persist the pointer on the current goal, then swap the session's role.

    The old report is stale before this returns.
    """
    role = get_role_or_404(body.role_id)
    goal = goal_store.set_target_role(user["id"], role.id, role.title)
    ctx.select_role(role)
    logger.info("target_role.updated", user_id=user["id"], role_id=role.id, goal_id=goal["id"])
    return {"role": role.to_dict(), "goal": goal}


@router.delete("")
async def clear_target_role(
    user: dict = Depends(get_current_user),
    ctx: CareerContext = Depends(get_career_context),
):
    goal_store.clear_target_role(user["id"])
    ctx.clear_role()
    return {"role": None}
