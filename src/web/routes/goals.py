"""Career goal routes."""

import structlog
from fastapi import APIRouter, Depends, HTTPException

from gaps import CareerContext
from store import goals as goal_store
from web.auth import get_current_user
from web.deps import get_career_context, get_goal_or_404, get_role_or_404
from web.models import CareerGoalCreate, CareerGoalUpdate

logger = structlog.get_logger()

router = APIRouter(prefix="/api/career-goals", tags=["career-goals"])


def _sync_target_role(user_id: str, ctx: CareerContext, goal: dict) -> None:
    """Keep the session's target role in step with the user's current goal."""
    current = goal_store.current_goal(user_id)
    if current is None or current["id"] != goal["id"]:
        return
    if current["target_role_id"] is None:
        ctx.clear_role()
    else:
        ctx.select_role(get_role_or_404(current["target_role_id"]))
    ctx.goal_changed()


@router.get("")
async def list_goals(user: dict = Depends(get_current_user)):
    return goal_store.list_goals(user["id"])


@router.post("", status_code=201)
async def create_goal(
    body: CareerGoalCreate,
    user: dict = Depends(get_current_user),
    ctx: CareerContext = Depends(get_career_context),
):
    for role_id in (body.current_role_id, body.target_role_id):
        if role_id is not None:
            get_role_or_404(role_id)
    try:
        goal = goal_store.create_goal(user["id"], **body.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    _sync_target_role(user["id"], ctx, goal)
    return goal


@router.get("/{goal_id}")
async def get_goal(goal_id: int, user: dict = Depends(get_current_user)):
    return get_goal_or_404(user["id"], goal_id)


@router.patch("/{goal_id}")
async def update_goal(
    goal_id: int,
    body: CareerGoalUpdate,
    user: dict = Depends(get_current_user),
    ctx: CareerContext = Depends(get_career_context),
):
    get_goal_or_404(user["id"], goal_id)
    fields = body.model_dump(exclude_unset=True)
    for key in ("current_role_id", "target_role_id"):
        if fields.get(key) is not None:
            get_role_or_404(fields[key])
    try:
        goal = goal_store.update_goal(user["id"], goal_id, **fields)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    _sync_target_role(user["id"], ctx, goal)
    return goal
