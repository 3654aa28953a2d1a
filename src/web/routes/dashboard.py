"""Dashboard route: gap report + goal metadata + learning stats."""

from fastapi import APIRouter, Depends

from gaps import CareerContext
from store import activity as activity_store
from store import learning as learning_store
from store import skills as skill_store
from web.auth import get_current_user
from web.deps import get_career_context

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("")
async def get_dashboard(
    user: dict = Depends(get_current_user),
    ctx: CareerContext = Depends(get_career_context),
):
    stats = {
        **learning_store.progress_stats(user["id"]),
        "skills_assessed": len(skill_store.list_user_skills(user["id"])),
        "overall_progress": skill_store.overall_progress(user["id"]),
    }
    data = ctx.dashboard.view(stats=stats).to_dict()
    data["recentActivities"] = activity_store.recent_activities(user["id"], limit=5)
    return data
