"""Learning resources and per-resource progress."""

from fastapi import APIRouter, Depends, HTTPException

from shared_types import ResourceType
from store import learning as learning_store
from web.auth import get_current_user
from web.models import ProgressUpdate

router = APIRouter(prefix="/api", tags=["resources"])


@router.get("/resources")
async def list_resources(
    type: ResourceType | None = None,
    skill: str | None = None,
    user: dict = Depends(get_current_user),
):
    return learning_store.list_resources(resource_type=type, skill=skill)


@router.get("/resources/{resource_id}")
async def get_resource(resource_id: int, user: dict = Depends(get_current_user)):
    resource = learning_store.get_resource(resource_id)
    if resource is None:
        raise HTTPException(status_code=404, detail="Resource not found")
    return resource


@router.get("/progress")
async def list_progress(user: dict = Depends(get_current_user)):
    return learning_store.list_progress(user["id"])


@router.post("/progress")
async def record_progress(body: ProgressUpdate, user: dict = Depends(get_current_user)):
    if learning_store.get_resource(body.resource_id) is None:
        raise HTTPException(status_code=404, detail="Resource not found")
    try:
        return learning_store.record_progress(user["id"], body.resource_id, body.progress, score=body.score)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
