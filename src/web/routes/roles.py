"""Role catalog routes (read-only)."""

from fastapi import APIRouter, Depends

from web.auth import get_current_user
from web.deps import get_catalog, get_role_or_404
from web.models import RoleOut

router = APIRouter(prefix="/api/roles", tags=["roles"])


@router.get("", response_model=list[RoleOut])
async def list_roles(
    industry: str | None = None,
    role_type: str | None = None,
    user: dict = Depends(get_current_user),
):
    return [r.to_dict() for r in get_catalog().list_roles(industry=industry, role_type=role_type)]


@router.get("/industries")
async def list_industries(user: dict = Depends(get_current_user)):
    return get_catalog().industries()


@router.get("/{role_id}", response_model=RoleOut)
async def get_role(role_id: int, user: dict = Depends(get_current_user)):
    return get_role_or_404(role_id).to_dict()
