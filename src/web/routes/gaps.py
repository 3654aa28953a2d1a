"""Gap report routes."""

from typing import Literal

import structlog
from fastapi import APIRouter, Depends, HTTPException

from gaps import CareerContext, sort_by_priority
from gaps.engine import summarize
from web.deps import get_career_context, get_config

logger = structlog.get_logger()

router = APIRouter(prefix="/api/gaps", tags=["gaps"])


def _report_payload(ctx: CareerContext, order: str) -> dict:
    try:
        report = ctx.gap_report(timeout=get_config().gaps.report_timeout)
    except TimeoutError:
        raise HTTPException(status_code=503, detail="Gap report is still being computed")
    snapshot = ctx.recomputer.snapshot()
    role = ctx.target_role
    entries = report if order == "catalog" else sort_by_priority(report)
    return {
        "state": str(snapshot["state"]),
        "version": snapshot["version"],
        "targetRole": {"id": role.id, "title": role.title} if role else None,
        "entries": [e.to_dict() for e in entries],
        "summary": summarize(report),
    }


@router.get("")
async def get_gaps(
    order: Literal["priority", "catalog"] = "priority",
    ctx: CareerContext = Depends(get_career_context),
):
    """Current gap report; most urgent first unless `order=catalog`."""
    return _report_payload(ctx, order)


@router.post("/refresh")
async def refresh_gaps(ctx: CareerContext = Depends(get_career_context)):
    ctx.refresh()
    return _report_payload(ctx, "priority")
