"""Dashboard view model: compose the gap report with career-goal metadata."""

import threading
from dataclasses import dataclass, field, replace
from typing import Callable, Optional, Sequence

from shared_types import DashboardState, RecomputeState

from .engine import GapEntry, sort_by_priority, summarize

NO_TARGET_ROLE_MESSAGE = "No target role set. Choose a role to see your skill gaps."
COMPLETE_ASSESSMENT_MESSAGE = "Complete an assessment to see how your skills compare."


@dataclass(frozen=True)
class CareerGoalMeta:
    """Externally supplied goal data; readiness is not computed here."""

    title: str
    timeline_months: Optional[int] = None
    readiness: int = 0
    goal_id: Optional[int] = None


@dataclass
class DashboardView:
    state: DashboardState
    message: Optional[str]
    target_role: Optional[dict]
    career_goal: Optional[dict]
    skill_gaps: list[dict] = field(default_factory=list)
    gap_summary: dict = field(default_factory=dict)
    stats: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "state": str(self.state),
            "message": self.message,
            "targetRole": self.target_role,
            "careerGoal": self.career_goal,
            "skillGaps": self.skill_gaps,
            "gapSummary": self.gap_summary,
            "stats": self.stats,
        }


def _timeline_text(months: Optional[int]) -> Optional[str]:
    if not months:
        return None
    return f"Target timeline: {months} months"


def build_dashboard(
    report: Sequence[GapEntry],
    role=None,
    goal_meta: Optional[CareerGoalMeta] = None,
    stats: Optional[dict] = None,
) -> DashboardView:
    """Assemble the read-only dashboard view; never raises for missing pieces."""
    target_role = None
    if role is not None:
        target_role = {"id": role.id, "title": role.title}

    career_goal = None
    if goal_meta is not None:
        career_goal = {
            "id": goal_meta.goal_id,
            "title": goal_meta.title,
            "timeline": _timeline_text(goal_meta.timeline_months),
            "readiness": goal_meta.readiness,
        }

    if role is None:
        state, message = DashboardState.NO_TARGET_ROLE, NO_TARGET_ROLE_MESSAGE
    elif not report:
        state, message = DashboardState.COMPLETE_ASSESSMENT, COMPLETE_ASSESSMENT_MESSAGE
    else:
        state, message = DashboardState.READY, None

    return DashboardView(
        state=state,
        message=message,
        target_role=target_role,
        career_goal=career_goal,
        skill_gaps=[e.to_dict() for e in sort_by_priority(report)],
        gap_summary=summarize(report),
        stats=dict(stats or {}),
    )


class DashboardAggregator:
    """Caches the last dashboard view and drops it on role or report changes."""

    def __init__(self, selector, recomputer, goal_provider: Callable[[], Optional[CareerGoalMeta]]):
        self._selector = selector
        self._recomputer = recomputer
        self._goal_provider = goal_provider
        self._lock = threading.Lock()
        self._cached: Optional[DashboardView] = None
        self._generation = 0
        self._unsubscribers = [
            selector.subscribe(lambda role, previous: self.invalidate()),
            recomputer.subscribe(lambda state, report: self.invalidate()),
        ]

    def invalidate(self) -> None:
        with self._lock:
            self._cached = None
            self._generation += 1

    def view(self, stats: Optional[dict] = None) -> DashboardView:
        """The cached gap/goal view, with `stats` layered on a copy when given."""
        with self._lock:
            cached = self._cached
            generation = self._generation
        if cached is None or self._recomputer.state != RecomputeState.READY:
            cached = build_dashboard(
                self._recomputer.report(),
                role=self._selector.get_target_role(),
                goal_meta=self._goal_provider(),
            )
            with self._lock:
                # An invalidation during the build means this view is already outdated
                if self._generation == generation:
                    self._cached = cached
        if stats is None:
            return cached
        return replace(cached, stats=dict(stats))

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
