"""Skill-gap core: report computation, target role selection, recompute policy."""

from .context import CareerContext, ContextRegistry
from .dashboard import CareerGoalMeta, DashboardAggregator, DashboardView, build_dashboard
from .engine import (
    GapEntry,
    SkillLevel,
    compute_gap_report,
    normalize_user_skills,
    resolve_required_skills,
    skill_percentage,
    sort_by_priority,
)
from .recompute import GapRecomputer
from .selector import TargetRoleSelector

__all__ = [
    "CareerContext",
    "CareerGoalMeta",
    "ContextRegistry",
    "DashboardAggregator",
    "DashboardView",
    "GapEntry",
    "GapRecomputer",
    "SkillLevel",
    "TargetRoleSelector",
    "build_dashboard",
    "compute_gap_report",
    "normalize_user_skills",
    "resolve_required_skills",
    "skill_percentage",
    "sort_by_priority",
]
