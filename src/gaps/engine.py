"""Gap report computation: compare a role's required skills with assessed levels."""

import math
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Sequence

from shared_types import GapStatus

# Percentage below which a held skill still needs improvement
IMPROVEMENT_THRESHOLD = 50

_STATUS_RANK = {
    GapStatus.MISSING: 0,
    GapStatus.IMPROVEMENT: 1,
    GapStatus.STRONG: 2,
}


@dataclass(frozen=True)
class SkillLevel:
    current_level: int
    target_level: int


@dataclass(frozen=True)
class GapEntry:
    skill_name: str
    status: GapStatus
    percentage: int
    has_skill: bool

    def to_dict(self) -> dict:
        return {
            "skillName": self.skill_name,
            "status": str(self.status),
            "percentage": self.percentage,
            "hasSkill": self.has_skill,
        }


def skill_key(name: str) -> str:
    """Case-insensitive identity of a skill name."""
    return name.strip().lower()


def skill_percentage(current_level: int, target_level: int) -> int:
    """Percentage of target reached, rounded half-up and clamped to 0..100.

    A target of 0 (or below) yields 0 rather than a division error.
    """
    if target_level <= 0:
        return 0
    pct = math.floor(current_level / target_level * 100 + 0.5)
    return max(0, min(100, pct))


def normalize_user_skills(records: Iterable[Mapping]) -> dict[str, SkillLevel]:
    """Build the lowercase-keyed level mapping from skill records.

    Each record needs `name`, `current_level`, `target_level`. Later records
    with the same name (any casing) replace earlier ones.
    """
    levels: dict[str, SkillLevel] = {}
    for rec in records:
        name = rec.get("name") or rec.get("skill_name")
        if not name:
            continue
        levels[skill_key(name)] = SkillLevel(
            current_level=int(rec.get("current_level") or 0),
            target_level=int(rec.get("target_level") or 0),
        )
    return levels


def compute_gap_report(
    required_skills: Optional[Sequence[str]],
    user_skills: Optional[Mapping[str, SkillLevel]],
) -> list[GapEntry]:
    """One GapEntry per required skill, in catalog order.

    Args:
        required_skills: Role's required-skill names (order preserved)
        user_skills: Mapping of lowercase skill name -> SkillLevel

    Returns:
        Unsorted report; empty when the role lists no skills
    """
    if not required_skills:
        return []
    user_skills = user_skills or {}

    report = []
    for name in required_skills:
        level = user_skills.get(skill_key(name))
        if level is None:
            report.append(GapEntry(name, GapStatus.MISSING, 0, False))
            continue
        pct = skill_percentage(level.current_level, level.target_level)
        status = GapStatus.IMPROVEMENT if pct < IMPROVEMENT_THRESHOLD else GapStatus.STRONG
        report.append(GapEntry(name, status, pct, True))
    return report


def sort_by_priority(report: Iterable[GapEntry]) -> list[GapEntry]:
    """Most urgent first: missing, then improvement, then strong; lower % first.

    `sorted` is stable, so ties keep catalog order.
    """
    return sorted(report, key=lambda e: (_STATUS_RANK[e.status], e.percentage))


def resolve_required_skills(
    target_role=None,
    fallback_skills: Optional[Sequence[str]] = None,
) -> list[str]:
    """Pick the required-skill list feeding the report.

    The active target role's own list wins whenever it is non-empty; the
    fallback (skills attached to the user's career goal) is used only when the
    role is absent or lists nothing.
    """
    role_skills = list(getattr(target_role, "required_skills", None) or [])
    if role_skills:
        return role_skills
    return list(fallback_skills or [])


def summarize(report: Sequence[GapEntry]) -> dict:
    """Counts per status and mean percentage across the report."""
    counts = {str(status): 0 for status in GapStatus}
    for entry in report:
        counts[str(entry.status)] += 1
    mean = round(sum(e.percentage for e in report) / len(report)) if report else 0
    return {"total": len(report), "counts": counts, "mean_percentage": mean}
