"""Skill gap analysis: LLM narrative over the computed gap report, with a deterministic fallback."""

from typing import Optional, Sequence

import structlog

from gaps.engine import GapEntry, skill_key, sort_by_priority, summarize
from llm import LLMError, LLMProvider
from shared_types import GapStatus

from .engine import call_llm_json
from .prompts import PromptTemplates, format_gap_report, format_user_skills

logger = structlog.get_logger()

DEFAULT_REQUIRED_LEVEL = 70

FALLBACK_RECOMMENDATIONS = [
    "Focus first on the required skills you don't have yet",
    "Pick one course or workshop per missing skill and schedule it",
    "Build practical experience through a small project",
]


class SkillGapAnalyzer:
    """Explains a gap report in the context of a career goal."""

    def __init__(self, llm: Optional[LLMProvider] = None):
        self.llm = llm

    def analyze(
        self,
        goal: dict,
        report: Sequence[GapEntry],
        user_skills: list[dict],
        role=None,
    ) -> dict:
        """Return `{careerGoal, overallReadiness, skillGaps, recommendations, source}`.

        Falls back to `fallback_analysis` when no LLM is configured or the call fails.
        """
        if self.llm is None:
            return self.fallback_analysis(goal, report, user_skills)

        prompt = PromptTemplates.GAP_ANALYSIS.format(
            goal_title=goal["title"],
            role_title=getattr(role, "title", None) or "not set",
            gap_report=format_gap_report(sort_by_priority(report)),
            user_skills=format_user_skills(user_skills),
        )
        try:
            result = call_llm_json(self.llm, PromptTemplates.GAP_ANALYSIS_SYSTEM, prompt)
        except LLMError as e:
            logger.warning("gap_analysis.llm_failed", goal_id=goal.get("id"), error=str(e))
            return self.fallback_analysis(goal, report, user_skills)

        return {
            "careerGoal": result.get("careerGoal") or goal["title"],
            "overallReadiness": result.get("overallReadiness", summarize(report)["mean_percentage"]),
            "skillGaps": result.get("skillGaps") or [],
            "recommendations": result.get("recommendations") or [],
            "source": "llm",
        }

    @staticmethod
    def fallback_analysis(goal: dict, report: Sequence[GapEntry], user_skills: list[dict]) -> dict:
        """Deterministic analysis: readiness is the mean gap percentage."""
        levels = {skill_key(s.get("name") or s.get("skill_name") or ""): s for s in user_skills}
        skill_gaps = []
        for entry in sort_by_priority(report):
            if entry.status == GapStatus.STRONG:
                continue
            held = levels.get(skill_key(entry.skill_name), {})
            skill_gaps.append(
                {
                    "skillName": entry.skill_name,
                    "currentLevel": held.get("current_level", 0),
                    "requiredLevel": held.get("target_level") or DEFAULT_REQUIRED_LEVEL,
                    "priority": "high" if entry.status == GapStatus.MISSING else "medium",
                }
            )
        return {
            "careerGoal": goal["title"],
            "overallReadiness": summarize(report)["mean_percentage"],
            "skillGaps": skill_gaps,
            "recommendations": list(FALLBACK_RECOMMENDATIONS),
            "source": "fallback",
        }
