"""Learning path generator: LLM-structured modules, persisted in SQLite."""

from pathlib import Path
from typing import Optional, Sequence

import structlog

from gaps.engine import GapEntry, sort_by_priority
from llm import LLMError, LLMProvider
from shared_types import GapStatus, ResourceType
from store import learning as learning_store

from .engine import call_llm_json
from .prompts import PromptTemplates, format_gap_report, format_resources, format_user_skills

logger = structlog.get_logger()

MODULE_RESOURCE_LIMIT = 3


def fallback_path(goal: dict, resources: Sequence[dict]) -> dict:
    """Two-module path: courses for foundations, workshops/assessments for advanced work."""

    def pick(types):
        chosen = [r for r in resources if r["resource_type"] in types][:MODULE_RESOURCE_LIMIT]
        return [{"id": r["id"], "completed": False} for r in chosen]

    return {
        "title": f"Learning Path for {goal['title']}",
        "description": f"A personalized learning path to help you achieve your goal: {goal['title']}",
        "modules": [
            {
                "id": 1,
                "title": "Foundation Skills",
                "description": "Build the essential skills you need as a base",
                "estimatedHours": 15,
                "resources": pick({str(ResourceType.COURSE)}),
            },
            {
                "id": 2,
                "title": "Advanced Skills",
                "description": "Develop specialized skills for your career goal",
                "estimatedHours": 20,
                "resources": pick({str(ResourceType.WORKSHOP), str(ResourceType.ASSESSMENT)}),
            },
        ],
    }


def _clean_modules(modules, known_ids: set[int]) -> list[dict]:
    """Keep well-formed modules and drop resource references the library doesn't have."""
    cleaned = []
    for i, module in enumerate(modules or [], start=1):
        if not isinstance(module, dict) or not module.get("title"):
            continue
        refs = []
        for ref in module.get("resources") or []:
            rid = ref.get("id") if isinstance(ref, dict) else ref
            if isinstance(rid, int) and rid in known_ids:
                refs.append({"id": rid, "completed": bool(ref.get("completed")) if isinstance(ref, dict) else False})
        cleaned.append({**module, "id": module.get("id", i), "resources": refs})
    return cleaned


class LearningPathGenerator:
    """Generate structured learning paths via LLM."""

    def __init__(self, llm: Optional[LLMProvider] = None, db_path: Path | None = None):
        self.llm = llm
        self.db_path = db_path

    def generate(
        self,
        user_id: str,
        goal: dict,
        user_skills: list[dict],
        report: Sequence[GapEntry] = (),
    ) -> dict:
        """Generate and save a path for `goal`.

        Returns:
            The stored path dict (with id and `source` of "llm" or "fallback")
        """
        resources = learning_store.list_resources(db_path=self.db_path)
        path, source = None, "fallback"
        if self.llm is not None:
            gaps = [e for e in sort_by_priority(report) if e.status != GapStatus.STRONG]
            prompt = PromptTemplates.LEARNING_PATH.format(
                goal_title=goal["title"],
                timeline_months=goal.get("timeline_months") or "unspecified",
                gap_report=format_gap_report(gaps),
                user_skills=format_user_skills(user_skills),
                resources=format_resources(resources),
            )
            try:
                result = call_llm_json(self.llm, PromptTemplates.LEARNING_PATH_SYSTEM, prompt, max_tokens=3000)
                modules = _clean_modules(result.get("modules"), {r["id"] for r in resources})
                if result.get("title") and modules:
                    path = {"title": result["title"], "description": result.get("description"), "modules": modules}
                    source = "llm"
                else:
                    logger.warning("learning_path.incomplete_llm_path", goal_id=goal.get("id"))
            except LLMError as e:
                logger.warning("learning_path.llm_failed", goal_id=goal.get("id"), error=str(e))

        if path is None:
            path = fallback_path(goal, resources)
        return learning_store.save_path(user_id, path, source=source, db_path=self.db_path)
