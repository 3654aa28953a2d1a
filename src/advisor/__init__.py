from .engine import AdvisorError, APIKeyMissingError, SkillAdvisor, build_llm
from .gap_analysis import SkillGapAnalyzer
from .learning_paths import LearningPathGenerator
from .prompts import PromptTemplates

__all__ = [
    "AdvisorError",
    "APIKeyMissingError",
    "LearningPathGenerator",
    "PromptTemplates",
    "SkillAdvisor",
    "SkillGapAnalyzer",
    "build_llm",
]
