"""LLM orchestration for skill advice: recommendations, learning advice, chat."""

from typing import Optional

import structlog

from cli.retry import llm_retry
from llm import LLMError as BaseLLMError
from llm import LLMProvider, LLMRateLimitError, create_llm_provider

from .prompts import PromptTemplates, format_career_goals, format_user_skills

logger = structlog.get_logger()

_llm_retry = llm_retry(max_attempts=3, min_wait=2.0, max_wait=30.0, exceptions=(LLMRateLimitError,))


class AdvisorError(Exception):
    """Base exception for advisor errors; message is safe to show users."""


class APIKeyMissingError(AdvisorError):
    """Raised when API key is not configured."""


@_llm_retry
def call_llm_json(llm: LLMProvider, system: str, user_prompt: str, max_tokens: int = 2000) -> dict:
    """JSON-object LLM call, retried on rate limits."""
    logger.debug("advisor.llm_call", provider=llm.provider_name, max_tokens=max_tokens)
    return llm.generate_json(
        messages=[{"role": "user", "content": user_prompt}],
        system=system,
        max_tokens=max_tokens,
    )


@_llm_retry
def call_llm_text(llm: LLMProvider, system: str, messages: list[dict], max_tokens: int = 1000) -> str:
    logger.debug("advisor.llm_chat", provider=llm.provider_name, turns=len(messages))
    return llm.generate(messages=messages, system=system, max_tokens=max_tokens)


def build_llm(
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    provider: Optional[str] = None,
    client=None,
) -> LLMProvider:
    try:
        return create_llm_provider(provider=provider, api_key=api_key, model=model, client=client)
    except BaseLLMError as e:
        raise APIKeyMissingError(str(e)) from e


class SkillAdvisor:
    """Skill recommendations, per-skill learning advice and advisor chat."""

    def __init__(self, llm: LLMProvider):
        self.llm = llm

    def recommend_skills(
        self,
        role_title: str,
        user_skills: list[dict],
        industry: Optional[str] = None,
    ) -> dict:
        """Recommend 3-5 skills to add for the target role.

        Raises:
            AdvisorError: the LLM call failed
        """
        prompt = PromptTemplates.SKILL_RECOMMENDATIONS.format(
            role_title=role_title,
            industry_line=f"Industry: {industry}\n" if industry else "",
            user_skills=format_user_skills(user_skills),
        )
        try:
            result = call_llm_json(self.llm, PromptTemplates.SKILL_RECOMMENDATIONS_SYSTEM, prompt)
        except BaseLLMError as e:
            logger.error("advisor.recommend_skills_failed", role=role_title, error=str(e))
            raise AdvisorError("Failed to get skill recommendations. Please try again later.") from e
        return {
            "recommendations": result.get("recommendations") or [],
            "explanation": result.get("explanation")
            or "Based on your target role and current skills, these skills will help you progress.",
        }

    def learning_advice(
        self,
        skill_name: str,
        current_level: int,
        role_title: str,
        learning_preference: Optional[str] = None,
    ) -> dict:
        prompt = PromptTemplates.LEARNING_ADVICE.format(
            skill_name=skill_name,
            current_level=current_level,
            role_title=role_title,
            preference_line=f"Learning preference: {learning_preference}\n" if learning_preference else "",
        )
        try:
            result = call_llm_json(self.llm, PromptTemplates.LEARNING_ADVICE_SYSTEM, prompt)
        except BaseLLMError as e:
            logger.error("advisor.learning_advice_failed", skill=skill_name, error=str(e))
            raise AdvisorError("Failed to get learning advice. Please try again later.") from e
        return {
            "advice": result.get("advice")
            or f"Here are some tips to improve your {skill_name} skills for a {role_title} role.",
            "resources": result.get("resources") or [],
            "estimatedTime": result.get("estimatedTime"),
        }

    def chat(
        self,
        message: str,
        history: Optional[list[dict]] = None,
        role_title: Optional[str] = None,
        user_skills: Optional[list[dict]] = None,
        goals: Optional[list[dict]] = None,
        role_titles: Optional[dict] = None,
    ) -> str:
        """One advisor turn with the user's skills and goals as system context."""
        if not message or not message.strip():
            raise AdvisorError("Message is required")
        system = PromptTemplates.CHAT_SYSTEM.format(
            target_role_line=f"Target role: {role_title}" if role_title else "No target role specified",
            user_skills=format_user_skills(user_skills or []),
            career_goals=format_career_goals(goals or [], role_titles),
        )
        messages = [m for m in (history or []) if m.get("role") in ("user", "assistant")]
        messages.append({"role": "user", "content": message})
        try:
            reply = call_llm_text(self.llm, system, messages)
        except BaseLLMError as e:
            logger.error("advisor.chat_failed", error=str(e))
            raise AdvisorError("Failed to chat with the advisor. Please try again later.") from e
        return reply or "I'm sorry, I wasn't able to generate a response. Please try again."
