"""Dependency injection for FastAPI routes."""

import os
from functools import lru_cache

import structlog
from fastapi import Depends, HTTPException

from advisor import APIKeyMissingError, build_llm
from catalog import Role, RoleCatalog
from cli.config import load_config_model
from gaps import (
    CareerContext,
    CareerGoalMeta,
    ContextRegistry,
    GapEntry,
    compute_gap_report,
    resolve_required_skills,
)
from store import goals as goal_store
from store import skills as skill_store
from store.users import get_user_secrets
from web.auth import get_current_user

logger = structlog.get_logger()


@lru_cache
def get_config():
    """Load shared config from config.yaml."""
    return load_config_model()


def get_secret_key() -> str:
    """Get Fernet secret key from env."""
    key = os.getenv("SECRET_KEY")
    if not key:
        raise RuntimeError("SECRET_KEY env var required for API key encryption")
    return key


def get_catalog() -> RoleCatalog:
    return RoleCatalog()


def get_role_or_404(role_id: int) -> Role:
    role = get_catalog().get(role_id)
    if role is None:
        raise HTTPException(status_code=404, detail="Role not found")
    return role


def get_goal_or_404(user_id: str, goal_id: int) -> dict:
    goal = goal_store.get_goal(user_id, goal_id)
    if goal is None:
        raise HTTPException(status_code=404, detail="Career goal not found")
    return goal


# --- Per-user career context ---


def _goal_meta(user_id: str) -> CareerGoalMeta | None:
    goal = goal_store.current_goal(user_id)
    if goal is None:
        return None
    return CareerGoalMeta(
        title=goal["title"],
        timeline_months=goal["timeline_months"],
        readiness=skill_store.overall_progress(user_id),
        goal_id=goal["id"],
    )


def _skills_for_goal_title(title: str) -> list[str]:
    """Required skills of the catalog role named like a goal."""
    role = get_catalog().find_by_title(title)
    return list(role.required_skills) if role else []


def _goal_fallback_skills(user_id: str) -> list[str]:
    goal = goal_store.current_goal(user_id)
    if goal is None:
        return []
    return _skills_for_goal_title(goal["title"])


def build_context(user_id: str) -> CareerContext:
    """Rebuild a user's session context from the stored target role pointer."""
    config = get_config()
    goal = goal_store.current_goal(user_id)
    role = None
    if goal and goal["target_role_id"]:
        role = get_catalog().get(goal["target_role_id"])
    fallback = None
    if config.gaps.fallback_to_goal_skills:

        def fallback():
            return _goal_fallback_skills(user_id)

    return CareerContext(
        user_id=user_id,
        skills_provider=lambda: skill_store.skill_levels_for_user(user_id),
        goal_provider=lambda: _goal_meta(user_id),
        fallback_provider=fallback,
        initial_role=role,
        auto_recompute=config.gaps.auto_recompute,
    )


_registry = ContextRegistry(build_context)


def get_registry() -> ContextRegistry:
    return _registry


def get_career_context(user: dict = Depends(get_current_user)) -> CareerContext:
    return _registry.get(user["id"])


def goal_gap_report(user_id: str, goal: dict, ctx: CareerContext) -> tuple[list[GapEntry], Role | None]:
    """Gap report and role for `goal`.

    The current goal uses the session's live report; an older goal gets a one-off
    report against its own target role (or title fallback).
    """
    current = goal_store.current_goal(user_id)
    if current is not None and current["id"] == goal["id"]:
        return ctx.gap_report(), ctx.target_role
    role = get_catalog().get(goal["target_role_id"]) if goal["target_role_id"] else None
    fallback = None
    if get_config().gaps.fallback_to_goal_skills:
        fallback = _skills_for_goal_title(goal["title"])
    report = compute_gap_report(
        resolve_required_skills(role, fallback),
        skill_store.skill_levels_for_user(user_id),
    )
    return report, role


# --- Per-user secrets ---


def get_decrypted_secrets_for_user(user_id: str) -> dict:
    """Load all decrypted secrets for a specific user."""
    return get_user_secrets(user_id, get_secret_key())


def get_api_key_for_user(user_id: str) -> str | None:
    """Get LLM API key for a user: user secrets first, then env var, then config."""
    secrets = get_decrypted_secrets_for_user(user_id)
    if secrets.get("llm_api_key"):
        return secrets["llm_api_key"]

    val = os.getenv("OPENAI_API_KEY")
    if val:
        return val

    config = get_config()
    if config.llm.api_key:
        return config.llm.api_key
    return None


def get_llm_for_user(user_id: str, required: bool = True):
    """Build the user's LLM provider.

    Returns None when no key is configured and `required` is False, so callers
    with a deterministic fallback can still answer.
    """
    secrets = get_decrypted_secrets_for_user(user_id)
    config = get_config()
    api_key = get_api_key_for_user(user_id)
    if not api_key and not required:
        return None
    try:
        return build_llm(
            api_key=api_key,
            model=secrets.get("llm_model") or config.llm.model,
            provider=secrets.get("llm_provider") or config.llm.provider,
        )
    except APIKeyMissingError as e:
        if not required:
            return None
        raise HTTPException(status_code=400, detail=str(e))


def _hint(value: str | None) -> str | None:
    """Return last 4 chars as hint, or None."""
    if not value or len(value) < 4:
        return None
    return f"...{value[-4:]}"


def get_settings_mask_for_user(user_id: str) -> dict:
    """Return settings with bool mask for secrets, per-user."""
    secrets = get_decrypted_secrets_for_user(user_id)
    config = get_config()
    return {
        "llm_provider": secrets.get("llm_provider") or config.llm.provider,
        "llm_model": secrets.get("llm_model") or config.llm.model,
        "llm_api_key_set": bool(secrets.get("llm_api_key")),
        "llm_api_key_hint": _hint(secrets.get("llm_api_key")),
    }
