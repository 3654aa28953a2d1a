"""Shared enums and types for upcraft."""

from enum import StrEnum


class GapStatus(StrEnum):
    MISSING = "missing"
    IMPROVEMENT = "improvement"
    STRONG = "strong"


class RecomputeState(StrEnum):
    IDLE = "idle"
    RECOMPUTING = "recomputing"
    READY = "ready"
    STALE = "stale"


class DashboardState(StrEnum):
    NO_TARGET_ROLE = "no_target_role"
    COMPLETE_ASSESSMENT = "complete_assessment"
    READY = "ready"


class SkillCategory(StrEnum):
    TECHNICAL = "technical"
    LEADERSHIP = "leadership"
    COMMUNICATION = "communication"
    ANALYTICAL = "analytical"
    CREATIVE = "creative"


class RoleType(StrEnum):
    TECHNICAL = "technical"
    CREATIVE = "creative"
    BUSINESS = "business"
    LEADERSHIP = "leadership"
    OPERATIONS = "operations"
    CUSTOMER_FACING = "customer_facing"
    HEALTHCARE = "healthcare"
    EDUCATION = "education"
    FINANCE = "finance"
    MARKETING = "marketing"
    RESEARCH = "research"
    HUMAN_RESOURCES = "human_resources"


class Industry(StrEnum):
    TECHNOLOGY = "technology"
    HEALTHCARE = "healthcare"
    FINANCE = "finance"
    EDUCATION = "education"
    MEDIA = "media"
    RETAIL = "retail"
    CONSULTING = "consulting"
    MANUFACTURING = "manufacturing"


class ResourceType(StrEnum):
    COURSE = "course"
    WORKSHOP = "workshop"
    ASSESSMENT = "assessment"
    VIDEO = "video"
    ARTICLE = "article"
    BOOK = "book"
    PROJECT = "project"


class ActivityType(StrEnum):
    COMPLETED_RESOURCE = "completed_resource"
    STARTED_RESOURCE = "started_resource"
    UPDATED_SKILL = "updated_skill"
    VALIDATED_SKILL = "validated_skill"
    SET_CAREER_GOAL = "set_career_goal"


class ValidationType(StrEnum):
    ASSESSMENT = "assessment"
    PROJECT = "project"
    CERTIFICATION = "certification"
    PEER_REVIEW = "peer_review"
    SELF_ASSESSMENT = "self_assessment"
