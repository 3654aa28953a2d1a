"""Pydantic request/response schemas for the web API."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from shared_types import SkillCategory, ValidationType

# --- Settings ---


class SettingsUpdate(BaseModel):
    """Update user settings / API keys."""

    llm_provider: Optional[Literal["auto", "openai"]] = None
    llm_model: Optional[str] = None
    llm_api_key: Optional[str] = None


class SettingsResponse(BaseModel):
    """Settings with bool mask for secrets (never raw keys)."""

    llm_provider: Optional[str] = None
    llm_model: Optional[str] = None
    llm_api_key_set: bool = False
    llm_api_key_hint: Optional[str] = None


# --- Roles ---


class RoleOut(BaseModel):
    id: int
    title: str
    industry: str
    role_type: str
    level: str
    description: Optional[str] = None
    required_skills: list[str] = []


class TargetRoleSet(BaseModel):
    role_id: int


# --- Skills ---


class SkillAssessment(BaseModel):
    skill_name: str = Field(..., min_length=1, max_length=100)
    category: SkillCategory = SkillCategory.TECHNICAL
    current_level: int = Field(..., ge=0, le=100)
    target_level: int = Field(..., ge=0, le=100)
    notes: Optional[str] = Field(None, max_length=2000)


class AssessmentBatch(BaseModel):
    skills: list[SkillAssessment] = Field(..., min_length=1, max_length=100)


class UserSkillOut(BaseModel):
    id: int
    skill_id: int
    name: str
    category: str
    current_level: int
    target_level: int
    notes: Optional[str] = None
    last_assessed: str


# --- Career goals ---


class CareerGoalCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    timeline_months: int = Field(12, ge=1, le=240)
    target_date: Optional[str] = None
    current_role_id: Optional[int] = None
    target_role_id: Optional[int] = None


class CareerGoalUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    timeline_months: Optional[int] = Field(None, ge=1, le=240)
    target_date: Optional[str] = None
    current_role_id: Optional[int] = None
    target_role_id: Optional[int] = None


# --- Learning ---


class LearningPathGenerate(BaseModel):
    career_goal_id: int


class ProgressUpdate(BaseModel):
    resource_id: int
    progress: int = Field(..., ge=0, le=100)
    score: Optional[int] = Field(None, ge=0, le=100)


class ValidationCreate(BaseModel):
    skill_name: str = Field(..., min_length=1, max_length=100)
    validation_type: ValidationType
    score: Optional[int] = Field(None, ge=0, le=100)
    evidence: Optional[str] = Field(None, max_length=5000)
    validated_by: Optional[str] = None


# --- Advisor ---


class GapAnalysisRequest(BaseModel):
    career_goal_id: int


class SkillRecommendationRequest(BaseModel):
    industry: Optional[str] = None


class LearningAdviceRequest(BaseModel):
    skill_name: str = Field(..., min_length=1, max_length=100)
    learning_preference: Optional[str] = Field(None, max_length=200)


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str = Field(..., max_length=10_000)


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=5000)
    history: list[ChatTurn] = Field(default_factory=list, max_length=50)


class ChatResponse(BaseModel):
    response: str
