"""Tests for advisor prompt formatting."""

from advisor.prompts import (
    PromptTemplates,
    format_career_goals,
    format_gap_report,
    format_resources,
    format_user_skills,
)
from gaps.engine import GapEntry
from shared_types import GapStatus


def test_format_user_skills():
    text = format_user_skills(
        [
            {"name": "SQL", "current_level": 40, "target_level": 80},
            {"skill_name": "Excel", "current_level": None, "target_level": 60},
        ]
    )
    assert text.splitlines() == [
        "- SQL (Current level: 40, Target level: 80)",
        "- Excel (Current level: 0, Target level: 60)",
    ]
    assert format_user_skills([]) == "No skills data available."


def test_format_gap_report():
    entries = [GapEntry("Coaching", GapStatus.IMPROVEMENT, 30, True)]
    assert format_gap_report(entries) == "- Coaching: improvement (30%)"
    assert format_gap_report([]) == "No required skills for this role."


def test_format_career_goals_names_roles():
    goals = [{"title": "Lead", "description": "", "target_role_id": 7, "timeline_months": 6}]
    assert format_career_goals(goals, {7: "Scrum Master"}) == "- Lead: Target role: Scrum Master Timeline: 6 months"
    assert format_career_goals([{"title": "x", "target_role_id": 9}]) == "- x: Target role: Unknown role"
    assert format_career_goals([]) == "No career goals set."


def test_format_resources():
    text = format_resources([{"id": 3, "resource_type": "course", "title": "SQL", "skill_names": ["SQL", "Databases"]}])
    assert text == "- id=3 [course] SQL (skills: SQL, Databases)"


def test_templates_render_without_missing_keys():
    PromptTemplates.GAP_ANALYSIS.format(goal_title="g", role_title="r", gap_report="", user_skills="")
    PromptTemplates.LEARNING_PATH.format(
        goal_title="g", timeline_months=12, gap_report="", user_skills="", resources=""
    )
    PromptTemplates.SKILL_RECOMMENDATIONS.format(role_title="r", industry_line="", user_skills="")
    PromptTemplates.LEARNING_ADVICE.format(skill_name="s", current_level=0, role_title="r", preference_line="")
    PromptTemplates.CHAT_SYSTEM.format(target_role_line="", user_skills="", career_goals="")
