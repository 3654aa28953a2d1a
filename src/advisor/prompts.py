"""Prompt templates for the skill advisor."""

from typing import Iterable, Optional


class PromptTemplates:
    """Specialized prompts for the advisor workflows."""

    GAP_ANALYSIS_SYSTEM = """You are an AI career advisor that specializes in identifying skill gaps based on users' current skills and career goals.

Reply with a JSON object with these keys:
- "careerGoal": the goal title
- "overallReadiness": integer 0-100
- "skillGaps": list of {"skillName", "currentLevel", "requiredLevel", "priority"} where priority is "high", "medium" or "low"
- "recommendations": list of short, actionable strings"""

    GAP_ANALYSIS = """CAREER GOAL: {goal_title}
TARGET ROLE: {role_title}

COMPUTED GAP REPORT (most urgent first):
{gap_report}

USER SKILLS:
{user_skills}

Analyze the missing and underdeveloped skills for this goal."""

    LEARNING_PATH_SYSTEM = """You are an AI career advisor that specializes in creating personalized learning paths based on users' skills and career goals. Create a structured learning path with modules and recommended resources.

Reply with a JSON object: {"title", "description", "modules": [{"id", "title", "description", "estimatedHours", "skills", "resources": [{"id", "completed"}]}]}.
Only reference resource ids from the available resources list."""

    LEARNING_PATH = """CAREER GOAL: {goal_title} (timeline: {timeline_months} months)

SKILLS TO CLOSE (most urgent first):
{gap_report}

USER SKILLS:
{user_skills}

AVAILABLE RESOURCES:
{resources}"""

    SKILL_RECOMMENDATIONS_SYSTEM = """You are a career development and skills advisor specializing in IT and technology careers.
Your task is to analyze a user's target role and current skills to recommend additional skills they should develop to be competitive in their target role.

Focus on skill recommendations that are:
1. Highly relevant to the target role
2. Complementary to their current skill set
3. In-demand in the current job market
4. Paired with a clear learning path suggestion

Reply with a JSON object: {"recommendations": [{"skillName", "relevance", "description", "learningPathSuggestion"}], "explanation"}."""

    SKILL_RECOMMENDATIONS = """I'm looking to advance my career and need skill recommendations.

Target Role: {role_title}
{industry_line}
My Current Skills:
{user_skills}

Please recommend 3-5 additional skills I should develop to be competitive for my target role."""

    LEARNING_ADVICE_SYSTEM = """You are a skill development advisor specializing in IT and technology skills.
Provide personalized learning advice for a specific skill based on the user's current level, target role and learning preferences.

Reply with a JSON object: {"advice", "resources": [{"title", "type", "url", "description", "difficulty"}], "estimatedTime"}."""

    LEARNING_ADVICE = """I need advice on how to improve my {skill_name} skills.

Current level: {current_level}/100
Target role: {role_title}
{preference_line}
Please provide:
1. Specific advice on how to improve this skill
2. 3-5 recommended learning resources (courses, books, tutorials, projects)
3. Estimated time to reach proficiency"""

    CHAT_SYSTEM = """You are an AI Skill Advisor for a career development platform called Upcraft. Your role is to help users develop their skills for career advancement.

USER CONTEXT:
{target_role_line}

USER SKILLS:
{user_skills}

USER CAREER GOALS:
{career_goals}

INSTRUCTIONS:
1. Provide thoughtful, personalized advice on skill development based on the user's current skills and career goals.
2. If the user asks about skills needed for a specific role, break down the technical and soft skills required.
3. For learning resources, recommend specific types of courses, projects, or practice exercises.
4. Be encouraging and focus on incremental progress.
5. When suggesting learning paths, structure them in clear steps from beginner to advanced.
6. Keep responses concise and focused on actionable advice.
7. If you don't have enough information, ask clarifying questions."""


def format_user_skills(skills: Iterable[dict]) -> str:
    lines = [
        f"- {s.get('name') or s.get('skill_name') or 'Unknown skill'} "
        f"(Current level: {s.get('current_level') or 0}, Target level: {s.get('target_level') or 0})"
        for s in skills
    ]
    return "\n".join(lines) if lines else "No skills data available."


def format_gap_report(entries: Iterable) -> str:
    lines = [f"- {e.skill_name}: {e.status} ({e.percentage}%)" for e in entries]
    return "\n".join(lines) if lines else "No required skills for this role."


def format_career_goals(goals: Iterable[dict], role_titles: Optional[dict] = None) -> str:
    role_titles = role_titles or {}
    lines = []
    for g in goals:
        parts = [f"- {g.get('title') or 'Unnamed goal'}:", g.get("description") or ""]
        if g.get("target_role_id"):
            parts.append(f"Target role: {role_titles.get(g['target_role_id'], 'Unknown role')}")
        if g.get("timeline_months"):
            parts.append(f"Timeline: {g['timeline_months']} months")
        lines.append(" ".join(p for p in parts if p))
    return "\n".join(lines) if lines else "No career goals set."


def format_resources(resources: Iterable[dict]) -> str:
    lines = [
        f"- id={r['id']} [{r['resource_type']}] {r['title']} (skills: {', '.join(r.get('skill_names') or [])})"
        for r in resources
    ]
    return "\n".join(lines) if lines else "No resources available."
