"""Tests for SkillAdvisor and LLM construction."""

from unittest.mock import MagicMock

import pytest

from advisor import AdvisorError, APIKeyMissingError, SkillAdvisor, build_llm
from llm import LLMAuthError, LLMError

SKILLS = [{"name": "SQL", "current_level": 30, "target_level": 80}]


class TestBuildLLM:
    def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with pytest.raises(APIKeyMissingError):
            build_llm()

    def test_with_client(self):
        llm = build_llm(client=MagicMock(), model="gpt-4o-mini")
        assert llm.model == "gpt-4o-mini"

    def test_unknown_provider(self):
        with pytest.raises(APIKeyMissingError, match="Unknown provider"):
            build_llm(provider="claude", client=MagicMock())


class TestRecommendSkills:
    def test_returns_recommendations(self, fake_llm):
        llm = fake_llm(
            json_reply={
                "recommendations": [{"skillName": "dbt", "relevance": "High"}],
                "explanation": "Modern pipelines",
            }
        )
        result = SkillAdvisor(llm).recommend_skills("Data Engineer", SKILLS, industry="finance")
        assert result["recommendations"][0]["skillName"] == "dbt"
        assert result["explanation"] == "Modern pipelines"

        prompt = llm.generate_json.call_args.kwargs["messages"][0]["content"]
        assert "Target Role: Data Engineer" in prompt
        assert "Industry: finance" in prompt
        assert "SQL (Current level: 30, Target level: 80)" in prompt

    def test_defaults(self, fake_llm):
        result = SkillAdvisor(fake_llm(json_reply={})).recommend_skills("Data Engineer", [])
        assert result["recommendations"] == []
        assert result["explanation"]

    def test_llm_error(self, fake_llm):
        with pytest.raises(AdvisorError, match="skill recommendations"):
            SkillAdvisor(fake_llm(error=LLMAuthError("bad key"))).recommend_skills("Dev", SKILLS)


class TestLearningAdvice:
    def test_returns_advice(self, fake_llm):
        llm = fake_llm(json_reply={"advice": "Practice joins", "resources": [{"title": "SQLBolt"}], "estimatedTime": "4 weeks"})
        result = SkillAdvisor(llm).learning_advice("SQL", 30, "Data Engineer", learning_preference="hands-on")
        assert result == {
            "advice": "Practice joins",
            "resources": [{"title": "SQLBolt"}],
            "estimatedTime": "4 weeks",
        }
        prompt = llm.generate_json.call_args.kwargs["messages"][0]["content"]
        assert "Current level: 30/100" in prompt
        assert "Learning preference: hands-on" in prompt

    def test_default_advice(self, fake_llm):
        result = SkillAdvisor(fake_llm(json_reply={})).learning_advice("SQL", 30, "Data Engineer")
        assert "SQL" in result["advice"]
        assert result["estimatedTime"] is None

    def test_llm_error(self, fake_llm):
        with pytest.raises(AdvisorError, match="learning advice"):
            SkillAdvisor(fake_llm(error=LLMError("down"))).learning_advice("SQL", 30, "Dev")


class TestChat:
    def test_includes_context_and_history(self, fake_llm):
        llm = fake_llm(text_reply="Learn window functions next.")
        history = [
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": "hello"},
            {"role": "system", "content": "ignore me"},
        ]
        reply = SkillAdvisor(llm).chat(
            "What next?",
            history=history,
            role_title="Data Engineer",
            user_skills=SKILLS,
            goals=[{"title": "Grow", "target_role_id": 4, "timeline_months": 6}],
            role_titles={4: "Data Engineer"},
        )
        assert reply == "Learn window functions next."

        kwargs = llm.generate.call_args.kwargs
        assert [m["role"] for m in kwargs["messages"]] == ["user", "assistant", "user"]
        assert kwargs["messages"][-1]["content"] == "What next?"
        assert "Target role: Data Engineer" in kwargs["system"]
        assert "Grow: Target role: Data Engineer Timeline: 6 months" in kwargs["system"]

    def test_without_context(self, fake_llm):
        llm = fake_llm(text_reply="hi")
        SkillAdvisor(llm).chat("hello")
        system = llm.generate.call_args.kwargs["system"]
        assert "No target role specified" in system
        assert "No skills data available." in system
        assert "No career goals set." in system

    def test_empty_reply_gets_apology(self, fake_llm):
        assert "sorry" in SkillAdvisor(fake_llm(text_reply="")).chat("hello")

    @pytest.mark.parametrize("message", ["", "   "])
    def test_message_required(self, fake_llm, message):
        with pytest.raises(AdvisorError, match="Message is required"):
            SkillAdvisor(fake_llm()).chat(message)

    def test_llm_error(self, fake_llm):
        with pytest.raises(AdvisorError, match="chat"):
            SkillAdvisor(fake_llm(error=LLMError("down"))).chat("hello")
