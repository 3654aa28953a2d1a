"""Tests for LearningPathGenerator."""

from advisor.learning_paths import LearningPathGenerator, _clean_modules, fallback_path
from gaps.engine import SkillLevel, compute_gap_report
from llm import LLMError, LLMResponseError
from store.learning import list_paths, list_resources

GOAL = {"id": 3, "title": "Become a Data Scientist", "timeline_months": 9}


class TestFallbackPath:
    def test_two_modules_split_by_type(self, resources):
        path = fallback_path(GOAL, list_resources(db_path=resources))
        foundation, advanced = path["modules"]
        by_id = {r["id"]: r for r in list_resources(db_path=resources)}

        assert path["title"] == "Learning Path for Become a Data Scientist"
        assert foundation["title"] == "Foundation Skills"
        assert {by_id[r["id"]]["resource_type"] for r in foundation["resources"]} == {"course"}
        assert {by_id[r["id"]]["resource_type"] for r in advanced["resources"]} <= {"workshop", "assessment"}
        assert all(r["completed"] is False for r in foundation["resources"] + advanced["resources"])

    def test_caps_resources_per_module(self, resources):
        path = fallback_path(GOAL, list_resources(db_path=resources))
        assert all(len(m["resources"]) <= 3 for m in path["modules"])

    def test_empty_library(self):
        path = fallback_path(GOAL, [])
        assert [m["resources"] for m in path["modules"]] == [[], []]


class TestCleanModules:
    def test_drops_untitled_and_unknown_resources(self):
        modules = [
            {"title": "Basics", "resources": [{"id": 1, "completed": True}, {"id": 99}, 2, "x"]},
            {"description": "no title"},
            "garbage",
        ]
        cleaned = _clean_modules(modules, known_ids={1, 2})
        assert len(cleaned) == 1
        assert cleaned[0]["id"] == 1
        assert cleaned[0]["resources"] == [{"id": 1, "completed": True}, {"id": 2, "completed": False}]

    def test_none(self):
        assert _clean_modules(None, {1}) == []


class TestGenerate:
    def _report(self):
        return compute_gap_report(["Statistics", "Python"], {"python": SkillLevel(60, 100)})

    def test_fallback_without_llm_is_saved(self, resources, user):
        path = LearningPathGenerator(db_path=resources).generate("user-1", GOAL, [], self._report())
        assert path["source"] == "fallback"
        assert path["id"]
        assert [p["id"] for p in list_paths("user-1", db_path=resources)] == [path["id"]]

    def test_llm_path(self, resources, user, fake_llm):
        rid = list_resources(skill="Statistics", db_path=resources)[0]["id"]
        llm = fake_llm(
            json_reply={
                "title": "Stats first",
                "description": "Close the statistics gap",
                "modules": [{"title": "Statistics", "resources": [{"id": rid}, {"id": 999}]}],
            }
        )
        path = LearningPathGenerator(llm, db_path=resources).generate("user-1", GOAL, [], self._report())

        assert path["source"] == "llm"
        assert path["title"] == "Stats first"
        assert path["modules"][0]["resources"] == [{"id": rid, "completed": False}]

        prompt = llm.generate_json.call_args.kwargs["messages"][0]["content"]
        assert "Statistics: missing" in prompt
        # Strong skills are not sent as gaps
        assert "Python: strong" not in prompt

    def test_llm_path_without_modules_falls_back(self, resources, user, fake_llm):
        llm = fake_llm(json_reply={"title": "Empty", "modules": []})
        path = LearningPathGenerator(llm, db_path=resources).generate("user-1", GOAL, [])
        assert path["source"] == "fallback"

    def test_llm_error_falls_back(self, resources, user, fake_llm):
        llm = fake_llm(error=LLMResponseError("not json"))
        path = LearningPathGenerator(llm, db_path=resources).generate("user-1", GOAL, [])
        assert path["source"] == "fallback"
        assert path["title"].startswith("Learning Path for")

    def test_generic_llm_error_falls_back(self, resources, user, fake_llm):
        llm = fake_llm(error=LLMError("down"))
        path = LearningPathGenerator(llm, db_path=resources).generate("user-1", GOAL, [])
        assert path["source"] == "fallback"
