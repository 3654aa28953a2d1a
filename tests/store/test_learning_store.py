"""Tests for resources, learning paths and progress."""

import pytest

from catalog.data import DEFAULT_RESOURCES
from store.activity import recent_activities
from store.learning import (
    delete_path,
    get_path,
    get_resource,
    list_paths,
    list_progress,
    list_resources,
    progress_stats,
    record_progress,
    save_path,
    seed_resources,
)


def _resource_id(db_path, title):
    return next(r["id"] for r in list_resources(db_path=db_path) if r["title"] == title)


class TestResources:
    def test_seed_once(self, db_path):
        assert seed_resources(db_path=db_path) == len(DEFAULT_RESOURCES)
        assert seed_resources(db_path=db_path) == 0

    def test_filter_by_type(self, resources):
        workshops = list_resources("workshop", db_path=resources)
        assert {r["resource_type"] for r in workshops} == {"workshop"}
        assert len(workshops) == 2

    def test_filter_by_skill_case_insensitive(self, resources):
        titles = {r["title"] for r in list_resources(skill="python", db_path=resources)}
        assert titles == {"Python for Everybody", "Machine Learning Crash Course"}

    def test_rows_decoded(self, resources):
        resource = get_resource(_resource_id(resources, "SQL Fundamentals"), db_path=resources)
        assert resource["skill_names"] == ["SQL", "Databases"]
        assert resource["is_free"] is True

    def test_unknown_resource(self, resources):
        assert get_resource(999, db_path=resources) is None


class TestPaths:
    def test_save_list_get_delete(self, db_path, user):
        saved = save_path(
            "user-1",
            {"title": "Data path", "description": "d", "modules": [{"title": "m1", "resources": []}]},
            source="fallback",
            db_path=db_path,
        )
        assert saved["source"] == "fallback"
        [listed] = list_paths("user-1", db_path=db_path)
        assert listed["modules"][0]["title"] == "m1"
        assert get_path("user-1", saved["id"], db_path=db_path)["title"] == "Data path"
        assert get_path("user-2", saved["id"], db_path=db_path) is None

        assert delete_path("user-1", saved["id"], db_path=db_path) is True
        assert delete_path("user-1", saved["id"], db_path=db_path) is False

    def test_title_required(self, db_path, user):
        with pytest.raises(ValueError):
            save_path("user-1", {"modules": []}, db_path=db_path)


class TestProgress:
    def test_start_then_complete(self, resources, user):
        rid = _resource_id(resources, "SQL Fundamentals")
        started = record_progress("user-1", rid, 40, db_path=resources)
        assert started["completed"] is False
        done = record_progress("user-1", rid, 100, score=88, db_path=resources)
        assert done["completed"] is True
        assert done["score"] == 88
        assert done["resource_title"] == "SQL Fundamentals"

        kinds = [a["activity_type"] for a in recent_activities("user-1", db_path=resources)]
        assert kinds.count("started_resource") == 1
        assert kinds.count("completed_resource") == 1

    def test_completion_logged_once(self, resources, user):
        rid = _resource_id(resources, "SQL Fundamentals")
        record_progress("user-1", rid, 100, db_path=resources)
        record_progress("user-1", rid, 100, db_path=resources)
        kinds = [a["activity_type"] for a in recent_activities("user-1", db_path=resources)]
        assert kinds.count("completed_resource") == 1

    def test_completion_sticks(self, resources, user):
        rid = _resource_id(resources, "SQL Fundamentals")
        record_progress("user-1", rid, 100, db_path=resources)
        assert record_progress("user-1", rid, 50, db_path=resources)["completed"] is True

    @pytest.mark.parametrize("progress", [-1, 101, 5.5])
    def test_progress_validated(self, resources, user, progress):
        rid = _resource_id(resources, "SQL Fundamentals")
        with pytest.raises(ValueError, match="progress"):
            record_progress("user-1", rid, progress, db_path=resources)

    def test_unknown_resource(self, resources, user):
        with pytest.raises(ValueError, match="unknown resource"):
            record_progress("user-1", 999, 10, db_path=resources)

    def test_stats(self, resources, user):
        record_progress("user-1", _resource_id(resources, "SQL Fundamentals"), 100, db_path=resources)
        record_progress("user-1", _resource_id(resources, "Python for Everybody"), 50, db_path=resources)
        stats = progress_stats("user-1", db_path=resources)
        assert stats["resources_started"] == 2
        assert stats["resources_completed"] == 1
        # 300 min + half of 1200 min = 900 min
        assert stats["learning_hours"] == 15.0
        assert len(list_progress("user-1", db_path=resources)) == 2

    def test_stats_empty(self, resources, user):
        assert progress_stats("user-1", db_path=resources) == {
            "resources_started": 0,
            "resources_completed": 0,
            "learning_hours": 0.0,
        }
