"""Tests for TargetRoleSelector."""

import pytest

from gaps.selector import TargetRoleSelector


class TestTargetRoleSelector:
    def test_starts_empty(self):
        assert TargetRoleSelector().get_target_role() is None

    def test_initial_role(self, make_role):
        role = make_role(1, "Dev", ["Python"])
        assert TargetRoleSelector(role).get_target_role() is role

    def test_set_replaces_and_notifies(self, make_role):
        a, b = make_role(1, "A"), make_role(2, "B")
        selector = TargetRoleSelector(a)
        calls = []
        selector.subscribe(lambda role, prev: calls.append((role, prev)))

        selector.set_target_role(b)

        assert selector.get_target_role() is b
        assert calls == [(b, a)]

    def test_reselecting_same_role_is_noop(self, make_role):
        selector = TargetRoleSelector(make_role(1, "A"))
        calls = []
        selector.subscribe(lambda role, prev: calls.append(role))
        selector.set_target_role(make_role(1, "A"))
        assert calls == []

    def test_clear_notifies_once(self, make_role):
        a = make_role(1, "A")
        selector = TargetRoleSelector(a)
        calls = []
        selector.subscribe(lambda role, prev: calls.append((role, prev)))

        selector.clear_target_role()
        selector.clear_target_role()

        assert selector.get_target_role() is None
        assert calls == [(None, a)]

    def test_set_none_clears(self, make_role):
        selector = TargetRoleSelector(make_role(1, "A"))
        selector.set_target_role(None)
        assert selector.get_target_role() is None

    def test_observers_called_before_return(self, make_role):
        selector = TargetRoleSelector()
        seen = []
        selector.subscribe(lambda role, prev: seen.append(selector.get_target_role().id))
        selector.set_target_role(make_role(5, "E"))
        assert seen == [5]

    def test_unsubscribe(self, make_role):
        selector = TargetRoleSelector()
        calls = []
        unsubscribe = selector.subscribe(lambda role, prev: calls.append(role))
        unsubscribe()
        unsubscribe()
        selector.set_target_role(make_role(1, "A"))
        assert calls == []

    def test_failing_observer_does_not_starve_others(self, make_role):
        selector = TargetRoleSelector()
        calls = []

        def broken(role, prev):
            raise RuntimeError("boom")

        selector.subscribe(broken)
        selector.subscribe(lambda role, prev: calls.append(role.id))

        with pytest.raises(RuntimeError, match="boom"):
            selector.set_target_role(make_role(1, "A"))
        assert calls == [1]
        assert selector.get_target_role().id == 1

    def test_notify_stale_rebroadcasts_current(self, make_role):
        a = make_role(1, "A")
        selector = TargetRoleSelector(a)
        calls = []
        selector.subscribe(lambda role, prev: calls.append((role, prev)))
        selector.notify_stale()
        assert calls == [(a, a)]
