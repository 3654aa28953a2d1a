"""Per-user career context wiring selector, recomputer and dashboard together."""

import threading
from typing import Callable, Optional

import structlog

from .dashboard import CareerGoalMeta, DashboardAggregator
from .recompute import GapRecomputer
from .selector import TargetRoleSelector

logger = structlog.get_logger()


class CareerContext:
    """Explicit session state handed to every consumer of the gap report."""

    def __init__(
        self,
        user_id: str,
        skills_provider: Callable,
        goal_provider: Callable[[], Optional[CareerGoalMeta]] = lambda: None,
        fallback_provider: Optional[Callable] = None,
        initial_role=None,
        auto_recompute: bool = True,
    ):
        self.user_id = user_id
        self.selector = TargetRoleSelector(initial_role)
        self.recomputer = GapRecomputer(
            role_provider=self.selector.get_target_role,
            skills_provider=skills_provider,
            fallback_provider=fallback_provider,
            auto_recompute=auto_recompute,
        )
        # Recomputer subscribes first so the report is stale before the dashboard reacts
        self.selector.subscribe(self.recomputer.on_role_changed)
        self.dashboard = DashboardAggregator(self.selector, self.recomputer, goal_provider)
        self.recomputer.start()

    @property
    def target_role(self):
        return self.selector.get_target_role()

    def select_role(self, role) -> None:
        self.selector.set_target_role(role)

    def clear_role(self) -> None:
        self.selector.clear_target_role()

    def skills_changed(self) -> None:
        """Assessment submitted: the stored levels no longer match the report."""
        self.recomputer.on_skills_changed()

    def goal_changed(self) -> None:
        """Current goal edited: fallback skills and goal metadata may differ."""
        self.recomputer.mark_stale("goal_changed")

    def refresh(self) -> None:
        self.recomputer.request("manual_refresh")

    def gap_report(self, timeout=None):
        return self.recomputer.report(timeout=timeout)

    def close(self) -> None:
        self.dashboard.close()


class ContextRegistry:
    """Thread-safe cache of CareerContext objects keyed by user id."""

    def __init__(self, factory: Callable[[str], CareerContext]):
        self._factory = factory
        self._contexts: dict[str, CareerContext] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str) -> CareerContext:
        with self._lock:
            ctx = self._contexts.get(user_id)
            if ctx is None:
                ctx = self._factory(user_id)
                self._contexts[user_id] = ctx
                logger.debug("career_context.created", user_id=user_id)
            return ctx

    def drop(self, user_id: str) -> None:
        with self._lock:
            ctx = self._contexts.pop(user_id, None)
        if ctx is not None:
            ctx.close()

    def clear(self) -> None:
        with self._lock:
            contexts = list(self._contexts.values())
            self._contexts.clear()
        for ctx in contexts:
            ctx.close()

    def __len__(self) -> int:
        with self._lock:
            return len(self._contexts)
