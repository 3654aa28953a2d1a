"""Gap report recompute state machine with coalesced triggers.

States: idle -> recomputing -> ready -> stale -> recomputing -> ready ...

Any trigger (role change, assessment submitted, manual refresh) that arrives
while a run is in flight sets a single pending flag instead of starting a
second run. When the in-flight run finishes it discards its result and runs
once more, reading the providers again, so the published report always
reflects the freshest inputs.
"""

import threading
from typing import Callable, Mapping, Optional, Sequence

import structlog

from observability import metrics as default_metrics
from shared_types import RecomputeState

from .engine import GapEntry, SkillLevel, compute_gap_report, resolve_required_skills

logger = structlog.get_logger()

ReportObserver = Callable[[RecomputeState, list[GapEntry]], None]


class GapRecomputer:
    """Keep one user's gap report consistent with their role and skills."""

    def __init__(
        self,
        role_provider: Callable[[], Optional[object]],
        skills_provider: Callable[[], Mapping[str, SkillLevel]],
        fallback_provider: Optional[Callable[[], Sequence[str]]] = None,
        auto_recompute: bool = True,
        metrics=None,
    ):
        self._role_provider = role_provider
        self._skills_provider = skills_provider
        self._fallback_provider = fallback_provider
        self.auto_recompute = auto_recompute
        self._metrics = metrics or default_metrics

        self._cond = threading.Condition()
        self._state = RecomputeState.IDLE
        self._pending = False
        self._report: list[GapEntry] = []
        self._role_id = None
        self._version = 0
        self._observers: list[ReportObserver] = []

    @property
    def state(self) -> RecomputeState:
        with self._cond:
            return self._state

    @property
    def version(self) -> int:
        """Number of reports published so far."""
        with self._cond:
            return self._version

    def snapshot(self) -> dict:
        with self._cond:
            return {
                "state": self._state,
                "role_id": self._role_id,
                "version": self._version,
                "report": list(self._report),
            }

    def subscribe(self, observer: ReportObserver) -> Callable[[], None]:
        with self._cond:
            self._observers.append(observer)

        def unsubscribe():
            with self._cond:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    # --- triggers ---

    def start(self) -> None:
        """Initial load: compute once a target role is available."""
        with self._cond:
            if self._state != RecomputeState.IDLE:
                return
        if self._role_provider() is not None:
            self.request("initial_load")

    def on_role_changed(self, role, previous) -> None:
        """TargetRoleSelector observer."""
        self.mark_stale("target_role_changed")

    def on_skills_changed(self) -> None:
        self.mark_stale("skills_changed")

    def mark_stale(self, reason: str = "invalidated") -> None:
        """Invalidate the current report; recompute right away if auto mode is on."""
        with self._cond:
            if self._state == RecomputeState.RECOMPUTING:
                self._coalesce(reason)
                return
            self._state = RecomputeState.STALE
            logger.debug("gaps.stale", reason=reason)
        if self.auto_recompute:
            self.request(reason)

    def request(self, reason: str = "refresh") -> bool:
        """Trigger a recompute. Returns False when folded into an in-flight run."""
        with self._cond:
            if self._state == RecomputeState.RECOMPUTING:
                self._coalesce(reason)
                return False
            self._state = RecomputeState.RECOMPUTING
        self._run(reason)
        return True

    # --- reads ---

    def report(self, timeout: Optional[float] = None) -> list[GapEntry]:
        """Return the current report, recomputing or waiting until it is ready.

        Must not be called from inside a provider.
        """
        while True:
            with self._cond:
                needs_run = self._state in (RecomputeState.IDLE, RecomputeState.STALE)
            if needs_run:
                self.request("read")
            with self._cond:
                finished = self._cond.wait_for(
                    lambda: self._state != RecomputeState.RECOMPUTING, timeout
                )
                if not finished:
                    raise TimeoutError("gap recompute did not finish in time")
                if self._state == RecomputeState.READY:
                    return list(self._report)

    # --- internals ---

    def _coalesce(self, reason: str) -> None:
        self._pending = True
        self._metrics.counter("gaps.recompute.coalesced")
        logger.debug("gaps.recompute_coalesced", reason=reason)

    def _run(self, reason: str) -> None:
        runs = 0
        while True:
            runs += 1
            try:
                role = self._role_provider()
                skills = self._skills_provider() or {}
                fallback = self._fallback_provider() if self._fallback_provider else None
                with self._metrics.timer("gaps.recompute"):
                    report = compute_gap_report(resolve_required_skills(role, fallback), skills)
            except Exception as e:
                with self._cond:
                    self._state = RecomputeState.STALE
                    self._pending = False
                    self._cond.notify_all()
                logger.error("gaps.recompute_failed", reason=reason, error=str(e))
                raise

            with self._cond:
                if self._pending:
                    # Inputs changed mid-run; this result is already outdated
                    self._pending = False
                    continue
                self._report = report
                self._role_id = getattr(role, "id", None)
                self._state = RecomputeState.READY
                self._version += 1
                self._cond.notify_all()
                self._metrics.counter("gaps.recompute.runs", runs)
                logger.info(
                    "gaps.ready",
                    reason=reason,
                    role_id=self._role_id,
                    entries=len(report),
                    runs=runs,
                )
                # Published under the lock so observers see versions in order
                for observer in list(self._observers):
                    observer(self._state, list(report))
                return
