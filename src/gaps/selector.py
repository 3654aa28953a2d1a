"""Target role selection with synchronous change notification."""

import threading
from typing import Callable, Optional

import structlog

logger = structlog.get_logger()

# Observer signature: (new_role_or_None, previous_role_or_None) -> None
RoleObserver = Callable[[Optional[object], Optional[object]], None]


class TargetRoleSelector:
    """Holds at most one active target role per user session.

    Observers run on the caller's thread before `set_target_role` /
    `clear_target_role` return, so anything caching a gap report has been
    invalidated by the time the caller can read again.
    """

    def __init__(self, role=None):
        self._role = role
        self._observers: list[RoleObserver] = []
        self._lock = threading.RLock()

    def get_target_role(self):
        return self._role

    def set_target_role(self, role) -> None:
        """Replace the active target role and notify observers.

        Re-selecting the role that is already active does nothing.
        """
        if role is None:
            self.clear_target_role()
            return
        with self._lock:
            previous = self._role
            if previous is not None and previous.id == role.id:
                return
            self._role = role
            logger.info("target_role.set", role_id=role.id, previous_id=getattr(previous, "id", None))
            self._notify(role, previous)

    def clear_target_role(self) -> None:
        with self._lock:
            previous = self._role
            if previous is None:
                return
            self._role = None
            logger.info("target_role.cleared", previous_id=previous.id)
            self._notify(None, previous)

    def subscribe(self, observer: RoleObserver) -> Callable[[], None]:
        """Register an observer; returns a callable that unsubscribes it."""
        with self._lock:
            self._observers.append(observer)

        def unsubscribe():
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    def notify_stale(self) -> None:
        """Re-broadcast the current role so observers drop derived state."""
        with self._lock:
            self._notify(self._role, self._role)

    def _notify(self, role, previous) -> None:
        # Every observer is called even if an earlier one fails
        first_error = None
        for observer in list(self._observers):
            try:
                observer(role, previous)
            except Exception as e:
                logger.error("target_role.observer_failed", error=str(e))
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error
