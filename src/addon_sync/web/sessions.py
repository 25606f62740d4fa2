"""In-memory browser sessions, one sync controller each."""

import secrets
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from ..core.controller import SyncController
from ..utils.logging import LoggerMixin


class SessionStore(LoggerMixin):
    """Maps session ids to controllers, evicting the least recently used."""

    def __init__(self, controller_factory: Callable[[], SyncController], max_sessions: int = 1000):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.controller_factory = controller_factory
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, SyncController]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def get(self, session_id: Optional[str]) -> Optional[SyncController]:
        if not session_id or session_id not in self._sessions:
            return None
        self._sessions.move_to_end(session_id)
        return self._sessions[session_id]

    def get_or_create(self, session_id: Optional[str]) -> Tuple[str, SyncController, bool]:
        """Return ``(session_id, controller, created)`` for a cookie value."""
        controller = self.get(session_id)
        if controller is not None:
            return session_id, controller, False

        session_id = secrets.token_urlsafe(24)
        controller = self.controller_factory()
        self._sessions[session_id] = controller

        while len(self._sessions) > self.max_sessions:
            self._sessions.popitem(last=False)
            self.logger.info("Session evicted", active_sessions=len(self._sessions))

        self.logger.debug("Session created", active_sessions=len(self._sessions))
        return session_id, controller, True
