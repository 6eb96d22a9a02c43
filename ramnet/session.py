"""Server-side sessions that expire after a period of inactivity."""

from __future__ import annotations

import math
import threading
import time
from typing import Callable, Generic, Optional, TypeVar

SESSION_TTL = 600
"""Seconds of inactivity after which a session expires."""

SESSION_CHECK = 10.0
"""Seconds between sweeps for expired sessions."""

_ACCESS_AGE = 5


class Session:
    """A session stamped with the time it was last seen."""

    def __init__(self, ttl: float = SESSION_TTL, clock: Callable[[], float] = time.time) -> None:
        self.ttl = ttl
        self._clock = clock
        self.last_seen = clock()

    def refresh(self) -> None:
        """Mark the session as seen now, unless it has been pinned."""
        if self.last_seen != math.inf:
            self.last_seen = self._clock()

    def expired(self) -> bool:
        return self.last_seen < self._clock() - self.ttl

    def invalidate(self) -> None:
        """Pin the session: it is no longer refreshed and never expires."""
        self.last_seen = math.inf


S = TypeVar("S", bound=Session)


class SessionServer(Generic[S]):
    """A thread-safe store of sessions swept for expiry by a background thread."""

    def __init__(
        self,
        factory: Callable[[], S] = Session,  # type: ignore[assignment]
        check_interval: float = SESSION_CHECK,
    ) -> None:
        self._factory = factory
        self._sessions: dict[str, S] = {}
        self._lock = threading.Lock()
        self._stopped = threading.Event()
        self._interval = check_interval
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        while not self._stopped.wait(self._interval):
            self.purge()

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def get(self, session_id: str) -> Optional[S]:
        """Return the session, ageing it slightly if still live, or None."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None and not session.expired():
                session.last_seen -= _ACCESS_AGE
            return session

    def has(self, session_id: str) -> bool:
        """Return whether the session is stored, ageing it slightly if still live."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None and not session.expired():
                session.last_seen -= _ACCESS_AGE
            return session is not None

    def add(self, session_id: str, session: Optional[S] = None) -> S:
        """Store ``session`` (a new one if not given) under ``session_id``."""
        if session is None:
            session = self._factory()
        with self._lock:
            self._sessions[session_id] = session
        return session

    def refresh(self, session_id: str) -> None:
        """Refresh the session if it exists and has not expired."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None and not session.expired():
                session.refresh()

    def purge(self) -> list[str]:
        """Remove expired sessions and return their ids."""
        with self._lock:
            gone = [key for key, session in self._sessions.items() if session.expired()]
            for key in gone:
                del self._sessions[key]
        return gone

    def shutdown(self) -> None:
        """Stop the background sweep."""
        self._stopped.set()
        if self._thread is not threading.current_thread():
            self._thread.join()

    def __enter__(self) -> "SessionServer[S]":
        return self

    def __exit__(self, *args: object) -> None:
        self.shutdown()