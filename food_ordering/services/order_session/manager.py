"""Order session manager."""
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from food_ordering.core.exceptions import SessionNotFound
from food_ordering.services.menu.catalog import Catalog
from food_ordering.services.order_session.session import OrderSession
from food_ordering.services.ordering.pricing import DEFAULT_POLICY, PricingPolicy
from food_ordering.services.ordering.submission import OrderSubmissionService

logger = logging.getLogger(__name__)

# Module-level session storage (persists across requests, lost on restart)
_sessions: Dict[str, OrderSession] = {}


class OrderSessionManager:
    """Creates and looks up order sessions.

    Sessions expire ``session_ttl`` seconds after they were last used.
    Expired sessions are dropped lazily, on lookup and when a new session
    is created. A ``session_ttl`` of None keeps sessions until they are
    ended.
    """

    def __init__(
        self,
        catalog: Catalog,
        submission_service: OrderSubmissionService,
        policy: PricingPolicy = DEFAULT_POLICY,
        submission_timeout: Optional[float] = None,
        session_ttl: Optional[float] = None,
    ):
        self.catalog = catalog
        self.submission_service = submission_service
        self.policy = policy
        self.submission_timeout = submission_timeout
        self.session_ttl = session_ttl

    def _expiry(self) -> Optional[datetime]:
        if self.session_ttl is None:
            return None
        return datetime.now(timezone.utc) + timedelta(seconds=self.session_ttl)

    @staticmethod
    def _is_expired(session: OrderSession, now: datetime) -> bool:
        return session.expires_at is not None and now > session.expires_at

    def _drop(self, session_id: str) -> None:
        session = _sessions.pop(session_id, None)
        if session is not None:
            session.reset()
            logger.info(f"[SESSION MANAGER] Expired session {session_id}")

    def purge_expired(self) -> int:
        """Drop every expired session. Returns how many were dropped."""
        now = datetime.now(timezone.utc)
        expired = [sid for sid, session in list(_sessions.items()) if self._is_expired(session, now)]
        for session_id in expired:
            self._drop(session_id)
        return len(expired)

    def create_session(self) -> OrderSession:
        """Start a new session with an empty cart."""
        self.purge_expired()
        session_id = secrets.token_urlsafe(16)
        session = OrderSession(
            session_id,
            self.catalog,
            self.submission_service,
            policy=self.policy,
            submission_timeout=self.submission_timeout,
        )
        session.expires_at = self._expiry()
        _sessions[session_id] = session
        logger.info(f"[SESSION MANAGER] Created session {session_id}")
        return session

    def get_session(self, session_id: str) -> OrderSession:
        session = _sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        if self._is_expired(session, datetime.now(timezone.utc)):
            self._drop(session_id)
            raise SessionNotFound(session_id)
        session.expires_at = self._expiry()
        return session

    def end_session(self, session_id: str) -> None:
        """Reset and forget a session."""
        session = _sessions.pop(session_id, None)
        if session is None:
            raise SessionNotFound(session_id)
        session.reset()
        logger.info(f"[SESSION MANAGER] Ended session {session_id}")
