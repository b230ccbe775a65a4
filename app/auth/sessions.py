## Session management utilities

import hashlib
import secrets
from datetime import datetime, timedelta, timezone

from app.settings import settings
from app.state.store import SessionState, User, sessions

SESSION_COOKIE_NAME = "cc_session"

def new_raw_token() -> str:
    return secrets.token_urlsafe(32)

def hash_token(raw: str) -> str:
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()

def absolute_expiry(now: datetime | None = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now + timedelta(days=settings.session_absolute_days)

def start_session(user: User, now: datetime | None = None) -> tuple[str, SessionState]:
    """Create a server-side session; returns the raw cookie token and its state."""
    raw = new_raw_token()
    state = sessions.create(
        hash_token(raw), user, absolute_expiry(now), now=now,
        idle_minutes=settings.session_idle_minutes,
        max_sessions=settings.max_sessions,
    )
    return raw, state

def end_session(raw: str | None) -> None:
    if raw:
        sessions.revoke(hash_token(raw))
