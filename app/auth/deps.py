## Current session dependency
from fastapi import Request

from app.auth.sessions import SESSION_COOKIE_NAME, hash_token
from app.settings import settings
from app.state.store import SessionState, sessions

class NotAuthenticated(Exception):
    pass

def get_current_session(request: Request) -> SessionState:
    raw = request.cookies.get(SESSION_COOKIE_NAME)
    if not raw:
        raise NotAuthenticated()

    state = sessions.get(hash_token(raw))
    if not state:
        raise NotAuthenticated()

    # Absolute expiry + idle timeout; an expired session is revoked server-side
    if not sessions.touch(state, settings.session_idle_minutes):
        raise NotAuthenticated()

    return state
