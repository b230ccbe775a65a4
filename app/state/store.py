## In-process session state and account directory
"""
Everything a signed-in user builds up (roadmap, completion record, chat
transcript, last insights) lives on their SessionState and disappears with
the session. Nothing is written to disk.
"""
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from app.agents.schemas import PlacementInsights, Roadmap

DEMO_USER_NAME = "Demo User"


@dataclass
class User:
    name: str
    email: str


@dataclass
class Account:
    name: str
    email: str
    password_hash: str


@dataclass
class ChatMessage:
    role: str  # user/bot
    content: str


@dataclass
class SessionState:
    token_hash: str
    user: User
    expires_at: datetime
    last_seen_at: datetime
    revoked_at: Optional[datetime] = None

    roadmap: Optional[Roadmap] = None
    completed_items: Dict[str, str] = field(default_factory=dict)
    chat: List[ChatMessage] = field(default_factory=list)
    insights: Optional[PlacementInsights] = None
    insights_role: Optional[str] = None

    def replace_roadmap(self, roadmap: Optional[Roadmap]) -> None:
        # Completion keys are positional, so they only make sense for the roadmap they were made on
        self.roadmap = roadmap
        self.completed_items = {}


class SessionStore:
    def __init__(self):
        self._sessions: Dict[str, SessionState] = {}
        self._lock = threading.Lock()

    def create(self, token_hash: str, user: User, expires_at: datetime,
    now: datetime | None = None, idle_minutes: int | None = None,
    max_sessions: int | None = None) -> SessionState:
        """
        Register a new session. Expired and idle sessions are dropped first;
        when `max_sessions` live sessions remain, the least recently seen
        ones are evicted to make room.
        """
        now = now or datetime.now(timezone.utc)
        state = SessionState(token_hash=token_hash, user=user,
        expires_at=expires_at, last_seen_at=now)
        with self._lock:
            if idle_minutes is not None:
                self._prune_locked(now, idle_minutes)
            if max_sessions is not None and len(self._sessions) >= max_sessions:
                by_age = sorted(self._sessions.values(), key=lambda s: s.last_seen_at)
                for old in by_age[:len(self._sessions) - max_sessions + 1]:
                    del self._sessions[old.token_hash]
                    old.revoked_at = now
            self._sessions[token_hash] = state
        return state

    def _prune_locked(self, now: datetime, idle_minutes: int) -> int:
        idle = timedelta(minutes=idle_minutes)
        dead = [s for s in self._sessions.values()
                if s.expires_at <= now or s.last_seen_at + idle <= now]
        for s in dead:
            del self._sessions[s.token_hash]
            s.revoked_at = now
        return len(dead)

    def prune(self, idle_minutes: int, now: datetime | None = None) -> int:
        """Drop sessions past their absolute expiry or idle deadline; returns how many."""
        now = now or datetime.now(timezone.utc)
        with self._lock:
            return self._prune_locked(now, idle_minutes)

    def get(self, token_hash: str) -> Optional[SessionState]:
        with self._lock:
            state = self._sessions.get(token_hash)
        if state is None or state.revoked_at is not None:
            return None
        return state

    def revoke(self, token_hash: str, now: datetime | None = None) -> None:
        with self._lock:
            state = self._sessions.pop(token_hash, None)
        if state is not None:
            state.revoked_at = now or datetime.now(timezone.utc)

    def touch(self, state: SessionState, idle_minutes: int,
    now: datetime | None = None) -> bool:
        """
        Update activity on a live session. Returns False (and revokes it)
        when the absolute expiry or the idle deadline has passed.
        """
        now = now or datetime.now(timezone.utc)
        if state.expires_at <= now:
            self.revoke(state.token_hash, now)
            return False

        idle_deadline = state.last_seen_at + timedelta(minutes=idle_minutes)
        if idle_deadline <= now:
            self.revoke(state.token_hash, now)
            return False

        state.last_seen_at = now
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()


class AccountExists(Exception):
    pass


class AccountDirectory:
    def __init__(self):
        self._accounts: Dict[str, Account] = {}
        self._lock = threading.Lock()

    def add(self, account: Account) -> None:
        with self._lock:
            if account.email in self._accounts:
                raise AccountExists(account.email)
            self._accounts[account.email] = account

    def get(self, email: str) -> Optional[Account]:
        with self._lock:
            return self._accounts.get(email)

    def rename(self, email: str, name: str) -> None:
        with self._lock:
            acc = self._accounts.get(email)
            if acc:
                acc.name = name

    def clear(self) -> None:
        with self._lock:
            self._accounts.clear()


sessions = SessionStore()
accounts = AccountDirectory()
