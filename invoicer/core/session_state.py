"""Session State — the read-only view of a browser session used by the gate.

Invariants:
    - Built from an explicit mapping (the decoded session cookie), never from globals
    - is_authenticated is derived solely from the presence of user_id
    - Immutable: the gate and the routes cannot change auth state through it

Design Decisions:
    - Frozen dataclass: passed by value into pure functions
    - SESSION_USER_KEY is the single cookie key written at login and cleared at logout
"""

from collections.abc import Mapping
from dataclasses import dataclass

SESSION_USER_KEY = "auth_user_id"


@dataclass(frozen=True)
class SessionState:
    """Who (if anyone) the current browsing context is signed in as."""
    user_id: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)

    @classmethod
    def from_mapping(cls, session: Mapping[str, object]) -> "SessionState":
        user_id = session.get(SESSION_USER_KEY)
        return cls(user_id=str(user_id) if user_id else None)
