"""Test doubles for the browsing context and provider-issued sessions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from webcraft.auth.models import Session, SessionUser

BASE_URL = "http://localhost:8080"


@dataclass
class FakeBrowser:
    """Stands in for the browsing context: current URL and navigations."""

    url: str = "index.html"
    navigations: list[str] = field(default_factory=list)

    def navigate(self, target: str) -> None:
        self.navigations.append(target)

    def current_url(self) -> str:
        return self.url


def make_session(
    email: str = "user@example.com",
    *,
    token: str = "session-token-1",
    expires_in: timedelta | None = timedelta(hours=1),
) -> Session:
    return Session(
        session_token=token,
        session_jwt="jwt-1",
        user=SessionUser(user_id="user-1", email=email),
        expires_at=datetime.now(UTC) + expires_in if expires_in else None,
    )
