"""Authentication module for the WebCraft site.

Delegates credentials, sessions and OAuth to Stytch and adds:
- A per-browser identity provider that stores the session and publishes
  SIGNED_IN / SIGNED_OUT events
- A session coordinator with the page guard and post-login redirects
- Mock client for testing

Usage:
    from webcraft.auth import IdentityProvider, SessionCoordinator, get_auth_client

    provider = IdentityProvider(get_auth_client(), app.storage.user)
    coordinator = SessionCoordinator(
        provider,
        navigate=ui.navigate.to,
        current_url=lambda: str(request.url),
        site=get_settings().site,
    )
    session = await coordinator.require_session_or_redirect()
"""

from __future__ import annotations

from webcraft.auth.coordinator import SessionCoordinator
from webcraft.auth.factory import clear_config_cache, get_auth_client
from webcraft.auth.models import (
    AuthChangeEvent,
    AuthResult,
    ErrorInfo,
    ErrorKind,
    OAuthProvider,
    ProviderResponse,
    Session,
    SessionLookup,
    SessionStatus,
    SessionUser,
    SignUpData,
)
from webcraft.auth.protocol import AuthBackendProtocol
from webcraft.auth.provider import IdentityProvider, Subscription

__all__ = [
    "AuthBackendProtocol",
    "AuthChangeEvent",
    "AuthResult",
    "ErrorInfo",
    "ErrorKind",
    "IdentityProvider",
    "OAuthProvider",
    "ProviderResponse",
    "Session",
    "SessionCoordinator",
    "SessionLookup",
    "SessionStatus",
    "SessionUser",
    "SignUpData",
    "Subscription",
    "clear_config_cache",
    "get_auth_client",
]
